"""Configuration commands.

Show where the configuration lives, print the effective configuration,
and write the built-in defaults to disk.
"""

from typing import Annotated

import tomli_w
import typer
from rich.syntax import Syntax

from macclean.core.config import (
    ConfigError,
    MaccleanConfig,
    config_to_dict,
    require_config,
    save_config,
)
from macclean.core.paths import get_config_path
from macclean.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Inspect and initialize the configuration.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def path() -> None:
    """Print the configuration file path."""
    typer.echo(str(get_config_path()))


@app.command()
def show() -> None:
    """Print the effective configuration (file merged over defaults)."""
    config = require_config()
    config_path = get_config_path()
    if not config_path.exists():
        print_info(f"No config file at {config_path}; showing built-in defaults.")

    text = tomli_w.dumps(config_to_dict(config))
    console.print(Syntax(text, "toml", background_color="default"))


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing configuration file."),
    ] = False,
) -> None:
    """Write the built-in defaults to the configuration file."""
    config_path = get_config_path()
    if config_path.exists() and not force:
        print_error(f"Config already exists: {config_path}")
        print_info("Use --force to overwrite it.")
        raise typer.Exit(code=1)

    try:
        saved = save_config(MaccleanConfig(), config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")
