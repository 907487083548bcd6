"""Path helpers for macclean.

This module provides the XDG-style configuration location used by
macclean itself, plus the home-relative path handling shared by the
residue and cache scanners.

XDG defaults:
- Config: ~/.config/macclean/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "macclean"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/macclean/ (or XDG_CONFIG_HOME/macclean/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_config_path() -> Path:
    """Get the default configuration file path.

    Returns:
        Path to ~/.config/macclean/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_user_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/macclean/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def expand_home(template: str, home: Path | None = None) -> Path:
    """Expand a leading ``~/`` in a path template.

    Only the ``~/`` form is expanded; ``~user`` and other shell syntax
    are left untouched.

    Args:
        template: Path template such as "~/Library/Caches".
        home: Home directory to expand against. Defaults to Path.home().

    Returns:
        Absolute path for home-relative templates, the template as a
        Path otherwise.
    """
    if template == "~" or template.startswith("~/"):
        base = home if home is not None else Path.home()
        return base / template[2:] if template != "~" else base
    return Path(template)


def is_within(path: str | Path, root: str | Path) -> bool:
    """Check whether path is root itself or lies below it.

    The comparison is purely lexical; symlinks are not resolved.

    Args:
        path: Path to test.
        root: Candidate ancestor directory.

    Returns:
        True if path equals root or is nested under it.
    """
    try:
        Path(path).relative_to(root)
    except ValueError:
        return False
    return True
