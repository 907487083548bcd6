"""Configuration models and file I/O.

The configuration holds the lookup tables the scanners work from:
residual locations, system-reserved name prefixes, bundle identifier
mappings and cache cleanup tasks. Defaults are built in; a TOML file at
~/.config/macclean/config.toml may replace any top-level key.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any, Literal

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from macclean.core.paths import get_config_path
from macclean.models.orphan import Confidence

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the configuration file is not valid TOML."""


class ConfigValidationError(ConfigError):
    """Raised when the configuration content does not match the schema."""


class ResidualLocation(BaseModel):
    """A directory whose immediate children may be application residue.

    Attributes:
        path: Scan root; a leading "~/" is expanded to the home directory.
        category: Short label reported with every orphan found here.
        confidence_base: Default confidence for orphans found here.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    path: Annotated[str, Field(min_length=1, description="Scan root directory")]
    category: Annotated[str, Field(min_length=1, description="Location category label")]
    confidence_base: Annotated[
        Confidence,
        Field(description="Default confidence for entries found here"),
    ] = Confidence.MEDIUM


class CleanupTask(BaseModel):
    """A named group of cache path templates.

    Attributes:
        name: Display name (e.g., "Homebrew").
        description: One-line description shown in the review list.
        paths: Path templates; "~/" is expanded and glob wildcards are allowed.
        commands: Shell commands run when the task is confirmed (e.g.,
            "brew cleanup -s"). Split like a shell would, but never run
            through one.
        requires_root: Run the commands through sudo. Skipped without
            administrator privileges.
        enabled: Disabled tasks are never scanned.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: Annotated[str, Field(min_length=1)]
    description: str = ""
    paths: tuple[str, ...] = ()
    commands: tuple[Annotated[str, Field(min_length=1)], ...] = ()
    requires_root: bool = False
    enabled: bool = True


DiskUsageBackend = Literal["du", "walk"]


DEFAULT_LOCATIONS: tuple[ResidualLocation, ...] = (
    ResidualLocation(
        path="~/Library/Application Support",
        category="App Support",
        confidence_base=Confidence.HIGH,
    ),
    ResidualLocation(
        path="~/Library/Caches", category="Caches", confidence_base=Confidence.MEDIUM
    ),
    ResidualLocation(
        path="~/Library/Preferences", category="Preferences", confidence_base=Confidence.LOW
    ),
    ResidualLocation(
        path="~/Library/Containers", category="Containers", confidence_base=Confidence.HIGH
    ),
    ResidualLocation(
        path="~/Library/Group Containers", category="Group", confidence_base=Confidence.HIGH
    ),
    ResidualLocation(
        path="~/Library/Saved Application State",
        category="Saved State",
        confidence_base=Confidence.MEDIUM,
    ),
    ResidualLocation(
        path="~/Library/HTTPStorages", category="HTTP Storage", confidence_base=Confidence.MEDIUM
    ),
    ResidualLocation(
        path="~/Library/WebKit", category="WebKit", confidence_base=Confidence.MEDIUM
    ),
    ResidualLocation(
        path="/Library/Application Support",
        category="System App",
        confidence_base=Confidence.HIGH,
    ),
)

DEFAULT_SYSTEM_PREFIXES: tuple[str, ...] = (
    "com.apple.",
    "apple.",
    "system.",
    ".DS_Store",
    ".localized",
    "MobileSync",
    "CloudStorage",
    "IdentityServices",
)

# Checked in order; the first prefix that matches wins.
DEFAULT_BUNDLE_MAPPINGS: dict[str, str] = {
    "com.apple": "Apple",
    "com.google": "Google",
    "com.microsoft": "Microsoft",
    "com.adobe": "Adobe",
    "com.jetbrains": "JetBrains",
    "com.github": "GitHub",
    "com.docker": "Docker",
    "com.spotify": "Spotify",
    "com.discord": "Discord",
    "com.slack": "Slack",
    "org.mozilla": "Mozilla",
    "com.brave": "Brave",
    "com.electron": "Electron",
    "io.github": "GitHub",
    "dev.orbstack": "OrbStack",
}


def _task(
    name: str,
    description: str,
    *paths: str,
    commands: tuple[str, ...] = (),
    requires_root: bool = False,
) -> CleanupTask:
    return CleanupTask(
        name=name,
        description=description,
        paths=paths,
        commands=commands,
        requires_root=requires_root,
    )


DEFAULT_CLEANUP_TASKS: tuple[CleanupTask, ...] = (
    # System
    _task("System Cache", "User application caches", "~/Library/Caches/*"),
    _task("System Logs", "User and system logs", "~/Library/Logs/*", "/Library/Logs/*"),
    _task(
        "Diagnostic Reports",
        "Crash and diagnostic reports",
        "~/Library/Logs/DiagnosticReports/*",
    ),
    # Developer tools
    _task(
        "JetBrains",
        "JetBrains IDE caches",
        "~/Library/Caches/JetBrains/*",
        "~/Library/Logs/JetBrains/*",
    ),
    _task(
        "VSCode",
        "VSCode caches",
        "~/Library/Application Support/Code/Cache/*",
        "~/Library/Application Support/Code/CachedData/*",
        "~/Library/Application Support/Code/logs/*",
    ),
    _task(
        "Xcode",
        "Xcode derived data and archives",
        "~/Library/Developer/Xcode/DerivedData/*",
        "~/Library/Developer/Xcode/Archives/*",
        "~/Library/Developer/Xcode/iOS Device Logs/*",
    ),
    _task(
        "iOS Simulators",
        "iOS simulator caches",
        "~/Library/Developer/CoreSimulator/Caches/*",
        commands=("xcrun simctl delete unavailable",),
    ),
    # Browsers
    _task(
        "Chrome",
        "Chrome caches",
        "~/Library/Caches/Google/Chrome/*",
        "~/Library/Application Support/Google/Chrome/Default/Service Worker/*",
    ),
    _task("Safari", "Safari caches", "~/Library/Caches/com.apple.Safari/*"),
    _task("Firefox", "Firefox caches", "~/Library/Caches/Firefox/*"),
    # Adobe
    _task(
        "Adobe",
        "Adobe caches",
        "~/Library/Caches/Adobe/*",
        "~/Library/Application Support/Adobe/Common/Media Cache Files/*",
    ),
    # Package managers
    _task("npm", "npm cache", "~/.npm/_cacache/*", commands=("npm cache clean --force",)),
    _task("yarn", "yarn cache", "~/Library/Caches/Yarn/*"),
    _task("pnpm", "pnpm store", "~/Library/pnpm/store/*"),
    _task("Bun", "Bun install cache", "~/.bun/install/cache/*"),
    _task(
        "Homebrew",
        "Homebrew downloads",
        "~/Library/Caches/Homebrew/*",
        commands=("brew cleanup -s",),
    ),
    _task("CocoaPods", "CocoaPods cache", "~/Library/Caches/CocoaPods/*"),
    _task("Gradle", "Gradle caches", "~/.gradle/caches/*"),
    _task("Maven", "Maven local repository", "~/.m2/repository/*"),
    # Language toolchains
    _task("Go", "Go module cache", "~/go/pkg/mod/cache/*", commands=("go clean -cache",)),
    _task("Rust/Cargo", "Cargo registry cache", "~/.cargo/registry/cache/*", "~/.cargo/git/db/*"),
    _task("Python/pip", "pip cache", "~/Library/Caches/pip/*", "~/.cache/pip/*"),
    _task("Ruby/gem", "gem cache", "~/.gem/ruby/*/cache/*"),
    _task("PHP/Composer", "Composer cache", "~/.composer/cache/*"),
    _task("Deno", "Deno cache", "~/Library/Caches/deno/*", "~/.deno/gen/*"),
    _task("Flutter", "Flutter and pub caches", "~/.pub-cache/*", "~/Library/Developer/Flutter/*"),
    # Containers and virtualization
    _task("Docker", "Docker VM data", "~/Library/Containers/com.docker.docker/Data/vms/*"),
    # Games
    _task("Steam", "Steam app cache", "~/Library/Application Support/Steam/appcache/*"),
    _task("Minecraft", "Minecraft logs", "~/Library/Application Support/minecraft/logs/*"),
    # Network
    _task(
        "DNS Cache",
        "Flush the DNS resolver cache",
        commands=("dscacheutil -flushcache", "killall -HUP mDNSResponder"),
        requires_root=True,
    ),
)


class MaccleanConfig(BaseModel):
    """Complete macclean configuration.

    Every field has a built-in default, so an empty file is valid.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    locations: tuple[ResidualLocation, ...] = DEFAULT_LOCATIONS
    system_prefixes: tuple[str, ...] = DEFAULT_SYSTEM_PREFIXES
    bundle_mappings: Annotated[
        dict[str, str],
        Field(default_factory=lambda: dict(DEFAULT_BUNDLE_MAPPINGS)),
    ]
    cleanup_tasks: tuple[CleanupTask, ...] = DEFAULT_CLEANUP_TASKS
    disk_usage: DiskUsageBackend = "du"

    @field_validator("system_prefixes")
    @classmethod
    def validate_prefixes(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Reject empty prefixes, which would match every entry."""
        if any(not p for p in v):
            msg = "system_prefixes cannot contain empty strings"
            raise ValueError(msg)
        return v

    @property
    def enabled_tasks(self) -> list[CleanupTask]:
        """Return cleanup tasks that are enabled."""
        return [t for t in self.cleanup_tasks if t.enabled]


def load_config(path: Path | None = None) -> MaccleanConfig:
    """Load and validate the configuration file.

    A missing file is not an error: the built-in defaults are returned.

    Args:
        path: Path to the configuration file. If None, uses the default path.

    Returns:
        Validated MaccleanConfig object.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigValidationError: If the content doesn't match the schema.
        ConfigError: If the file exists but cannot be read.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No config file at %s, using defaults", config_path)
        return MaccleanConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return MaccleanConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid config content: {e}") from e


def save_config(config: MaccleanConfig, path: Path | None = None) -> Path:
    """Save a configuration to a TOML file.

    The file is written atomically via a temporary file in the same
    directory and os.replace(). The temporary file is cleaned up on failure.

    Args:
        config: The configuration to save.
        path: Destination path. If None, uses the default path.

    Returns:
        Path where the configuration was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(config_to_dict(config), f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def config_to_dict(config: MaccleanConfig) -> dict[str, Any]:
    """Convert a configuration to a dictionary suitable for TOML serialization.

    Args:
        config: The configuration to convert.

    Returns:
        Dictionary with enums reduced to their string values.
    """
    return config.model_dump(mode="json")


def require_config(config_path: Path | None = None) -> MaccleanConfig:
    """Load the configuration or exit with a helpful error message.

    Args:
        config_path: Optional custom config path.

    Returns:
        Loaded and validated configuration.

    Raises:
        typer.Exit: If the configuration cannot be loaded.
    """
    import typer

    from macclean.utils.formatting import print_error, print_info

    path = config_path or get_config_path()
    try:
        return load_config(path)
    except ConfigError as e:
        print_error(f"Failed to load config {path}: {e}")
        print_info("Run 'macclean config init --force' to restore the defaults.")
        raise typer.Exit(code=1) from e
