"""Configuration file loader for artiformat.

Handles discovery, loading, parsing, and validation of configuration files.
Supports two formats:

- ``artiformat.toml``: settings under ``[artiformat]`` table
- ``pyproject.toml``: settings under ``[tool.artiformat]`` table

Discovery order:

1. Explicit path from ``--config`` or ``ARTIFORMAT_CONFIG``
2. ``artiformat.toml`` in current directory
3. ``pyproject.toml`` with ``[tool.artiformat]`` section

Configuration precedence: defaults < config file < CLI args.

Typical usage::

    config = load_config()  # Auto-discover
    config = load_config(Path("custom.toml"))  # Explicit path

Example (``artiformat.toml``)::

    [artiformat]
    include_prefix = false
    default_format = "X.YY.Z-rc"
"""

from __future__ import annotations


import tomli as tomllib
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, field

from artiformat.exceptions import ConfigError
from artiformat.utils.logger import get_logger
from artiformat.constants import DEFAULT_INCLUDE_PREFIX, VERSION_FORMATS

logger = get_logger("config")

CONFIG_FILE_NAME = "artiformat.toml"
SECTION_NAME = "artiformat"


@dataclass
class ArtiformatConfig:
    """Parsed and validated artiformat configuration.

    All fields have defaults, so empty config files are valid.

    Attributes:
        include_prefix: Compose versions with the ``v`` prefix when neither
            ``--format`` nor ``--exclude-prefix`` decides.
        default_format: Template used by ``version compose`` when neither
            ``--format`` nor ``--type`` is given.
        source_path: Path to loaded config file, or ``None`` if using defaults.
    """

    include_prefix: bool = DEFAULT_INCLUDE_PREFIX
    default_format: Optional[str] = None

    # Metadata (not a user-facing option)
    source_path: Optional[Path] = field(default=None, repr=False)

    def to_log_dict(self) -> Dict[str, Any]:
        """Return configuration as dictionary for debug logging.

        Excludes ``source_path`` metadata.
        """
        return {
            "include_prefix": self.include_prefix,
            "default_format": self.default_format,
        }


def discover_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Find the configuration file to load.

    Args:
        explicit_path: Explicit config path. If provided, must exist.

    Returns:
        Resolved path to config file, or ``None`` if not found.

    Raises:
        ConfigError: Explicit path provided but does not exist.
    """
    if explicit_path is not None:
        resolved = explicit_path.resolve()
        if not resolved.is_file():
            raise ConfigError(
                f"Configuration file not found: {explicit_path}",
                config_path=str(explicit_path),
            )
        logger.debug("Using explicit config: %s", resolved)
        return resolved

    cwd = Path.cwd()

    own_toml = cwd / CONFIG_FILE_NAME
    if own_toml.is_file():
        logger.debug("Found %s: %s", CONFIG_FILE_NAME, own_toml)
        return own_toml

    pyproject_toml = cwd / "pyproject.toml"
    if pyproject_toml.is_file() and _pyproject_has_section(pyproject_toml):
        logger.debug("Found [tool.%s] in pyproject.toml: %s", SECTION_NAME, pyproject_toml)
        return pyproject_toml

    logger.debug("No configuration file found")
    return None


def _pyproject_has_section(path: Path) -> bool:
    """Check if pyproject.toml contains a ``[tool.artiformat]`` section.

    Parse errors count as "no section" so a broken unrelated pyproject.toml
    does not stop the CLI.
    """
    try:
        raw = _read_toml(path)
    except ConfigError as exc:
        logger.debug("Ignoring unreadable %s: %s", path, exc)
        return False
    return SECTION_NAME in raw.get("tool", {})


def load_config(config_path: Optional[Path] = None) -> ArtiformatConfig:
    """Load and validate artiformat configuration.

    Args:
        config_path: Explicit path to config file. If ``None``, uses
            auto-discovery (see :func:`discover_config_file`).

    Returns:
        Validated :class:`ArtiformatConfig` with values from file or defaults.

    Raises:
        ConfigError: File cannot be parsed, has unknown keys, or invalid values.
    """
    resolved = discover_config_file(config_path)

    if resolved is None:
        logger.debug("No config file found, using defaults")
        return ArtiformatConfig()

    logger.info("Loading configuration from %s", resolved)
    raw = _read_toml(resolved)

    if resolved.name == "pyproject.toml":
        section = raw.get("tool", {}).get(SECTION_NAME, {})
    else:
        section = raw.get(SECTION_NAME, {})

    if not section:
        logger.debug("Config file found but no %s section, using defaults", SECTION_NAME)
        return ArtiformatConfig(source_path=resolved)

    config = _parse_section(section, config_path=str(resolved))
    config.source_path = resolved

    logger.debug("Loaded configuration: %s", config.to_log_dict())
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    """Read and parse a TOML file.

    Raises:
        ConfigError: File cannot be read or is not valid TOML.
    """
    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Invalid TOML in {path.name}: {exc}",
            config_path=str(path),
        ) from exc
    except OSError as exc:
        raise ConfigError(
            f"Cannot read configuration file {path}: {exc}",
            config_path=str(path),
        ) from exc


def _parse_section(
    section: Dict[str, Any],
    *,
    config_path: str,
) -> ArtiformatConfig:
    """Parse and validate the ``[artiformat]`` or ``[tool.artiformat]`` table.

    Raises:
        ConfigError: Unknown keys, incorrect types, or an unknown template.
    """
    config = ArtiformatConfig()

    known_top = {"include_prefix", "default_format"}

    unknown_top = set(section.keys()) - known_top
    if unknown_top:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(sorted(unknown_top))}",
            config_path=config_path,
        )

    if "include_prefix" in section:
        val = section["include_prefix"]
        if not isinstance(val, bool):
            raise ConfigError(
                f"include_prefix must be a boolean, got {type(val).__name__}",
                config_path=config_path,
                option="include_prefix",
            )
        config.include_prefix = val

    if "default_format" in section:
        val = section["default_format"]
        if not isinstance(val, str):
            raise ConfigError(
                f"default_format must be a string, got {type(val).__name__}",
                config_path=config_path,
                option="default_format",
            )
        if val not in VERSION_FORMATS:
            raise ConfigError(
                f"default_format must be one of {', '.join(VERSION_FORMATS)}, got {val!r}",
                config_path=config_path,
                option="default_format",
            )
        config.default_format = val

    return config
