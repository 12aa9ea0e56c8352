"""Configuration file loader for julia-version.

Handles discovery, loading, parsing, and validation of configuration files.
Supports two formats:

- ``julia-version.toml``: settings under the ``[julia-version]`` table
- ``pyproject.toml``: settings under the ``[tool.julia-version]`` table

Discovery order:

1. Explicit path from ``--config`` or ``JULIA_VERSION_CONFIG``
2. ``julia-version.toml`` in current directory
3. ``pyproject.toml`` with ``[tool.julia-version]`` section

Configuration precedence: defaults < config file < environment < CLI args.

Typical usage::

    config = load_config()  # Auto-discover
    config = load_config(Path("custom.toml"))  # Explicit path

Example (``julia-version.toml``)::

    [julia-version]
    if_missing = "warn"
    timeout = 10
    max_retries = 3
"""

from __future__ import annotations


import tomli as tomllib
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, field

from julia_version.exceptions import ConfigError
from julia_version.utils.logger import get_logger
from julia_version.constants import (
    DEFAULT_IF_MISSING,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT,
    IF_MISSING_CHOICES,
    NIGHTLY_BASE_URL,
    VERSIONS_JSON_URL,
)

logger = get_logger("config")

#: Name of the configuration table in both supported files.
CONFIG_SECTION = "julia-version"


@dataclass
class JuliaVersionConfig:
    """Parsed and validated julia-version configuration.

    All fields have defaults, so empty config files are valid.

    Attributes:
        if_missing: Policy for specifiers that match nothing
            (``"warn"`` or ``"error"``).
        versions_url: Location of the release catalogue.
        nightly_base_url: Base URL of nightly artifacts.
        timeout: HTTP timeout in seconds.
        max_retries: HTTP retries after the first attempt.
        source_path: Path to loaded config file, or ``None`` if using defaults.
    """

    if_missing: str = DEFAULT_IF_MISSING
    versions_url: str = VERSIONS_JSON_URL
    nightly_base_url: str = NIGHTLY_BASE_URL
    timeout: int = DEFAULT_TIMEOUT
    max_retries: int = DEFAULT_MAX_RETRIES

    # Metadata (not a user-facing option)
    source_path: Optional[Path] = field(default=None, repr=False)

    def to_log_dict(self) -> Dict[str, Any]:
        """Return configuration as dictionary for debug logging."""
        return {
            "if_missing": self.if_missing,
            "versions_url": self.versions_url,
            "nightly_base_url": self.nightly_base_url,
            "timeout": self.timeout,
            "max_retries": self.max_retries,
        }


def discover_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Find the configuration file to load.

    Search order:

    1. ``explicit_path`` (from ``--config`` or ``JULIA_VERSION_CONFIG``)
    2. ``julia-version.toml`` in current directory
    3. ``pyproject.toml`` with ``[tool.julia-version]`` section in current
       directory

    Args:
        explicit_path: Explicit config path. If provided, must exist.

    Returns:
        Resolved path to config file, or ``None`` if not found.

    Raises:
        ConfigError: Explicit path provided but does not exist.
    """
    # 1. Explicit path takes priority
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

    # 2. julia-version.toml in current directory
    own_toml = cwd / "julia-version.toml"
    if own_toml.is_file():
        logger.debug("Found julia-version.toml: %s", own_toml)
        return own_toml

    # 3. pyproject.toml with [tool.julia-version] section
    pyproject_toml = cwd / "pyproject.toml"
    if pyproject_toml.is_file() and _pyproject_has_section(pyproject_toml):
        logger.debug("Found [tool.julia-version] in pyproject.toml: %s", pyproject_toml)
        return pyproject_toml

    logger.debug("No configuration file found")
    return None


def _pyproject_has_section(path: Path) -> bool:
    """Check if pyproject.toml contains a ``[tool.julia-version]`` section.

    An unreadable or invalid pyproject.toml is treated as having none.
    """
    try:
        raw = _read_toml(path)
    except ConfigError as exc:
        logger.debug("Ignoring unreadable pyproject.toml: %s", exc.message)
        return False
    return CONFIG_SECTION in raw.get("tool", {})


def load_config(config_path: Optional[Path] = None) -> JuliaVersionConfig:
    """Load and validate julia-version configuration.

    Discovers config file (or uses provided path), parses and validates it.
    Returns config with defaults if no file found.

    Args:
        config_path: Explicit path to config file. If ``None``, uses
            auto-discovery (see :func:`discover_config_file`).

    Returns:
        Validated :class:`JuliaVersionConfig` with values from file or
        defaults.

    Raises:
        ConfigError: File cannot be parsed, has unknown keys, or invalid values.
    """
    resolved = discover_config_file(config_path)

    if resolved is None:
        logger.debug("No config file found, using defaults")
        return JuliaVersionConfig()

    logger.info("Loading configuration from %s", resolved)
    raw = _read_toml(resolved)

    if resolved.name == "pyproject.toml":
        section = raw.get("tool", {}).get(CONFIG_SECTION, {})
    else:
        section = raw.get(CONFIG_SECTION, {})

    if not section:
        logger.debug("Config file found but no julia-version section, using defaults")
        return JuliaVersionConfig(source_path=resolved)

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


def _require_str(section: Dict[str, Any], key: str, config_path: str) -> str:
    val = section[key]
    if not isinstance(val, str) or not val:
        raise ConfigError(
            f"{key} must be a non-empty string, got {type(val).__name__}",
            config_path=config_path,
            option=key,
        )
    return val


def _require_int(section: Dict[str, Any], key: str, config_path: str, minimum: int) -> int:
    val = section[key]
    # bool is a subclass of int
    if isinstance(val, bool) or not isinstance(val, int):
        raise ConfigError(
            f"{key} must be an integer, got {type(val).__name__}",
            config_path=config_path,
            option=key,
        )
    if val < minimum:
        raise ConfigError(
            f"{key} must be at least {minimum}, got {val}",
            config_path=config_path,
            option=key,
        )
    return val


def _parse_section(
    section: Dict[str, Any],
    *,
    config_path: str,
) -> JuliaVersionConfig:
    """Parse and validate the ``[julia-version]`` table.

    Rejects unknown keys and type mismatches.

    Args:
        section: Raw config dictionary from TOML file.
        config_path: Path string for error messages.

    Returns:
        Validated :class:`JuliaVersionConfig`.

    Raises:
        ConfigError: Unknown keys or incorrect types.
    """
    config = JuliaVersionConfig()

    known_top = {
        "if_missing",
        "versions_url",
        "nightly_base_url",
        "timeout",
        "max_retries",
    }

    unknown_top = set(section.keys()) - known_top
    if unknown_top:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(sorted(unknown_top))}",
            config_path=config_path,
        )

    if "if_missing" in section:
        val = section["if_missing"]
        if val not in IF_MISSING_CHOICES:
            raise ConfigError(
                f"if_missing must be one of {', '.join(IF_MISSING_CHOICES)}, got {val!r}",
                config_path=config_path,
                option="if_missing",
            )
        config.if_missing = val

    if "versions_url" in section:
        config.versions_url = _require_str(section, "versions_url", config_path)

    if "nightly_base_url" in section:
        config.nightly_base_url = _require_str(section, "nightly_base_url", config_path)

    if "timeout" in section:
        config.timeout = _require_int(section, "timeout", config_path, minimum=1)

    if "max_retries" in section:
        config.max_retries = _require_int(section, "max_retries", config_path, minimum=0)

    return config
