"""Configuration file loading utilities.

Supports loading configuration from YAML and TOML files with:
- Automatic format detection
- Error reporting with file location
- Fallback to defaults when no file exists
"""

import tomllib
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from publishflow.config.models import PublishConfig
from publishflow.exceptions import ConfigurationError

SEARCH_PATHS = [
    "publishflow.yml",
    "publishflow.yaml",
    ".publishflow.yml",
    "publishflow.toml",
    "config/publishflow.yml",
]


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML configuration file.

    Raises:
        ConfigurationError: If file cannot be read or parsed
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(
            f"Configuration file not found: {path}",
            fix_hint="Check the --config path",
        ) from None
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML in {path}",
            details=str(e),
            fix_hint="Check YAML syntax at the indicated line",
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid configuration in {path}",
            details="Top level must be a mapping",
        )
    return data


def load_toml(path: Path) -> dict[str, Any]:
    """Load a TOML configuration file.

    Raises:
        ConfigurationError: If file cannot be read or parsed
    """
    try:
        with open(path, "rb") as f:
            data: dict[str, Any] = tomllib.load(f)
            return data
    except FileNotFoundError:
        raise ConfigurationError(
            f"Configuration file not found: {path}",
            fix_hint="Check the --config path",
        ) from None
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(
            f"Invalid TOML in {path}",
            details=str(e),
            fix_hint="Check TOML syntax at the indicated line",
        ) from e


def find_config(project_root: Path) -> Path | None:
    """Return the first configuration file found in the standard locations."""
    for search_path in SEARCH_PATHS:
        candidate = project_root / search_path
        if candidate.is_file():
            return candidate
    return None


def load_config(
    path: Path | None = None,
    project_root: Path | None = None,
) -> PublishConfig:
    """Load publish configuration.

    Search order if path not specified:
    1. publishflow.yml
    2. publishflow.yaml
    3. .publishflow.yml
    4. publishflow.toml
    5. config/publishflow.yml

    Configuration is optional: when no file is found the defaults (plus
    any PUBLISHFLOW_* environment overrides) are returned.

    Raises:
        ConfigurationError: If an explicit file is missing or any file is invalid
    """
    if project_root is None:
        project_root = Path.cwd()

    config_path: Path | None
    if path:
        config_path = Path(path)
        if not config_path.is_absolute():
            config_path = project_root / config_path
    else:
        config_path = find_config(project_root)

    if config_path is None:
        data: dict[str, Any] = {}
    elif config_path.suffix in (".yml", ".yaml"):
        data = load_yaml(config_path)
    elif config_path.suffix == ".toml":
        data = load_toml(config_path)
    else:
        raise ConfigurationError(
            f"Unsupported config format: {config_path.suffix}",
            fix_hint="Use .yml, .yaml, or .toml extension",
        )

    try:
        return PublishConfig(**data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration in {config_path or 'environment'}",
            details=str(e),
            fix_hint="Check the configuration values match expected types",
        ) from e
