"""Configuration file handling for the dbmeta CLI.

The configuration lives in ~/.dbmeta.yaml (or the path in DBMETA_CONFIG) and
holds named connections plus defaults for new databases and exports.
"""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

from dbmeta.database.engine import DatabaseSettings

CONFIG_ENV_VAR = "DBMETA_CONFIG"
DEFAULT_CONFIG_NAME = ".dbmeta.yaml"
VALID_PAGE_SIZES = (4096, 8192, 16384, 32768)


class DatabaseDefaults(BaseModel):
    """Defaults for databases created by build-db"""

    user: str = "SYSDBA"
    password: str = "masterkey"
    charset: str = "UTF8"
    page_size: int = 16384
    host: str | None = None
    file_name: str = "database.fdb"

    def to_settings(self, **overrides: object) -> DatabaseSettings:
        """Convert to database settings, applying explicit overrides"""
        values = self.model_dump()
        values.update({key: value for key, value in overrides.items() if value is not None})
        return DatabaseSettings(**values)


class ExportDefaults(BaseModel):
    """Defaults for export-scripts"""

    write_json: bool = False


class Defaults(BaseModel):
    """Default settings per command"""

    database: DatabaseDefaults = Field(default_factory=DatabaseDefaults)
    export: ExportDefaults = Field(default_factory=ExportDefaults)


class Config(BaseModel):
    """CLI configuration file"""

    version: str = "1.0"
    connections: dict[str, str] = Field(default_factory=dict)
    defaults: Defaults = Field(default_factory=Defaults)


def get_config_path() -> Path:
    """Get config file path from environment or default location."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return Path.home() / DEFAULT_CONFIG_NAME


def load_config() -> Config:
    """Load config from file, returning defaults when the file does not exist.

    Returns:
        Parsed configuration

    Raises:
        ValueError: If the file is not valid YAML or does not match the schema
    """
    config_path = get_config_path()
    if not config_path.exists():
        return Config()

    try:
        with config_path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_path}: {e}") from e

    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid config in {config_path}: {e}") from e


def save_config(config: Config) -> Path:
    """Write config to the config file path.

    Args:
        config: Configuration to save

    Returns:
        Path the config was written to
    """
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with config_path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(config.model_dump(), f, default_flow_style=False, sort_keys=False)
    return config_path


def init_config(force: bool = False) -> Path:
    """Create a config file with default values.

    Args:
        force: Overwrite an existing file

    Returns:
        Path of the created file

    Raises:
        FileExistsError: If the file exists and force is False
    """
    config_path = get_config_path()
    if config_path.exists() and not force:
        raise FileExistsError(f"Config file already exists: {config_path}")
    return save_config(Config())


def get_connection(name: str, config: Config | None = None) -> str:
    """Get a named connection string.

    Raises:
        KeyError: If no connection has that name
    """
    config = config or load_config()
    if name not in config.connections:
        raise KeyError(f"Connection '{name}' not found in config")
    return config.connections[name]


def resolve_connection(connection: str, config: Config | None = None) -> str:
    """Resolve '@name' references to configured connections; other values pass through."""
    if connection.startswith("@"):
        return get_connection(connection[1:], config)
    return connection


def get_database_defaults(config: Config | None = None) -> DatabaseDefaults:
    """Get defaults for new databases."""
    config = config or load_config()
    return config.defaults.database


def get_export_defaults(config: Config | None = None) -> ExportDefaults:
    """Get defaults for exports."""
    config = config or load_config()
    return config.defaults.export


def validate_config(config: Config) -> list[str]:
    """Check config values that the schema alone does not cover.

    Returns:
        List of error messages (empty when valid)
    """
    errors = []

    if config.defaults.database.page_size not in VALID_PAGE_SIZES:
        sizes = ", ".join(str(size) for size in VALID_PAGE_SIZES)
        errors.append(f"'defaults.database.page_size' must be one of {sizes}")

    for name, connection_string in config.connections.items():
        try:
            make_url(connection_string)
        except ArgumentError:
            errors.append(f"Connection '{name}' is not a valid database URL")

    return errors
