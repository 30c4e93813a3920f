from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union
import logging

from .exceptions import MissingDatabaseName
from .options import ConnectionOptions, DEFAULT_HOST, DEFAULT_PORT
from .utils import load_settings, force_acknowledged


class Config:
    """Static configuration class - no instances, only class methods"""
    _config: Dict[str, Any] = {}

    @classmethod
    def initialize(cls, config_file: str) -> Dict[str, Any]:
        """Initialize the config with values from config file"""
        cls._config = cls._load_system_config(config_file)
        return cls._config

    @classmethod
    def reset(cls) -> None:
        cls._config = {}

    @classmethod
    def get(cls, key: str, default: Any = None) -> Any:
        """Get a configuration value by key"""
        return cls._config.get(key, default)

    @classmethod
    def get_db_params(cls) -> ConnectionOptions:
        """Get database parameters from config data"""
        return ConnectionOptions(
            host=cls._config.get('db_host'),
            port=cls._config.get('db_port'),
            name=cls._config.get('db_name'),
            **cls._config.get('db_options', {})
        )

    @classmethod
    def _load_system_config(cls, config_file: str) -> Dict[str, Any]:
        """
        Load and return the configuration from a json file.
        If the file is not found, return an empty configuration so defaults apply.
        """
        if len(config_file) > 0:
            config_path = Path(config_file)
            if config_path.exists():
                return load_settings(config_path)
        logging.warning(f'Configuration file "{config_file}" not found. Using defaults.')
        return {}


def resolve_connection_options(
    options: Union[ConnectionOptions, Mapping[str, Any], None] = None
) -> ConnectionOptions:
    """
    Resolve the final connection options, once, before a client is built.

    Precedence: explicit options, then Config values, then localhost:27017.
    The write concern is always forced to an acknowledged one.
    """
    explicit = ConnectionOptions.coerce(options)
    configured = Config.get_db_params()

    merged: Dict[str, Any] = configured.client_kwargs()
    merged.update(explicit.client_kwargs())
    merged = force_acknowledged(merged)

    name: Optional[str] = explicit.name or configured.name
    if not name:
        raise MissingDatabaseName()

    return ConnectionOptions(
        host=explicit.host or configured.host or DEFAULT_HOST,
        port=explicit.port or configured.port or DEFAULT_PORT,
        name=name,
        **merged
    )
