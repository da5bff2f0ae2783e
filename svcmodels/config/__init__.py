"""Config subsystem public API.

Provides:
    get_config() -> AggregatedConfig (schema_version + sections)
    as_dict()    -> dict representation
    ConfigError  -> raised on validation / unknown key
    default_data_dir(), default_manifest_path() -> resolved data locations
"""

from .loader import (  # noqa: F401
    AggregatedConfig,
    ConfigError,
    as_dict,
    clear_config_cache,
    default_data_dir,
    default_manifest_path,
    get_config,
)

__all__ = [
    "AggregatedConfig",
    "ConfigError",
    "as_dict",
    "clear_config_cache",
    "default_data_dir",
    "default_manifest_path",
    "get_config",
]
