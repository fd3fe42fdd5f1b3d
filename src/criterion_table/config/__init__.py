from criterion_table.config.loader import load_toml_detailed
from criterion_table.config.tables import (
    DEFAULT_TABLES_CONFIG_FILE,
    TABLES_CONFIG_PATH_ENV,
    TablesConfig,
    encode_key,
    load_tables_config,
    parse_tables_config,
    resolve_tables_config_path,
)

__all__ = [
    "DEFAULT_TABLES_CONFIG_FILE",
    "TABLES_CONFIG_PATH_ENV",
    "TablesConfig",
    "encode_key",
    "load_toml_detailed",
    "load_tables_config",
    "parse_tables_config",
    "resolve_tables_config_path",
]
