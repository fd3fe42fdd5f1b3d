from __future__ import annotations

from dataclasses import dataclass, field
import logging
import os
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from criterion_table.config.loader import load_toml_detailed
from criterion_table.errors import ConfigParseError
from criterion_table.util.logging import log_event

DEFAULT_TABLES_CONFIG_FILE = "tables.toml"
TABLES_CONFIG_PATH_ENV = "CRITERION_TABLE_CONFIG_PATH"
_TABLES_CONFIG_LOG = logging.getLogger("criterion_table.config.tables")


def encode_key(name: str) -> str:
    """Config lookup key for a table name: lowercase, spaces become ``_``."""
    return name.replace(" ", "_").lower()


@dataclass(frozen=True)
class TablesConfig:
    comments: str | None = None
    table_comments: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def table_comment(self, table_name: str) -> str | None:
        return self.table_comments.get(encode_key(table_name))


def parse_tables_config(payload: Mapping[str, Any], *, path: str = "<memory>") -> TablesConfig:
    comments = payload.get("comments")
    if comments is not None and not isinstance(comments, str):
        raise ConfigParseError(path, "invalid_shape", "comments must be a string")

    raw_table_comments = payload.get("table_comments", {})
    if not isinstance(raw_table_comments, Mapping):
        raise ConfigParseError(path, "invalid_shape", "table_comments must be a table")
    table_comments = {}
    for key, value in raw_table_comments.items():
        if not isinstance(value, str):
            raise ConfigParseError(path, "invalid_shape", f"table_comments.{key} must be a string")
        table_comments[str(key)] = value

    return TablesConfig(comments=comments, table_comments=MappingProxyType(table_comments))


def resolve_tables_config_path(path: str | os.PathLike | None = None) -> Path:
    if path is not None:
        return Path(path)
    override = os.getenv(TABLES_CONFIG_PATH_ENV, "").strip()
    if override:
        return Path(override)
    return Path(DEFAULT_TABLES_CONFIG_FILE)


def load_tables_config(path: str | os.PathLike | None = None) -> TablesConfig:
    """Load table comments; a missing file yields an empty config, anything else broken raises."""
    resolved = resolve_tables_config_path(path)
    result = load_toml_detailed(resolved)
    error_kind = result.get("error_kind")
    log_event(
        _TABLES_CONFIG_LOG,
        "tables_config_loaded",
        path=result["path"],
        source="defaults" if error_kind == "missing" else "file",
        error_kind=error_kind,
    )
    if error_kind == "missing":
        return TablesConfig()
    if not result["ok"]:
        raise ConfigParseError(result["path"], error_kind, result.get("error"))
    return parse_tables_config(result["payload"], path=result["path"])
