"""Markdown comparison tables from cargo-criterion JSON benchmark output."""

from criterion_table._version import VERSION, __version__

from criterion_table.config import TablesConfig, load_tables_config
from criterion_table.errors import (
    BuildError,
    ConfigParseError,
    CriterionTableError,
    DuplicateColumnError,
    InputParseError,
    MalformedIdentifierError,
    UnrecognizedTimeUnitError,
)
from criterion_table.formatter import FORMATTERS, Formatter, GFMFormatter, get_formatter, render
from criterion_table.model import (
    Comparison,
    Direction,
    TableSet,
    TimeMeasurement,
    TimeUnit,
    build_table_set,
    read_raw_records,
)


def build_tables(stream, formatter=None, config_path=None) -> str:
    """Read raw criterion JSON from ``stream`` and render it with ``formatter``.

    ``config_path`` names an optional tables config; a missing file is skipped.
    """
    records = read_raw_records(stream)
    table_set = build_table_set(records)
    config = load_tables_config(config_path)
    return render(table_set, formatter or GFMFormatter(), config)


__all__ = [
    "VERSION",
    "__version__",
    "BuildError",
    "Comparison",
    "ConfigParseError",
    "CriterionTableError",
    "Direction",
    "DuplicateColumnError",
    "FORMATTERS",
    "Formatter",
    "GFMFormatter",
    "InputParseError",
    "MalformedIdentifierError",
    "TableSet",
    "TablesConfig",
    "TimeMeasurement",
    "TimeUnit",
    "UnrecognizedTimeUnitError",
    "build_table_set",
    "build_tables",
    "get_formatter",
    "load_tables_config",
    "read_raw_records",
    "render",
]
