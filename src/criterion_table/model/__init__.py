from criterion_table.model.builder import (
    BenchmarkPath,
    ColumnPosition,
    TableSetBuilder,
    build_table_set,
    split_identifier,
)
from criterion_table.model.measurement import (
    Comparison,
    Direction,
    TimeMeasurement,
    TimeUnit,
    compare_to_baseline,
    ratio,
)
from criterion_table.model.raw import (
    ChangeDetails,
    ChangeType,
    ConfidenceInterval,
    RawBenchmarkGroup,
    RawBenchmarkRecord,
    RawCriterionData,
    Throughput,
    parse_raw_record,
    read_raw_records,
)
from criterion_table.model.table import (
    Column,
    ColumnInfo,
    ColumnWidthRegistry,
    Row,
    Table,
    TableSet,
)

__all__ = [
    "BenchmarkPath",
    "ChangeDetails",
    "ChangeType",
    "Column",
    "ColumnInfo",
    "ColumnPosition",
    "ColumnWidthRegistry",
    "Comparison",
    "ConfidenceInterval",
    "Direction",
    "RawBenchmarkGroup",
    "RawBenchmarkRecord",
    "RawCriterionData",
    "Row",
    "Table",
    "TableSet",
    "TableSetBuilder",
    "Throughput",
    "TimeMeasurement",
    "TimeUnit",
    "build_table_set",
    "compare_to_baseline",
    "parse_raw_record",
    "ratio",
    "read_raw_records",
    "split_identifier",
]
