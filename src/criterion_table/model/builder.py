from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterable, NamedTuple

from criterion_table.errors import MalformedIdentifierError
from criterion_table.model.measurement import TimeMeasurement
from criterion_table.model.raw import RawBenchmarkRecord, RawCriterionData
from criterion_table.model.table import TableBuilder, TableSet
from criterion_table.util.logging import log_event

LOG = logging.getLogger(__name__)

ID_SEPARATOR = "/"


class BenchmarkPath(NamedTuple):
    table: str
    column: str
    row: str


def split_identifier(identifier: str) -> BenchmarkPath:
    """Split ``table/column[/row]``; a missing row becomes the empty row name.

    Segments past the third are ignored.
    """
    parts = identifier.split(ID_SEPARATOR)
    if len(parts) < 2:
        raise MalformedIdentifierError(identifier)
    row = parts[2] if len(parts) > 2 else ""
    return BenchmarkPath(parts[0], parts[1], row)


class ColumnPosition:
    """Counts row-name occurrences across the whole input stream.

    The count after incrementing is the slot a column is inserted at when its
    table has not registered that column yet. The counter is shared by all
    tables, so column order follows how row names recur through the stream.
    """

    def __init__(self):
        self._counts: dict[str, int] = {}

    def next_idx(self, row_name: str) -> int:
        count = self._counts.get(row_name, 0) + 1
        self._counts[row_name] = count
        return count


class TableSetBuilder:
    def __init__(self):
        self._tables: dict[str, TableBuilder] = {}
        self._positions = ColumnPosition()
        self._built = False

    def _table(self, name: str) -> TableBuilder:
        table = self._tables.get(name)
        if table is None:
            table = self._tables[name] = TableBuilder(name)
        return table

    def add_record(self, record: RawCriterionData) -> None:
        if self._built:
            raise RuntimeError("TableSetBuilder.build() has already been called")
        if not isinstance(record, RawBenchmarkRecord):
            return

        path = split_identifier(record.id)
        table = self._table(path.table)
        measurement = TimeMeasurement.parse(record.typical.estimate, record.typical.unit)
        idx = self._positions.next_idx(path.row)
        column = table.add_column_data(idx, path.column, path.row, measurement)

        if LOG.isEnabledFor(logging.DEBUG):
            LOG.debug(
                "routed id=%s table=%s row=%s column=%s idx=%d time=%s comparison=%s",
                record.id,
                path.table,
                path.row,
                path.column,
                idx,
                column.measurement,
                column.comparison,
            )

    def build(self) -> TableSet:
        self._built = True
        tables = {name: table.freeze() for name, table in self._tables.items()}
        table_set = TableSet(MappingProxyType(tables))
        log_event(
            LOG,
            "table_set_built",
            tables=len(table_set),
            rows=sum(len(table.rows) for table in table_set),
        )
        return table_set


def build_table_set(records: Iterable[RawCriterionData]) -> TableSet:
    builder = TableSetBuilder()
    for record in records:
        builder.add_record(record)
    return builder.build()
