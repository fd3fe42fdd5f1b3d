from __future__ import annotations

from abc import ABC, abstractmethod
from io import StringIO
import logging
from typing import Sequence

from criterion_table.config.tables import TablesConfig
from criterion_table.model.measurement import Comparison, TimeMeasurement
from criterion_table.model.table import ColumnInfo, TableSet
from criterion_table.util.logging import log_event

LOG = logging.getLogger(__name__)


class Formatter(ABC):
    """Visitor that writes one output encoding of a finished ``TableSet``.

    ``render`` drives the calls in a fixed order: ``start`` once, then for each
    table ``start_table``, per row ``start_row``, one ``used_column`` or
    ``unused_column`` per data column and ``end_row``, then ``end_table``, and
    finally ``end``. Every call writes to the shared ``buffer`` only.
    """

    name = "formatter"

    @abstractmethod
    def start(self, buffer: StringIO, comment: str | None, tables: Sequence[str]) -> None:
        """Start of the document: top level ``comment`` (if any) and all table names."""

    @abstractmethod
    def end(self, buffer: StringIO) -> None:
        """End of the document."""

    @abstractmethod
    def start_table(
        self,
        buffer: StringIO,
        name: str,
        comment: str | None,
        columns: Sequence[ColumnInfo],
    ) -> None:
        """Start of a table; ``columns[0]`` is the row-label column."""

    @abstractmethod
    def end_table(self, buffer: StringIO) -> None:
        """End of a table."""

    @abstractmethod
    def start_row(self, buffer: StringIO, name: str, max_width: int) -> None:
        """Start of a row with its label and the label column width."""

    @abstractmethod
    def end_row(self, buffer: StringIO) -> None:
        """End of a row."""

    @abstractmethod
    def used_column(
        self,
        buffer: StringIO,
        time: TimeMeasurement,
        compare: Comparison,
        max_width: int,
    ) -> None:
        """A populated cell with its measurement, comparison and column width."""

    @abstractmethod
    def unused_column(self, buffer: StringIO, max_width: int) -> None:
        """A cell the row has no data for."""


def render(table_set: TableSet, formatter: Formatter, config: TablesConfig | None = None) -> str:
    config = config or TablesConfig()
    buffer = StringIO()

    formatter.start(buffer, config.comments, table_set.table_names)

    for table in table_set:
        if not table.is_populated():
            continue

        formatter.start_table(buffer, table.name, config.table_comment(table.name), table.columns)

        for row in table.rows.values():
            formatter.start_row(buffer, row.name, table.row_label_width)

            for info in table.data_columns:
                column = row.get(info.name)
                if column is not None:
                    formatter.used_column(buffer, column.measurement, column.comparison, info.max_width)
                else:
                    formatter.unused_column(buffer, info.max_width)

            formatter.end_row(buffer)

        formatter.end_table(buffer)

    formatter.end(buffer)

    text = buffer.getvalue()
    log_event(
        LOG,
        "report_rendered",
        formatter=formatter.name,
        tables=len(table_set),
        chars=len(text),
    )
    return text
