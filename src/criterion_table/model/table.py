from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Iterator, Mapping

from criterion_table.errors import DuplicateColumnError
from criterion_table.model.measurement import Comparison, TimeMeasurement, compare_to_baseline

ROW_LABEL_COLUMN = ""


def display_width(text: str) -> int:
    return len(text)


@dataclass(frozen=True)
class ColumnInfo:
    name: str
    max_width: int

    def widened(self, width: int) -> "ColumnInfo":
        if width <= self.max_width:
            return self
        return replace(self, max_width=width)


class ColumnWidthRegistry:
    """Table-level column order and running maximum display widths.

    Slot 0 is the unnamed row-label column, sized from the longest row name.
    Data columns follow it in the order their positions were resolved.
    """

    def __init__(self):
        self._columns: list[ColumnInfo] = []

    def __len__(self) -> int:
        return len(self._columns)

    def __iter__(self) -> Iterator[ColumnInfo]:
        return iter(self._columns)

    def update_row_label(self, row_name: str) -> None:
        width = display_width(row_name)
        if self._columns:
            self._columns[0] = self._columns[0].widened(width)
        else:
            self._columns.append(ColumnInfo(ROW_LABEL_COLUMN, width))

    def update_column(self, idx: int, name: str, width: int) -> None:
        for pos in range(1, len(self._columns)):
            if self._columns[pos].name == name:
                self._columns[pos] = self._columns[pos].widened(width)
                return
        # list.insert appends when idx runs past the end.
        self._columns.insert(max(idx, 1), ColumnInfo(name, width))

    def freeze(self) -> tuple[ColumnInfo, ...]:
        return tuple(self._columns)


@dataclass(frozen=True)
class Column:
    name: str
    measurement: TimeMeasurement
    comparison: Comparison = field(default_factory=Comparison)

    def display_width(self) -> int:
        # Markup added by a formatter is not counted here.
        return self.measurement.display_width() + self.comparison.display_width()


@dataclass(frozen=True)
class Row:
    name: str
    columns: Mapping[str, Column]

    def get(self, column_name: str) -> Column | None:
        return self.columns.get(column_name)


@dataclass(frozen=True)
class Table:
    name: str
    columns: tuple[ColumnInfo, ...]
    rows: Mapping[str, Row]

    @property
    def row_label_width(self) -> int:
        return self.columns[0].max_width if self.columns else 0

    @property
    def data_columns(self) -> tuple[ColumnInfo, ...]:
        return self.columns[1:]

    def is_populated(self) -> bool:
        return bool(self.columns)


@dataclass(frozen=True)
class TableSet:
    tables: Mapping[str, Table]

    @property
    def table_names(self) -> list[str]:
        return list(self.tables)

    def __iter__(self) -> Iterator[Table]:
        return iter(self.tables.values())

    def __len__(self) -> int:
        return len(self.tables)

    def __getitem__(self, name: str) -> Table:
        return self.tables[name]

    def render(self, formatter, config=None) -> str:
        from criterion_table.formatter.base import render

        return render(self, formatter, config)


class RowBuilder:
    def __init__(self, name: str):
        self.name = name
        self._columns: dict[str, Column] = {}

    def baseline(self) -> TimeMeasurement | None:
        # First column recorded for this row, not for the table.
        for column in self._columns.values():
            return column.measurement
        return None

    def add_column(self, name: str, measurement: TimeMeasurement, comparison: Comparison) -> Column:
        if name in self._columns:
            raise DuplicateColumnError(name, self.name)
        column = Column(name, measurement, comparison)
        self._columns[name] = column
        return column

    def freeze(self) -> Row:
        return Row(self.name, MappingProxyType(dict(self._columns)))


class TableBuilder:
    def __init__(self, name: str):
        self.name = name
        self.columns = ColumnWidthRegistry()
        self._rows: dict[str, RowBuilder] = {}

    def row(self, name: str) -> RowBuilder:
        row = self._rows.get(name)
        if row is None:
            row = self._rows[name] = RowBuilder(name)
        return row

    def add_column_data(self, idx: int, column_name: str, row_name: str, measurement: TimeMeasurement) -> Column:
        self.columns.update_row_label(row_name)

        row = self.row(row_name)
        comparison = compare_to_baseline(row.baseline(), measurement)
        try:
            column = row.add_column(column_name, measurement, comparison)
        except DuplicateColumnError as exc:
            raise DuplicateColumnError(column_name, row_name, self.name) from exc

        width = max(column.display_width(), display_width(column_name))
        self.columns.update_column(idx, column_name, width)
        return column

    def freeze(self) -> Table:
        rows = {name: row.freeze() for name, row in self._rows.items()}
        return Table(self.name, self.columns.freeze(), MappingProxyType(rows))
