from __future__ import annotations

from io import StringIO
from typing import Sequence

from criterion_table.formatter.base import Formatter
from criterion_table.model.measurement import Comparison, Direction, TimeMeasurement
from criterion_table.model.table import ColumnInfo

CT_URL = "https://github.com/nu11ptr/criterion-table"

# Markup allowances, in characters
# Row label: bold + backticks
FIRST_COL_EXTRA_WIDTH = len("**``**")
# Data cell: parens + backticks + bold (italics is shorter) + one space + marker emoji
USED_EXTRA_WIDTH = len("() ``****XX")
UNUSED_CELL = "`N/A`"


def encode_link(name: str) -> str:
    """Anchor for the table of contents: lowercase, spaces become ``-``."""
    return name.replace(" ", "-").lower()


class GFMFormatter(Formatter):
    """Github Flavored Markdown"""

    name = "gfm"

    @staticmethod
    def pad(buffer: StringIO, ch: str, max_width: int, written: int) -> None:
        # Inclusive, which leaves the trailing space before the next pipe
        buffer.write(ch * (max_width - written + 1))

    def start(self, buffer, comment, tables: Sequence[str]):
        buffer.write("# Benchmarks\n\n")

        if comment is not None:
            buffer.write(comment)
            buffer.write("\n")

        for table in tables:
            buffer.write(f"- [{table}](#{encode_link(table)})\n")

        buffer.write("\n")

    def end(self, buffer):
        buffer.write(f"Made with [criterion-table]({CT_URL})\n")

    def start_table(self, buffer, name, comment, columns: Sequence[ColumnInfo]):
        buffer.write(f"## {name}\n\n")

        if comment is not None:
            buffer.write(comment)
            buffer.write("\n")

        first_col_max_width = columns[0].max_width + FIRST_COL_EXTRA_WIDTH

        # Header
        buffer.write("| ")
        self.pad(buffer, " ", first_col_max_width, 0)
        for column in columns[1:]:
            buffer.write(f"| `{column.name}`")
            self.pad(buffer, " ", column.max_width + USED_EXTRA_WIDTH, len(column.name) + 2)
        buffer.write(" |\n")

        # Delimiter, everything left justified
        buffer.write("|:")
        self.pad(buffer, "-", first_col_max_width, 0)
        for column in columns[1:]:
            buffer.write("|:")
            self.pad(buffer, "-", column.max_width + USED_EXTRA_WIDTH, 0)
        buffer.write(" |\n")

    def end_table(self, buffer):
        buffer.write("\n")

    def start_row(self, buffer, name, max_width):
        if name:
            buffer.write(f"| **`{name}`**")
            written = len(name) + FIRST_COL_EXTRA_WIDTH
        else:
            buffer.write("| ")
            written = 0

        self.pad(buffer, " ", max_width + FIRST_COL_EXTRA_WIDTH, written)

    def end_row(self, buffer):
        buffer.write(" |\n")

    def used_column(self, buffer, time: TimeMeasurement, compare: Comparison, max_width):
        direction = compare.direction
        if direction is Direction.FASTER:
            data = f"`{time}` (✅ **{compare}**)"
        elif direction is Direction.SLOWER:
            data = f"`{time}` (❌ *{compare}*)"
        else:
            data = f"`{time}` ({compare})"

        buffer.write("| ")
        buffer.write(data)
        self.pad(buffer, " ", max_width + USED_EXTRA_WIDTH, len(data))

    def unused_column(self, buffer, max_width):
        buffer.write("| ")
        buffer.write(UNUSED_CELL)
        self.pad(buffer, " ", max_width + USED_EXTRA_WIDTH, len(UNUSED_CELL))
