from __future__ import annotations

from criterion_table.formatter.base import Formatter, render
from criterion_table.formatter.gfm import GFMFormatter, encode_link

FORMATTERS: dict[str, type[Formatter]] = {
    GFMFormatter.name: GFMFormatter,
}
DEFAULT_FORMAT = GFMFormatter.name


def get_formatter(name: str = DEFAULT_FORMAT) -> Formatter:
    try:
        formatter_cls = FORMATTERS[name]
    except KeyError:
        raise ValueError(
            f"Unknown output format {name!r}; expected one of: {', '.join(sorted(FORMATTERS))}"
        ) from None
    return formatter_cls()


__all__ = [
    "DEFAULT_FORMAT",
    "FORMATTERS",
    "Formatter",
    "GFMFormatter",
    "encode_link",
    "get_formatter",
    "render",
]
