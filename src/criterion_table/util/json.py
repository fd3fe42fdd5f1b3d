from __future__ import annotations

import json as _stdlib_json
import re
from typing import Any, Iterator

# orjson has no incremental decoder; raw_decode walks concatenated documents.
JSONDecodeError = _stdlib_json.JSONDecodeError

_DECODER = _stdlib_json.JSONDecoder()
_WHITESPACE = re.compile(r"[ \t\n\r]*")


def line_of(text: str, pos: int) -> int:
    return text.count("\n", 0, pos) + 1


def iter_json_documents(text: str) -> Iterator[tuple[int, Any]]:
    """Yield ``(line, value)`` for each JSON value in ``text``.

    Values may be separated by any JSON whitespace, span several lines or share one.
    """
    end = len(text)
    pos = _WHITESPACE.match(text, 0).end()
    while pos < end:
        value, next_pos = _DECODER.raw_decode(text, pos)
        yield line_of(text, pos), value
        pos = _WHITESPACE.match(text, next_pos).end()
