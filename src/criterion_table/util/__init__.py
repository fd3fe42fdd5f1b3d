from __future__ import annotations

from criterion_table.util.core import ReadableException
from criterion_table.util.json import iter_json_documents
from criterion_table.util.logging import log_event, log_structured_event

__all__ = [
    "ReadableException",
    "iter_json_documents",
    "log_event",
    "log_structured_event",
]
