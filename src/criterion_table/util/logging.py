from __future__ import annotations

import json
import logging

try:
    import orjson as _orjson
except Exception:  # pragma: no cover - optional acceleration
    _orjson = None

_TRUNCATED_SUFFIX = "...<truncated>"
_MAX_LOG_STRING_CHARS = 2048


def _sanitize_log_value(value):
    if isinstance(value, str) and len(value) > _MAX_LOG_STRING_CHARS:
        return value[:_MAX_LOG_STRING_CHARS] + _TRUNCATED_SUFFIX
    return value


def _serialize_structured_payload(payload: dict[str, object]) -> str:
    if _orjson is not None:
        try:
            return _orjson.dumps(payload, default=str).decode("utf-8")
        except TypeError:
            # orjson rejects some payloads (non-str keys, huge ints); json.dumps copes.
            pass
    return json.dumps(payload, default=str, ensure_ascii=False, separators=(",", ":"))


def log_structured_event(
    logger: logging.Logger,
    level: int,
    event: str,
    **fields,
) -> dict[str, object]:
    payload: dict[str, object] = {"event": str(event)}
    payload.update({k: _sanitize_log_value(v) for k, v in fields.items() if v is not None})
    logger.log(level, _serialize_structured_payload(payload))
    return payload


def log_event(logger: logging.Logger, event: str, level: int = logging.INFO, **fields) -> None:
    if not logger.isEnabledFor(level):
        return
    log_structured_event(logger, level, event, **fields)
