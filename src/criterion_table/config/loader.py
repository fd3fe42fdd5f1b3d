from __future__ import annotations

from pathlib import Path

import tomllib

_MAX_CONFIG_FILE_BYTES = 1_048_576


def load_toml_detailed(path: Path) -> dict:
    path = Path(path)
    path_str = str(path)
    try:
        size_bytes = path.stat().st_size
    except FileNotFoundError:
        return {
            "ok": False,
            "payload": {},
            "path": path_str,
            "error_kind": "missing",
        }
    except OSError as exc:
        return {
            "ok": False,
            "payload": {},
            "path": path_str,
            "error_kind": "unreadable",
            "error": exc,
        }
    if size_bytes > _MAX_CONFIG_FILE_BYTES:
        return {
            "ok": False,
            "payload": {},
            "path": path_str,
            "error_kind": "oversized",
            "size_bytes": int(size_bytes),
        }
    try:
        with path.open("rb") as handle:
            loaded = tomllib.load(handle)
    except FileNotFoundError:
        return {
            "ok": False,
            "payload": {},
            "path": path_str,
            "error_kind": "missing",
        }
    except tomllib.TOMLDecodeError as exc:
        return {
            "ok": False,
            "payload": {},
            "path": path_str,
            "error_kind": "invalid_toml",
            "error": exc,
        }
    except (OSError, UnicodeDecodeError) as exc:
        return {
            "ok": False,
            "payload": {},
            "path": path_str,
            "error_kind": "unreadable",
            "error": exc,
        }
    return {
        "ok": True,
        "payload": loaded,
        "path": path_str,
        "error_kind": None,
        "size_bytes": int(size_bytes),
    }
