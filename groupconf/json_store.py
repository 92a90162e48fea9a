from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from .errors import JsonParseError
from .paths import ensure_dir


def read_json(path: Path) -> Any:
    """
    Read JSON from disk.

    Empty files read as an empty object. Missing files raise
    FileNotFoundError; invalid JSON raises JsonParseError.
    """
    raw = path.read_text(encoding="utf-8")
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise JsonParseError(path, f"line {e.lineno} column {e.colno}: {e.msg}") from e


def atomic_write_json(path: Path, payload: Any, *, indent: int = 2) -> None:
    """
    Atomically write JSON to disk by writing to a temp file then replacing.

    Key order is kept as given.
    """
    ensure_dir(path.parent)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        with tmp_path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, indent=indent or None)
            f.write("\n")
            f.flush()
            os.fsync(f.fileno())
        tmp_path.replace(path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
