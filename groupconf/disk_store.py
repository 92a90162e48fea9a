from __future__ import annotations

import copy
import logging
import threading
from pathlib import Path
from typing import Any, Mapping

from .errors import JsonParseError, NotFoundError
from .interfaces import KeyValueDocumentStore
from .json_store import atomic_write_json, read_json
from .settings import get_settings

logger = logging.getLogger(__name__)


class PathLockRegistry:
    """
    One lock per absolute file path, shared by every store in the process.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    def lock_for(self, path: Path) -> threading.Lock:
        key = str(path.expanduser().absolute())
        with self._guard:
            return self._locks.setdefault(key, threading.Lock())


GLOBAL_PATH_LOCKS = PathLockRegistry()


class DiskJsonDocumentStore(KeyValueDocumentStore):
    """
    Stores a single JSON object on disk at a fixed path.

    - ``load`` raises NotFoundError for a missing file unless a ``default``
      document was supplied, and JsonParseError for anything that is not a
      JSON object.
    - Writes atomically; key order is preserved.
    """

    def __init__(self, path: Path, *, default: Mapping[str, Any] | None = None):
        self._path = Path(path)
        self._default = dict(default) if default is not None else None

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        try:
            return self._path.is_file()
        except OSError:
            return False

    def load(self) -> dict[str, Any]:
        with GLOBAL_PATH_LOCKS.lock_for(self._path):
            try:
                raw = read_json(self._path)
            except FileNotFoundError:
                if self._default is None:
                    raise NotFoundError(self._path) from None
                logger.debug("CONFIG LOAD: %s missing, using default", self._path)
                return copy.deepcopy(self._default)
            if not isinstance(raw, dict):
                raise JsonParseError(self._path, f"expected a JSON object, got {type(raw).__name__}")
            logger.debug("CONFIG LOAD: %s (%d keys)", self._path, len(raw))
            return raw

    def save(self, doc: dict[str, Any]) -> None:
        indent = get_settings().json_indent
        with GLOBAL_PATH_LOCKS.lock_for(self._path):
            atomic_write_json(self._path, doc, indent=indent)
        logger.debug("CONFIG SAVE: %s (%d keys)", self._path, len(doc))

    def unlink(self) -> None:
        with GLOBAL_PATH_LOCKS.lock_for(self._path):
            self._path.unlink(missing_ok=True)
        logger.debug("CONFIG UNLINK: %s", self._path)
