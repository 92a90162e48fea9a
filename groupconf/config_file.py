from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Iterator, Mapping

from .disk_store import DiskJsonDocumentStore
from .interfaces import KeyValueDocumentStore
from .paths import config_path

Parser = Callable[[dict[str, Any]], dict[str, Any]]


class _Missing:
    """Absent-value marker, distinct from a stored JSON null (None)."""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


@dataclass(frozen=True)
class ConfigOptions:
    filename: str
    is_global: bool = True
    root_folder: Path | None = None
    # When False, reading a missing file raises NotFoundError.
    create_if_missing: bool = True

    def resolve_path(self) -> Path:
        return config_path(self.filename, is_global=self.is_global, root_folder=self.root_folder)


class ConfigFile:
    """
    A flat, insertion-ordered key/value mapping backed by one JSON file.

    Contents are loaded lazily: ``read()`` loads them explicitly, and the
    first accessor call on an unloaded store loads them synchronously.
    Mutations stay in memory until ``write()``.

    Storage calls (``read``, ``write``, ``exists``, ``unlink``) are coroutines
    that run the blocking file I/O in a worker thread.
    """

    def __init__(
        self,
        options: ConfigOptions,
        *,
        store: KeyValueDocumentStore | None = None,
        parser: Parser | None = None,
    ) -> None:
        self.options = options
        if store is None:
            store = DiskJsonDocumentStore(
                options.resolve_path(),
                default={} if options.create_if_missing else None,
            )
        self._store = store
        self._parser = parser
        self._contents: dict[str, Any] | None = None

    @classmethod
    async def create(cls, options: ConfigOptions, **kwargs: Any) -> "ConfigFile":
        return cls(options, **kwargs)

    @classmethod
    async def retrieve(cls, options: ConfigOptions, **kwargs: Any) -> "ConfigFile":
        config = cls(options, **kwargs)
        await config.read()
        return config

    @property
    def path(self) -> Path:
        return self._store.path

    @property
    def loaded(self) -> bool:
        return self._contents is not None

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------

    def _load(self) -> dict[str, Any]:
        doc = self._store.load()
        if self._parser is not None:
            doc = self._parser(doc)
        self._contents = doc
        return doc

    async def exists(self) -> bool:
        return await asyncio.to_thread(self._store.exists)

    async def read(self, *, force: bool = False) -> dict[str, Any]:
        if self._contents is not None and not force:
            return self._contents
        return await asyncio.to_thread(self._load)

    async def write(self, contents: Mapping[str, Any] | None = None) -> dict[str, Any]:
        if contents is not None:
            self.set_contents(contents)
        elif self._contents is None:
            await self.read()
        doc = self.to_object()
        await asyncio.to_thread(self._store.save, doc)
        return doc

    async def unlink(self) -> None:
        await asyncio.to_thread(self._store.unlink)
        self._contents = None

    # ------------------------------------------------------------------
    # In-memory accessors
    # ------------------------------------------------------------------

    def get_contents(self) -> dict[str, Any]:
        if self._contents is None:
            return self._load()
        return self._contents

    def set_contents(self, contents: Mapping[str, Any]) -> None:
        doc = dict(contents)
        if self._parser is not None:
            doc = self._parser(doc)
        self._contents = doc

    def get(self, key: str) -> Any:
        """Return the value for ``key``, or MISSING. A stored null reads as None."""
        return self.get_contents().get(key, MISSING)

    def set(self, key: str, value: Any = MISSING) -> dict[str, Any]:
        contents = self.get_contents()
        if value is MISSING:
            contents.pop(key, None)
        else:
            contents[key] = value
        return contents

    def has(self, key: str) -> bool:
        return key in self.get_contents()

    def unset(self, key: str) -> bool:
        contents = self.get_contents()
        if key not in contents:
            return False
        del contents[key]
        return True

    def keys(self) -> list[str]:
        return list(self.get_contents().keys())

    def values(self) -> list[Any]:
        return list(self.get_contents().values())

    def entries(self) -> list[tuple[str, Any]]:
        return list(self.get_contents().items())

    def clear(self) -> None:
        self.get_contents().clear()

    def to_object(self) -> dict[str, Any]:
        return dict(self.get_contents())

    def set_contents_from_object(self, obj: Mapping[str, Any]) -> None:
        self.set_contents(obj)

    def __len__(self) -> int:
        return len(self.get_contents())

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())
