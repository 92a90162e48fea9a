from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from pydantic import RootModel, ValidationError

from .config_file import MISSING, ConfigFile, ConfigOptions
from .errors import JsonParseError, MissingGroupNameError
from .interfaces import KeyValueDocumentStore

DEFAULT_GROUP = "default"


class GroupedContents(RootModel[dict[str, dict[str, Any]]]):
    """
    Mirrors the on-disk document exactly:
      { "<group>": { "<key>": <json value>, ... }, ... }

    Every group value must itself be an object.
    """

    @classmethod
    def from_disk_doc(cls, doc: Mapping[str, Any], path: Path | None = None) -> "GroupedContents":
        try:
            return cls.model_validate(dict(doc))
        except ValidationError as e:
            err = e.errors()[0]
            group = err["loc"][0] if err["loc"] else "?"
            raise JsonParseError(path, f"group {group!r} must be an object") from e

    def to_disk_doc(self) -> dict[str, dict[str, Any]]:
        return {group: dict(values) for group, values in self.root.items()}


@dataclass(frozen=True)
class ConfigGroupOptions(ConfigOptions):
    default_group: str = DEFAULT_GROUP


class ConfigGroup:
    """
    A config file that stores values in named groups, e.g. to keep different
    values per command without manipulating the nested mapping by hand.

    Unqualified accessors (``get``, ``set``, ``has``, ...) act on the default
    group; the ``*_in_group`` variants take an explicit group. A falsy group
    argument always means the default group.

    Example::

        config = await ConfigGroup.create(ConfigGroup.get_options("my-command", "plugin.json"))
        config.set("key", "value")                  # my-command.key
        config.set_in_group("key", "other", "all")  # all.key
        await config.write()
    """

    def __init__(
        self,
        options: ConfigOptions,
        *,
        default_group: str | None = None,
        store: KeyValueDocumentStore | None = None,
    ) -> None:
        self._file = ConfigFile(options, store=store, parser=self._parse)
        self._default_group = DEFAULT_GROUP
        if default_group is not None:
            self.set_default_group(default_group)
        elif isinstance(options, ConfigGroupOptions):
            self.set_default_group(options.default_group)

    @staticmethod
    def get_options(default_group: str, filename: str | None = None, **kwargs: Any) -> ConfigGroupOptions:
        return ConfigGroupOptions(
            filename=filename or f"{default_group}.json",
            default_group=default_group,
            **kwargs,
        )

    @classmethod
    async def create(cls, options: ConfigOptions, **kwargs: Any) -> "ConfigGroup":
        return cls(options, **kwargs)

    @classmethod
    async def retrieve(cls, options: ConfigOptions, **kwargs: Any) -> "ConfigGroup":
        config = cls(options, **kwargs)
        await config.read()
        return config

    def _parse(self, doc: dict[str, Any]) -> dict[str, Any]:
        return GroupedContents.from_disk_doc(doc, self._file.path).to_disk_doc()

    @property
    def path(self) -> Path:
        return self._file.path

    @property
    def default_group(self) -> str:
        return self._default_group

    def set_default_group(self, group: str) -> None:
        """
        Set the group that unqualified accessors use.

        Raises MissingGroupNameError if ``group`` is empty or None.
        """
        if not group:
            raise MissingGroupNameError("null or undefined group")
        self._default_group = str(group)

    # ------------------------------------------------------------------
    # Storage (forwarded to the underlying file)
    # ------------------------------------------------------------------

    async def exists(self) -> bool:
        return await self._file.exists()

    async def read(self, *, force: bool = False) -> dict[str, Any]:
        return await self._file.read(force=force)

    async def write(self, contents: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return await self._file.write(contents)

    async def unlink(self) -> None:
        await self._file.unlink()

    async def update_value(self, key: str, value: Any = MISSING, group: str | None = None) -> None:
        """Read the latest file, set one value in ``group`` and save."""
        await self.read(force=True)
        self.set_in_group(key, value, group)
        await self.write()

    async def update_values(self, new_entries: Mapping[str, Any], group: str | None = None) -> dict[str, Any]:
        """
        Set several values in one read-modify-write cycle.

        Returns the entries that were applied; MISSING values were removed.
        """
        await self.read(force=True)
        target = group or self._default_group
        for key, value in new_entries.items():
            self.set_in_group(key, value, target)
        await self.write()
        return dict(new_entries)

    # ------------------------------------------------------------------
    # Group-qualified accessors
    # ------------------------------------------------------------------

    def get_group(self, group: str | None = None) -> dict[str, Any] | None:
        return self._file.get_contents().get(group or self._default_group)

    def get_in_group(self, key: str, group: str | None = None) -> Any:
        contents = self.get_group(group)
        if contents is None:
            return MISSING
        return contents.get(key, MISSING)

    def set_in_group(self, key: str, value: Any = MISSING, group: str | None = None) -> dict[str, Any]:
        """
        Set ``key`` in ``group``, creating the group on first write.

        A MISSING value removes the key (None stores a JSON null); the group
        is kept even if emptied.
        """
        contents = self._file.get_contents().setdefault(group or self._default_group, {})
        if value is MISSING:
            contents.pop(key, None)
        else:
            contents[key] = value
        return contents

    def unset_in_group(self, key: str, group: str | None = None) -> bool:
        contents = self.get_group(group)
        if contents is None or key not in contents:
            return False
        del contents[key]
        return True

    # ------------------------------------------------------------------
    # Default-group accessors
    # ------------------------------------------------------------------

    def get(self, key: str) -> Any:
        return self.get_in_group(key)

    def set(self, key: str, value: Any = MISSING) -> dict[str, Any]:
        return self.set_in_group(key, value)

    def has(self, key: str) -> bool:
        contents = self.get_group()
        return contents is not None and key in contents

    def unset(self, key: str) -> bool:
        return self.unset_in_group(key)

    def keys(self) -> list[str]:
        return list((self.get_group() or {}).keys())

    def values(self) -> list[Any]:
        return list((self.get_group() or {}).values())

    def entries(self) -> list[tuple[str, Any]]:
        return list((self.get_group() or {}).items())

    def clear(self) -> None:
        self._file.get_contents().pop(self._default_group, None)

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def groups(self) -> list[str]:
        return list(self._file.get_contents().keys())

    def to_object(self) -> dict[str, dict[str, Any]]:
        return GroupedContents.model_construct(self._file.get_contents()).to_disk_doc()

    def set_contents_from_object(self, obj: Mapping[str, Any]) -> None:
        self._file.set_contents(obj)
