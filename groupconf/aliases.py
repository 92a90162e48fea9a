from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Sequence

from .config_file import MISSING
from .config_group import ConfigGroup, ConfigGroupOptions
from .errors import EmptyInputError, InvalidFormatError
from .settings import get_settings


class AliasGroup(str, Enum):
    """Groups of aliases. Only orgs are supported today."""

    ORGS = "orgs"


def parse_alias_pairs(pairs: Sequence[str]) -> dict[str, Any]:
    """
    Parse ``name=value`` strings into a mapping.

    Each entry needs exactly one ``=`` and a non-empty name. ``name=`` maps
    to MISSING (remove). The whole batch is validated before anything is
    returned, so a bad entry rejects every entry.
    """
    if not pairs:
        raise EmptyInputError(name="NoAliasesFound")

    parsed: dict[str, Any] = {}
    for arg in pairs:
        if arg.count("=") != 1:
            raise InvalidFormatError(arg)
        name, _, value = arg.partition("=")
        if not name:
            raise InvalidFormatError(arg)
        parsed[name] = value or MISSING
    return parsed


class Aliases:
    """
    Manage aliases stored in the global alias file. Aliases let users refer
    to values (such as org ids) by a short name.

    Every alias lives in a group; ``group`` arguments default to the group
    this instance was built for. Reads always reload the file, and every
    mutation is its own read-modify-write cycle.
    """

    def __init__(self, config: ConfigGroup, group: str = AliasGroup.ORGS) -> None:
        self._config = config
        self.group = str(getattr(group, "value", group))

    @classmethod
    async def create(cls, filename: str | None = None, group: str = AliasGroup.ORGS, **kwargs: Any) -> "Aliases":
        group = str(getattr(group, "value", group))
        options = ConfigGroupOptions(
            filename=filename or get_settings().alias_filename,
            default_group=group,
            **kwargs,
        )
        return cls(await ConfigGroup.create(options), group)

    @property
    def config(self) -> ConfigGroup:
        return self._config

    def _group(self, group: str | None) -> str:
        return str(getattr(group, "value", group)) if group else self.group

    async def parse_and_update(self, pairs: Sequence[str], group: str | None = None) -> dict[str, Any]:
        """
        Update a batch of aliases from ``name=value`` strings in one save.

        Returns the aliases that were applied (MISSING for removed ones).
        """
        new_aliases = parse_alias_pairs(pairs)
        return await self._config.update_values(new_aliases, self._group(group))

    async def update(self, alias: str, value: Any, group: str | None = None) -> None:
        await self._config.update_value(alias, value, self._group(group))

    async def remove(self, alias: str, group: str | None = None) -> None:
        await self.unset([alias], group)

    async def unset(self, aliases: Iterable[str], group: str | None = None) -> None:
        target = self._group(group)
        await self._config.read(force=True)
        for alias in aliases:
            self._config.unset_in_group(alias, target)
        await self._config.write()

    async def fetch(self, alias: str, group: str | None = None) -> Any:
        """Return the alias value, or MISSING when the alias is not set."""
        await self._config.read(force=True)
        return self._config.get_in_group(alias, self._group(group))

    async def list(self, group: str | None = None) -> dict[str, Any]:
        await self._config.read(force=True)
        return dict(self._config.get_group(self._group(group)) or {})

    async def by_value(self, value: Any, group: str | None = None) -> str | None:
        """Return the first alias whose value is ``value`` (same type, equal)."""
        for alias, candidate in (await self.list(group)).items():
            if type(candidate) is type(value) and candidate == value:
                return alias
        return None
