from __future__ import annotations

from .aliases import AliasGroup, Aliases, parse_alias_pairs
from .config_file import MISSING, ConfigFile, ConfigOptions
from .config_group import DEFAULT_GROUP, ConfigGroup, ConfigGroupOptions, GroupedContents
from .disk_store import DiskJsonDocumentStore
from .errors import (
    ConfigError,
    EmptyInputError,
    InvalidFormatError,
    JsonParseError,
    MissingGroupNameError,
    NotFoundError,
)
from .interfaces import KeyValueDocumentStore

__all__ = [
    "AliasGroup",
    "Aliases",
    "parse_alias_pairs",
    "MISSING",
    "ConfigFile",
    "ConfigOptions",
    "DEFAULT_GROUP",
    "ConfigGroup",
    "ConfigGroupOptions",
    "GroupedContents",
    "DiskJsonDocumentStore",
    "KeyValueDocumentStore",
    "ConfigError",
    "EmptyInputError",
    "InvalidFormatError",
    "JsonParseError",
    "MissingGroupNameError",
    "NotFoundError",
]
