from __future__ import annotations

from pathlib import Path
from typing import Any


class ConfigError(Exception):
    """
    Base error for the config store.

    Carries a stable ``name`` key plus positional ``tokens`` so callers can
    render their own message; the store never formats user-facing text.
    """

    name = "ConfigError"

    def __init__(self, *tokens: Any, name: str | None = None) -> None:
        if name:
            self.name = name
        self.tokens = tuple(tokens)
        super().__init__(self.name, *self.tokens)

    def __str__(self) -> str:
        if not self.tokens:
            return self.name
        return f"{self.name}: {', '.join(str(t) for t in self.tokens)}"


class MissingGroupNameError(ConfigError):
    name = "MissingGroupName"


class NotFoundError(ConfigError):
    name = "NotFound"

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(str(path))


class JsonParseError(ConfigError):
    name = "ParseError"

    def __init__(self, path: Path | None, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(str(path) if path is not None else "<object>", detail)


class EmptyInputError(ConfigError):
    name = "EmptyInput"


class InvalidFormatError(ConfigError):
    name = "InvalidFormat"

    def __init__(self, entry: str) -> None:
        self.entry = entry
        super().__init__(entry)
