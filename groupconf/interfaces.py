from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol


class KeyValueDocumentStore(Protocol):
    """
    A single JSON object persisted as one unit.
    """

    @property
    def path(self) -> Path:
        ...

    def exists(self) -> bool:
        """Whether the backing document exists. Never raises."""
        ...

    def load(self) -> dict[str, Any]:
        """Load and return the full document."""
        ...

    def save(self, doc: dict[str, Any]) -> None:
        """Persist the full document atomically."""
        ...

    def unlink(self) -> None:
        ...
