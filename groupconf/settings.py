from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    # Locations
    home_dir: Path
    state_folder: str

    # Files
    alias_filename: str

    # Serialization
    json_indent: int


def get_settings() -> Settings:
    home_dir = Path(os.getenv("GROUPCONF_HOME", "~/.groupconf")).expanduser()
    state_folder = os.getenv("GROUPCONF_STATE_FOLDER", ".groupconf").strip() or ".groupconf"

    alias_filename = os.getenv("GROUPCONF_ALIAS_FILE", "alias.json").strip() or "alias.json"

    # Negative indents are meaningless to json.dump; clamp to compact output.
    json_indent = max(_env_int("GROUPCONF_JSON_INDENT", 2), 0)

    return Settings(
        home_dir=home_dir,
        state_folder=state_folder,
        alias_filename=alias_filename,
        json_indent=json_indent,
    )
