from __future__ import annotations

from pathlib import Path

from .settings import get_settings


def global_dir() -> Path:
    return get_settings().home_dir


def local_dir(project_root: Path | None = None) -> Path:
    root = project_root if project_root is not None else Path.cwd()
    return root / get_settings().state_folder


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def config_path(filename: str, *, is_global: bool = True, root_folder: Path | None = None) -> Path:
    """
    Resolve where a config file lives.

    An explicit ``root_folder`` wins; otherwise global files go under the
    home dir and local ones under the project's state folder.
    """
    if root_folder is not None:
        return Path(root_folder) / filename
    if is_global:
        return global_dir() / filename
    return local_dir() / filename
