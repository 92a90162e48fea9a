from __future__ import annotations

from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture
def sandbox_home(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """
    Point the global config dir at a temp directory so tests never touch ~/.groupconf.
    """
    home = tmp_path / "home"
    monkeypatch.setenv("GROUPCONF_HOME", str(home))
    monkeypatch.delenv("GROUPCONF_ALIAS_FILE", raising=False)
    monkeypatch.delenv("GROUPCONF_JSON_INDENT", raising=False)
    monkeypatch.chdir(tmp_path)
    return home
