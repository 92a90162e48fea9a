from __future__ import annotations

import asyncio
import json
import threading

import pytest

from groupconf.config_file import MISSING, ConfigFile, ConfigOptions
from groupconf.disk_store import DiskJsonDocumentStore
from groupconf.errors import JsonParseError, NotFoundError


def test_paths_resolve_global_local_and_root_folder(sandbox_home, tmp_path):
    assert ConfigFile(ConfigOptions("a.json")).path == sandbox_home / "a.json"
    assert ConfigFile(ConfigOptions("b.json", is_global=False)).path == tmp_path / ".groupconf" / "b.json"
    assert ConfigFile(ConfigOptions("c.json", root_folder=tmp_path / "x")).path == tmp_path / "x" / "c.json"


def test_read_missing_file_creates_empty_contents(sandbox_home):
    async def _run():
        config = await ConfigFile.retrieve(ConfigOptions("flat.json"))
        assert config.loaded
        assert config.entries() == []
        assert await config.exists() is False

    asyncio.run(_run())


def test_read_missing_file_without_create_raises(sandbox_home):
    async def _run():
        config = ConfigFile(ConfigOptions("flat.json", create_if_missing=False))
        with pytest.raises(NotFoundError):
            await config.read()

    asyncio.run(_run())


def test_read_malformed_file_raises_parse_error(sandbox_home):
    sandbox_home.mkdir(parents=True)
    (sandbox_home / "flat.json").write_text('{"a": ', encoding="utf-8")

    async def _run():
        with pytest.raises(JsonParseError):
            await ConfigFile(ConfigOptions("flat.json")).read()

    asyncio.run(_run())


def test_accessors_and_write(sandbox_home):
    async def _run():
        config = await ConfigFile.create(ConfigOptions("flat.json"))
        config.set("b", 1)
        config.set("a", {"nested": True})
        config.set("c", "x")
        assert config.keys() == ["b", "a", "c"]
        assert config.values() == [1, {"nested": True}, "x"]
        assert config.has("a")
        assert config.get("missing") is MISSING

        config.set("c")
        assert not config.has("c")
        assert config.unset("b") is True
        assert config.unset("b") is False
        assert len(config) == 1

        written = await config.write()
        assert written == {"a": {"nested": True}}
        assert json.loads(config.path.read_text(encoding="utf-8")) == {"a": {"nested": True}}

    asyncio.run(_run())


def test_read_is_cached_until_forced(sandbox_home):
    async def _run():
        first = await ConfigFile.create(ConfigOptions("flat.json"))
        await first.write({"k": "v1"})

        second = await ConfigFile.retrieve(ConfigOptions("flat.json"))
        await first.write({"k": "v2"})

        assert (await second.read())["k"] == "v1"
        assert (await second.read(force=True))["k"] == "v2"

    asyncio.run(_run())


def test_first_accessor_loads_lazily(sandbox_home):
    sandbox_home.mkdir(parents=True)
    (sandbox_home / "flat.json").write_text('{"x": 1}', encoding="utf-8")

    config = ConfigFile(ConfigOptions("flat.json"))
    assert not config.loaded
    assert config.get("x") == 1
    assert config.loaded


def test_unlink_removes_file_and_cache(sandbox_home):
    async def _run():
        config = await ConfigFile.create(ConfigOptions("flat.json"))
        await config.write({"k": 1})
        assert await config.exists()
        await config.unlink()
        assert await config.exists() is False
        assert not config.loaded
        assert config.to_object() == {}

    asyncio.run(_run())


def test_null_is_a_value_not_a_removal(sandbox_home):
    async def _run():
        config = await ConfigFile.create(ConfigOptions("flat.json"))
        config.set("k", None)
        assert config.has("k")
        assert config.get("k") is None
        assert config.get("other") is MISSING

        await config.write()
        assert json.loads(config.path.read_text(encoding="utf-8")) == {"k": None}

        config.set("k", MISSING)
        assert not config.has("k")

    asyncio.run(_run())


def test_write_on_unloaded_store_loads_in_worker_thread(sandbox_home):
    loaded_in: list[str] = []

    class RecordingStore(DiskJsonDocumentStore):
        def load(self):
            loaded_in.append(threading.current_thread().name)
            return super().load()

    sandbox_home.mkdir(parents=True)
    path = sandbox_home / "flat.json"
    path.write_text('{"keep": 1}', encoding="utf-8")

    async def _run():
        config = ConfigFile(ConfigOptions("flat.json"), store=RecordingStore(path, default={}))
        written = await config.write()
        assert written == {"keep": 1}

    asyncio.run(_run())
    assert loaded_in and loaded_in[0] != threading.main_thread().name
    assert json.loads(path.read_text(encoding="utf-8")) == {"keep": 1}
