from __future__ import annotations

import asyncio
import json
from types import SimpleNamespace

from fastapi.testclient import TestClient


def _client() -> TestClient:
    import app as app_module

    # Build after the sandbox env is in place so the alias file lands in tmp.
    return TestClient(app_module.create_app())


def test_alias_routes_basic_flow(sandbox_home):
    client = _client()

    r = client.get("/aliases/orgs")
    assert r.status_code == 200
    assert r.json() == {}

    r = client.post("/aliases/orgs", json={"pairs": ["dev=00Dxx", "prod=00Dyy"]})
    assert r.status_code == 200
    assert r.json() == {"dev": "00Dxx", "prod": "00Dyy"}
    assert (sandbox_home / "alias.json").exists()

    r = client.get("/aliases/orgs/dev")
    assert r.status_code == 200
    assert r.json() == {"alias": "dev", "value": "00Dxx"}

    r = client.get("/aliases/orgs", params={"value": "00Dyy"})
    assert r.json() == {"alias": "prod"}

    r = client.put("/aliases/orgs/dev", json={"value": "00Dzz"})
    assert r.status_code == 200

    r = client.delete("/aliases/orgs/prod")
    assert r.status_code == 204
    assert client.get("/aliases/orgs").json() == {"dev": "00Dzz"}


def test_alias_routes_report_error_keys(sandbox_home):
    client = _client()

    r = client.post("/aliases/orgs", json={"pairs": []})
    assert r.status_code == 400
    assert r.json()["detail"]["error"] == "NoAliasesFound"

    r = client.post("/aliases/orgs", json={"pairs": ["ok=1", "broken"]})
    assert r.status_code == 400
    assert r.json()["detail"] == {"error": "InvalidFormat", "tokens": ["broken"]}
    assert client.get("/aliases/orgs").json() == {}

    r = client.get("/aliases/orgs/nobody")
    assert r.status_code == 404


def test_malformed_alias_file_is_reported(sandbox_home):
    sandbox_home.mkdir(parents=True)
    (sandbox_home / "alias.json").write_text("{oops", encoding="utf-8")

    r = _client().get("/aliases/orgs")
    assert r.status_code == 400
    assert r.json()["detail"]["error"] == "ParseError"


def test_put_null_stores_null_and_post_reports_removals(sandbox_home):
    client = _client()

    r = client.put("/aliases/orgs/cleared", json={"value": None})
    assert r.status_code == 200
    assert client.get("/aliases/orgs/cleared").json() == {"alias": "cleared", "value": None}

    r = client.post("/aliases/orgs", json={"pairs": ["cleared="]})
    assert r.json() == {"cleared": None}
    assert client.get("/aliases/orgs/cleared").status_code == 404


def _fake_request(aliases):
    # minimal shape for the router: request.app.state.{aliases, aliases_lock}
    state = SimpleNamespace(aliases=aliases, aliases_lock=asyncio.Lock())
    return SimpleNamespace(app=SimpleNamespace(state=state))


def test_concurrent_updates_are_all_persisted(sandbox_home):
    async def _run():
        import endpoints.alias_endpoints as routes
        from groupconf.aliases import Aliases

        aliases = await Aliases.create()
        request = _fake_request(aliases)

        await asyncio.gather(
            *(
                routes.set_alias("orgs", f"a{i}", routes.AliasValueRequest(value=str(i)), request)
                for i in range(20)
            )
        )
        await asyncio.gather(*(routes.remove_alias("orgs", f"a{i}", request) for i in range(0, 20, 2)))
        return aliases.config.path

    path = asyncio.run(_run())
    on_disk = json.loads(path.read_text(encoding="utf-8"))
    assert on_disk == {"orgs": {f"a{i}": str(i) for i in range(1, 20, 2)}}
