"""Documentation & Validation Routes — reports over the whole registry.

Tests cover:
    - /validation: valid built-in model; closed-world lists external targets
    - /docs/markdown: Markdown identical to render_markdown()
    - /live-checks: results per probe; unknown resource or method fails before probing
"""

import httpx

from rs_contracts.api.routes import documentation
from rs_contracts.services.documentation import render_markdown
from rs_contracts.services.live_checker import LiveContractChecker


async def test_validation_report_for_builtin_model(client):
    res = await client.get("/api/v1/validation")
    assert res.status_code == 200
    assert res.json() == {"valid": True, "count": 0, "violations": []}


async def test_closed_world_validation_report(client):
    res = await client.get("/api/v1/validation", params={"closed_world": True})
    body = res.json()
    assert body["valid"] is False
    assert body["count"] == len(body["violations"])
    assert {v["kind"] for v in body["violations"]} == {"unresolved_target"}


async def test_markdown_documentation(client, app):
    res = await client.get("/api/v1/docs/markdown")
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/markdown")
    assert res.text == render_markdown(app.state.registry)


async def test_live_checks(client, monkeypatch):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/persons/1":
            return httpx.Response(200, headers={"Link": '<http://x/r>; rel="relationship"'})
        return httpx.Response(500)

    async def fake_check_server(registry, probes, base_url, timeout_seconds, concurrency):
        transport = httpx.MockTransport(handler)
        async with httpx.AsyncClient(transport=transport, base_url=base_url) as http:
            return await LiveContractChecker(registry, http, concurrency).check_all(probes)

    monkeypatch.setattr(documentation, "check_server", fake_check_server)

    res = await client.post("/api/v1/live-checks", json=[
        {"resource": "Person", "method": "GET", "path": "/persons/1"},
        {"resource": "Person", "method": "GET", "path": "/persons/2"},
    ])
    assert res.status_code == 200
    first, second = res.json()
    assert first["conforming"] is True
    assert first["links"] == ["relationship"]
    assert second["conforming"] is False
    assert second["status_code"] == 500
    assert second["violations"][0]["kind"] == "undeclared_status_code"


async def test_live_checks_unknown_resource_is_404(client):
    res = await client.post("/api/v1/live-checks", json=[
        {"resource": "Tree", "method": "GET", "path": "/trees/1"},
    ])
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "UNKNOWN_RESOURCE"


async def test_live_checks_undeclared_method_is_404(client, monkeypatch):
    async def fail_check_server(*args, **kwargs):
        raise AssertionError("no request may be sent")

    monkeypatch.setattr(documentation, "check_server", fail_check_server)
    res = await client.post("/api/v1/live-checks", json=[
        {"resource": "Person", "method": "GET", "path": "/persons/1"},
        {"resource": "Search", "method": "DELETE", "path": "/search"},
    ])
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "UNKNOWN_OPERATION"
