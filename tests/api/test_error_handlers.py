"""Error Handlers — one envelope shape, log level by category, lookup context as extras.

Tests cover:
    - Unknown relation → 404 envelope; logged at INFO with resource and rel extras
    - Request validation → 400 envelope carrying the request method and field details
    - Unhandled exception → 500 INTERNAL_ERROR without internal details
"""

import logging

from httpx import ASGITransport, AsyncClient

HANDLER_LOGGER = "rs_contracts.api.error_handlers"


async def test_unknown_relation_logged_with_lookup_context(client, caplog):
    caplog.set_level(logging.INFO, logger=HANDLER_LOGGER)
    res = await client.get(
        "/api/v1/resources/Person/transitions/resolve", params={"rel": "cousins"},
    )
    assert res.status_code == 404
    error = res.json()["error"]
    assert error["code"] == "UNKNOWN_RELATION"
    assert error["context"]["resource"] == "Person"
    assert error["context"]["rel"] == "cousins"

    record = next(r for r in caplog.records if r.name == HANDLER_LOGGER)
    assert record.levelno == logging.INFO
    assert record.resource == "Person"
    assert record.rel == "cousins"
    assert record.error_code == "UNKNOWN_RELATION"


async def test_request_validation_uses_contract_envelope(client):
    res = await client.post(
        "/api/v1/resources/Person/operations/GET/check", json={"links": []},
    )
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["category"] == "validation"
    assert error["context"]["method"] == "POST"
    assert any(d["field"].endswith("status_code") for d in error["details"])


async def test_unhandled_exception_is_opaque_500(app, caplog):
    @app.get("/api/v1/boom")
    async def boom():
        raise RuntimeError("secret internals")

    caplog.set_level(logging.ERROR, logger=HANDLER_LOGGER)
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        res = await c.get("/api/v1/boom")
    assert res.status_code == 500
    error = res.json()["error"]
    assert error["code"] == "INTERNAL_ERROR"
    assert error["severity"] == "critical"
    assert "secret" not in res.text
    assert any(r.levelno == logging.ERROR for r in caplog.records if r.name == HANDLER_LOGGER)
