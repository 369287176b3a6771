"""API test fixtures — FastAPI app with an injected registry + async HTTP client.

Invariants:
    - Every test gets a fresh app built by create_app(registry); startup loading is skipped
    - Requests go through ASGITransport, no network
"""

import pytest
from httpx import ASGITransport, AsyncClient

from rs_contracts.core.gedcomx_definitions import build_gedcomx_registry
from rs_contracts.main import create_app


@pytest.fixture
def app():
    return create_app(build_gedcomx_registry())


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
