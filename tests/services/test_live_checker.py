"""Live Contract Checker — probes against a mocked server via httpx.MockTransport.

Tests cover:
    - Declared status + declared links → conforming report
    - Undeclared status code → violation, not exception
    - Links read from the Link header and from GEDCOM X JSON "links"
    - Transport errors recorded on the probe; other probes still complete
    - check_all keeps probe order
    - Undeclared methods are rejected before any request of the batch is sent
    - Non-string JSON rels are ignored
"""

import httpx
import pytest

from rs_contracts.core.domain_types import ContractViolationKind, HttpMethod
from rs_contracts.core.errors import UnknownOperationError, UnknownResourceError
from rs_contracts.services.live_checker import (
    LiveContractChecker, ResponseProbe, extract_link_rels,
)


def _handler(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path == "/persons/ok":
        return httpx.Response(
            200,
            headers={"Link": '<http://x/notes>; rel="notes", <http://x/r>; rel="relationship"'},
            json={"persons": [{"id": "1", "links": {"conclusion": {"href": "/c"}}}]},
        )
    if path == "/persons/odd":
        return httpx.Response(200, json={"links": {"cousins": {"href": "/c"}}})
    if path == "/persons/teapot":
        return httpx.Response(418)
    if path == "/search":
        return httpx.Response(299, json={"entries": []})
    if path == "/down":
        raise httpx.ConnectError("connection refused", request=request)
    return httpx.Response(404)


@pytest.fixture
async def checker(gedcomx_registry):
    async with httpx.AsyncClient(
        transport=httpx.MockTransport(_handler), base_url="http://server",
    ) as client:
        yield LiveContractChecker(gedcomx_registry, client, concurrency=2)


async def test_conforming_response(checker):
    report = await checker.check(ResponseProbe("Person", HttpMethod.GET, "/persons/ok"))
    assert report.conforming
    assert report.links == ["notes", "relationship", "conclusion"]


async def test_undeclared_status_is_reported(checker):
    report = await checker.check(ResponseProbe("Person", HttpMethod.GET, "/persons/teapot"))
    assert not report.conforming
    assert report.error is None
    assert [v.kind for v in report.violations] == [ContractViolationKind.UNDECLARED_STATUS_CODE]


async def test_undeclared_link_is_reported(checker):
    report = await checker.check(ResponseProbe("Person", HttpMethod.GET, "/persons/odd"))
    assert [(v.kind, v.rel) for v in report.violations] == [
        (ContractViolationKind.UNDECLARED_LINK, "cousins"),
    ]


async def test_warning_status_conforms(checker):
    report = await checker.check(ResponseProbe("Search", HttpMethod.GET, "/search"))
    assert report.conforming
    assert report.status.warning


async def test_declared_error_status_skips_link_check(checker):
    report = await checker.check(ResponseProbe("Person", HttpMethod.DELETE, "/persons/gone"))
    assert report.conforming
    assert report.status.status_code == 404
    assert report.links == []


async def test_transport_error_recorded_and_others_run(checker):
    reports = await checker.check_all([
        ResponseProbe("Person", HttpMethod.GET, "/down"),
        ResponseProbe("Person", HttpMethod.GET, "/persons/ok"),
    ])
    assert [r.probe.url for r in reports] == ["/down", "/persons/ok"]
    assert reports[0].error
    assert not reports[0].conforming
    assert reports[1].conforming


async def test_unknown_resource_fails_fast(checker):
    with pytest.raises(UnknownResourceError):
        await checker.check(ResponseProbe("Tree", HttpMethod.GET, "/persons/ok"))


def test_extract_link_rels_handles_list_links_and_plain_bodies():
    response = httpx.Response(
        200, json={"links": [{"rel": "self", "href": "/p"}, {"href": "/no-rel"}]},
    )
    assert extract_link_rels(response) == ["self"]
    assert extract_link_rels(httpx.Response(200, text="plain")) == []


async def test_undeclared_method_rejected_before_sending(gedcomx_registry):
    sent = []

    def recording(request: httpx.Request) -> httpx.Response:
        sent.append(request.method)
        return _handler(request)

    async with httpx.AsyncClient(
        transport=httpx.MockTransport(recording), base_url="http://server",
    ) as client:
        checker = LiveContractChecker(gedcomx_registry, client)
        with pytest.raises(UnknownOperationError):
            await checker.check_all([
                ResponseProbe("Person", HttpMethod.GET, "/persons/ok"),
                ResponseProbe("Search", HttpMethod.DELETE, "/search"),
            ])
        with pytest.raises(UnknownOperationError):
            await checker.check(ResponseProbe("Search", HttpMethod.DELETE, "/search"))
    assert sent == []


def test_extract_link_rels_ignores_non_string_rels():
    response = httpx.Response(
        200,
        json={"links": [{"rel": ["a"], "href": "/x"}, {"rel": 7}, {"rel": "notes"}]},
    )
    assert extract_link_rels(response) == ["notes"]
