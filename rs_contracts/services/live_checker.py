"""Live Contract Checker — probes a running server and compares responses with the contract.

Invariants:
    - Read-only against the registry; the registry is never mutated
    - A status code or link the contract does not allow is a violation, never an exception
    - A probe naming an unknown resource or an undeclared method raises before any
      request of its batch is sent
    - A transport failure is recorded on that probe's report; other probes still run
    - At most `concurrency` probes are in flight at once

Design Decisions:
    - httpx.AsyncClient injected: tests use MockTransport, production gets a pooled client
    - Link relations gathered from the Link header and from GEDCOM X JSON "links" objects
      (top level and one level of element lists, e.g. persons[].links)
"""

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

import httpx

from rs_contracts.core.contract_model import ResourceDefinition
from rs_contracts.core.contract_registry import ContractRegistry
from rs_contracts.core.domain_types import HttpMethod
from rs_contracts.core.link_check import check_links
from rs_contracts.core.status_code_table import StatusCheck, check_status, outcomes_for
from rs_contracts.core.violations import ContractViolation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResponseProbe:
    """One request to send: which resource/operation it exercises and where."""
    resource: str
    method: HttpMethod
    url: str
    namespace: str | None = None


@dataclass
class ProbeReport:
    probe: ResponseProbe
    status: StatusCheck | None = None
    links: list[str] = field(default_factory=list)
    link_violations: list[ContractViolation] = field(default_factory=list)
    error: str | None = None

    @property
    def violations(self) -> list[ContractViolation]:
        found = [self.status.violation] if self.status and self.status.violation else []
        return found + self.link_violations

    @property
    def conforming(self) -> bool:
        return self.error is None and not self.violations


class LiveContractChecker:
    """Runs probes against a server through an httpx.AsyncClient."""

    def __init__(
        self,
        registry: ContractRegistry,
        client: httpx.AsyncClient,
        concurrency: int = 8,
        require_unconditional_links: bool = False,
    ):
        self.registry = registry
        self.client = client
        self.require_unconditional_links = require_unconditional_links
        self._semaphore = asyncio.Semaphore(concurrency)

    def resolve(self, probe: ResponseProbe) -> ResourceDefinition:
        """Resource the probe exercises. Raises if it or its method is undeclared."""
        definition = self.registry.get(probe.resource, probe.namespace)
        outcomes_for(definition, probe.method)
        return definition

    async def check(self, probe: ResponseProbe) -> ProbeReport:
        return await self._run(probe, self.resolve(probe))

    async def _run(self, probe: ResponseProbe, definition: ResourceDefinition) -> ProbeReport:
        report = ProbeReport(probe=probe)
        async with self._semaphore:
            try:
                response = await self.client.request(probe.method.value, probe.url)
            except httpx.HTTPError as exc:
                logger.warning(
                    f"Probe {probe.method.value} {probe.url} failed: {exc}",
                    extra={"resource": probe.resource, "method": probe.method.value},
                )
                report.error = str(exc) or exc.__class__.__name__
                return report

        report.status = check_status(definition, probe.method, response.status_code)
        if response.is_success:
            report.links = extract_link_rels(response)
            report.link_violations = check_links(
                definition, report.links,
                require_unconditional=self.require_unconditional_links,
            )
        for violation in report.violations:
            logger.info(
                violation.message,
                extra={
                    "resource": probe.resource,
                    "method": probe.method.value,
                    "status_code": response.status_code,
                    "violation_kind": violation.kind.value,
                },
            )
        return report

    async def check_all(self, probes: Iterable[ResponseProbe]) -> list[ProbeReport]:
        """Run probes concurrently; reports come back in probe order."""
        planned = [(p, self.resolve(p)) for p in probes]
        return list(await asyncio.gather(*(self._run(p, d) for p, d in planned)))


async def check_server(
    registry: ContractRegistry,
    probes: Iterable[ResponseProbe],
    base_url: str,
    timeout_seconds: float = 30.0,
    concurrency: int = 8,
) -> list[ProbeReport]:
    """Open a client for base_url, run every probe, close the client."""
    async with httpx.AsyncClient(base_url=base_url, timeout=timeout_seconds) as client:
        checker = LiveContractChecker(registry, client, concurrency=concurrency)
        reports = await checker.check_all(probes)
    failed = sum(1 for r in reports if not r.conforming)
    logger.info(f"Checked {len(reports)} probe(s) against {base_url}; {failed} non-conforming")
    return reports


def extract_link_rels(response: httpx.Response) -> list[str]:
    rels: list[str] = []
    for link in response.links.values():
        rels.extend(link.get("rel", "").split())
    if "json" in response.headers.get("content-type", "") and response.content:
        try:
            body = response.json()
        except ValueError:
            logger.warning("Response declared JSON but body is not valid JSON")
            body = None
        rels.extend(_json_link_rels(body))
    return list(dict.fromkeys(r for r in rels if r))


def _json_link_rels(body) -> list[str]:
    if not isinstance(body, dict):
        return []
    rels = list(_links_of(body))
    for value in body.values():
        if isinstance(value, list):
            for item in value:
                if isinstance(item, dict):
                    rels.extend(_links_of(item))
    return rels


def _links_of(element: dict) -> list[str]:
    links = element.get("links")
    if isinstance(links, dict):
        return list(links)
    if isinstance(links, list):
        rels = []
        for link in links:
            rel = link.get("rel") if isinstance(link, dict) else None
            if isinstance(rel, str):
                rels.append(rel)
            elif rel is not None:
                logger.warning(f"Ignoring link with non-string rel: {rel!r}")
        return rels
    return []
