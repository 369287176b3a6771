"""Documentation & Validation Routes — contract-wide reports.

Invariants:
    - GET /validation always returns 200; violations are data, not errors
    - GET /docs/markdown is text/markdown, identical to render_markdown(registry)
    - POST /live-checks only reads the registry; probe failures are reported per probe
    - POST /live-checks sends nothing unless every probe names a declared operation
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from rs_contracts.api.routes.contracts import get_registry
from rs_contracts.config import Settings, get_settings
from rs_contracts.core.contract_registry import ContractRegistry
from rs_contracts.core.domain_types import HttpMethod
from rs_contracts.schemas.contract_api import ValidationReport, ViolationResponse
from rs_contracts.services.documentation import render_markdown
from rs_contracts.services.live_checker import ResponseProbe, check_server

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["documentation"])


@router.get("/validation", response_model=ValidationReport)
async def validation_report(
    closed_world: bool = False,
    registry: ContractRegistry = Depends(get_registry),
):
    violations = registry.validate(closed_world=closed_world)
    return ValidationReport(
        valid=not violations,
        count=len(violations),
        violations=[ViolationResponse(**v.to_dict()) for v in violations],
    )


@router.get("/docs/markdown", response_class=PlainTextResponse)
async def markdown_documentation(registry: ContractRegistry = Depends(get_registry)):
    return PlainTextResponse(render_markdown(registry), media_type="text/markdown")


class ProbeRequest(BaseModel):
    resource: str
    method: HttpMethod
    path: str = Field(min_length=1)
    namespace: str | None = None


class ProbeResult(BaseModel):
    resource: str
    method: str
    path: str
    conforming: bool
    status_code: int | None = None
    links: list[str]
    violations: list[ViolationResponse]
    error: str | None = None


@router.post("/live-checks", response_model=list[ProbeResult])
async def run_live_checks(
    probes: list[ProbeRequest],
    registry: ContractRegistry = Depends(get_registry),
    settings: Settings = Depends(get_settings),
):
    """Probe the configured server and report conformance per request."""
    for p in probes:
        registry.outcomes_for(p.resource, p.method, p.namespace)  # unknown resource or method
    reports = await check_server(
        registry,
        [ResponseProbe(p.resource, p.method, p.path, p.namespace) for p in probes],
        base_url=settings.check_base_url,
        timeout_seconds=settings.check_timeout_seconds,
        concurrency=settings.check_concurrency,
    )
    return [
        ProbeResult(
            resource=r.probe.resource,
            method=r.probe.method.value,
            path=r.probe.url,
            conforming=r.conforming,
            status_code=r.status.status_code if r.status else None,
            links=r.links,
            violations=[ViolationResponse(**v.to_dict()) for v in r.violations],
            error=r.error,
        )
        for r in reports
    ]
