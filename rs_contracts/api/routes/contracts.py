"""Contract Routes — read-only lookups over the sealed contract registry.

Invariants:
    - No route mutates the registry
    - Unknown resource/relation/method → ContractError → 404 envelope via global handler
    - A non-conforming status check is a 200 with violations, not an error

Design Decisions:
    - Registry reached through app.state via get_registry dependency: tests inject their own
"""

import logging

from fastapi import APIRouter, Depends, Request

from rs_contracts.core.contract_registry import ContractRegistry
from rs_contracts.core.link_check import check_links
from rs_contracts.core.status_code_table import check_status
from rs_contracts.schemas.contract_api import (
    OutcomeResponse,
    ResourceSummary,
    StatusCheckRequest,
    StatusCheckResponse,
    TransitionResolutionResponse,
    TransitionResponse,
    ViolationResponse,
)
from rs_contracts.schemas.contract_document import ResourceDocument

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/resources", tags=["resources"])


def get_registry(request: Request) -> ContractRegistry:
    return request.app.state.registry


@router.get("", response_model=list[ResourceSummary])
async def list_resources(registry: ContractRegistry = Depends(get_registry)):
    return [ResourceSummary.from_definition(d) for d in registry]


@router.get("/{name}", response_model=ResourceDocument, response_model_exclude_none=True)
async def get_resource(
    name: str, namespace: str | None = None,
    registry: ContractRegistry = Depends(get_registry),
):
    return ResourceDocument.from_definition(registry.get(name, namespace))


@router.get("/{name}/transitions", response_model=list[TransitionResponse])
async def list_transitions(
    name: str, namespace: str | None = None,
    registry: ContractRegistry = Depends(get_registry),
):
    return [
        TransitionResponse.from_transition(t)
        for t in registry.transitions_for(name, namespace)
    ]


@router.get("/{name}/transitions/resolve", response_model=TransitionResolutionResponse)
async def resolve_transition(
    name: str, rel: str, namespace: str | None = None,
    registry: ContractRegistry = Depends(get_registry),
):
    resolution = registry.resolve_transition(name, rel, namespace)
    return TransitionResolutionResponse(
        resource=resolution.source.name,
        transition=TransitionResponse.from_transition(resolution.transition),
        target=(
            ResourceSummary.from_definition(resolution.target)
            if resolution.target else None
        ),
        conditional=resolution.conditional,
    )


@router.get("/{name}/operations/{method}/outcomes", response_model=list[OutcomeResponse])
async def list_outcomes(
    name: str, method: str, namespace: str | None = None,
    registry: ContractRegistry = Depends(get_registry),
):
    return [
        OutcomeResponse.from_outcome(o)
        for o in registry.outcomes_for(name, method, namespace)
    ]


@router.post("/{name}/operations/{method}/check", response_model=StatusCheckResponse)
async def check_response(
    name: str, method: str, body: StatusCheckRequest, namespace: str | None = None,
    registry: ContractRegistry = Depends(get_registry),
):
    """Compare an observed response with the contract."""
    definition = registry.get(name, namespace)
    status = check_status(definition, method, body.status_code)
    violations = [status.violation] if status.violation else []
    if 200 <= body.status_code < 300:
        violations.extend(check_links(definition, body.links, require_unconditional=False))
    if violations:
        logger.info(
            f"Response for {method.upper()} {name} violates the contract",
            extra={"resource": name, "method": method.upper(), "status_code": body.status_code},
        )
    return StatusCheckResponse(
        conforming=not violations,
        warning=status.warning,
        matched=[OutcomeResponse.from_outcome(o) for o in status.matched],
        violations=[ViolationResponse(**v.to_dict()) for v in violations],
    )
