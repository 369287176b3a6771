"""Contract API Schemas — request/response models of the read-only contract endpoints.

Invariants:
    - StatusCheckRequest.status_code: 100-599 (an HTTP status a server can actually send)
    - Response models are built from core records, never from raw dicts

Design Decisions:
    - Violations serialized with their kind string: clients filter without importing enums
"""

from pydantic import BaseModel, Field

from rs_contracts.core.contract_model import ResourceDefinition, StateTransition
from rs_contracts.core.domain_types import MAX_STATUS_CODE, MIN_STATUS_CODE
from rs_contracts.core.status_code_table import DeclaredOutcome


class ResourceSummary(BaseModel):
    name: str
    namespace: str
    rel: str | None
    data_type: str
    methods: list[str]

    @classmethod
    def from_definition(cls, definition: ResourceDefinition) -> "ResourceSummary":
        return cls(
            name=definition.name,
            namespace=definition.namespace,
            rel=definition.rel,
            data_type=definition.resource_element,
            methods=[m.value for m in definition.methods],
        )


class TransitionResponse(BaseModel):
    rel: str
    description: str
    scope: list[str]
    conditional: bool

    @classmethod
    def from_transition(cls, t: StateTransition) -> "TransitionResponse":
        return cls(
            rel=t.rel, description=t.description,
            scope=list(t.scope), conditional=t.conditional,
        )


class TransitionResolutionResponse(BaseModel):
    resource: str
    transition: TransitionResponse
    target: ResourceSummary | None = None
    conditional: bool


class OutcomeResponse(BaseModel):
    code: int
    condition: str
    kind: str

    @classmethod
    def from_outcome(cls, outcome: DeclaredOutcome) -> "OutcomeResponse":
        return cls(code=outcome.code, condition=outcome.condition, kind=outcome.kind.value)


class ViolationResponse(BaseModel):
    kind: str
    resource: str
    message: str
    namespace: str | None = None
    location: str | None = None
    method: str | None = None
    status_code: int | None = None
    rel: str | None = None


class ValidationReport(BaseModel):
    valid: bool
    count: int
    violations: list[ViolationResponse]


class StatusCheckRequest(BaseModel):
    """An observed response: its status code and the link relations it carried."""
    status_code: int = Field(ge=MIN_STATUS_CODE, le=MAX_STATUS_CODE)
    links: list[str] = Field(default_factory=list)


class StatusCheckResponse(BaseModel):
    conforming: bool
    warning: bool
    matched: list[OutcomeResponse]
    violations: list[ViolationResponse]
