"""Contract Document Schemas — pydantic models for the declarative JSON contract format.

Invariants:
    - Structural errors (missing name, non-integer code) fail at parse time
    - Semantic rules (code range, empty scope, unknown types) are NOT enforced here:
      they are reported by ContractRegistry.validate() so one pass lists every problem
    - A resource uses either `states` or the `rel` + `transitions` shorthand, never both
    - to_definition() / from_definition() convert to and from frozen core records

Design Decisions:
    - camelCase aliases (projectId, dataType, requestElement) match the document format;
      populate_by_name keeps snake_case usable from Python
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from rs_contracts.core.contract_model import (
    OperationDefinition,
    ParameterDefinition,
    ResourceDefinition,
    StateDefinition,
    StateTransition,
    StatusCodeOutcome,
)
from rs_contracts.core.domain_types import HttpMethod


class _DocumentModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class OutcomeDocument(_DocumentModel):
    code: int
    condition: str = ""


class TransitionDocument(_DocumentModel):
    rel: str = Field(min_length=1)
    description: str = ""
    scope: list[str] = Field(default_factory=list)
    conditional: bool = False


class StateDocument(_DocumentModel):
    name: str = Field(min_length=1)
    rel: str = Field(min_length=1)
    description: str = ""
    transitions: list[TransitionDocument] = Field(default_factory=list)


class OperationDocument(_DocumentModel):
    method: HttpMethod
    description: str = ""
    request_element: str | None = Field(None, alias="requestElement")
    responses: list[OutcomeDocument] = Field(default_factory=list)
    warnings: list[OutcomeDocument] = Field(default_factory=list)

    @field_validator("method", mode="before")
    @classmethod
    def normalize_method(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v


class ParameterDocument(_DocumentModel):
    name: str = Field(min_length=1)
    description: str = ""


class ResourceDocument(_DocumentModel):
    name: str = Field(min_length=1)
    namespace: str = ""
    project_id: str = Field("", alias="projectId")
    data_type: str = Field(min_length=1, alias="dataType")
    description: str = ""
    rel: str | None = None
    transitions: list[TransitionDocument] = Field(default_factory=list)
    states: list[StateDocument] = Field(default_factory=list)
    operations: list[OperationDocument] = Field(default_factory=list)
    subresources: list[str] = Field(default_factory=list)
    parameters: list[ParameterDocument] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_state_form(self):
        if self.states and (self.rel is not None or self.transitions):
            raise ValueError("use either 'states' or the 'rel'/'transitions' shorthand, not both")
        if self.transitions and self.rel is None:
            raise ValueError("'transitions' shorthand requires 'rel'")
        return self

    def to_definition(self) -> ResourceDefinition:
        if self.rel is not None:
            states = (StateDefinition(
                name=self.name, rel=self.rel,
                transitions=tuple(_transition(t) for t in self.transitions),
            ),)
        else:
            states = tuple(
                StateDefinition(
                    name=s.name, rel=s.rel, description=s.description,
                    transitions=tuple(_transition(t) for t in s.transitions),
                )
                for s in self.states
            )
        return ResourceDefinition(
            name=self.name,
            namespace=self.namespace,
            project_id=self.project_id,
            resource_element=self.data_type,
            states=states,
            operations=tuple(
                OperationDefinition(
                    method=op.method,
                    responses=tuple(StatusCodeOutcome(o.code, o.condition) for o in op.responses),
                    warnings=tuple(StatusCodeOutcome(o.code, o.condition) for o in op.warnings),
                    description=op.description,
                    request_element=op.request_element,
                )
                for op in self.operations
            ),
            subresources=tuple(self.subresources),
            parameters=tuple(
                ParameterDefinition(p.name, p.description) for p in self.parameters
            ),
            description=self.description,
        )

    @classmethod
    def from_definition(cls, definition: ResourceDefinition) -> "ResourceDocument":
        return cls(
            name=definition.name,
            namespace=definition.namespace,
            project_id=definition.project_id,
            data_type=definition.resource_element,
            description=definition.description,
            states=[
                StateDocument(
                    name=s.name, rel=s.rel, description=s.description,
                    transitions=[
                        TransitionDocument(
                            rel=t.rel, description=t.description,
                            scope=list(t.scope), conditional=t.conditional,
                        )
                        for t in s.transitions
                    ],
                )
                for s in definition.states
            ],
            operations=[
                OperationDocument(
                    method=op.method,
                    description=op.description,
                    request_element=op.request_element,
                    responses=[OutcomeDocument(code=o.code, condition=o.condition) for o in op.responses],
                    warnings=[OutcomeDocument(code=o.code, condition=o.condition) for o in op.warnings],
                )
                for op in definition.operations
            ],
            subresources=list(definition.subresources),
            parameters=[
                ParameterDocument(name=p.name, description=p.description)
                for p in definition.parameters
            ],
        )


class ContractDocument(_DocumentModel):
    """Top-level document: resources plus any data element types beyond GEDCOM X."""
    data_types: list[str] = Field(default_factory=list, alias="dataTypes")
    resources: list[ResourceDocument] = Field(default_factory=list)


def _transition(t: TransitionDocument) -> StateTransition:
    return StateTransition(
        rel=t.rel, description=t.description,
        scope=tuple(t.scope), conditional=t.conditional,
    )
