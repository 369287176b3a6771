"""Resource Contract Model — immutable records describing one hypermedia resource.

Invariants:
    - All records are frozen dataclasses; collections are tuples (no mutation after build)
    - Records accept any values: range/scope/uniqueness rules are checked by
      ContractRegistry.validate(), so one pass can report every problem
    - Order is significant: states, transitions, responses and warnings keep declaration order

Design Decisions:
    - Explicit data records over annotations: a builder or a schema document constructs them
    - Pure dataclasses (no pydantic) in core/: the schema layer converts at the boundary
"""

from dataclasses import dataclass

from rs_contracts.core.domain_types import HttpMethod, ResourceKey


@dataclass(frozen=True)
class StatusCodeOutcome:
    """One declared (code, condition) pair of an operation."""
    code: int
    condition: str = ""


@dataclass(frozen=True)
class StateTransition:
    """A hypermedia link a resource state may carry."""
    rel: str
    description: str = ""
    scope: tuple[str, ...] = ()
    conditional: bool = False


@dataclass(frozen=True)
class StateDefinition:
    """A named state of a resource with its primary relation and outbound links."""
    name: str
    rel: str
    description: str = ""
    transitions: tuple[StateTransition, ...] = ()


@dataclass(frozen=True)
class OperationDefinition:
    """An HTTP verb with its primary and warning outcomes."""
    method: HttpMethod
    responses: tuple[StatusCodeOutcome, ...] = ()
    warnings: tuple[StatusCodeOutcome, ...] = ()
    description: str = ""
    request_element: str | None = None

    @property
    def all_outcomes(self) -> tuple[StatusCodeOutcome, ...]:
        return self.responses + self.warnings


@dataclass(frozen=True)
class ParameterDefinition:
    """A reserved query parameter documented for the resource."""
    name: str
    description: str = ""


@dataclass(frozen=True)
class ResourceDefinition:
    """Everything the contract says about one resource type."""
    name: str
    namespace: str
    project_id: str
    resource_element: str
    states: tuple[StateDefinition, ...] = ()
    operations: tuple[OperationDefinition, ...] = ()
    subresources: tuple[str, ...] = ()
    parameters: tuple[ParameterDefinition, ...] = ()
    description: str = ""

    @property
    def key(self) -> ResourceKey:
        return (self.namespace, self.name)

    @property
    def rel(self) -> str | None:
        """Primary relation of the first state, if any state is declared."""
        return self.states[0].rel if self.states else None

    @property
    def state_rels(self) -> tuple[str, ...]:
        return tuple(s.rel for s in self.states)

    @property
    def transitions(self) -> tuple[StateTransition, ...]:
        """All transitions, state order then declaration order."""
        return tuple(t for s in self.states for t in s.transitions)

    @property
    def methods(self) -> tuple[HttpMethod, ...]:
        return tuple(op.method for op in self.operations)

    def operation(self, method: HttpMethod | str) -> OperationDefinition | None:
        verb = HttpMethod.parse(method)
        for op in self.operations:
            if op.method == verb:
                return op
        return None

    def transition(self, rel: str) -> StateTransition | None:
        for t in self.transitions:
            if t.rel == rel:
                return t
        return None
