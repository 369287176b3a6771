"""Contract Builder — fluent construction of ResourceDefinitions in place of annotations.

Invariants:
    - Builders are mutable scratch space; build() returns frozen records
    - Declaration order is preserved (states, transitions, operations, outcomes)
    - Builders do not validate: rule checks belong to ContractRegistry.validate()

Design Decisions:
    - state()/operation() return child builders that hand back the parent via end(),
      so one resource reads top-to-bottom like the declaration it replaces
"""

from collections.abc import Iterable

from rs_contracts.core.contract_model import (
    OperationDefinition,
    ParameterDefinition,
    ResourceDefinition,
    StateDefinition,
    StateTransition,
    StatusCodeOutcome,
)
from rs_contracts.core.domain_types import HttpMethod


class StateBuilder:
    def __init__(self, parent: "ResourceBuilder", name: str, rel: str, description: str):
        self._parent = parent
        self.name = name
        self.rel = rel
        self.description = description
        self._transitions: list[StateTransition] = []

    def transition(
        self,
        rel: str,
        description: str = "",
        scope: str | Iterable[str] = (),
        conditional: bool = False,
    ) -> "StateBuilder":
        if isinstance(scope, str):
            scope = (scope,)
        self._transitions.append(StateTransition(
            rel=rel, description=description,
            scope=tuple(scope), conditional=conditional,
        ))
        return self

    def end(self) -> "ResourceBuilder":
        return self._parent

    def build(self) -> StateDefinition:
        return StateDefinition(
            name=self.name, rel=self.rel, description=self.description,
            transitions=tuple(self._transitions),
        )


class OperationBuilder:
    def __init__(
        self, parent: "ResourceBuilder", method: HttpMethod,
        description: str, request_element: str | None,
    ):
        self._parent = parent
        self.method = method
        self.description = description
        self.request_element = request_element
        self._responses: list[StatusCodeOutcome] = []
        self._warnings: list[StatusCodeOutcome] = []

    def responds(self, code: int, condition: str = "") -> "OperationBuilder":
        self._responses.append(StatusCodeOutcome(code, condition))
        return self

    def warns(self, code: int, condition: str = "") -> "OperationBuilder":
        self._warnings.append(StatusCodeOutcome(code, condition))
        return self

    def end(self) -> "ResourceBuilder":
        return self._parent

    def build(self) -> OperationDefinition:
        return OperationDefinition(
            method=self.method,
            responses=tuple(self._responses),
            warnings=tuple(self._warnings),
            description=self.description,
            request_element=self.request_element,
        )


class ResourceBuilder:
    """Builds one ResourceDefinition."""

    def __init__(
        self, name: str, namespace: str, project_id: str, resource_element: str,
    ):
        self.name = name
        self.namespace = namespace
        self.project_id = project_id
        self.resource_element = resource_element
        self._description = ""
        self._states: list[StateBuilder] = []
        self._operations: list[OperationBuilder] = []
        self._subresources: list[str] = []
        self._parameters: list[ParameterDefinition] = []

    def describe(self, description: str) -> "ResourceBuilder":
        self._description = description
        return self

    def state(self, name: str, rel: str, description: str = "") -> StateBuilder:
        builder = StateBuilder(self, name, rel, description)
        self._states.append(builder)
        return builder

    def operation(
        self,
        method: HttpMethod | str,
        description: str = "",
        request_element: str | None = None,
    ) -> OperationBuilder:
        builder = OperationBuilder(
            self, HttpMethod.parse(method), description, request_element,
        )
        self._operations.append(builder)
        return builder

    def subresource(self, name: str) -> "ResourceBuilder":
        self._subresources.append(name)
        return self

    def parameter(self, name: str, description: str = "") -> "ResourceBuilder":
        self._parameters.append(ParameterDefinition(name, description))
        return self

    def build(self) -> ResourceDefinition:
        return ResourceDefinition(
            name=self.name,
            namespace=self.namespace,
            project_id=self.project_id,
            resource_element=self.resource_element,
            states=tuple(s.build() for s in self._states),
            operations=tuple(o.build() for o in self._operations),
            subresources=tuple(self._subresources),
            parameters=tuple(self._parameters),
            description=self._description,
        )
