"""Resource Contract Registry — the full set of ResourceDefinitions making up an API surface.

Invariants:
    - (namespace, name) is unique; register() is atomic (a failed call changes nothing)
    - register() is the only mutator and is rejected once seal() has been called
    - Lookups never mutate: a sealed registry is safe to share across threads/tasks
    - validate() aggregates every violation; all other operations fail fast

Design Decisions:
    - Secondary indexes (name, rel, element) hold keys in registration order, so
      lookups are deterministic without re-scanning definitions
    - Transition targets resolve through the rel index: a transition points at the
      resource whose state declares that rel as its primary relation
"""

from collections.abc import Iterator
from dataclasses import dataclass

from rs_contracts.core.contract_model import (
    ResourceDefinition, StateTransition,
)
from rs_contracts.core.contract_validation import (
    validate_closed_world, validate_resource,
)
from rs_contracts.core.data_elements import GEDCOMX_DATA_ELEMENTS
from rs_contracts.core.domain_types import HttpMethod, ResourceKey
from rs_contracts.core.errors import (
    AmbiguousResourceError,
    ContractValidationError,
    DuplicateResourceError,
    RegistrySealedError,
    UnknownRelationError,
    UnknownResourceError,
)
from rs_contracts.core.status_code_table import DeclaredOutcome, outcomes_for
from rs_contracts.core.violations import ValidationViolation


@dataclass(frozen=True)
class TransitionResolution:
    """Where a declared transition leads."""
    source: ResourceDefinition
    transition: StateTransition
    target: ResourceDefinition | None = None

    @property
    def conditional(self) -> bool:
        return self.transition.conditional


class ContractRegistry:
    """Registry of resource contracts, built once and then read."""

    def __init__(self, catalog: frozenset[str] = GEDCOMX_DATA_ELEMENTS):
        self.catalog = catalog
        self._resources: dict[ResourceKey, ResourceDefinition] = {}
        self._by_name: dict[str, list[ResourceKey]] = {}
        self._by_rel: dict[str, list[ResourceKey]] = {}
        self._by_element: dict[str, list[ResourceKey]] = {}
        self._sealed = False

    # ─── Build phase ────────────────────────────────────────────

    def register(self, definition: ResourceDefinition) -> ResourceDefinition:
        if self._sealed:
            raise RegistrySealedError(definition.name)
        if definition.key in self._resources:
            raise DuplicateResourceError(definition.namespace, definition.name)
        # all checks done above; indexing below cannot fail part-way
        key = definition.key
        self._resources[key] = definition
        self._by_name.setdefault(definition.name, []).append(key)
        for rel in dict.fromkeys(definition.state_rels):
            self._by_rel.setdefault(rel, []).append(key)
        self._by_element.setdefault(definition.resource_element, []).append(key)
        return definition

    def seal(self) -> "ContractRegistry":
        self._sealed = True
        return self

    @property
    def sealed(self) -> bool:
        return self._sealed

    # ─── Lookups ────────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self._resources)

    def __iter__(self) -> Iterator[ResourceDefinition]:
        return iter(self._resources.values())

    def __contains__(self, name: str) -> bool:
        return name in self._by_name

    @property
    def resources(self) -> tuple[ResourceDefinition, ...]:
        return tuple(self._resources.values())

    def get(self, name: str, namespace: str | None = None) -> ResourceDefinition:
        if namespace is not None:
            definition = self._resources.get((namespace, name))
            if definition is None:
                raise UnknownResourceError(name, namespace)
            return definition
        keys = self._by_name.get(name)
        if not keys:
            raise UnknownResourceError(name)
        if len(keys) > 1:
            raise AmbiguousResourceError(name, [ns for ns, _ in keys])
        return self._resources[keys[0]]

    def find_by_rel(self, rel: str) -> tuple[ResourceDefinition, ...]:
        return tuple(self._resources[k] for k in self._by_rel.get(rel, ()))

    def find_by_element(self, element: str) -> tuple[ResourceDefinition, ...]:
        return tuple(self._resources[k] for k in self._by_element.get(element, ()))

    def transitions_for(
        self, name: str, namespace: str | None = None,
    ) -> tuple[StateTransition, ...]:
        return self.get(name, namespace).transitions

    def resolve_transition(
        self, name: str, rel: str, namespace: str | None = None,
    ) -> TransitionResolution:
        source = self.get(name, namespace)
        transition = source.transition(rel)
        if transition is None:
            raise UnknownRelationError(source.name, rel)
        return TransitionResolution(
            source=source,
            transition=transition,
            target=self._target_for(source, rel),
        )

    def outcomes_for(
        self, name: str, verb: HttpMethod | str, namespace: str | None = None,
    ) -> tuple[DeclaredOutcome, ...]:
        return outcomes_for(self.get(name, namespace), verb)

    # ─── Validation ─────────────────────────────────────────────

    def validate(self, closed_world: bool = False) -> list[ValidationViolation]:
        """Every violation across the registry, in registration order."""
        violations: list[ValidationViolation] = []
        for definition in self._resources.values():
            violations.extend(validate_resource(definition, self.catalog))
            if closed_world:
                violations.extend(validate_closed_world(
                    definition,
                    has_rel=lambda rel: rel in self._by_rel,
                    has_resource=lambda n: n in self._by_name,
                ))
        return violations

    def ensure_valid(self, closed_world: bool = False) -> None:
        violations = self.validate(closed_world=closed_world)
        if violations:
            raise ContractValidationError(violations)

    def _target_for(
        self, source: ResourceDefinition, rel: str,
    ) -> ResourceDefinition | None:
        candidates = self.find_by_rel(rel)
        for candidate in candidates:
            if candidate.namespace == source.namespace:
                return candidate
        return candidates[0] if candidates else None
