"""Contract Validation — pure checks of one ResourceDefinition against the model invariants.

Invariants:
    - Functions are PURE: they return violation lists, never raise, never log
    - Every defect is reported once, at the declaration that introduces it
      (a duplicate relation is reported on its second and later occurrences)
    - An empty scope yields EMPTY_SCOPE only; scope-type checks are skipped
    - Closed-world checks are separate: the model does not enforce them by default

Design Decisions:
    - Split from the registry: the registry owns indexes, this module owns rules
"""

from collections.abc import Callable

from rs_contracts.core.contract_model import (
    OperationDefinition, ResourceDefinition, StateTransition,
)
from rs_contracts.core.data_elements import GEDCOMX_DATA_ELEMENTS, unknown_elements
from rs_contracts.core.domain_types import (
    MAX_STATUS_CODE, MIN_STATUS_CODE, ViolationKind,
)
from rs_contracts.core.violations import ValidationViolation


def is_valid_status_code(code: int) -> bool:
    return MIN_STATUS_CODE <= code <= MAX_STATUS_CODE


def validate_resource(
    resource: ResourceDefinition,
    catalog: frozenset[str] = GEDCOMX_DATA_ELEMENTS,
) -> list[ValidationViolation]:
    """All static violations of a single resource, in declaration order."""
    violations: list[ValidationViolation] = []
    violations.extend(_check_resource_element(resource, catalog))
    violations.extend(_check_states(resource, catalog))
    for op in resource.operations:
        violations.extend(_check_operation(resource, op, catalog))
    return violations


def validate_closed_world(
    resource: ResourceDefinition,
    has_rel: Callable[[str], bool],
    has_resource: Callable[[str], bool],
) -> list[ValidationViolation]:
    """Transitions and sub-resources must point at registered resources."""
    violations = []
    for state in resource.states:
        for t in state.transitions:
            if not has_rel(t.rel):
                violations.append(_violation(
                    ViolationKind.UNRESOLVED_TARGET, resource,
                    _transition_location(state.name, t),
                    f"Transition '{t.rel}' does not resolve to a registered resource",
                ))
    for name in resource.subresources:
        if not has_resource(name):
            violations.append(_violation(
                ViolationKind.UNRESOLVED_SUBRESOURCE, resource,
                f"subresources[{name}]",
                f"Sub-resource '{name}' is not registered",
            ))
    return violations


# ─── Rules ───────────────────────────────────────────────────────

def _check_resource_element(
    resource: ResourceDefinition, catalog: frozenset[str],
) -> list[ValidationViolation]:
    if resource.resource_element in catalog:
        return []
    return [_violation(
        ViolationKind.UNRESOLVED_ELEMENT_TYPE, resource, "resource_element",
        f"Resource element '{resource.resource_element}' is not a known data element type",
    )]


def _check_states(
    resource: ResourceDefinition, catalog: frozenset[str],
) -> list[ValidationViolation]:
    violations = []
    seen_states: set[str] = set()
    seen_rels: set[str] = set()
    for state in resource.states:
        if state.name in seen_states:
            violations.append(_violation(
                ViolationKind.DUPLICATE_STATE, resource, f"states[{state.name}]",
                f"State '{state.name}' is declared more than once",
            ))
        seen_states.add(state.name)
        for t in state.transitions:
            location = _transition_location(state.name, t)
            if t.rel in seen_rels:
                violations.append(_violation(
                    ViolationKind.DUPLICATE_RELATION, resource, location,
                    f"Relation '{t.rel}' is declared more than once",
                ))
            seen_rels.add(t.rel)
            violations.extend(_check_scope(resource, location, t, catalog))
    return violations


def _check_scope(
    resource: ResourceDefinition, location: str,
    transition: StateTransition, catalog: frozenset[str],
) -> list[ValidationViolation]:
    if not transition.scope:
        return [_violation(
            ViolationKind.EMPTY_SCOPE, resource, location,
            f"Transition '{transition.rel}' has an empty scope",
        )]
    return [
        _violation(
            ViolationKind.UNRESOLVED_SCOPE_TYPE, resource, f"{location}.scope[{element}]",
            f"Scope type '{element}' of transition '{transition.rel}' "
            f"is not a known data element type",
        )
        for element in unknown_elements(transition.scope, catalog)
    ]


def _check_operation(
    resource: ResourceDefinition, op: OperationDefinition, catalog: frozenset[str],
) -> list[ValidationViolation]:
    violations = []
    for group, outcomes in (("responses", op.responses), ("warnings", op.warnings)):
        for index, outcome in enumerate(outcomes):
            if not is_valid_status_code(outcome.code):
                violations.append(_violation(
                    ViolationKind.STATUS_CODE_OUT_OF_RANGE, resource,
                    f"operations[{op.method.value}].{group}[{index}]",
                    f"Status code {outcome.code} is outside "
                    f"[{MIN_STATUS_CODE}, {MAX_STATUS_CODE}]",
                ))
    if op.request_element is not None and op.request_element not in catalog:
        violations.append(_violation(
            ViolationKind.UNRESOLVED_ELEMENT_TYPE, resource,
            f"operations[{op.method.value}].request_element",
            f"Request element '{op.request_element}' is not a known data element type",
        ))
    return violations


def _transition_location(state_name: str, transition: StateTransition) -> str:
    return f"states[{state_name}].transitions[{transition.rel}]"


def _violation(
    kind: ViolationKind, resource: ResourceDefinition, location: str, message: str,
) -> ValidationViolation:
    return ValidationViolation(
        kind=kind, resource=resource.name, namespace=resource.namespace,
        location=location, message=message,
    )
