"""Status Code Table — per-operation declared outcomes, split into primary and warning.

Invariants:
    - outcomes_for() yields primary outcomes in declared order, then warnings in declared order
    - An undeclared verb is an error (UnknownOperationError); an undeclared status code is NOT:
      check_status() reports it as a ContractViolation so contract testers never crash
    - A code may match several outcomes (same code, different conditions): all are returned

Design Decisions:
    - Works on a ResourceDefinition, not on the registry: pure and trivially shareable
    - Warning outcomes (e.g. 299 "query partially understood") count as conforming,
      flagged with StatusCheck.warning so reports can surface degraded processing
"""

from dataclasses import dataclass

from rs_contracts.core.contract_model import ResourceDefinition
from rs_contracts.core.domain_types import (
    ContractViolationKind, HttpMethod, OutcomeKind,
)
from rs_contracts.core.errors import UnknownOperationError
from rs_contracts.core.violations import ContractViolation


@dataclass(frozen=True)
class DeclaredOutcome:
    code: int
    condition: str
    kind: OutcomeKind = OutcomeKind.PRIMARY

    def as_pair(self) -> tuple[int, str]:
        return (self.code, self.condition)


@dataclass(frozen=True)
class StatusCheck:
    """Result of comparing one observed status code with the declared outcomes."""
    resource: str
    method: HttpMethod
    status_code: int
    matched: tuple[DeclaredOutcome, ...] = ()
    violation: ContractViolation | None = None

    @property
    def conforming(self) -> bool:
        return self.violation is None

    @property
    def warning(self) -> bool:
        return any(o.kind == OutcomeKind.WARNING for o in self.matched)


def outcomes_for(
    resource: ResourceDefinition, verb: HttpMethod | str,
) -> tuple[DeclaredOutcome, ...]:
    """Ordered outcomes of one operation. Raises UnknownOperationError."""
    method = _parse_method(resource, verb)
    op = resource.operation(method)
    if op is None:
        raise UnknownOperationError(resource.name, method.value)
    primary = tuple(
        DeclaredOutcome(o.code, o.condition, OutcomeKind.PRIMARY) for o in op.responses
    )
    warnings = tuple(
        DeclaredOutcome(o.code, o.condition, OutcomeKind.WARNING) for o in op.warnings
    )
    return primary + warnings


def primary_outcomes(
    resource: ResourceDefinition, verb: HttpMethod | str,
) -> tuple[DeclaredOutcome, ...]:
    return tuple(o for o in outcomes_for(resource, verb) if o.kind == OutcomeKind.PRIMARY)


def warning_outcomes(
    resource: ResourceDefinition, verb: HttpMethod | str,
) -> tuple[DeclaredOutcome, ...]:
    return tuple(o for o in outcomes_for(resource, verb) if o.kind == OutcomeKind.WARNING)


def check_status(
    resource: ResourceDefinition, verb: HttpMethod | str, status_code: int,
) -> StatusCheck:
    """Compare an observed status code with the contract. Pure, never raises on mismatch."""
    method = _parse_method(resource, verb)
    declared = outcomes_for(resource, method)
    matched = tuple(o for o in declared if o.code == status_code)
    if matched:
        return StatusCheck(resource.name, method, status_code, matched)
    allowed = ", ".join(str(code) for code in dict.fromkeys(o.code for o in declared))
    violation = ContractViolation(
        kind=ContractViolationKind.UNDECLARED_STATUS_CODE,
        resource=resource.name,
        method=method.value,
        status_code=status_code,
        message=(
            f"{method.value} {resource.name} returned {status_code}; "
            f"declared: {allowed or 'none'}"
        ),
    )
    return StatusCheck(resource.name, method, status_code, (), violation)


def _parse_method(resource: ResourceDefinition, verb: HttpMethod | str) -> HttpMethod:
    try:
        return HttpMethod.parse(verb)
    except ValueError:
        raise UnknownOperationError(resource.name, str(verb)) from None
