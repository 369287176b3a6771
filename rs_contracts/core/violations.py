"""Violation Records — diagnostics produced by validation and response checking.

Invariants:
    - ValidationViolation describes a static defect of the model (found by validate())
    - ContractViolation describes an observed response that the model does not allow
    - Neither is an exception: callers collect, report and decide

Design Decisions:
    - location is a dotted path ("states[Person].transitions[conclusion]") so tooling
      can point at the exact declaration without holding object references
"""

from dataclasses import dataclass

from rs_contracts.core.domain_types import ContractViolationKind, ViolationKind


@dataclass(frozen=True)
class ValidationViolation:
    kind: ViolationKind
    resource: str
    namespace: str
    location: str
    message: str

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "resource": self.resource,
            "namespace": self.namespace,
            "location": self.location,
            "message": self.message,
        }


@dataclass(frozen=True)
class ContractViolation:
    kind: ContractViolationKind
    resource: str
    message: str
    method: str | None = None
    status_code: int | None = None
    rel: str | None = None

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "resource": self.resource,
            "message": self.message,
            "method": self.method,
            "status_code": self.status_code,
            "rel": self.rel,
        }
