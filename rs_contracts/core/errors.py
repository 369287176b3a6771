"""Error Hierarchy — typed, categorized exceptions for all contract-model failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Lookup and registration errors fail fast; validation aggregates (see ContractValidationError)
    - to_response() produces the REST envelope used by the contract API

Design Decisions:
    - Single hierarchy with ContractError base: FastAPI global handler catches all (uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - ValidationViolation is a record, not an exception: validate() collects, never raises
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DOCUMENT = "document"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    resource: str | None = None
    rel: str | None = None
    method: str | None = None
    debug_info: dict[str, Any] | None = None


class ContractError(Exception):
    """Base exception for all contract-model errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "resource": self.context.resource,
                    "rel": self.context.rel,
                    "method": self.context.method,
                },
            }
        }


# ─── Registration Errors ────────────────────────────────────────

class DuplicateResourceError(ContractError):
    """A resource with the same namespace and name is already registered."""
    def __init__(self, namespace: str, name: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext(resource=name)
        super().__init__(
            f"Resource '{name}' already registered in namespace '{namespace}'",
            "DUPLICATE_RESOURCE", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )
        self.namespace = namespace
        self.name = name


class RegistrySealedError(ContractError):
    """register() called after the build phase ended."""
    def __init__(self, name: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext(resource=name)
        super().__init__(
            f"Registry is sealed; cannot register '{name}'",
            "REGISTRY_SEALED", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )


# ─── Lookup Errors ──────────────────────────────────────────────

class UnknownResourceError(ContractError):
    """Requested resource is not registered."""
    def __init__(self, name: str, namespace: str | None = None,
                 context: ErrorContext | None = None):
        ctx = context or ErrorContext(resource=name)
        where = f" in namespace '{namespace}'" if namespace else ""
        super().__init__(
            f"Resource '{name}'{where} not found",
            "UNKNOWN_RESOURCE", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.name = name
        self.namespace = namespace


class AmbiguousResourceError(ContractError):
    """Resource name registered in several namespaces and none was given."""
    def __init__(self, name: str, namespaces: list[str],
                 context: ErrorContext | None = None):
        ctx = context or ErrorContext(resource=name)
        super().__init__(
            f"Resource '{name}' exists in namespaces: {', '.join(namespaces)}",
            "AMBIGUOUS_RESOURCE", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )
        self.namespaces = namespaces


class UnknownRelationError(ContractError):
    """Link relation not declared as a transition of the resource."""
    def __init__(self, resource: str, rel: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext(resource=resource, rel=rel)
        super().__init__(
            f"Relation '{rel}' is not declared for resource '{resource}'",
            "UNKNOWN_RELATION", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.resource = resource
        self.rel = rel


class UnknownOperationError(ContractError):
    """HTTP method not declared for the resource."""
    def __init__(self, resource: str, method: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext(resource=resource, method=method)
        super().__init__(
            f"Method '{method}' is not declared for resource '{resource}'",
            "UNKNOWN_OPERATION", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.resource = resource
        self.method = method


# ─── Document / Validation Errors ───────────────────────────────

class ContractDocumentError(ContractError):
    """Schema document could not be read or parsed."""
    def __init__(self, message: str, details: list[dict] | None = None,
                 context: ErrorContext | None = None):
        ctx = context or ErrorContext(debug_info={"details": details or []})
        super().__init__(
            message, "CONTRACT_DOCUMENT_INVALID", ErrorCategory.DOCUMENT,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.details = details or []


class ContractValidationError(ContractError):
    """ensure_valid() found violations. Carries the full list."""
    def __init__(self, violations: list, context: ErrorContext | None = None):
        super().__init__(
            f"Contract model has {len(violations)} violation(s)",
            "CONTRACT_INVALID", ErrorCategory.VALIDATION,
            ErrorSeverity.CRITICAL, context, 422,
        )
        self.violations = violations

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["violations"] = [v.to_dict() for v in self.violations]
        return response
