"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ResourceKey (namespace, name) is the identity of a ResourceDefinition
    - Status codes are valid iff MIN_STATUS_CODE <= code <= MAX_STATUS_CODE
    - All valid states encoded as Enums, never raw strings

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (contract document is JSON)
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

LinkRelation = NewType("LinkRelation", str)
DataElementType = NewType("DataElementType", str)
ResourceKey = tuple[str, str]  # (namespace, name)


# ─── Value Bounds ────────────────────────────────────────────────

MIN_STATUS_CODE: int = 100
MAX_STATUS_CODE: int = 599


# ─── Enums ───────────────────────────────────────────────────────

class HttpMethod(str, Enum):
    """HTTP verbs an OperationDefinition may declare."""
    HEAD = "HEAD"
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    PATCH = "PATCH"

    @classmethod
    def parse(cls, value: "str | HttpMethod") -> "HttpMethod":
        """Case-insensitive lookup. Raises ValueError on unknown verbs."""
        if isinstance(value, HttpMethod):
            return value
        return cls(value.strip().upper())


class OutcomeKind(str, Enum):
    """Partition of a Status Code Table entry."""
    PRIMARY = "primary"
    WARNING = "warning"


class ViolationKind(str, Enum):
    """Static problems found by ContractRegistry.validate()."""
    STATUS_CODE_OUT_OF_RANGE = "status_code_out_of_range"
    EMPTY_SCOPE = "empty_scope"
    DUPLICATE_RELATION = "duplicate_relation"
    UNRESOLVED_SCOPE_TYPE = "unresolved_scope_type"
    DUPLICATE_STATE = "duplicate_state"
    UNRESOLVED_ELEMENT_TYPE = "unresolved_element_type"
    # closed-world only
    UNRESOLVED_TARGET = "unresolved_target"
    UNRESOLVED_SUBRESOURCE = "unresolved_subresource"


class ContractViolationKind(str, Enum):
    """Mismatches between an observed server response and the contract."""
    UNDECLARED_STATUS_CODE = "undeclared_status_code"
    UNDECLARED_LINK = "undeclared_link"
    MISSING_REQUIRED_LINK = "missing_required_link"
