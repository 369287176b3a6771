"""Error Hierarchy — codes, HTTP statuses and response envelopes.

Tests:
    - Every contract error is a ContractError with a stable code
    - to_response() carries code, category and context
    - ContractValidationError embeds all violations in its envelope
"""

from rs_contracts.core.domain_types import ViolationKind
from rs_contracts.core.errors import (
    AmbiguousResourceError,
    ContractDocumentError,
    ContractError,
    ContractValidationError,
    DuplicateResourceError,
    ErrorCategory,
    RegistrySealedError,
    UnknownOperationError,
    UnknownRelationError,
    UnknownResourceError,
)
from rs_contracts.core.violations import ValidationViolation


def test_error_codes_and_statuses():
    cases = [
        (DuplicateResourceError("ns", "Person"), "DUPLICATE_RESOURCE", 409),
        (RegistrySealedError("Person"), "REGISTRY_SEALED", 409),
        (UnknownResourceError("Person"), "UNKNOWN_RESOURCE", 404),
        (AmbiguousResourceError("Person", ["a", "b"]), "AMBIGUOUS_RESOURCE", 409),
        (UnknownRelationError("Person", "x"), "UNKNOWN_RELATION", 404),
        (UnknownOperationError("Person", "PUT"), "UNKNOWN_OPERATION", 404),
        (ContractDocumentError("bad"), "CONTRACT_DOCUMENT_INVALID", 400),
    ]
    for error, code, http_status in cases:
        assert isinstance(error, ContractError)
        assert error.code == code
        assert error.http_status == http_status


def test_unknown_relation_response_envelope():
    body = UnknownRelationError("Person", "cousins").to_response()["error"]
    assert body["code"] == "UNKNOWN_RELATION"
    assert body["category"] == ErrorCategory.RESOURCE_NOT_FOUND.value
    assert body["context"]["resource"] == "Person"
    assert body["context"]["rel"] == "cousins"
    assert "cousins" in body["message"]


def test_validation_error_lists_violations():
    violation = ValidationViolation(
        kind=ViolationKind.EMPTY_SCOPE, resource="Person", namespace="ns",
        location="states[Person].transitions[note]", message="empty",
    )
    error = ContractValidationError([violation])
    assert error.http_status == 422
    body = error.to_response()["error"]
    assert body["violations"] == [violation.to_dict()]
    assert "1 violation" in body["message"]
