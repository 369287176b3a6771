"""Document Loader — JSON document → sealed registry, and back.

Tests cover:
    - Valid document loads, registry sealed, registration order kept
    - Malformed JSON / structure → ContractDocumentError with field details
    - Duplicate resources in one document → DuplicateResourceError
    - strict=True raises ContractValidationError; default loads and lets validate() report
    - dataTypes extend the catalog; dump_document round-trips the built-in model
"""

import json

import pytest

from rs_contracts.core.errors import (
    ContractDocumentError, ContractValidationError, DuplicateResourceError,
)
from rs_contracts.core.domain_types import ViolationKind
from rs_contracts.services.document_loader import (
    dump_document, load_document, load_document_file,
)


def _doc(*resources, data_types=()):
    return json.dumps({"dataTypes": list(data_types), "resources": list(resources)})


def _resource(name="Person", scope=("Name",), code=200, data_type="Gedcomx"):
    return {
        "name": name,
        "namespace": "urn:example",
        "dataType": data_type,
        "rel": name.lower(),
        "operations": [{"method": "GET", "responses": [{"code": code, "condition": "OK"}]}],
        "transitions": [{"rel": "conclusion", "scope": list(scope), "conditional": True}],
    }


def test_load_valid_document():
    registry = load_document(_doc(_resource("Person"), _resource("Search", data_type="Feed")))
    assert registry.sealed
    assert [d.name for d in registry] == ["Person", "Search"]
    assert registry.validate() == []


def test_malformed_json_raises_document_error():
    with pytest.raises(ContractDocumentError):
        load_document("{not json")


def test_structural_error_reports_field():
    bad = _resource()
    del bad["dataType"]
    with pytest.raises(ContractDocumentError) as exc_info:
        load_document(_doc(bad))
    fields = [d["field"] for d in exc_info.value.details]
    assert any("dataType" in f for f in fields)


def test_duplicate_resources_rejected():
    with pytest.raises(DuplicateResourceError):
        load_document(_doc(_resource(), _resource()))


def test_lenient_load_keeps_violations_for_validate():
    registry = load_document(_doc(_resource(scope=(), code=700)))
    kinds = [v.kind for v in registry.validate()]
    assert kinds == [ViolationKind.EMPTY_SCOPE, ViolationKind.STATUS_CODE_OUT_OF_RANGE]


def test_strict_load_raises_with_all_violations():
    with pytest.raises(ContractValidationError) as exc_info:
        load_document(_doc(_resource(scope=(), code=700)), strict=True)
    assert len(exc_info.value.violations) == 2


def test_document_data_types_extend_catalog():
    registry = load_document(_doc(_resource(scope=("Tree",)), data_types=["Tree"]))
    assert registry.validate() == []


def test_load_document_file(tmp_path):
    path = tmp_path / "contract.json"
    path.write_text(_doc(_resource()), encoding="utf-8")
    assert len(load_document_file(path)) == 1


def test_missing_file_raises_document_error(tmp_path):
    with pytest.raises(ContractDocumentError):
        load_document_file(tmp_path / "absent.json")


def test_non_utf8_file_raises_document_error(tmp_path):
    path = tmp_path / "contract.json"
    path.write_bytes(b'{"resources": [\xff\xfe]}')
    with pytest.raises(ContractDocumentError, match="not UTF-8"):
        load_document_file(path)


def test_dump_then_load_preserves_builtin_model(gedcomx_registry):
    reloaded = load_document(dump_document(gedcomx_registry))
    assert reloaded.resources == gedcomx_registry.resources


def test_dump_keeps_extra_data_types():
    registry = load_document(_doc(_resource(scope=("Tree",)), data_types=["Tree"]))
    assert json.loads(dump_document(registry))["dataTypes"] == ["Tree"]
