"""Document Loader — builds a ContractRegistry from a JSON contract document.

Invariants:
    - Malformed JSON or structurally invalid documents → ContractDocumentError (never ValidationError)
    - Resources register in document order; a duplicate name+namespace raises DuplicateResourceError
    - Returned registries are sealed
    - dump_document(load_document(x)) preserves every declaration

Design Decisions:
    - Parsing via pydantic model_validate_json: one pass for JSON and structure
    - Semantic validation is opt-in (strict=True) so tooling can load a broken
      document and still report all of its violations
"""

import logging
from pathlib import Path

from pydantic import ValidationError

from rs_contracts.core.contract_registry import ContractRegistry
from rs_contracts.core.data_elements import GEDCOMX_DATA_ELEMENTS, extend_catalog
from rs_contracts.core.errors import ContractDocumentError
from rs_contracts.schemas.contract_document import ContractDocument, ResourceDocument

logger = logging.getLogger(__name__)


def parse_document(text: str | bytes) -> ContractDocument:
    try:
        return ContractDocument.model_validate_json(text)
    except ValidationError as exc:
        raise ContractDocumentError(
            "Contract document is invalid",
            details=[
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        ) from exc


def build_registry(
    document: ContractDocument, strict: bool = False, closed_world: bool = False,
) -> ContractRegistry:
    registry = ContractRegistry(catalog=extend_catalog(document.data_types))
    for resource in document.resources:
        registry.register(resource.to_definition())
        logger.debug(
            f"Registered resource {resource.name}",
            extra={"resource": resource.name},
        )
    registry.seal()
    if strict:
        registry.ensure_valid(closed_world=closed_world)
    logger.info(f"Loaded contract document with {len(registry)} resource(s)")
    return registry


def load_document(
    text: str | bytes, strict: bool = False, closed_world: bool = False,
) -> ContractRegistry:
    return build_registry(parse_document(text), strict=strict, closed_world=closed_world)


def load_document_file(
    path: str | Path, strict: bool = False, closed_world: bool = False,
) -> ContractRegistry:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ContractDocumentError(f"Cannot read contract document {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise ContractDocumentError(f"Contract document {path} is not UTF-8: {exc}") from exc
    return load_document(text, strict=strict, closed_world=closed_world)


def dump_document(registry: ContractRegistry, indent: int | None = 2) -> str:
    document = ContractDocument(
        data_types=sorted(registry.catalog - GEDCOMX_DATA_ELEMENTS),
        resources=[ResourceDocument.from_definition(d) for d in registry],
    )
    return document.model_dump_json(by_alias=True, exclude_none=True, indent=indent)
