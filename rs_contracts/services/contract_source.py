"""Contract Source — resolves the registry the service runs with, per settings.

Invariants:
    - Exactly one registry per process, built at startup, sealed before use
    - Violations are always logged; strict_startup turns them into a startup failure

Design Decisions:
    - Built-in GEDCOM X definitions when no document is configured: the service
      is useful out of the box
"""

import logging

from rs_contracts.config import Settings
from rs_contracts.core.contract_registry import ContractRegistry
from rs_contracts.core.gedcomx_definitions import build_gedcomx_registry
from rs_contracts.services.document_loader import load_document_file

logger = logging.getLogger(__name__)


def load_registry(settings: Settings) -> ContractRegistry:
    if settings.contract_document is not None:
        registry = load_document_file(settings.contract_document)
        logger.info(f"Contract loaded from {settings.contract_document}")
    else:
        registry = build_gedcomx_registry()
        logger.info("Using built-in GEDCOM X contract")

    violations = registry.validate(closed_world=settings.closed_world_validation)
    for violation in violations:
        logger.warning(
            f"{violation.location}: {violation.message}",
            extra={"resource": violation.resource, "violation_kind": violation.kind.value},
        )
    if settings.strict_startup:
        registry.ensure_valid(closed_world=settings.closed_world_validation)
    return registry
