"""Health Probe — liveness endpoint for container orchestration.

Invariants:
    - GET /health/ returns 200 once the registry is loaded, with its resource count
"""

import logging
from fastapi import APIRouter, Depends, status

from rs_contracts.api.routes.contracts import get_registry
from rs_contracts.core.contract_registry import ContractRegistry

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check(registry: ContractRegistry = Depends(get_registry)):
    """Basic liveness probe."""
    return {
        "status": "healthy",
        "service": "rs-contracts",
        "version": "1.0.0",
        "resources": len(registry),
        "sealed": registry.sealed,
    }
