"""RS Contracts API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ContractError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - The registry is built and sealed on startup unless one was injected

Design Decisions:
    - create_app(registry) factory: tests inject a registry and skip startup loading
    - Lifespan over @app.on_event: FastAPI recommended pattern
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rs_contracts.api.error_handlers import register_error_handlers
from rs_contracts.api.routes import contracts, documentation, health
from rs_contracts.config import get_settings
from rs_contracts.core.contract_registry import ContractRegistry
from rs_contracts.infrastructure.observability import setup_logging
from rs_contracts.services.contract_source import load_registry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    if getattr(app.state, "registry", None) is None:
        app.state.registry = load_registry(settings)
    logger.info(f"RS Contracts API started with {len(app.state.registry)} resource(s)")
    yield
    logger.info("RS Contracts API shutting down")


def create_app(registry: ContractRegistry | None = None) -> FastAPI:
    app = FastAPI(title="RS Contracts API", version="1.0.0", lifespan=lifespan)
    app.state.registry = registry.seal() if registry is not None else None

    settings = get_settings()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # Routes, explicit registration
    app.include_router(health.router)
    app.include_router(contracts.router)
    app.include_router(documentation.router)

    register_error_handlers(app)
    return app


app = create_app()
