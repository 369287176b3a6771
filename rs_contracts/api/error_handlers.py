"""Error Handlers — map contract-model failures onto the API's error envelope.

Invariants:
    - Every error response has the ContractError.to_response() shape
    - Lookup failures (unknown resource/relation/method) log at INFO
    - Conflicts and document errors log at WARNING; invalid contracts and 5xx at ERROR
    - Log records carry the resource, rel and method of the failing lookup as extras
    - Unhandled exceptions never leak internal details

Design Decisions:
    - Request validation errors are wrapped in a ContractError so clients parse one shape
    - Extracted from main.py to keep the entry point small
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from rs_contracts.core.errors import (
    ContractError, ContractValidationError, ErrorCategory, ErrorContext, ErrorSeverity,
)

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    ErrorCategory.RESOURCE_NOT_FOUND: logging.INFO,
    ErrorCategory.CONFLICT: logging.WARNING,
    ErrorCategory.DOCUMENT: logging.WARNING,
    ErrorCategory.VALIDATION: logging.ERROR,
    ErrorCategory.INTERNAL: logging.ERROR,
}


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ContractError, contract_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


async def contract_error_handler(request: Request, exc: ContractError) -> JSONResponse:
    message = exc.message
    if isinstance(exc, ContractValidationError):
        kinds = sorted({v.kind.value for v in exc.violations})
        message = f"{message}: {', '.join(kinds)}"
    logger.log(
        _log_level(exc), message,
        extra={
            "resource": exc.context.resource,
            "rel": exc.context.rel,
            "method": exc.context.method,
            "error_code": exc.code,
            "path": request.url.path,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def request_validation_handler(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    error = ContractError(
        "Invalid request data", "VALIDATION_ERROR", ErrorCategory.VALIDATION,
        context=ErrorContext(method=request.method, debug_info={"details": details}),
        http_status=status.HTTP_400_BAD_REQUEST,
    )
    logger.info(
        f"Rejected request to {request.url.path}: {len(details)} invalid field(s)",
        extra={"method": request.method, "error_code": error.code, "path": request.url.path},
    )
    content = error.to_response()
    content["error"]["details"] = details
    return JSONResponse(status_code=error.http_status, content=content)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=True,
        extra={"method": request.method, "path": request.url.path},
    )
    error = ContractError(
        "An unexpected error occurred", "INTERNAL_ERROR", ErrorCategory.INTERNAL,
        ErrorSeverity.CRITICAL, ErrorContext(method=request.method),
    )
    return JSONResponse(status_code=error.http_status, content=error.to_response())


def _log_level(exc: ContractError) -> int:
    if exc.http_status >= 500:
        return logging.ERROR
    return _LOG_LEVELS.get(exc.category, logging.WARNING)
