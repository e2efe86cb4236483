"""
API error handling and exception mapping.

Converts generation errors and request validation errors into the standard
``ErrorResponse`` envelope.
"""

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from deckforge.api.schemas import ErrorResponse
from deckforge.domain.exceptions import ErrorKind, GenerationError
from deckforge.infra.config.logging_config import get_logger

logger = get_logger("api.errors")

KIND_STATUS_CODES = {
    ErrorKind.CONFIGURATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.QUOTA_OR_PERMISSION: status.HTTP_403_FORBIDDEN,
    ErrorKind.SCHEMA: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.CONTENT_MISSING: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.TRANSPORT: status.HTTP_502_BAD_GATEWAY,
}


def _error_json(status_code: int, error: str, detail: str) -> JSONResponse:
    body = ErrorResponse(error=error, detail=detail)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def generation_error_handler(request: Request, exc: GenerationError) -> JSONResponse:
    logger.warning("api.generation_error", kind=exc.kind.value, error=exc.message)
    return _error_json(
        KIND_STATUS_CODES.get(exc.kind, status.HTTP_502_BAD_GATEWAY),
        exc.kind.value.upper(),
        exc.message,
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    formatted_errors = []
    for error in exc.errors():
        location = " -> ".join(str(loc) for loc in error["loc"])
        formatted_errors.append(f"{location}: {error['msg']}")

    logger.warning("api.validation_error", errors=formatted_errors)
    return _error_json(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "VALIDATION_ERROR",
        "Validation failed: " + "; ".join(formatted_errors),
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    logger.warning("api.http_exception", status_code=exc.status_code, detail=str(exc.detail))
    return _error_json(exc.status_code, f"HTTP_{exc.status_code}", str(exc.detail))


def setup_error_handlers(app) -> None:
    """
    Register exception handlers on the application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(GenerationError, generation_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
