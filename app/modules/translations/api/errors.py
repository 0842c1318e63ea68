"""Exception handlers mapping the domain taxonomy to HTTP responses."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from infrastructure.logging import get_module_logger
from modules.translations.domain.errors import (
    ConcurrentModificationError,
    DuplicateKeyError,
    NotFoundError,
    PermissionDeniedError,
    StorageError,
    TranslationServiceError,
    ValidationError,
)

logger = get_module_logger()

STATUS_CODES = {
    NotFoundError: 404,
    DuplicateKeyError: 409,
    ConcurrentModificationError: 409,
    ValidationError: 400,
    PermissionDeniedError: 403,
}


def _error_body(error: str, message: str) -> dict:
    return {"error": error, "message": message}


async def translation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    status_code = next(
        (STATUS_CODES[cls] for cls in type(exc).__mro__ if cls in STATUS_CODES), 400
    )
    message = exc.message if isinstance(exc, TranslationServiceError) else str(exc)
    logger.info(
        "translation_request_rejected",
        path=request.url.path,
        error=type(exc).__name__,
        status_code=status_code,
    )
    return JSONResponse(
        status_code=status_code, content=_error_body(type(exc).__name__, message)
    )


async def storage_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "translation_storage_unavailable",
        path=request.url.path,
        error=str(exc),
        error_code=getattr(exc, "error_code", None),
    )
    return JSONResponse(
        status_code=503,
        content=_error_body("StorageError", "Translation storage is unavailable"),
    )


async def request_validation_handler(request: Request, exc: Exception) -> JSONResponse:
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    message = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', []))}: {err.get('msg')}"
        for err in errors
    )
    return JSONResponse(
        status_code=400,
        content=_error_body("ValidationError", message or "Invalid request"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the translation exception handlers to the application."""
    for error_class in STATUS_CODES:
        app.add_exception_handler(error_class, translation_error_handler)
    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
