"""Maps domain exceptions to HTTP responses shaped ``{"error": message}``."""

from collections.abc import Callable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from evalsummary.credentials.exceptions import CredentialError
from evalsummary.logging.logger import Log
from evalsummary.pdf.exceptions import ExtractionExhaustedError, PdfExtractionError
from evalsummary.processor.exceptions import (
    EmptyTextError,
    InvalidUploadError,
    PayloadTooLargeError,
    ProcessorError,
)
from evalsummary.summarization.exceptions import (
    SummarizationError,
    SummarizationNetworkError,
    SummarizationOversizedError,
    SummarizationRateLimitedError,
    SummarizationUnauthorizedError,
)

INTERNAL_ERROR_MESSAGE = "Internal server error"
METHOD_NOT_ALLOWED_MESSAGE = "Method not allowed"


def error_response(status_code: int, message: str, **extra: object) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


def status_for(exc: Exception) -> tuple[int, str]:
    """Return the HTTP status and client-facing message for a domain error."""
    if isinstance(exc, CredentialError):
        return 400, str(exc)
    if isinstance(exc, PayloadTooLargeError):
        return 413, str(exc)
    if isinstance(exc, (InvalidUploadError, EmptyTextError)):
        return 400, str(exc)
    if isinstance(exc, ExtractionExhaustedError):
        return 400, str(exc)
    if isinstance(exc, PdfExtractionError):
        return 400, f"Invalid PDF file: {exc}"
    if isinstance(exc, SummarizationUnauthorizedError):
        return 401, "Invalid API key"
    if isinstance(exc, SummarizationOversizedError):
        return 413, "PDF is too large for direct processing. Try text extraction instead."
    if isinstance(exc, SummarizationRateLimitedError):
        return 500, "Rate limit exceeded. Please wait a moment and try again."
    if isinstance(exc, SummarizationNetworkError):
        return 500, f"Could not reach the AI service: {exc}"
    if isinstance(exc, SummarizationError):
        return 500, f"AI processing failed: {exc}"
    if isinstance(exc, ProcessorError):
        return 500, str(exc)
    return 500, INTERNAL_ERROR_MESSAGE


def _domain_error_handler(request: Request, exc: Exception) -> JSONResponse:
    status_code, message = status_for(exc)
    log = Log.error if status_code >= 500 else Log.warning
    log(f"{request.method} {request.url.path} failed: {exc}", status=status_code)
    return error_response(status_code, message)


def _validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    Log.warning(f"Malformed request to {request.url.path}: {exc}")
    return error_response(400, "Malformed request body")


def _http_error_handler(request: Request, exc: Exception) -> JSONResponse:
    if not isinstance(exc, StarletteHTTPException):
        return _unhandled_error_handler(request, exc)
    if exc.status_code == 405:
        return error_response(405, METHOD_NOT_ALLOWED_MESSAGE)
    return error_response(exc.status_code, str(exc.detail))


def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    Log.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response(500, INTERNAL_ERROR_MESSAGE)


def register_error_handlers(app: FastAPI) -> None:
    handlers: dict[type[Exception], Callable[[Request, Exception], JSONResponse]] = {
        CredentialError: _domain_error_handler,
        ProcessorError: _domain_error_handler,
        PdfExtractionError: _domain_error_handler,
        SummarizationError: _domain_error_handler,
        RequestValidationError: _validation_error_handler,
        StarletteHTTPException: _http_error_handler,
        Exception: _unhandled_error_handler,
    }
    for exc_class, handler in handlers.items():
        app.add_exception_handler(exc_class, handler)
