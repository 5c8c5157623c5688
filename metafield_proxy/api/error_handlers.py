from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from metafield_proxy.core.exceptions import (
    APIException,
    NotFoundError,
    UpstreamError,
    ValidationException,
)
from metafield_proxy.core.logging import get_logger

logger = get_logger(__name__)


async def handle_api_exception(request: Request, exc: APIException) -> JSONResponse:
    """
    Handle APIException instances.

    Args:
        request: FastAPI request object
        exc: APIException instance

    Returns:
        JSONResponse: Formatted error response
    """
    logger.error(
        f"API Exception: {exc.detail}",
        extra={"data": {"status_code": exc.status_code, "error_code": exc.code}}
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def handle_validation_exception(request: Request, exc: ValidationException) -> JSONResponse:
    """Handle missing or malformed request parameters."""
    logger.warning(
        f"Validation error: {exc.detail}",
        extra={"data": {"path": request.url.path, "context": exc.context}}
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def handle_not_found_exception(request: Request, exc: NotFoundError) -> JSONResponse:
    """Handle resource not found errors."""
    logger.info(f"Resource not found: {exc.detail}", extra={"data": {"path": request.url.path}})
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def handle_upstream_exception(request: Request, exc: UpstreamError) -> JSONResponse:
    """
    Handle Shopify transport failures.

    Upstream failures are reported to callers as internal errors.
    """
    logger.error(
        f"Upstream error: {exc.detail}",
        extra={"data": {"original_error": exc.context.get("original_error")}}
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=exc.to_dict()
    )


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle bodies FastAPI could not parse."""
    messages = [f"{'.'.join(str(p) for p in error['loc'])}: {error['msg']}" for error in exc.errors()]
    logger.warning(f"Invalid request body: {messages}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": f"Invalid request body: {'; '.join(messages)}"}
    )


async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": str(exc) or "An unexpected error occurred"}
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Configure exception handlers for the FastAPI application.

    Handlers are looked up by the exception's MRO, so subclasses are
    registered alongside the base class.
    """
    app.add_exception_handler(ValidationException, handle_validation_exception)
    app.add_exception_handler(NotFoundError, handle_not_found_exception)
    app.add_exception_handler(UpstreamError, handle_upstream_exception)
    app.add_exception_handler(APIException, handle_api_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_exception)
