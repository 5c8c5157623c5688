from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import time
import uuid
from typing import Callable, Optional

from metafield_proxy.api.error_handlers import register_exception_handlers
from metafield_proxy.core.config import Settings, get_settings, load_env_file
from metafield_proxy.core.logging import configure_logging, get_logger, set_correlation_id


# Load environment variables and configure logging early
load_env_file()
configure_logging()
logger = get_logger(__name__)


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use; defaults to the process-wide settings

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = settings or get_settings()

    app = FastAPI(title=settings.PROJECT_NAME, debug=settings.DEBUG)

    configure_middleware(app, settings)
    register_exception_handlers(app)
    register_routers(app)

    @app.on_event("startup")
    async def startup_event():
        logger.info(f"Starting up {settings.PROJECT_NAME} for shop {settings.SHOPIFY_SHOP_NAME}")
        missing = settings.missing_shopify_settings
        if missing:
            logger.warning(
                f"Required settings are not set: {', '.join(missing)}. Requests to Shopify will fail."
            )
        if not settings.machine_translation_active:
            logger.warning("Machine translation is disabled; missing translations fall back to the original value")

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info(f"Shutting down {settings.PROJECT_NAME}")

    return app


def configure_middleware(app: FastAPI, settings: Settings) -> None:
    """
    Configure middleware components for the FastAPI application.

    Args:
        app: FastAPI application instance
        settings: Application settings
    """
    # CORS is restricted to a single configured origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.CORS_ALLOWED_ORIGIN],
        allow_credentials=True,
        allow_methods=settings.CORS_ALLOWED_METHODS,
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def add_correlation_id(request: Request, call_next: Callable):
        correlation_id = set_correlation_id(request.headers.get("X-Correlation-ID") or str(uuid.uuid4()))
        start_time = time.time()

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                f"Request failed: {str(e)}",
                extra={"data": {
                    "request_path": request.url.path,
                    "method": request.method,
                    "process_time_ms": round(process_time * 1000, 2),
                }},
                exc_info=True
            )
            raise

        response.headers["X-Correlation-ID"] = correlation_id

        process_time = time.time() - start_time
        logger.info(
            "Request completed",
            extra={"data": {
                "request_path": request.url.path,
                "method": request.method,
                "status_code": response.status_code,
                "process_time_ms": round(process_time * 1000, 2),
            }}
        )
        return response


def register_routers(app: FastAPI) -> None:
    """
    Register API routers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    # Import routers here to avoid circular imports
    from metafield_proxy.api.routes.health import health_router
    from metafield_proxy.api.routes.metafield import metafield_router

    app.include_router(health_router, prefix="/health", tags=["Health"])
    app.include_router(metafield_router, prefix="/api", tags=["Metafields"])


app = create_application()


def run() -> None:
    """Serve the application on the configured port."""
    import uvicorn

    settings = get_settings()
    logger.info(f"Server is running on port {settings.PORT}")
    uvicorn.run("metafield_proxy.main:app", host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    run()
