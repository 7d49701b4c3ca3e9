"""
Nova Wellness Gateway
FastAPI application relaying dashboard chat messages to a Bedrock text model.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from nova_health.api.routers import api_router
from nova_health.config.settings import Settings, get_settings
from nova_health.controllers.chat_controller import ChatController
from nova_health.middleware.error_handling import (
    ErrorHandlingMiddleware,
    chat_aware_validation_handler,
)
from nova_health.middleware.request_logging import RequestLoggingMiddleware


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager."""
    settings = get_settings()
    logging.info(
        f"Starting {settings.app_name} ({settings.environment}) "
        f"with model {settings.inference_model_id} in {settings.aws_region}"
    )
    yield
    logging.info("Shutting down...")


def create_app(chat_controller: Optional[ChatController] = None) -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Wellness companion chat gateway for the Nova dashboard",
        version=settings.version,
        lifespan=lifespan,
        redirect_slashes=False,
    )

    # One controller per process so the reply history outlives requests
    app.state.chat_controller = chat_controller or ChatController(settings=settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add custom middleware
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(RequestValidationError, chat_aware_validation_handler)

    app.include_router(api_router, prefix=settings.api_prefix)

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_local and settings.debug,
    )
