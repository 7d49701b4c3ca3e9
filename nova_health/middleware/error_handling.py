"""
Error handling middleware.
Last-resort handler for exceptions that escape an endpoint, plus the
request-validation handler that keeps /chat answering in its own shape.
"""
import json
import logging
import traceback
from typing import Callable, Optional

from fastapi import Request, Response, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from nova_health.api.models import ChatReply, ErrorResponse
from nova_health.controllers.chat_controller import NO_MESSAGE_REPLY
from nova_health.middleware.request_logging import redact_body

logger = logging.getLogger(__name__)


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Middleware for centralized error handling and logging."""

    async def _get_request_body(self, request: Request) -> Optional[dict]:
        """
        Safely extract request body for error logging.
        """
        try:
            if hasattr(request.state, "body"):
                body_bytes = request.state.body
            else:
                body_bytes = await request.body()
                request.state.body = body_bytes

            if not body_bytes:
                return None

            return json.loads(body_bytes.decode("utf-8"))
        except Exception:
            return None

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)

        except Exception as e:
            body = await self._get_request_body(request)
            tb_str = traceback.format_exc()

            from nova_health.config.settings import get_settings

            try:
                is_production = get_settings().is_production
            except Exception:
                is_production = True  # Default to production mode for safety

            logger.error(
                "Unhandled error",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "error": str(e),
                    "error_type": type(e).__name__,
                    "request_body": redact_body(body),
                },
                exc_info=True,
            )

            # Don't expose internal errors in production
            if is_production:
                content = ErrorResponse(
                    error="Internal Server Error",
                    message="An internal error occurred. Please try again later.",
                )
            else:
                content = ErrorResponse(
                    error="Internal Server Error",
                    message=f"{type(e).__name__}: {str(e)}",
                    traceback=tb_str,
                )

            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=content.model_dump(exclude_none=True),
            )


async def chat_aware_validation_handler(
    request: Request, exc: RequestValidationError
) -> Response:
    """
    Handle request validation errors.

    ``/chat`` only fails validation when its body is not decodable JSON,
    which leaves it without a message: answer with the chat 400 reply.
    Other routes keep FastAPI's default 422.
    """
    if request.url.path.rstrip("/").endswith("/chat"):
        logger.warning(
            "Undecodable chat request body",
            extra={"path": request.url.path, "errors": exc.errors()},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ChatReply(reply=NO_MESSAGE_REPLY).model_dump(),
        )
    return await request_validation_exception_handler(request, exc)
