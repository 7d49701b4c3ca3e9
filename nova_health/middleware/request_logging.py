"""
Request logging middleware.
Logs HTTP requests and responses for monitoring and debugging.
"""
import json
import logging
import time
from typing import Any, Callable, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

SENSITIVE_FIELDS = {"password", "token", "secret", "api_key", "credit_card"}

# Health snapshots (medications, BMI) stay out of the logs
HEALTH_FIELDS = {"healthdata"}

REDACTED = "***REDACTED***"


def redact_body(body: Any) -> Any:
    """Mask credentials and health data in a decoded JSON body (top-level keys)."""
    if isinstance(body, dict):
        return {
            k: REDACTED if k.lower() in SENSITIVE_FIELDS | HEALTH_FIELDS else v
            for k, v in body.items()
        }
    return body


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging HTTP requests and responses."""

    def __init__(self, app, ignore_paths: tuple = ()):
        super().__init__(app)
        self.ignore_paths = ignore_paths or (
            "/health",
            "/docs",
            "/openapi.json",
            "/redoc",
            "/favicon.ico",
        )

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # Skip logging for ignored paths
        if request.url.path.endswith(self.ignore_paths):
            return await call_next(request)

        start_time = time.time()

        request_log = {
            "type": "request",
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client_ip": self._get_client_ip(request),
            "user_agent": request.headers.get("user-agent"),
            "timestamp": start_time,
        }

        body = None
        if request.method in ("POST", "PUT", "PATCH", "DELETE"):
            body = await self._get_request_body(request)
            if body:
                request_log["body"] = redact_body(body)

        # The dashboard identifies itself with "userId" in the JSON body
        user_id = self._extract_user_id(body)
        if user_id:
            request_log["user_id"] = user_id

        logger.info(json.dumps(request_log, default=str))

        response = await call_next(request)

        process_time = time.time() - start_time

        response_log = {
            "type": "response",
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "process_time_ms": round(process_time * 1000, 2),
            "client_ip": self._get_client_ip(request),
            "timestamp": time.time(),
        }

        if user_id:
            response_log["user_id"] = user_id

        # Log level based on status code
        if response.status_code >= 500:
            logger.error(json.dumps(response_log))
        elif response.status_code >= 400:
            logger.warning(json.dumps(response_log))
        else:
            logger.info(json.dumps(response_log))

        response.headers["X-Process-Time"] = str(process_time)

        return response

    def _get_client_ip(self, request: Request) -> str:
        """Extract client IP address from request."""
        # Check for forwarded headers (when behind proxy)
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()

        real_ip = request.headers.get("x-real-ip")
        if real_ip:
            return real_ip

        if request.client:
            return request.client.host

        return "unknown"

    def _extract_user_id(self, body: Any) -> Optional[str]:
        if isinstance(body, dict):
            user_id = body.get("userId")
            if isinstance(user_id, str) and user_id:
                return user_id
        return None

    async def _get_request_body(self, request: Request) -> Any:
        """
        Safely extract and parse request body.
        Returns None if body cannot be read or parsed.
        """
        try:
            if hasattr(request.state, "body"):
                body_bytes = request.state.body
            else:
                # Read body and cache it for downstream handlers
                body_bytes = await request.body()
                request.state.body = body_bytes

            if not body_bytes:
                return None

            return json.loads(body_bytes.decode("utf-8"))

        except Exception:
            # Don't fail request if body parsing fails
            return None
