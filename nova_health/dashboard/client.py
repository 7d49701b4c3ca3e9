"""
HTTP client used by the dashboard to talk to the chat gateway.
"""
import logging
from typing import List, Optional

import httpx
from pydantic import BaseModel

from nova_health.api.models import ChatRequest, Medication
from nova_health.config.settings import get_settings

logger = logging.getLogger(__name__)


class GatewayReply(BaseModel):
    """What the gateway answered to one chat request."""
    status_code: int
    reply: Optional[str] = None
    reason: str = ""
    reply_status: Optional[str] = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class GatewayClient:
    """Thin wrapper over ``httpx.Client`` for the gateway endpoints."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        self.base_url = base_url or get_settings().backend_url
        self._client = http_client or httpx.Client(base_url=self.base_url)

    def chat(self, request: ChatRequest) -> GatewayReply:
        """
        POST a chat request.

        Raises:
            httpx.HTTPError: If the gateway cannot be reached
            ValueError: If the response body is not JSON
        """
        payload = request.model_dump(mode="json", by_alias=True, exclude_none=True)
        response = self._client.post("/chat", json=payload)
        data = response.json()
        reply = data.get("reply") if isinstance(data, dict) else None
        logger.debug(f"Gateway answered {response.status_code}: {reply!r}")
        return GatewayReply(
            status_code=response.status_code,
            reply=reply,
            reason=response.reason_phrase,
            reply_status=response.headers.get("x-reply-status"),
        )

    def list_medications(self) -> List[Medication]:
        response = self._client.get("/medications")
        response.raise_for_status()
        return [Medication(**item) for item in response.json()]

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "GatewayClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
