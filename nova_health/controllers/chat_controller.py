"""
Controller for the wellness chat.

Builds the prompt from the request, calls the inference service once and
interprets its response envelope.
"""
import logging
from typing import Any, Optional

from pydantic import ValidationError

from nova_health.api.models.chat import ChatOutcome, ChatRequest, HealthData, ReplyStatus
from nova_health.config.settings import Settings, get_settings
from nova_health.services.chat_history import ChatHistoryLog
from nova_health.services.inference import (
    BedrockInferenceClient,
    InferenceClient,
    parse_inference_body,
)
from nova_health.services.prompts import build_wellness_prompt

logger = logging.getLogger(__name__)

NO_MESSAGE_REPLY = "No message provided"
INFERENCE_ERROR_REPLY = "Oops, AI error!"


class ChatGatewayError(Exception):
    """Base class for failures the chat endpoint turns into a reply."""


class EmptyMessageError(ChatGatewayError, ValueError):
    """Raised when a chat request carries no message text."""


class InvalidHealthDataError(ChatGatewayError, ValueError):
    """Raised when the health snapshot cannot be read at all."""


class InferenceServiceError(ChatGatewayError, RuntimeError):
    """Raised when the inference service call itself fails."""


class ChatController:
    """Controller for wellness chat operations."""

    def __init__(
        self,
        inference_client: Optional[InferenceClient] = None,
        settings: Optional[Settings] = None,
        history: Optional[ChatHistoryLog] = None,
    ):
        """Initialize the controller, creating a Bedrock client unless one is given."""
        settings = settings or get_settings()
        self.inference_client = inference_client or BedrockInferenceClient(settings)
        self.history = history or ChatHistoryLog(limit=settings.chat_history_limit)

    def parse_payload(self, payload: Any) -> ChatRequest:
        """
        Turn a raw JSON body into a ChatRequest.

        The message is checked before anything else is looked at, so a
        request without one is always reported as such.

        Args:
            payload: Decoded request body (anything; non-objects count as empty)

        Raises:
            EmptyMessageError: If the message is missing or blank
            InvalidHealthDataError: If ``healthData`` has an unusable shape
        """
        if not isinstance(payload, dict):
            payload = {}

        message = payload.get("message")
        if not message or not str(message).strip():
            raise EmptyMessageError(NO_MESSAGE_REPLY)

        try:
            health_data = HealthData.model_validate(payload.get("healthData") or {})
        except ValidationError as e:
            logger.error(f"Unusable healthData in chat request: {e}")
            raise InvalidHealthDataError(str(e)) from e

        user_id = payload.get("userId")
        return ChatRequest(
            message=str(message),
            user_id=str(user_id) if user_id is not None else None,
            health_data=health_data,
        )

    def _validate_request(self, request: ChatRequest) -> str:
        """
        Validate the chat request.

        Returns:
            The message text

        Raises:
            EmptyMessageError: If the message is missing or blank
        """
        message = request.message
        if message is None or not message.strip():
            raise EmptyMessageError(NO_MESSAGE_REPLY)
        return message

    def chat_from_payload(self, payload: Any) -> ChatOutcome:
        """Parse a raw request body and answer it. See ``chat``."""
        return self.chat(self.parse_payload(payload))

    def chat(self, request: ChatRequest) -> ChatOutcome:
        """
        Produce the companion's reply for one chat request.

        Blocking; the endpoint runs it in a worker thread.

        Raises:
            EmptyMessageError: If the message is missing or blank
            InferenceServiceError: If the inference call raises
        """
        message = self._validate_request(request)
        prompt = build_wellness_prompt(message, request.health_data)

        try:
            raw = self.inference_client.generate(prompt)
        except Exception as e:
            logger.error(f"Inference service error: {e}", exc_info=True)
            raise InferenceServiceError(str(e)) from e

        outcome = parse_inference_body(raw)

        # Sentinel replies are logged too, except when the body was not JSON
        if outcome.status is not ReplyStatus.UNPARSEABLE:
            self.history.append_reply(outcome.reply)

        return outcome
