from .chat import (
    ChatHistoryEntry,
    ChatOutcome,
    ChatReply,
    ChatRequest,
    HealthData,
    ReplyStatus,
)
from .error import ErrorResponse
from .medication import Medication

__all__ = [
    "ErrorResponse",
    "ChatRequest",
    "ChatReply",
    "ChatOutcome",
    "ChatHistoryEntry",
    "HealthData",
    "Medication",
    "ReplyStatus",
]
