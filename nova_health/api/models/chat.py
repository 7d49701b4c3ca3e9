"""
Request and response models for the wellness chat endpoint.
"""
from decimal import Decimal
from enum import Enum
from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .medication import Medication


class HealthData(BaseModel):
    """Snapshot of the client-side health state sent with every chat message.

    Values are taken as-is from the dashboard and rendered verbatim;
    nothing is range-checked or normalized.
    """
    model_config = ConfigDict(populate_by_name=True)

    steps: Union[int, float, str] = 0
    bmi: Optional[Union[Decimal, str]] = None
    medications: List[Medication] = Field(default_factory=list)
    medication_reminder: str = Field(default="", alias="medicationReminder")

    @field_validator("medication_reminder", mode="before")
    @classmethod
    def _reminder_as_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)


class ChatRequest(BaseModel):
    """Payload for the wellness chat.

    - message: the user's free-text message (required, non-empty)
    - userId: optional caller identifier, only used for request logging
    - healthData: health snapshot interpolated into the prompt
    """
    model_config = ConfigDict(populate_by_name=True)

    message: Optional[str] = None
    user_id: Optional[str] = Field(default=None, alias="userId")
    health_data: HealthData = Field(default_factory=HealthData, alias="healthData")


class ChatReply(BaseModel):
    """Reply returned to the dashboard."""
    reply: str


class ReplyStatus(str, Enum):
    """How the inference response body was interpreted."""
    OK = "ok"
    EMPTY = "empty"
    UNPARSEABLE = "unparseable"


class ChatOutcome(BaseModel):
    reply: str
    status: ReplyStatus


class ChatHistoryEntry(BaseModel):
    role: Literal["assistant"] = "assistant"
    content: str
