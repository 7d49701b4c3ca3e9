from typing import Any, Dict, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response model for failures outside the chat contract."""

    error: str
    message: str
    details: Optional[Dict[str, Any]] = None
    traceback: Optional[str] = None
