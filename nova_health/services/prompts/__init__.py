from .chat_prompts import (
    WELLNESS_SYSTEM_PROMPT,
    WELLNESS_GUIDANCE_PROMPT,
    build_wellness_prompt,
    format_pending_medications,
)

__all__ = [
    "WELLNESS_SYSTEM_PROMPT",
    "WELLNESS_GUIDANCE_PROMPT",
    "build_wellness_prompt",
    "format_pending_medications",
]
