"""
Interpretation of the Titan Text response envelope.

The dashboard tells the three outcomes apart only by the reply text, so the
sentinel strings below must not change.
"""
import json
import logging
from typing import Any

from nova_health.api.models.chat import ChatOutcome, ReplyStatus

logger = logging.getLogger(__name__)

UNPARSEABLE_REPLY = "Could not parse AI response"
EMPTY_REPLY = "AI returned empty reply"


def _extract_output_text(parsed: Any) -> Any:
    if not isinstance(parsed, dict):
        return None
    results = parsed.get("results")
    if not isinstance(results, list) or not results:
        return None
    first = results[0]
    if not isinstance(first, dict):
        return None
    return first.get("outputText")


def parse_inference_body(raw: str) -> ChatOutcome:
    """
    Extract the reply from a raw inference response body.

    Expects ``{"results": [{"outputText": "..."}]}``.

    Returns:
        ChatOutcome with the trimmed text (``ok``), the empty-reply
        sentinel when the body is JSON without usable text (``empty``),
        or the parse-failure sentinel when the body is not JSON
        (``unparseable``)
    """
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError) as e:
        logger.error(f"Could not decode inference response as JSON: {e}")
        return ChatOutcome(reply=UNPARSEABLE_REPLY, status=ReplyStatus.UNPARSEABLE)

    output_text = _extract_output_text(parsed)
    if not output_text or not isinstance(output_text, str):
        logger.warning(f"Inference response parsed but has no reply: {parsed!r}")
        return ChatOutcome(reply=EMPTY_REPLY, status=ReplyStatus.EMPTY)

    return ChatOutcome(reply=output_text.strip(), status=ReplyStatus.OK)
