"""
Wellness chat endpoints.

Relays the user's message and health snapshot to the inference service and
returns the companion's reply.
"""
import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Request, status
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from nova_health.api.models import ChatReply
from nova_health.controllers.chat_controller import (
    INFERENCE_ERROR_REPLY,
    ChatController,
    ChatGatewayError,
    EmptyMessageError,
)

logger = logging.getLogger(__name__)

REPLY_STATUS_HEADER = "X-Reply-Status"

# ============================================================================
# Dependency Injection
# ============================================================================


def get_chat_controller(request: Request) -> ChatController:
    """Dependency injection for the app-wide ChatController."""
    return request.app.state.chat_controller


# ============================================================================
# Router
# ============================================================================

router = APIRouter()


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    "/chat",
    status_code=status.HTTP_200_OK,
    response_model=ChatReply,
    responses={
        400: {"model": ChatReply, "description": "No message provided"},
        500: {"model": ChatReply, "description": "Inference service error"},
    },
)
async def wellness_chat(
    payload: Any = Body(default=None),
    controller: ChatController = Depends(get_chat_controller),
) -> JSONResponse:
    """
    Chat with the Nova wellness companion.

    The body is read as raw JSON so a missing or empty ``message`` is
    always answered with 400, whatever else the body holds. The health
    snapshot in ``healthData`` is interpolated into the prompt.
    Sentinel replies for unusable inference responses are still returned
    with 200; the ``X-Reply-Status`` header tells them apart.
    """
    try:
        outcome = await run_in_threadpool(controller.chat_from_payload, payload)
    except EmptyMessageError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ChatReply(reply=str(e)).model_dump(),
        )
    except ChatGatewayError:
        # Already logged by the controller
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ChatReply(reply=INFERENCE_ERROR_REPLY).model_dump(),
        )
    except Exception:
        logger.exception("Chat request failed")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ChatReply(reply=INFERENCE_ERROR_REPLY).model_dump(),
        )

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=ChatReply(reply=outcome.reply).model_dump(),
        headers={REPLY_STATUS_HEADER: outcome.status.value},
    )
