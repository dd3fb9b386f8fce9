"""
Vent routes: chat with the AI companion and reset a conversation.

The conversation is identified by the caller's id plus the optional
session_id (body for POST, query string for DELETE).
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from zense.config import settings
from zense.dependencies import get_current_user_id, get_vent_service
from zense.schemas.common import ErrorResponse
from zense.schemas.vent import VentRequest, VentResponse
from zense.services.vent_service import DEFAULT_SESSION, VentService, conversation_key

router = APIRouter(prefix=f"{settings.api_prefix}/vents", tags=["Vent"])


@router.post(
    "",
    response_model=VentResponse,
    responses={503: {"description": "AI assistant unavailable", "model": ErrorResponse}},
    summary="Send a message to the vent assistant",
)
async def chat(
    payload: VentRequest,
    caller_id: int = Depends(get_current_user_id),
    vents: VentService = Depends(get_vent_service),
) -> VentResponse:
    reply = await vents.chat(conversation_key(caller_id, payload.session_id), payload.message)
    return VentResponse(reply=reply, session_id=payload.session_id or DEFAULT_SESSION)


@router.delete(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Forget a vent conversation",
)
async def clear(
    session_id: Optional[str] = Query(default=None, max_length=64),
    caller_id: int = Depends(get_current_user_id),
    vents: VentService = Depends(get_vent_service),
) -> Response:
    await vents.clear(conversation_key(caller_id, session_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
