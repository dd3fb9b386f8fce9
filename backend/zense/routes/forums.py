"""
Forum routes.

DELETE /forums/{id}/topic clears every topic of the forum (owner only)
and keeps the forum itself.
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from zense.config import settings
from zense.dependencies import get_current_user_id, get_forum_service
from zense.routes import OWNED_WRITE_ERRORS
from zense.schemas.forum import ForumCreateRequest, ForumResponse, ForumUpdateRequest
from zense.services.forum_service import ForumService

router = APIRouter(prefix=f"{settings.api_prefix}/forums", tags=["Forums"])


@router.post(
    "",
    response_model=ForumResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_forum(
    payload: ForumCreateRequest,
    caller_id: int = Depends(get_current_user_id),
    forums: ForumService = Depends(get_forum_service),
):
    return await forums.create(caller_id, payload)


@router.get("", response_model=List[ForumResponse], response_model_exclude_none=True)
async def list_forums(forums: ForumService = Depends(get_forum_service)):
    return await forums.find_all()


@router.get("/{forum_id}", response_model=ForumResponse, response_model_exclude_none=True)
async def get_forum(forum_id: int, forums: ForumService = Depends(get_forum_service)):
    return await forums.find_by_id(forum_id)


@router.put(
    "/{forum_id}",
    response_model=ForumResponse,
    response_model_exclude_none=True,
    responses=OWNED_WRITE_ERRORS,
)
async def update_forum(
    forum_id: int,
    payload: ForumUpdateRequest,
    caller_id: int = Depends(get_current_user_id),
    forums: ForumService = Depends(get_forum_service),
):
    return await forums.update(forum_id, caller_id, payload)


@router.delete(
    "/{forum_id}/topic",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=OWNED_WRITE_ERRORS,
    summary="Remove every topic from a forum",
)
async def remove_forum_topics(
    forum_id: int,
    caller_id: int = Depends(get_current_user_id),
    forums: ForumService = Depends(get_forum_service),
) -> Response:
    await forums.remove_topics(forum_id, caller_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{forum_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=OWNED_WRITE_ERRORS,
)
async def delete_forum(
    forum_id: int,
    caller_id: int = Depends(get_current_user_id),
    forums: ForumService = Depends(get_forum_service),
) -> Response:
    await forums.delete(forum_id, caller_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
