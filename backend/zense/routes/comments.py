"""Comment routes."""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from zense.config import settings
from zense.dependencies import get_comment_service, get_current_user_id
from zense.routes import OWNED_WRITE_ERRORS
from zense.schemas.comment import (
    CommentCreateRequest,
    CommentResponse,
    CommentUpdateRequest,
)
from zense.services.comment_service import CommentService

router = APIRouter(prefix=f"{settings.api_prefix}/comments", tags=["Comments"])


@router.post(
    "",
    response_model=CommentResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    payload: CommentCreateRequest,
    caller_id: int = Depends(get_current_user_id),
    comments: CommentService = Depends(get_comment_service),
):
    return await comments.create(caller_id, payload)


@router.get("", response_model=List[CommentResponse], response_model_exclude_none=True)
async def list_comments(comments: CommentService = Depends(get_comment_service)):
    return await comments.find_all()


@router.get("/{comment_id}", response_model=CommentResponse, response_model_exclude_none=True)
async def get_comment(comment_id: int, comments: CommentService = Depends(get_comment_service)):
    return await comments.find_by_id(comment_id)


@router.put(
    "/{comment_id}",
    response_model=CommentResponse,
    response_model_exclude_none=True,
    responses=OWNED_WRITE_ERRORS,
)
async def update_comment(
    comment_id: int,
    payload: CommentUpdateRequest,
    caller_id: int = Depends(get_current_user_id),
    comments: CommentService = Depends(get_comment_service),
):
    return await comments.update(comment_id, caller_id, payload)


@router.delete(
    "/{comment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=OWNED_WRITE_ERRORS,
)
async def delete_comment(
    comment_id: int,
    caller_id: int = Depends(get_current_user_id),
    comments: CommentService = Depends(get_comment_service),
) -> Response:
    await comments.delete(comment_id, caller_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
