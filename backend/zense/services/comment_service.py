"""
Comment service.

A comment always belongs to an existing forum; the parent is checked on
create and the comment keeps its forum for life (updates may change only
content and visibility).
"""

import logging
from typing import List

from zense.exceptions import NotFoundError
from zense.models import Comment
from zense.repositories import CommentStore, ForumStore
from zense.schemas.comment import (
    CommentCreateRequest,
    CommentResponse,
    CommentUpdateRequest,
)
from zense.schemas.user import UserSummary
from zense.services.authorization import fetch_owned
from zense.services.common import changed_fields

logger = logging.getLogger(__name__)


def to_response(comment: Comment, include_user: bool = True) -> CommentResponse:
    return CommentResponse(
        id=comment.id,
        user_id=comment.user_id,
        forum_id=comment.forum_id,
        content=comment.content,
        visibility=comment.visibility,
        user=(
            UserSummary(id=comment.user.id, name=comment.user.name)
            if include_user and comment.user is not None
            else None
        ),
        created_at=comment.created_at,
        updated_at=comment.updated_at,
    )


class CommentService:
    def __init__(self, comments: CommentStore, forums: ForumStore):
        self.comments = comments
        self.forums = forums

    async def create(self, owner_id: int, payload: CommentCreateRequest) -> CommentResponse:
        if await self.forums.find_by_id(payload.forum_id) is None:
            raise NotFoundError(resource="forum", resource_id=payload.forum_id)
        comment = await self.comments.create(
            Comment(
                user_id=owner_id,
                forum_id=payload.forum_id,
                content=payload.content,
                visibility=payload.visibility,
            )
        )
        logger.info(
            "Comment %d created on forum %d by user %d", comment.id, comment.forum_id, owner_id,
        )
        return to_response(comment, include_user=False)

    async def find_all(self) -> List[CommentResponse]:
        comments = await self.comments.find_all()
        if not comments:
            raise NotFoundError(resource="comment")
        return [to_response(comment) for comment in comments]

    async def find_by_id(self, comment_id: int) -> CommentResponse:
        comment = await self.comments.find_by_id(comment_id)
        if comment is None:
            raise NotFoundError(resource="comment", resource_id=comment_id)
        return to_response(comment)

    async def update(
        self, comment_id: int, caller_id: int, payload: CommentUpdateRequest,
    ) -> CommentResponse:
        fields = changed_fields(payload)
        comment = await fetch_owned(
            self.comments.find_by_id, comment_id, caller_id, resource="comment",
        )
        for name, value in fields.items():
            setattr(comment, name, value)
        comment = await self.comments.update(comment)
        return to_response(comment)

    async def delete(self, comment_id: int, caller_id: int) -> None:
        comment = await fetch_owned(
            self.comments.find_by_id, comment_id, caller_id,
            resource="comment", action="delete",
        )
        await self.comments.delete(comment)
        logger.info("Comment %d deleted by user %d", comment_id, caller_id)
