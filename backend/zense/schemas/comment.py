"""Comment request/response schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from zense.models.comment import CommentVisibility
from zense.schemas.user import UserSummary


class CommentCreateRequest(BaseModel):
    forum_id: int = Field(gt=0)
    content: str = Field(min_length=1)
    visibility: CommentVisibility = CommentVisibility.REVIEW


class CommentUpdateRequest(BaseModel):
    content: Optional[str] = Field(default=None, min_length=1)
    visibility: Optional[CommentVisibility] = None


class CommentResponse(BaseModel):
    id: int
    user_id: int
    forum_id: int
    content: str
    visibility: CommentVisibility
    user: Optional[UserSummary] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
