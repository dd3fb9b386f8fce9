"""
Zense Backend - Forum Schemas
==============================

topic_ids semantics:
    - create: the listed topics are attached (empty list = no topics)
    - update: omitted keeps the current set, an explicit list replaces it
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from zense.schemas.topic import TopicSummary
from zense.schemas.user import UserSummary


class ForumCreateRequest(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)
    topic_ids: List[int] = Field(default_factory=list)


class ForumUpdateRequest(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    content: Optional[str] = Field(default=None, min_length=1)
    topic_ids: Optional[List[int]] = None


class ForumResponse(BaseModel):
    id: int
    user_id: int
    title: str
    content: str
    user: Optional[UserSummary] = None
    topics: List[TopicSummary] = Field(default_factory=list)
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
