"""Topic request/response schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class TopicCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: str = Field(default="")


class TopicUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = None


class TopicSummary(BaseModel):
    id: int
    name: str
    description: str

    model_config = {"from_attributes": True}


class TopicResponse(TopicSummary):
    created_at: datetime
    updated_at: Optional[datetime] = None
