"""Journal request/response schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from zense.models.journal import JournalMood, JournalVisibility


class JournalCreateRequest(BaseModel):
    mood: JournalMood = JournalMood.NORMAL
    content: str = Field(min_length=1)
    visibility: JournalVisibility = JournalVisibility.PRIVATE


class JournalUpdateRequest(BaseModel):
    mood: Optional[JournalMood] = None
    content: Optional[str] = Field(default=None, min_length=1)
    visibility: Optional[JournalVisibility] = None


class JournalResponse(BaseModel):
    id: int
    user_id: int
    mood: JournalMood
    content: str
    visibility: JournalVisibility
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
