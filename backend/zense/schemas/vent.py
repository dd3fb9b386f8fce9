"""Vent (AI chat) request/response schemas."""

from typing import Optional

from pydantic import BaseModel, Field


class VentRequest(BaseModel):
    message: str = Field(min_length=1, max_length=4000)
    session_id: Optional[str] = Field(
        default=None,
        max_length=64,
        description="Client-chosen conversation id; omitted means the default conversation",
    )


class VentResponse(BaseModel):
    reply: str
    session_id: str
