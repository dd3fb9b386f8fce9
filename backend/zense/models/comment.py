"""
Zense Backend - Comment Model
==============================

What:  ORM model for the `comments` table: a reply on a forum thread.

Visibility:
    review (default) | public | private. New comments wait in "review";
    the value is stored for clients, it does not filter reads.
"""

import enum
from typing import TYPE_CHECKING

from sqlalchemy import Enum, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from zense.database import Base
from zense.models.mixins import TimestampMixin

if TYPE_CHECKING:
    from zense.models.forum import Forum
    from zense.models.user import User


class CommentVisibility(str, enum.Enum):
    REVIEW = "review"
    PUBLIC = "public"
    PRIVATE = "private"


class Comment(TimestampMixin, Base):
    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    forum_id: Mapped[int] = mapped_column(
        ForeignKey("forums.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    visibility: Mapped[CommentVisibility] = mapped_column(
        Enum(
            CommentVisibility,
            name="comment_visibility",
            values_callable=lambda e: [member.value for member in e],
        ),
        nullable=False,
        default=CommentVisibility.REVIEW,
    )

    user: Mapped["User"] = relationship(
        "User", back_populates="comments", lazy="selectin",
    )
    forum: Mapped["Forum"] = relationship("Forum", back_populates="comments")

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, forum_id={self.forum_id}, user_id={self.user_id})>"
