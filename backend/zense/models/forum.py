"""
Zense Backend - Forum Model
============================

What:  ORM model for the `forums` table: a discussion thread.

Relations:
    - user:     many-to-one owner, eagerly loaded (responses embed it)
    - topics:   many-to-many through `forum_topics`, eagerly loaded
    - comments: one-to-many, deleted together with the forum

Why lazy="selectin" on user/topics:
    Async sessions cannot lazy-load on attribute access, and every forum
    response includes both relations.
"""

from typing import List, TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from zense.database import Base
from zense.models.mixins import TimestampMixin
from zense.models.topic import Topic, forum_topics

if TYPE_CHECKING:
    from zense.models.comment import Comment
    from zense.models.user import User


class Forum(TimestampMixin, Base):
    __tablename__ = "forums"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    user: Mapped["User"] = relationship(
        "User", back_populates="forums", lazy="selectin",
    )
    topics: Mapped[List[Topic]] = relationship(
        Topic, secondary=forum_topics, back_populates="forums",
        lazy="selectin", order_by=Topic.id,
    )
    comments: Mapped[List["Comment"]] = relationship(
        "Comment", back_populates="forum", cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Forum(id={self.id}, user_id={self.user_id}, title='{self.title}')>"
