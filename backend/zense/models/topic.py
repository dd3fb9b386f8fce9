"""
Zense Backend - Topic Model
============================

What:  ORM model for the `topics` table and the `forum_topics` association.
Why global: topics are a shared taxonomy. They have no owner, so any
authenticated user may curate them.
"""

from typing import List, TYPE_CHECKING

from sqlalchemy import Column, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from zense.database import Base
from zense.models.mixins import TimestampMixin

if TYPE_CHECKING:
    from zense.models.forum import Forum

# Many-to-many link between forums and topics. Rows go away with either side.
forum_topics = Table(
    "forum_topics",
    Base.metadata,
    Column("forum_id", ForeignKey("forums.id", ondelete="CASCADE"), primary_key=True),
    Column("topic_id", ForeignKey("topics.id", ondelete="CASCADE"), primary_key=True),
)


class Topic(TimestampMixin, Base):
    __tablename__ = "topics"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # Not eagerly loaded: only read by the unit of work when a topic is
    # deleted, so its association rows are removed with it
    forums: Mapped[List["Forum"]] = relationship(
        "Forum", secondary=forum_topics, back_populates="topics",
    )

    def __repr__(self) -> str:
        return f"<Topic(id={self.id}, name='{self.name}')>"
