"""
Zense Backend - Journal Model
==============================

What:  ORM model for the `journals` table: a mood-tagged diary entry.

Enumerations:
    mood:        happy | good | normal | sad | angry
    visibility:  private | public (stored only, not an access-control rule)
"""

import enum

from sqlalchemy import Enum, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from zense.database import Base
from zense.models.mixins import TimestampMixin


class JournalMood(str, enum.Enum):
    HAPPY = "happy"
    GOOD = "good"
    NORMAL = "normal"
    SAD = "sad"
    ANGRY = "angry"


class JournalVisibility(str, enum.Enum):
    PRIVATE = "private"
    PUBLIC = "public"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Journal(TimestampMixin, Base):
    """
    A journal entry owned by one user.

    Ownership:
        user_id is fixed at creation; only that user may update or delete
        the entry (enforced in JournalService, not by the database).
    """

    __tablename__ = "journals"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    mood: Mapped[JournalMood] = mapped_column(
        Enum(JournalMood, name="journal_mood", values_callable=_enum_values),
        nullable=False,
        default=JournalMood.NORMAL,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    visibility: Mapped[JournalVisibility] = mapped_column(
        Enum(JournalVisibility, name="journal_visibility", values_callable=_enum_values),
        nullable=False,
        default=JournalVisibility.PRIVATE,
    )

    def __repr__(self) -> str:
        return f"<Journal(id={self.id}, user_id={self.user_id}, mood='{self.mood}')>"
