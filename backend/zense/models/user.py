"""
Zense Backend - User Model
===========================

What:  ORM model for the `users` table.
Who:   Owner of journals, forums and comments; authenticated through
       email + password.

Table Design:
    - email is UNIQUE: the constraint is the last line of defence against
      duplicate registrations (services check first, the database decides)
    - password holds a werkzeug hash string, never the plain password
    - deleting a user deletes everything the user owns
"""

from typing import List, TYPE_CHECKING

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from zense.database import Base
from zense.models.mixins import TimestampMixin

if TYPE_CHECKING:
    from zense.models.comment import Comment
    from zense.models.forum import Forum
    from zense.models.journal import Journal


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)

    journals: Mapped[List["Journal"]] = relationship(
        "Journal", cascade="all, delete-orphan",
    )
    forums: Mapped[List["Forum"]] = relationship(
        "Forum", back_populates="user", cascade="all, delete-orphan",
    )
    comments: Mapped[List["Comment"]] = relationship(
        "Comment", back_populates="user", cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
