"""User persistence adapter."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from zense.exceptions import ConflictError
from zense.models import User
from zense.repositories.base import SQLAlchemyRepository


class UserRepository(SQLAlchemyRepository[User]):
    model = User

    async def create(self, user: User) -> User:
        # The unique index settles registrations that race past the lookup
        try:
            return await super().create(user)
        except IntegrityError as e:
            raise ConflictError(
                message="Email is already registered",
                context={"constraint": type(e.orig).__name__},
            ) from e

    async def update(self, user: User) -> User:
        try:
            return await super().update(user)
        except IntegrityError as e:
            raise ConflictError(
                message="Email is already registered",
                context={"constraint": type(e.orig).__name__},
            ) from e

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()
