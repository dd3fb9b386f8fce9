"""
Zense Backend - Generic SQLAlchemy Repository
==============================================

What:  CRUD shared by every entity adapter.
How:   Wraps one AsyncSession (the request session). Writes are flushed so
       generated ids and timestamps are visible immediately; committing is
       left to get_db_session.
"""

import logging
from typing import Any, ClassVar, Generic, List, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from zense.database import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class SQLAlchemyRepository(Generic[ModelT]):
    model: ClassVar[Type[Any]]
    # Reload rows already in the identity map so eager relations get attached
    populate_existing: ClassVar[bool] = False

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, entity: ModelT) -> ModelT:
        self.session.add(entity)
        await self.session.flush()
        logger.debug("Created %r", entity)
        return entity

    async def find_all(self) -> List[ModelT]:
        result = await self.session.execute(
            select(self.model)
            .order_by(self.model.id)
            .execution_options(populate_existing=self.populate_existing)
        )
        return list(result.scalars().all())

    async def find_by_id(self, entity_id: int) -> Optional[ModelT]:
        result = await self.session.execute(
            select(self.model)
            .where(self.model.id == entity_id)
            .execution_options(populate_existing=self.populate_existing)
        )
        return result.scalar_one_or_none()

    async def update(self, entity: ModelT) -> ModelT:
        await self.session.flush()
        return entity

    async def delete(self, entity: ModelT) -> None:
        await self.session.delete(entity)
        await self.session.flush()
        logger.debug("Deleted %r", entity)
