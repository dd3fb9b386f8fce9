"""Topic persistence adapter."""

from typing import List, Sequence

from sqlalchemy import select

from zense.models import Topic
from zense.repositories.base import SQLAlchemyRepository


class TopicRepository(SQLAlchemyRepository[Topic]):
    model = Topic

    async def find_by_ids(self, topic_ids: Sequence[int]) -> List[Topic]:
        if not topic_ids:
            return []
        result = await self.session.execute(
            select(Topic).where(Topic.id.in_(list(topic_ids))).order_by(Topic.id)
        )
        return list(result.scalars().all())
