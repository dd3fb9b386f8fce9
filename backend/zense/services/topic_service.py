"""
Topic service.

Topics are a global taxonomy: any authenticated caller may create, rename
or delete them, so there is no ownership check here.
"""

import logging
from typing import List

from zense.exceptions import NotFoundError
from zense.models import Topic
from zense.repositories import TopicStore
from zense.schemas.topic import TopicCreateRequest, TopicResponse, TopicUpdateRequest
from zense.services.common import changed_fields

logger = logging.getLogger(__name__)


def to_response(topic: Topic) -> TopicResponse:
    return TopicResponse(
        id=topic.id,
        name=topic.name,
        description=topic.description,
        created_at=topic.created_at,
        updated_at=topic.updated_at,
    )


class TopicService:
    def __init__(self, topics: TopicStore):
        self.topics = topics

    async def create(self, payload: TopicCreateRequest) -> TopicResponse:
        topic = await self.topics.create(
            Topic(name=payload.name, description=payload.description)
        )
        logger.info("Topic %d created: %s", topic.id, topic.name)
        return to_response(topic)

    async def find_all(self) -> List[TopicResponse]:
        topics = await self.topics.find_all()
        if not topics:
            raise NotFoundError(resource="topic")
        return [to_response(topic) for topic in topics]

    async def find_by_id(self, topic_id: int) -> TopicResponse:
        return to_response(await self._get(topic_id))

    async def update(self, topic_id: int, payload: TopicUpdateRequest) -> TopicResponse:
        fields = changed_fields(payload)
        topic = await self._get(topic_id)
        for name, value in fields.items():
            setattr(topic, name, value)
        return to_response(await self.topics.update(topic))

    async def delete(self, topic_id: int) -> None:
        topic = await self._get(topic_id)
        await self.topics.delete(topic)
        logger.info("Topic %d deleted", topic_id)

    async def _get(self, topic_id: int) -> Topic:
        topic = await self.topics.find_by_id(topic_id)
        if topic is None:
            raise NotFoundError(resource="topic", resource_id=topic_id)
        return topic
