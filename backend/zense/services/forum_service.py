"""
Zense Backend - Forum Service
==============================

What:  Business rules for forum threads and their topic tags.
Who:   Forum routes; uses ForumStore for threads and TopicStore to resolve
       topic ids.

Topic association rules:
    create   topic_ids resolved and attached (duplicates collapsed)
    update   topic_ids omitted → current set kept
             topic_ids given   → set replaced (an empty list clears it)
    remove_topics → every association cleared, the forum itself stays
    delete   associations cleared first, then the row (comments go with it)

Any id that does not resolve to a topic is NotFoundError("topic", id) and
nothing is written.
"""

import logging
from typing import List, Sequence

from zense.exceptions import NotFoundError
from zense.models import Forum, Topic
from zense.repositories import ForumStore, TopicStore
from zense.schemas.forum import ForumCreateRequest, ForumResponse, ForumUpdateRequest
from zense.schemas.topic import TopicSummary
from zense.schemas.user import UserSummary
from zense.services.authorization import fetch_owned
from zense.services.common import changed_fields

logger = logging.getLogger(__name__)


def to_response(forum: Forum, include_user: bool = True) -> ForumResponse:
    """
    Projects a forum row.

    include_user is False right after creation: the owner relation of a
    freshly inserted row is not loaded and the caller already knows it.
    """
    return ForumResponse(
        id=forum.id,
        user_id=forum.user_id,
        title=forum.title,
        content=forum.content,
        user=(
            UserSummary(id=forum.user.id, name=forum.user.name)
            if include_user and forum.user is not None
            else None
        ),
        topics=[
            TopicSummary(id=t.id, name=t.name, description=t.description)
            for t in forum.topics
        ],
        created_at=forum.created_at,
        updated_at=forum.updated_at,
    )


class ForumService:
    def __init__(self, forums: ForumStore, topics: TopicStore):
        self.forums = forums
        self.topics = topics

    async def _resolve_topics(self, topic_ids: Sequence[int]) -> List[Topic]:
        wanted = list(dict.fromkeys(topic_ids))
        found = {topic.id: topic for topic in await self.topics.find_by_ids(wanted)}
        for topic_id in wanted:
            if topic_id not in found:
                raise NotFoundError(resource="topic", resource_id=topic_id)
        return [found[topic_id] for topic_id in wanted]

    async def create(self, owner_id: int, payload: ForumCreateRequest) -> ForumResponse:
        topics = await self._resolve_topics(payload.topic_ids)
        forum = await self.forums.create(
            Forum(
                user_id=owner_id,
                title=payload.title,
                content=payload.content,
                topics=topics,
            )
        )
        logger.info(
            "Forum %d created by user %d with %d topic(s)", forum.id, owner_id, len(topics),
        )
        return to_response(forum, include_user=False)

    async def find_all(self) -> List[ForumResponse]:
        forums = await self.forums.find_all()
        if not forums:
            raise NotFoundError(resource="forum")
        return [to_response(forum) for forum in forums]

    async def find_by_id(self, forum_id: int) -> ForumResponse:
        forum = await self.forums.find_by_id(forum_id)
        if forum is None:
            raise NotFoundError(resource="forum", resource_id=forum_id)
        return to_response(forum)

    async def update(
        self, forum_id: int, caller_id: int, payload: ForumUpdateRequest,
    ) -> ForumResponse:
        fields = changed_fields(payload)
        forum = await fetch_owned(
            self.forums.find_by_id, forum_id, caller_id, resource="forum",
        )
        topic_ids = fields.pop("topic_ids", None)
        # Resolve before touching the row so a bad id leaves it unchanged
        topics = await self._resolve_topics(topic_ids) if topic_ids is not None else None

        for name, value in fields.items():
            setattr(forum, name, value)
        if topics is not None:
            forum.topics = topics
        forum = await self.forums.update(forum)
        logger.info("Forum %d updated by user %d", forum_id, caller_id)
        return to_response(forum)

    async def remove_topics(self, forum_id: int, caller_id: int) -> None:
        forum = await fetch_owned(
            self.forums.find_by_id, forum_id, caller_id,
            resource="forum", action="remove topics from",
        )
        await self.forums.clear_topics(forum)
        logger.info("Forum %d topics cleared by user %d", forum_id, caller_id)

    async def delete(self, forum_id: int, caller_id: int) -> None:
        forum = await fetch_owned(
            self.forums.find_by_id, forum_id, caller_id,
            resource="forum", action="delete",
        )
        await self.forums.clear_topics(forum)
        await self.forums.delete(forum)
        logger.info("Forum %d deleted by user %d", forum_id, caller_id)
