"""
Zense Backend - Forum Service Tests
====================================

What we test:
    ✅ Topics attached on create are returned on fetch, owner embedded
    ✅ remove_topics empties the set and keeps the forum
    ✅ Unknown topic id is NotFoundError and nothing is written
    ✅ Update without topic_ids keeps the set; with a list replaces it
    ✅ Non-owner update/remove_topics/delete is ForbiddenError
    ✅ Delete removes the forum and its comments
    ✅ Deleting a topic drops it from every forum
"""

import pytest

from zense.exceptions import ForbiddenError, NotFoundError
from zense.models import Comment, Topic
from zense.repositories import CommentRepository, ForumRepository, TopicRepository
from zense.schemas.forum import ForumCreateRequest, ForumUpdateRequest
from zense.services.forum_service import ForumService
from zense.services.topic_service import TopicService


class TestForumService:

    @pytest.fixture(autouse=True)
    def _service(self, db_session):
        self.session = db_session
        self.forums = ForumRepository(db_session)
        self.topics = TopicRepository(db_session)
        self.service = ForumService(self.forums, self.topics)

    async def _topics(self, *names):
        created = []
        for name in names:
            created.append(await self.topics.create(Topic(name=name, description=f"About {name}")))
        return created

    @pytest.mark.asyncio
    async def test_created_topics_are_fetched_back(self, make_user):
        alice = await make_user("alice", "alice@example.com")
        work, family = await self._topics("work", "family")

        created = await self.service.create(
            alice.id,
            ForumCreateRequest(title="Burnout", content="Anyone else?", topic_ids=[work.id, family.id]),
        )
        assert created.user is None
        assert {t.id for t in created.topics} == {work.id, family.id}

        fetched = await self.service.find_by_id(created.id)
        assert {t.id for t in fetched.topics} == {work.id, family.id}
        assert fetched.user.id == alice.id
        assert fetched.user.name == "alice"

    @pytest.mark.asyncio
    async def test_remove_topics_keeps_forum(self, make_user):
        alice = await make_user("alice", "alice@example.com")
        work, family = await self._topics("work", "family")
        created = await self.service.create(
            alice.id,
            ForumCreateRequest(title="Burnout", content="Anyone else?", topic_ids=[work.id, family.id]),
        )

        await self.service.remove_topics(created.id, alice.id)

        fetched = await self.service.find_by_id(created.id)
        assert fetched.topics == []
        assert fetched.title == "Burnout"

    @pytest.mark.asyncio
    async def test_duplicate_topic_ids_collapsed(self, make_user):
        alice = await make_user("alice", "alice@example.com")
        (work,) = await self._topics("work")

        created = await self.service.create(
            alice.id,
            ForumCreateRequest(title="t", content="c", topic_ids=[work.id, work.id]),
        )
        assert [t.id for t in created.topics] == [work.id]

    @pytest.mark.asyncio
    async def test_unknown_topic_rejected(self, make_user):
        alice = await make_user("alice", "alice@example.com")

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.create(
                alice.id, ForumCreateRequest(title="t", content="c", topic_ids=[404]),
            )
        assert exc_info.value.context["resource"] == "topic"
        assert await self.forums.find_all() == []

    @pytest.mark.asyncio
    async def test_update_without_topic_ids_keeps_set(self, make_user):
        alice = await make_user("alice", "alice@example.com")
        (work,) = await self._topics("work")
        created = await self.service.create(
            alice.id, ForumCreateRequest(title="Old", content="c", topic_ids=[work.id]),
        )

        updated = await self.service.update(created.id, alice.id, ForumUpdateRequest(title="New"))

        assert updated.title == "New"
        assert [t.id for t in updated.topics] == [work.id]

    @pytest.mark.asyncio
    async def test_update_with_topic_ids_replaces_set(self, make_user):
        alice = await make_user("alice", "alice@example.com")
        work, family = await self._topics("work", "family")
        created = await self.service.create(
            alice.id, ForumCreateRequest(title="t", content="c", topic_ids=[work.id]),
        )

        updated = await self.service.update(
            created.id, alice.id, ForumUpdateRequest(topic_ids=[family.id]),
        )
        assert [t.id for t in updated.topics] == [family.id]

    @pytest.mark.asyncio
    async def test_non_owner_is_forbidden_everywhere(self, make_user):
        alice = await make_user("alice", "alice@example.com")
        bob = await make_user("bobby", "bob@example.com")
        (work,) = await self._topics("work")
        created = await self.service.create(
            alice.id, ForumCreateRequest(title="Mine", content="c", topic_ids=[work.id]),
        )

        with pytest.raises(ForbiddenError):
            await self.service.update(created.id, bob.id, ForumUpdateRequest(title="Stolen"))
        with pytest.raises(ForbiddenError):
            await self.service.remove_topics(created.id, bob.id)
        with pytest.raises(ForbiddenError):
            await self.service.delete(created.id, bob.id)

        fetched = await self.service.find_by_id(created.id)
        assert fetched.title == "Mine"
        assert [t.id for t in fetched.topics] == [work.id]

    @pytest.mark.asyncio
    async def test_delete_removes_forum_and_comments(self, make_user):
        alice = await make_user("alice", "alice@example.com")
        (work,) = await self._topics("work")
        created = await self.service.create(
            alice.id, ForumCreateRequest(title="t", content="c", topic_ids=[work.id]),
        )
        self.session.add(Comment(user_id=alice.id, forum_id=created.id, content="me too"))
        await self.session.flush()

        await self.service.delete(created.id, alice.id)

        assert await self.forums.find_by_id(created.id) is None
        assert await CommentRepository(self.session).find_all() == []
        with pytest.raises(NotFoundError):
            await self.service.find_all()
        # Topics are shared and survive the forum
        assert await self.topics.find_by_id(work.id) is not None

    @pytest.mark.asyncio
    async def test_deleted_topic_leaves_no_association(self, make_user):
        alice = await make_user("alice", "alice@example.com")
        (work,) = await self._topics("work")
        created = await self.service.create(
            alice.id, ForumCreateRequest(title="t", content="c", topic_ids=[work.id]),
        )

        await TopicService(self.topics).delete(work.id)
        # SQLite may hand the freed id to the next topic
        (unrelated,) = await self._topics("unrelated")

        fetched = await self.service.find_by_id(created.id)
        assert fetched.topics == []
        assert await self.topics.find_by_id(unrelated.id) is not None
