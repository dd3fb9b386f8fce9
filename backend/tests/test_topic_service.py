"""Topic service tests: global taxonomy, no ownership."""

import pytest

from zense.exceptions import NotFoundError
from zense.repositories import TopicRepository
from zense.schemas.topic import TopicCreateRequest, TopicUpdateRequest
from zense.services.topic_service import TopicService


class TestTopicService:

    @pytest.fixture(autouse=True)
    def _service(self, db_session):
        self.service = TopicService(TopicRepository(db_session))

    @pytest.mark.asyncio
    async def test_create_and_fetch(self):
        created = await self.service.create(
            TopicCreateRequest(name="anxiety", description="Worries and stress")
        )

        fetched = await self.service.find_by_id(created.id)
        assert fetched.name == "anxiety"
        assert fetched.description == "Worries and stress"

    @pytest.mark.asyncio
    async def test_find_all_empty_raises_not_found(self):
        with pytest.raises(NotFoundError):
            await self.service.find_all()

    @pytest.mark.asyncio
    async def test_update_changes_only_given_fields(self):
        created = await self.service.create(TopicCreateRequest(name="work", description="Jobs"))

        updated = await self.service.update(created.id, TopicUpdateRequest(name="career"))

        assert updated.name == "career"
        assert updated.description == "Jobs"

    @pytest.mark.asyncio
    async def test_delete_then_missing(self):
        created = await self.service.create(TopicCreateRequest(name="sleep"))

        await self.service.delete(created.id)

        with pytest.raises(NotFoundError):
            await self.service.find_by_id(created.id)
