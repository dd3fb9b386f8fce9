"""
Forum persistence adapter.

Forum.user and Forum.topics are selectin-loaded by the mapping, so every
query here returns forums with owner and topics attached.
"""

from zense.models import Forum
from zense.repositories.base import SQLAlchemyRepository


class ForumRepository(SQLAlchemyRepository[Forum]):
    model = Forum
    populate_existing = True

    async def clear_topics(self, forum: Forum) -> Forum:
        """Removes every forum_topics row of the forum; the forum row stays."""
        forum.topics = []
        await self.session.flush()
        return forum
