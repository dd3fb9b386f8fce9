"""Persistence adapters, one per entity, plus their Protocol contracts."""

from zense.repositories.comment import CommentRepository  # noqa: F401
from zense.repositories.forum import ForumRepository  # noqa: F401
from zense.repositories.journal import JournalRepository  # noqa: F401
from zense.repositories.protocols import (  # noqa: F401
    CommentStore,
    ForumStore,
    JournalStore,
    TopicStore,
    UserStore,
)
from zense.repositories.topic import TopicRepository  # noqa: F401
from zense.repositories.user import UserRepository  # noqa: F401
