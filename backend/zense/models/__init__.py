"""ORM models for every Zense entity.

All models are imported here so string-based relationship() references
resolve before the first query runs and so Base.metadata is complete for
table creation and Alembic.
"""

from zense.models.user import User  # noqa: F401
from zense.models.journal import Journal, JournalMood, JournalVisibility  # noqa: F401
from zense.models.topic import Topic, forum_topics  # noqa: F401
from zense.models.forum import Forum  # noqa: F401
from zense.models.comment import Comment, CommentVisibility  # noqa: F401
