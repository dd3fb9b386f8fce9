"""Comment persistence adapter."""

from zense.models import Comment
from zense.repositories.base import SQLAlchemyRepository


class CommentRepository(SQLAlchemyRepository[Comment]):
    model = Comment
    populate_existing = True
