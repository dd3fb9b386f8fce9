"""Journal persistence adapter."""

from zense.models import Journal
from zense.repositories.base import SQLAlchemyRepository


class JournalRepository(SQLAlchemyRepository[Journal]):
    model = Journal
