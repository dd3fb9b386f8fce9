"""
Zense Backend - Journal Service
================================

What:  Business rules for journal entries.
How:   Stateless per request; receives its store (JournalStore) through the
       constructor and returns JournalResponse projections.

Rules:
    - the caller always becomes the owner on create
    - listing an empty table is NotFoundError
    - update/delete go through fetch_owned; a non-owner gets ForbiddenError
      and the entry is left untouched
"""

import logging
from typing import List

from zense.exceptions import NotFoundError
from zense.models import Journal
from zense.repositories import JournalStore
from zense.schemas.journal import (
    JournalCreateRequest,
    JournalResponse,
    JournalUpdateRequest,
)
from zense.services.authorization import fetch_owned
from zense.services.common import changed_fields

logger = logging.getLogger(__name__)


def to_response(journal: Journal) -> JournalResponse:
    return JournalResponse(
        id=journal.id,
        user_id=journal.user_id,
        mood=journal.mood,
        content=journal.content,
        visibility=journal.visibility,
        created_at=journal.created_at,
        updated_at=journal.updated_at,
    )


class JournalService:
    def __init__(self, journals: JournalStore):
        self.journals = journals

    async def create(self, owner_id: int, payload: JournalCreateRequest) -> JournalResponse:
        journal = await self.journals.create(
            Journal(
                user_id=owner_id,
                mood=payload.mood,
                content=payload.content,
                visibility=payload.visibility,
            )
        )
        logger.info("Journal %d created by user %d", journal.id, owner_id)
        return to_response(journal)

    async def find_all(self) -> List[JournalResponse]:
        journals = await self.journals.find_all()
        if not journals:
            raise NotFoundError(resource="journal")
        return [to_response(journal) for journal in journals]

    async def find_by_id(self, journal_id: int) -> JournalResponse:
        journal = await self.journals.find_by_id(journal_id)
        if journal is None:
            raise NotFoundError(resource="journal", resource_id=journal_id)
        return to_response(journal)

    async def update(
        self, journal_id: int, caller_id: int, payload: JournalUpdateRequest,
    ) -> JournalResponse:
        fields = changed_fields(payload)
        journal = await fetch_owned(
            self.journals.find_by_id, journal_id, caller_id, resource="journal",
        )
        for name, value in fields.items():
            setattr(journal, name, value)
        journal = await self.journals.update(journal)
        logger.info("Journal %d updated (%s)", journal_id, ", ".join(sorted(fields)))
        return to_response(journal)

    async def delete(self, journal_id: int, caller_id: int) -> None:
        journal = await fetch_owned(
            self.journals.find_by_id, journal_id, caller_id,
            resource="journal", action="delete",
        )
        await self.journals.delete(journal)
        logger.info("Journal %d deleted by user %d", journal_id, caller_id)
