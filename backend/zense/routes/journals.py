"""Journal routes. Reads are public; writes need a token and ownership."""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from zense.config import settings
from zense.dependencies import get_current_user_id, get_journal_service
from zense.routes import OWNED_WRITE_ERRORS
from zense.schemas.journal import (
    JournalCreateRequest,
    JournalResponse,
    JournalUpdateRequest,
)
from zense.services.journal_service import JournalService

router = APIRouter(prefix=f"{settings.api_prefix}/journals", tags=["Journals"])


@router.post(
    "",
    response_model=JournalResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_journal(
    payload: JournalCreateRequest,
    caller_id: int = Depends(get_current_user_id),
    journals: JournalService = Depends(get_journal_service),
):
    return await journals.create(caller_id, payload)


@router.get("", response_model=List[JournalResponse], response_model_exclude_none=True)
async def list_journals(journals: JournalService = Depends(get_journal_service)):
    return await journals.find_all()


@router.get("/{journal_id}", response_model=JournalResponse, response_model_exclude_none=True)
async def get_journal(journal_id: int, journals: JournalService = Depends(get_journal_service)):
    return await journals.find_by_id(journal_id)


@router.put(
    "/{journal_id}",
    response_model=JournalResponse,
    response_model_exclude_none=True,
    responses=OWNED_WRITE_ERRORS,
)
async def update_journal(
    journal_id: int,
    payload: JournalUpdateRequest,
    caller_id: int = Depends(get_current_user_id),
    journals: JournalService = Depends(get_journal_service),
):
    return await journals.update(journal_id, caller_id, payload)


@router.delete(
    "/{journal_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=OWNED_WRITE_ERRORS,
)
async def delete_journal(
    journal_id: int,
    caller_id: int = Depends(get_current_user_id),
    journals: JournalService = Depends(get_journal_service),
) -> Response:
    await journals.delete(journal_id, caller_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
