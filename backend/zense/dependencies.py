"""
Zense Backend - FastAPI Dependencies
=====================================

What:  Wiring between the HTTP layer and the services.
How:   Entity services are built per request around the request's
       AsyncSession; the LLM client and the conversation store are
       process-wide singletons handed out through functions so tests can
       swap them with app.dependency_overrides.

    get_db_session ──▶ XRepository(session) ──▶ XService(repository)
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from zense.config import settings
from zense.database import get_db_session
from zense.exceptions import AuthenticationError
from zense.repositories import (
    CommentRepository,
    ForumRepository,
    JournalRepository,
    TopicRepository,
    UserRepository,
)
from zense.services.comment_service import CommentService
from zense.services.forum_service import ForumService
from zense.services.gemini_service import gemini_service
from zense.services.journal_service import JournalService
from zense.services.llm_base import LLMService
from zense.services.topic_service import TopicService
from zense.services.user_service import UserService
from zense.services.vent_service import ConversationStore, VentService

conversation_store = ConversationStore(
    max_turns=settings.vent_max_turns,
    max_conversations=settings.vent_max_conversations,
)


def get_current_user_id(request: Request) -> int:
    """The id AuthMiddleware put on the request; 401 if the route was reached without one."""
    user_id = getattr(request.state, "user_id", None)
    if user_id is None:
        raise AuthenticationError()
    return user_id


def get_user_service(db: AsyncSession = Depends(get_db_session)) -> UserService:
    return UserService(UserRepository(db))


def get_journal_service(db: AsyncSession = Depends(get_db_session)) -> JournalService:
    return JournalService(JournalRepository(db))


def get_topic_service(db: AsyncSession = Depends(get_db_session)) -> TopicService:
    return TopicService(TopicRepository(db))


def get_forum_service(db: AsyncSession = Depends(get_db_session)) -> ForumService:
    return ForumService(ForumRepository(db), TopicRepository(db))


def get_comment_service(db: AsyncSession = Depends(get_db_session)) -> CommentService:
    return CommentService(CommentRepository(db), ForumRepository(db))


def get_llm_service() -> LLMService:
    return gemini_service


def get_conversation_store() -> ConversationStore:
    return conversation_store


def get_vent_service(
    llm: LLMService = Depends(get_llm_service),
    store: ConversationStore = Depends(get_conversation_store),
) -> VentService:
    return VentService(llm, store)
