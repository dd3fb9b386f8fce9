"""
Zense Backend - Vent (AI Chat) Service
=======================================

What:  Lets a user "vent" to an empathetic AI companion, one conversation at
       a time, with the transcript kept in memory.
Who:   POST /vents (chat) and DELETE /vents (clear).

State:
    ConversationStore maps a conversation key to its transcript. The key is
    the authenticated user id plus an optional client session id, so two
    users never share history and one user may keep several threads.

        "7:default"  → [USER "...", AI "...", USER "...", AI "..."]
        "7:evening"  → [USER "..."]

    Work on one key runs under that key's asyncio.Lock: two concurrent
    messages in the same conversation are handled one after the other, so
    turns never interleave. A lock only exists while someone holds or awaits
    it. At most max_conversations transcripts are kept; when a new one would
    exceed that, the least recently used idle conversation is evicted.
    Transcripts are not persisted and are lost on restart.

Failure rule:
    If the model call fails or is cancelled, the user's message is withdrawn
    from the transcript before the error propagates, so a retry does not
    duplicate it.
"""

import asyncio
import enum
import logging
from collections import OrderedDict
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Dict, List, Optional

from zense.config import settings
from zense.services.llm_base import LLMService

logger = logging.getLogger(__name__)

DEFAULT_SESSION = "default"


class Speaker(str, enum.Enum):
    USER = "User"
    AI = "AI"


@dataclass(frozen=True)
class Utterance:
    speaker: Speaker
    text: str


def conversation_key(user_id: int, session_id: Optional[str] = None) -> str:
    return f"{user_id}:{session_id or DEFAULT_SESSION}"


class ConversationStore:
    """In-memory transcripts keyed by conversation, bounded in length and count."""

    def __init__(self, max_turns: int = 50, max_conversations: int = 10000):
        self.max_turns = max_turns
        self.max_conversations = max_conversations
        self._transcripts: "OrderedDict[str, List[Utterance]]" = OrderedDict()
        self._locks: Dict[str, asyncio.Lock] = {}
        # Holders plus waiters per key; the lock is dropped when this hits zero
        self._users: Dict[str, int] = {}

    @asynccontextmanager
    async def locked(self, key: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._users[key] = self._users.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[key] -= 1
            if not self._users[key]:
                del self._users[key]
                del self._locks[key]

    @property
    def lock_count(self) -> int:
        return len(self._locks)

    def transcript(self, key: str) -> List[Utterance]:
        return list(self._transcripts.get(key, []))

    def append(self, key: str, utterance: Utterance) -> None:
        transcript = self._transcripts.get(key)
        if transcript is None:
            transcript = self._transcripts[key] = []
            self._evict_idle()
        else:
            self._transcripts.move_to_end(key)
        transcript.append(utterance)
        overflow = len(transcript) - self.max_turns
        if overflow > 0:
            del transcript[:overflow]

    def pop_last(self, key: str) -> Optional[Utterance]:
        transcript = self._transcripts.get(key)
        if not transcript:
            return None
        utterance = transcript.pop()
        if not transcript:
            del self._transcripts[key]
        return utterance

    def clear(self, key: str) -> None:
        self._transcripts.pop(key, None)

    def _evict_idle(self) -> None:
        excess = len(self._transcripts) - self.max_conversations
        if excess <= 0:
            return
        idle = [key for key in self._transcripts if key not in self._users][:excess]
        for key in idle:
            del self._transcripts[key]
            logger.info("Vent conversation %s evicted (store full)", key)

    def __len__(self) -> int:
        return len(self._transcripts)


class VentService:
    def __init__(self, llm: LLMService, store: ConversationStore, language: Optional[str] = None):
        self.llm = llm
        self.store = store
        self.language = language or settings.vent_language

    def build_prompt(self, transcript: List[Utterance], message: str) -> str:
        history = "\n".join(f"{u.speaker.value}: {u.text}" for u in transcript)
        return (
            "You are an empathetic, trustworthy friend. The user wants to vent "
            "about what they are going through. Listen, acknowledge their "
            "feelings and respond warmly without judging or lecturing. "
            f"Always reply in {self.language}.\n\n"
            f"Conversation so far:\n{history}\n\n"
            f"Latest message from the user: {message}\n\n"
            "Reply with a short answer of a few sentences."
        )

    async def chat(self, key: str, message: str) -> str:
        async with self.store.locked(key):
            self.store.append(key, Utterance(Speaker.USER, message))
            prompt = self.build_prompt(self.store.transcript(key), message)
            try:
                reply = await self.llm.generate_text(prompt)
            except BaseException:
                # Includes cancellation: a disconnected client leaves no dangling turn
                self.store.pop_last(key)
                logger.warning("Vent reply failed for conversation %s; message withdrawn", key)
                raise
            self.store.append(key, Utterance(Speaker.AI, reply))

        logger.info("Vent reply for conversation %s (%d chars)", key, len(reply))
        return reply

    async def clear(self, key: str) -> None:
        async with self.store.locked(key):
            self.store.clear(key)
        logger.info("Vent conversation %s cleared", key)
