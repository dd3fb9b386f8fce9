"""
Zense Backend - Vent Service Tests
===================================

What we test:
    ✅ A reply is recorded after the user's message
    ✅ The prompt carries the transcript, instructions and reply language
    ✅ Conversations of different users/sessions stay separate
    ✅ A failed model call withdraws the user's message and re-raises
    ✅ A cancelled model call withdraws it too
    ✅ clear() forgets the conversation
    ✅ Locks are dropped once idle; clear() leaves no state behind
    ✅ Least recently used conversations are evicted past max_conversations
    ✅ Transcripts are capped at max_turns
    ✅ Concurrent messages in one conversation never interleave
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from zense.exceptions import LLMServiceError
from zense.services.vent_service import (
    ConversationStore,
    Speaker,
    Utterance,
    VentService,
    conversation_key,
)


class TestVentService:

    def setup_method(self):
        self.llm = MagicMock()
        self.llm.generate_text = AsyncMock(return_value="That sounds exhausting.")
        self.store = ConversationStore(max_turns=50)
        self.service = VentService(self.llm, self.store, language="Bahasa Indonesia")

    @pytest.mark.asyncio
    async def test_chat_records_both_turns(self):
        key = conversation_key(1)

        reply = await self.service.chat(key, "My boss yelled at me")

        assert reply == "That sounds exhausting."
        assert self.store.transcript(key) == [
            Utterance(Speaker.USER, "My boss yelled at me"),
            Utterance(Speaker.AI, "That sounds exhausting."),
        ]

    @pytest.mark.asyncio
    async def test_prompt_contains_history_and_language(self):
        key = conversation_key(1)
        await self.service.chat(key, "First thing")
        await self.service.chat(key, "Second thing")

        prompt = self.llm.generate_text.await_args.args[0]
        assert "User: First thing" in prompt
        assert "AI: That sounds exhausting." in prompt
        assert "Second thing" in prompt
        assert "Bahasa Indonesia" in prompt
        assert "short" in prompt

    @pytest.mark.asyncio
    async def test_conversations_are_isolated(self):
        await self.service.chat(conversation_key(1), "mine")
        await self.service.chat(conversation_key(2), "theirs")
        await self.service.chat(conversation_key(1, "night"), "other thread")

        assert [u.text for u in self.store.transcript("1:default")][0] == "mine"
        assert [u.text for u in self.store.transcript("2:default")][0] == "theirs"
        assert len(self.store.transcript("1:night")) == 2

    @pytest.mark.asyncio
    async def test_failed_reply_withdraws_message(self):
        key = conversation_key(1)
        await self.service.chat(key, "hello")
        self.llm.generate_text.side_effect = LLMServiceError()

        with pytest.raises(LLMServiceError):
            await self.service.chat(key, "are you there?")

        assert [u.text for u in self.store.transcript(key)] == [
            "hello", "That sounds exhausting.",
        ]

    @pytest.mark.asyncio
    async def test_clear_forgets_conversation(self):
        key = conversation_key(1)
        await self.service.chat(key, "hello")

        await self.service.clear(key)

        assert self.store.transcript(key) == []

    @pytest.mark.asyncio
    async def test_transcript_is_capped(self):
        store = ConversationStore(max_turns=4)
        service = VentService(self.llm, store)
        key = conversation_key(1)

        for i in range(3):
            await service.chat(key, f"message {i}")

        transcript = store.transcript(key)
        assert len(transcript) == 4
        assert transcript[0].text == "message 1"

    @pytest.mark.asyncio
    async def test_concurrent_messages_do_not_interleave(self):
        async def slow_reply(prompt):
            await asyncio.sleep(0.01)
            return "ok"

        self.llm.generate_text = AsyncMock(side_effect=slow_reply)
        key = conversation_key(1)

        await asyncio.gather(*(self.service.chat(key, f"m{i}") for i in range(3)))

        speakers = [u.speaker for u in self.store.transcript(key)]
        assert speakers == [Speaker.USER, Speaker.AI] * 3

    @pytest.mark.asyncio
    async def test_cancelled_reply_withdraws_message(self):
        key = conversation_key(1)
        self.llm.generate_text.side_effect = asyncio.CancelledError()

        with pytest.raises(asyncio.CancelledError):
            await self.service.chat(key, "anyone?")

        assert self.store.transcript(key) == []
        assert self.store.lock_count == 0

    @pytest.mark.asyncio
    async def test_chat_and_clear_leave_nothing_behind(self):
        for i in range(100):
            key = conversation_key(1, f"session-{i}")
            await self.service.chat(key, "hello")
            await self.service.clear(key)

        assert len(self.store) == 0
        assert self.store.lock_count == 0

    @pytest.mark.asyncio
    async def test_locks_are_released_between_messages(self):
        await self.service.chat(conversation_key(1), "hello")

        assert len(self.store) == 1
        assert self.store.lock_count == 0

    @pytest.mark.asyncio
    async def test_least_recently_used_conversation_evicted(self):
        store = ConversationStore(max_turns=50, max_conversations=2)
        service = VentService(self.llm, store)

        await service.chat("1:a", "first")
        await service.chat("1:b", "second")
        await service.chat("1:a", "again")
        await service.chat("1:c", "third")

        assert len(store) == 2
        assert store.transcript("1:b") == []
        assert len(store.transcript("1:a")) == 4
        assert len(store.transcript("1:c")) == 2
