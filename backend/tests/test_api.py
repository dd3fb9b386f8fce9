"""
Zense Backend - HTTP API Tests
===============================

What:  End-to-end requests through middleware, routers and exception
       handlers, against an in-memory database with Gemini mocked.

What we test:
    ✅ Register → login → authenticated write flow with status codes
    ✅ Auth middleware: missing, expired and garbage tokens get 401
    ✅ Skip policy: public GETs, /users/me needs a token
    ✅ Ownership over HTTP: 403 for another user's journal, state intact
    ✅ Error envelope shape and 400 for invalid bodies
    ✅ Forum topics, topic removal and cascading delete
    ✅ Vent chat/clear and 503 when the assistant fails
    ✅ Health endpoint
"""

from datetime import datetime, timedelta, timezone

import pytest

from zense.exceptions import LLMServiceError
from zense.security import create_access_token

API = "/api/v1"


async def register_and_login(client, name, email, password="password123"):
    response = await client.post(
        f"{API}/auth/register", json={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    response = await client.post(f"{API}/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    body = response.json()
    return body["id"], {"Authorization": f"Bearer {body['token']}"}


class TestAuthFlow:

    @pytest.mark.asyncio
    async def test_register_login_and_me(self, test_client):
        user_id, headers = await register_and_login(test_client, "alice", "alice@example.com")

        response = await test_client.get(f"{API}/users/me", headers=headers)

        assert response.status_code == 200
        assert response.json()["id"] == user_id
        assert response.json()["email"] == "alice@example.com"
        assert "password" not in response.json()

    @pytest.mark.asyncio
    async def test_duplicate_registration_conflicts(self, test_client):
        await register_and_login(test_client, "alice", "alice@example.com")

        response = await test_client.post(
            f"{API}/auth/register",
            json={"name": "other", "email": "alice@example.com", "password": "password999"},
        )

        assert response.status_code == 409
        assert response.json()["error"] == "conflict"

    @pytest.mark.asyncio
    async def test_bad_login_is_401(self, test_client):
        await register_and_login(test_client, "alice", "alice@example.com")

        wrong = await test_client.post(
            f"{API}/auth/login", json={"email": "alice@example.com", "password": "nope-nope"},
        )
        unknown = await test_client.post(
            f"{API}/auth/login", json={"email": "ghost@example.com", "password": "nope-nope"},
        )

        assert wrong.status_code == unknown.status_code == 401
        assert wrong.json()["message"] == unknown.json()["message"]

    @pytest.mark.asyncio
    async def test_me_requires_token(self, test_client):
        response = await test_client.get(f"{API}/users/me")
        assert response.status_code == 401
        assert response.json()["error"] == "unauthorized"

    @pytest.mark.asyncio
    async def test_expired_token_rejected(self, test_client):
        user_id, _ = await register_and_login(test_client, "alice", "alice@example.com")
        issued = datetime.now(timezone.utc) - timedelta(hours=1)
        token = create_access_token(user_id, expires_delta=timedelta(minutes=10), now=issued)

        response = await test_client.post(
            f"{API}/journals",
            json={"mood": "sad", "content": "late night"},
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_write_without_token_rejected(self, test_client):
        response = await test_client.post(f"{API}/topics", json={"name": "work"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_garbage_token_rejected(self, test_client):
        response = await test_client.post(
            f"{API}/topics", json={"name": "work"}, headers={"Authorization": "Bearer garbage"},
        )
        assert response.status_code == 401


class TestJournalsApi:

    @pytest.mark.asyncio
    async def test_crud_and_ownership(self, test_client):
        _, alice = await register_and_login(test_client, "alice", "alice@example.com")
        _, bob = await register_and_login(test_client, "bobby", "bob@example.com")

        created = await test_client.post(
            f"{API}/journals", json={"mood": "sad", "content": "Rough day"}, headers=alice,
        )
        assert created.status_code == 201
        journal_id = created.json()["id"]

        # Reads are public
        listed = await test_client.get(f"{API}/journals")
        assert listed.status_code == 200
        assert len(listed.json()) == 1

        forbidden = await test_client.put(
            f"{API}/journals/{journal_id}", json={"mood": "happy"}, headers=bob,
        )
        assert forbidden.status_code == 403
        assert forbidden.json()["error"] == "forbidden"
        assert forbidden.json()["request_id"]

        unchanged = await test_client.get(f"{API}/journals/{journal_id}")
        assert unchanged.json()["mood"] == "sad"

        updated = await test_client.put(
            f"{API}/journals/{journal_id}", json={"mood": "happy"}, headers=alice,
        )
        assert updated.status_code == 200
        assert updated.json()["mood"] == "happy"

        assert (await test_client.delete(f"{API}/journals/{journal_id}", headers=bob)).status_code == 403
        deleted = await test_client.delete(f"{API}/journals/{journal_id}", headers=alice)
        assert deleted.status_code == 204

        missing = await test_client.get(f"{API}/journals/{journal_id}")
        assert missing.status_code == 404
        assert missing.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_empty_listing_is_404(self, test_client):
        response = await test_client.get(f"{API}/journals")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_invalid_mood_is_400(self, test_client):
        _, alice = await register_and_login(test_client, "alice", "alice@example.com")

        response = await test_client.post(
            f"{API}/journals", json={"mood": "ecstatic", "content": "hm"}, headers=alice,
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["details"]["errors"][0]["field"] == "mood"


class TestForumsApi:

    @pytest.mark.asyncio
    async def test_topics_attach_and_remove(self, test_client):
        _, alice = await register_and_login(test_client, "alice", "alice@example.com")
        topic_ids = []
        for name in ("work", "family"):
            response = await test_client.post(
                f"{API}/topics", json={"name": name, "description": name}, headers=alice,
            )
            assert response.status_code == 201
            topic_ids.append(response.json()["id"])

        created = await test_client.post(
            f"{API}/forums",
            json={"title": "Burnout", "content": "Help", "topic_ids": topic_ids},
            headers=alice,
        )
        assert created.status_code == 201
        forum_id = created.json()["id"]

        fetched = (await test_client.get(f"{API}/forums/{forum_id}")).json()
        assert sorted(t["id"] for t in fetched["topics"]) == sorted(topic_ids)
        assert fetched["user"]["name"] == "alice"

        removed = await test_client.delete(f"{API}/forums/{forum_id}/topic", headers=alice)
        assert removed.status_code == 204

        fetched = await test_client.get(f"{API}/forums/{forum_id}")
        assert fetched.status_code == 200
        assert fetched.json()["topics"] == []

    @pytest.mark.asyncio
    async def test_unknown_topic_is_404(self, test_client):
        _, alice = await register_and_login(test_client, "alice", "alice@example.com")

        response = await test_client.post(
            f"{API}/forums",
            json={"title": "t", "content": "c", "topic_ids": [123]},
            headers=alice,
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_comments_go_with_forum(self, test_client):
        _, alice = await register_and_login(test_client, "alice", "alice@example.com")
        _, bob = await register_and_login(test_client, "bobby", "bob@example.com")
        forum_id = (await test_client.post(
            f"{API}/forums", json={"title": "t", "content": "c"}, headers=alice,
        )).json()["id"]

        comment = await test_client.post(
            f"{API}/comments", json={"forum_id": forum_id, "content": "hugs"}, headers=bob,
        )
        assert comment.status_code == 201
        assert comment.json()["visibility"] == "review"

        assert (await test_client.delete(f"{API}/forums/{forum_id}", headers=bob)).status_code == 403
        assert (await test_client.delete(f"{API}/forums/{forum_id}", headers=alice)).status_code == 204
        assert (await test_client.get(f"{API}/comments")).status_code == 404


class TestVentApi:

    @pytest.mark.asyncio
    async def test_chat_and_clear(self, test_client, fake_llm):
        _, alice = await register_and_login(test_client, "alice", "alice@example.com")

        response = await test_client.post(
            f"{API}/vents", json={"message": "I failed my exam"}, headers=alice,
        )

        assert response.status_code == 200
        assert response.json() == {
            "reply": "I hear you. That sounds really hard.",
            "session_id": "default",
        }
        fake_llm.generate_text.assert_awaited_once()

        cleared = await test_client.delete(f"{API}/vents", headers=alice)
        assert cleared.status_code == 204

    @pytest.mark.asyncio
    async def test_assistant_failure_is_503(self, test_client, fake_llm):
        _, alice = await register_and_login(test_client, "alice", "alice@example.com")
        fake_llm.generate_text.side_effect = LLMServiceError()

        response = await test_client.post(
            f"{API}/vents", json={"message": "hello?"}, headers=alice,
        )

        assert response.status_code == 503
        assert response.json()["error"] == "llm_service_error"

    @pytest.mark.asyncio
    async def test_vent_requires_token(self, test_client):
        response = await test_client.post(f"{API}/vents", json={"message": "hi"})
        assert response.status_code == 401


class TestHealth:

    @pytest.mark.asyncio
    async def test_health_reports_components(self, test_client, db_engine, monkeypatch):
        monkeypatch.setattr("zense.routes.health.engine", db_engine)

        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["gemini"] == "available"
        assert "X-Request-ID" in response.headers
