"""
Zense Backend - Configuration Tests
====================================

What we test:
    ✅ The public default JWT secret is rejected with a server database
    ✅ It is tolerated on local SQLite, and a real secret always passes
    ✅ Startup aborts before touching the database when the check fails
    ✅ A missing Gemini key is reported, not fatal
"""

from unittest.mock import AsyncMock

import pytest

from zense.config import DEFAULT_JWT_SECRET, Settings, settings

POSTGRES_URL = "postgresql+asyncpg://zense:secret@db:5432/zense"


class TestJwtSecretCheck:

    def test_default_secret_with_server_database_rejected(self):
        config = Settings(database_url=POSTGRES_URL, jwt_secret=DEFAULT_JWT_SECRET)

        with pytest.raises(ValueError, match="JWT_SECRET"):
            config.validate_jwt_secret()

    def test_default_secret_allowed_on_sqlite(self):
        config = Settings(database_url="sqlite+aiosqlite:///./dev.db", jwt_secret=DEFAULT_JWT_SECRET)
        config.validate_jwt_secret()

    def test_custom_secret_accepted(self):
        config = Settings(database_url=POSTGRES_URL, jwt_secret="a-long-random-value")
        config.validate_jwt_secret()

    def test_missing_gemini_key_only_reported(self):
        config = Settings(database_url=POSTGRES_URL, jwt_secret="a-long-random-value", gemini_api_key="")

        config.validate_jwt_secret()
        with pytest.raises(ValueError, match="GEMINI_API_KEY"):
            config.validate_required_for_production()


class TestStartup:

    @pytest.mark.asyncio
    async def test_startup_aborts_with_default_secret(self, monkeypatch):
        from zense import main

        create_tables = AsyncMock()
        monkeypatch.setattr(main, "setup_logging", lambda: None)
        monkeypatch.setattr(main, "create_tables", create_tables)
        monkeypatch.setattr(settings, "database_url", POSTGRES_URL)
        monkeypatch.setattr(settings, "jwt_secret", DEFAULT_JWT_SECRET)

        with pytest.raises(ValueError, match="JWT_SECRET"):
            async with main.lifespan(main.app):
                pass

        create_tables.assert_not_awaited()
