"""
Unit tests for database URL handling and the DatabaseManager lifecycle.
"""

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from college_advisor.infrastructure.db.database import DatabaseManager, build_database_url
from college_advisor.infrastructure.db.repositories import SatScoreRepository


class TestBuildDatabaseUrl:

    def test_read_only_rewrites_to_uri(self):
        url = build_database_url("sqlite+aiosqlite:///./db/mydb.sqlite", read_only=True)
        assert url == "sqlite+aiosqlite:///file:./db/mydb.sqlite?mode=ro&uri=true"

    def test_writable_url_unchanged(self):
        url = "sqlite+aiosqlite:///./db/mydb.sqlite"
        assert build_database_url(url, read_only=False) == url

    @pytest.mark.parametrize("url", [
        "sqlite+aiosqlite://",
        "sqlite+aiosqlite:///:memory:",
        "sqlite+aiosqlite:///file:x.sqlite?mode=ro&uri=true",
    ])
    def test_special_urls_unchanged(self, url):
        assert build_database_url(url, read_only=True) == url


class TestDatabaseManager:

    @pytest.mark.asyncio
    async def test_read_only_manager_reads_seeded_file(self, seeded_db, database_url):
        """A read-only handle on the seeded file serves lookups."""
        reader = DatabaseManager(database_url, read_only=True)
        try:
            async with reader.session() as session:
                repo = SatScoreRepository(session)
                row = await repo.get_by_total_score(1200)
                assert row.nat_rep_percentile == "80"
                assert await repo.count() == 10
        finally:
            await reader.close()

    @pytest.mark.asyncio
    async def test_close_resets_engine(self, database_url):
        db = DatabaseManager(database_url, read_only=False)
        await db.ping()
        await db.close()
        assert db._engine is None
        assert db._session_factory is None

    @pytest.mark.asyncio
    async def test_read_only_manager_rejects_writes(self, seeded_db, database_url):
        reader = DatabaseManager(database_url, read_only=True)
        try:
            async with reader.session() as session:
                with pytest.raises(OperationalError, match="readonly"):
                    await session.execute(text("DELETE FROM sat_scores"))

            async with seeded_db.session() as session:
                assert await SatScoreRepository(session).count() == 10
        finally:
            await reader.close()
