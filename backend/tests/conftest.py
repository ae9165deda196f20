"""
Test configuration and fixtures for College Advisor.

Provides shared fixtures for unit and integration tests.
"""

import asyncio
import pytest
from typing import AsyncGenerator
from unittest.mock import MagicMock, AsyncMock

from fastapi.testclient import TestClient

from college_advisor.domain.models import ChatMessage, CompletionResult
from college_advisor.infrastructure.db.database import DatabaseManager
from college_advisor.infrastructure.db.models import CollegeScore, SatScore
from college_advisor.infrastructure.services.lookup_service import LookupService, SatLookup


# =============================================================================
# Reference Data
# =============================================================================

SAT_ROWS = [
    (400, "1-", "1-"),
    (500, "2", "1"),
    (1100, "63", "58"),
    (1200, "80", "74"),
    (1210, "81", "76"),
    (1300, "91", "86"),
    (1450, "98", "96"),
    (1500, "99", "98"),
    (1550, "99+", "99"),
    (1600, "99+", "99+"),
]

COLLEGE_ROWS = [
    ("Rice University", 1500, 1550, 1570),
    ("Texas A&M University", 1150, 1205, 1330),
    ("Unranked College", None, None, None),
]

RECOMMENDATION_TEXT = (
    "With a 1200 SAT and a 3.7 GPA you are a solid applicant for several "
    "Texas schools with strong aid. 1 - Texas A&M University "
    "2 - Rice University 3 - University of North Texas"
)


async def seed_reference_data(db: DatabaseManager) -> None:
    """Create the lookup tables and insert the sample rows."""
    await db.create_tables()
    async with db.session() as session:
        session.add_all([
            SatScore(total_score=score, nat_rep_percentile=nat, user_percentile=user)
            for score, nat, user in SAT_ROWS
        ])
        session.add_all([
            CollegeScore(
                college_name=name,
                sat_25th_percentile=p25,
                sat_50th_percentile=p50,
                sat_75th_percentile=p75,
            )
            for name, p25, p50, p75 in COLLEGE_ROWS
        ])
        await session.commit()


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture
def database_url(tmp_path) -> str:
    """URL of a fresh SQLite file for one test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'lookup.sqlite'}"


@pytest.fixture
async def seeded_db(database_url) -> AsyncGenerator[DatabaseManager, None]:
    """Writable database seeded with the sample reference rows."""
    db = DatabaseManager(database_url, read_only=False)
    await seed_reference_data(db)
    yield db
    await db.close()


@pytest.fixture
def seeded_database_url(database_url) -> str:
    """Seed the database outside any running loop and return its URL."""
    async def _seed():
        db = DatabaseManager(database_url, read_only=False)
        try:
            await seed_reference_data(db)
        finally:
            await db.close()

    asyncio.run(_seed())
    return database_url


# =============================================================================
# App Fixtures
# =============================================================================

@pytest.fixture
def app():
    """Get the FastAPI application."""
    from college_advisor.main import app
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """Get synchronous test client."""
    return TestClient(app)


# =============================================================================
# Mock Fixtures
# =============================================================================

@pytest.fixture
def completion_result():
    """Top choice as returned by the completion API."""
    return CompletionResult(
        index=0,
        message=ChatMessage(role="assistant", content=RECOMMENDATION_TEXT),
        finish_reason="stop",
    )


@pytest.fixture
def mock_completion_service(completion_result):
    """Mock for CompletionService."""
    mock = MagicMock()
    mock.complete = AsyncMock(return_value=completion_result)
    return mock


@pytest.fixture
def mock_lookup_service():
    """Mock for LookupService that finds nothing."""
    mock = MagicMock(spec=LookupService)
    mock.get_sat_data = AsyncMock(return_value=SatLookup())
    mock.get_national_percentile = AsyncMock(return_value=None)
    mock.get_college_admissions = AsyncMock(return_value=None)
    return mock


# =============================================================================
# Sample Data Fixtures
# =============================================================================

@pytest.fixture
def sample_profile_form():
    """Complete profile form as posted by the page."""
    return {
        "state": "Texas",
        "satScore": "1200",
        "gpa": "3.7",
        "major": "Computer Science",
        "school-size": "large",
        "proximity-importance": "4",
        "financial-aid-importance": "5",
    }


@pytest.fixture
def sample_minimal_profile_form():
    """Profile form with only the required fields."""
    return {
        "state": "Ohio",
        "satScore": "1350",
        "gpa": "3.9",
        "financial-aid-importance": "2",
    }
