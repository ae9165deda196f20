"""
College Score Repository for College Advisor

Exact-name lookups against the college_scores reference table.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from college_advisor.infrastructure.db.models.college_score import CollegeScore
from college_advisor.infrastructure.db.repositories.base_repository import BaseRepository


class CollegeScoreRepository(BaseRepository[CollegeScore]):
    """Repository for college admissions SAT bands."""

    def __init__(self, session: AsyncSession):
        super().__init__(CollegeScore, session)

    async def get_by_name(self, college_name: str) -> Optional[CollegeScore]:
        """Get a college by its exact name (the table's primary key)."""
        return await self.get_by_key(college_name)
