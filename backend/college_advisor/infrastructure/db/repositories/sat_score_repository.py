"""
SAT Score Repository for College Advisor

Point lookups against the sat_scores reference table.
"""

import math
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from college_advisor.infrastructure.db.models.sat_score import SatScore
from college_advisor.infrastructure.db.repositories.base_repository import BaseRepository


MIN_SAT_SCORE = 400
MAX_SAT_SCORE = 1600
ADJACENT_SCORE_STEP = 100
PERCENTILE_GRANULARITY = 10


def higher_score(total_score: float) -> float:
    """Score one step above, capped at the maximum SAT score."""
    return min(total_score + ADJACENT_SCORE_STEP, MAX_SAT_SCORE)


def lower_score(total_score: float) -> float:
    """Score one step below, floored at the minimum SAT score."""
    return max(total_score - ADJACENT_SCORE_STEP, MIN_SAT_SCORE)


def round_to_percentile_grid(raw_score: float) -> int:
    """Round to the nearest multiple of 10, halves rounding up (1205 -> 1210)."""
    return int(math.floor(raw_score / PERCENTILE_GRANULARITY + 0.5)) * PERCENTILE_GRANULARITY


class SatScoreRepository(BaseRepository[SatScore]):
    """Repository for SAT percentile rows."""

    def __init__(self, session: AsyncSession):
        super().__init__(SatScore, session)

    async def get_by_total_score(self, total_score: float) -> Optional[SatScore]:
        """Get the row for an exact total score, or None."""
        stmt = select(SatScore).where(SatScore.total_score == total_score)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
