"""
Lookup Service

Read-only lookups against the SAT percentile and college admissions
reference tables. Each lookup acquires its own session from the shared
engine, so lookups can run concurrently within one request.
"""

import logging
from typing import Optional

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from college_advisor.infrastructure.db.database import DatabaseManager
from college_advisor.infrastructure.db.models.college_score import CollegeScoreRead
from college_advisor.infrastructure.db.models.sat_score import SatScoreRead
from college_advisor.infrastructure.db.repositories import (
    CollegeScoreRepository,
    SatScoreRepository,
)
from college_advisor.infrastructure.db.repositories.sat_score_repository import (
    higher_score,
    lower_score,
    round_to_percentile_grid,
)
from college_advisor.infrastructure.exceptions import LookupStoreError


logger = logging.getLogger(__name__)


class SatLookup(BaseModel):
    """Exact SAT row plus the rows one step above and below."""
    exact: Optional[SatScoreRead] = None
    higher: Optional[SatScoreRead] = None
    lower: Optional[SatScoreRead] = None


class LookupService:
    """
    Facade over the reference-table repositories.

    Misses resolve to None. A failure of the primary query raises
    LookupStoreError; failures of the adjacent SAT queries are logged
    and leave that slot empty.
    """

    def __init__(self, db: DatabaseManager):
        self._db = db

    async def get_sat_data(self, total_score: float) -> SatLookup:
        """
        Get the SAT row for a score and its neighbours.

        higher = min(score + 100, 1600), lower = max(score - 100, 400).
        The three queries run sequentially on one session.
        """
        result = SatLookup()

        async with self._db.session() as session:
            repo = SatScoreRepository(session)

            logger.debug(f"Running exact query with score: {total_score}")
            try:
                exact = await repo.get_by_total_score(total_score)
            except SQLAlchemyError as e:
                logger.error(f"Exact SAT query failed for {total_score}: {e}")
                raise LookupStoreError(
                    "SAT score lookup failed",
                    operation="get_sat_data",
                    table="sat_scores",
                    original_error=e,
                )
            result.exact = _read_sat_row(exact)

            for slot, score in (
                ("higher", higher_score(total_score)),
                ("lower", lower_score(total_score)),
            ):
                try:
                    row = await repo.get_by_total_score(score)
                except SQLAlchemyError as e:
                    logger.warning(f"{slot.capitalize()} SAT query failed for {score}: {e}")
                    continue
                setattr(result, slot, _read_sat_row(row))

        return result

    async def get_national_percentile(self, raw_score: float) -> Optional[str]:
        """
        National percentile for a score rounded to the nearest 10.

        Returns None when the rounded score has no row.
        """
        rounded = round_to_percentile_grid(raw_score)
        logger.debug(f"Running percentile query with score: {raw_score} (rounded {rounded})")

        try:
            async with self._db.session() as session:
                row = await SatScoreRepository(session).get_by_total_score(rounded)
        except SQLAlchemyError as e:
            logger.error(f"Percentile query failed for {rounded}: {e}")
            raise LookupStoreError(
                "SAT percentile lookup failed",
                operation="get_national_percentile",
                table="sat_scores",
                original_error=e,
            )

        if row is None:
            return None
        return row.nat_rep_percentile or None

    async def get_college_admissions(self, college_name: str) -> Optional[CollegeScoreRead]:
        """Admissions SAT band for an exact college name, or None."""
        try:
            async with self._db.session() as session:
                row = await CollegeScoreRepository(session).get_by_name(college_name)
        except SQLAlchemyError as e:
            logger.error(f"College query failed for '{college_name}': {e}")
            raise LookupStoreError(
                "College admissions lookup failed",
                operation="get_college_admissions",
                table="college_scores",
                original_error=e,
            )

        if row is None:
            logger.info(f"College not found in lookup store: '{college_name}'")
            return None
        return CollegeScoreRead.model_validate(row)


def _read_sat_row(row) -> Optional[SatScoreRead]:
    return SatScoreRead.model_validate(row) if row is not None else None
