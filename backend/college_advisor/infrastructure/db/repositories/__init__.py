"""
Repository Layer for College Advisor

Exports all repository classes for dependency injection.
"""

from college_advisor.infrastructure.db.repositories.base_repository import (
    BaseRepository,
    IReadRepository,
)
from college_advisor.infrastructure.db.repositories.sat_score_repository import (
    SatScoreRepository,
)
from college_advisor.infrastructure.db.repositories.college_score_repository import (
    CollegeScoreRepository,
)


__all__ = [
    # Base
    "BaseRepository",
    "IReadRepository",
    # Repositories
    "SatScoreRepository",
    "CollegeScoreRepository",
]
