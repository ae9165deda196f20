"""
SQLModel ORM Models for College Advisor

Exports all database models for Alembic and application use.
Import models here to register them with SQLModel.metadata.
"""

from college_advisor.infrastructure.db.models.sat_score import (
    SatScore,
    SatScoreBase,
    SatScoreRead,
)
from college_advisor.infrastructure.db.models.college_score import (
    CollegeScore,
    CollegeScoreBase,
    CollegeScoreRead,
)


__all__ = [
    "SatScore",
    "SatScoreBase",
    "SatScoreRead",
    "CollegeScore",
    "CollegeScoreBase",
    "CollegeScoreRead",
]
