"""
SAT Score SQLModel for College Advisor

Reference table mapping a total SAT score to its national
percentile bands. Rows are loaded once and never mutated by the API.
"""

from typing import Optional

from sqlmodel import Field, SQLModel


class SatScoreBase(SQLModel):
    """Base schema for SAT percentile rows."""

    nat_rep_percentile: Optional[str] = Field(
        default=None,
        max_length=16,
        description="Nationally representative sample percentile (e.g. '94', '99+')"
    )
    user_percentile: Optional[str] = Field(
        default=None,
        max_length=16,
        description="SAT user percentile"
    )


class SatScore(SatScoreBase, table=True):
    """
    SAT percentile reference table.

    Keyed by total score; the table is expected to hold rows on a
    10-point grid between 400 and 1600.
    """

    __tablename__ = "sat_scores"

    total_score: int = Field(
        primary_key=True,
        description="Total SAT score (400-1600)"
    )


class SatScoreRead(SatScoreBase):
    """Schema for reading a SAT percentile row."""

    total_score: int

    class Config:
        from_attributes = True
