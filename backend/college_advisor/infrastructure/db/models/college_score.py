"""
College Score SQLModel for College Advisor

Reference table with the SAT percentile band of admitted students
for each college, keyed by the college's full formal name.
"""

from typing import Optional

from sqlalchemy import Column, String
from sqlmodel import Field, SQLModel


class CollegeScoreBase(SQLModel):
    """Base schema for college admissions SAT bands."""

    sat_25th_percentile: Optional[int] = Field(
        default=None,
        description="25th percentile SAT score of admitted students"
    )
    sat_50th_percentile: Optional[int] = Field(
        default=None,
        description="Median SAT score of admitted students"
    )
    sat_75th_percentile: Optional[int] = Field(
        default=None,
        description="75th percentile SAT score of admitted students"
    )


class CollegeScore(CollegeScoreBase, table=True):
    """College admissions reference table."""

    __tablename__ = "college_scores"

    college_name: str = Field(
        ...,
        sa_column=Column(String(255), primary_key=True),
        description="Full formal institution name"
    )


class CollegeScoreRead(CollegeScoreBase):
    """Schema for reading a college admissions row."""

    college_name: str

    class Config:
        from_attributes = True
