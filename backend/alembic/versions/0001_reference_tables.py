"""create_reference_tables

Revision ID: 0001_reference_tables
Revises:
Create Date: 2026-10-19

Creates the two read-only lookup tables: SAT score percentiles and
college admissions SAT bands.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_reference_tables'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create sat_scores and college_scores."""
    op.create_table(
        'sat_scores',
        sa.Column('total_score', sa.Integer(), nullable=False),
        sa.Column('nat_rep_percentile', sa.String(length=16), nullable=True),
        sa.Column('user_percentile', sa.String(length=16), nullable=True),
        sa.PrimaryKeyConstraint('total_score'),
    )
    op.create_table(
        'college_scores',
        sa.Column('college_name', sa.String(length=255), nullable=False),
        sa.Column('sat_25th_percentile', sa.Integer(), nullable=True),
        sa.Column('sat_50th_percentile', sa.Integer(), nullable=True),
        sa.Column('sat_75th_percentile', sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint('college_name'),
    )


def downgrade() -> None:
    """Drop the reference tables."""
    op.drop_table('college_scores')
    op.drop_table('sat_scores')
