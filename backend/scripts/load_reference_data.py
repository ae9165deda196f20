#!/usr/bin/env python3
"""
Load Reference Data Script

Creates the lookup store tables and loads them from CSV exports.
Existing rows in a loaded table are replaced. The API itself never writes.

Usage:
    python -m scripts.load_reference_data --sat-csv data/sat_scores.csv
    python -m scripts.load_reference_data --college-csv data/college_scores.csv

CSV headers must match the column names:
    sat_scores.csv:     total_score,nat_rep_percentile,user_percentile
    college_scores.csv: college_name,sat_25th_percentile,sat_50th_percentile,sat_75th_percentile
"""

import asyncio
import argparse
import csv
import logging
from pathlib import Path
from typing import Dict, List, Optional

# Add parent directory to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import delete

from college_advisor.infrastructure.db.database import DatabaseManager
from college_advisor.infrastructure.db.models import CollegeScore, SatScore
from college_advisor.infrastructure.db.repositories import (
    CollegeScoreRepository,
    SatScoreRepository,
)

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def _optional_int(value: Optional[str]) -> Optional[int]:
    if value is None or not value.strip():
        return None
    return int(float(value))


def _optional_str(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value.strip()


def read_sat_rows(path: Path) -> List[SatScore]:
    """Parse sat_scores rows from a CSV file."""
    with open(path, newline="", encoding="utf-8") as f:
        return [
            SatScore(
                total_score=int(float(row["total_score"])),
                nat_rep_percentile=_optional_str(row.get("nat_rep_percentile")),
                user_percentile=_optional_str(row.get("user_percentile")),
            )
            for row in csv.DictReader(f)
        ]


def read_college_rows(path: Path) -> List[CollegeScore]:
    """Parse college_scores rows from a CSV file."""
    with open(path, newline="", encoding="utf-8") as f:
        return [
            CollegeScore(
                college_name=row["college_name"].strip(),
                sat_25th_percentile=_optional_int(row.get("sat_25th_percentile")),
                sat_50th_percentile=_optional_int(row.get("sat_50th_percentile")),
                sat_75th_percentile=_optional_int(row.get("sat_75th_percentile")),
            )
            for row in csv.DictReader(f)
        ]


async def load_reference_data(
    database_url: Optional[str] = None,
    sat_csv: Optional[Path] = None,
    college_csv: Optional[Path] = None,
) -> Dict[str, int]:
    """
    Create tables and replace the contents of each table given a CSV.

    Returns:
        Row counts per table after loading
    """
    db = DatabaseManager(database_url, read_only=False)
    stats: Dict[str, int] = {}

    try:
        await db.create_tables()

        async with db.session() as session:
            if sat_csv:
                rows = read_sat_rows(sat_csv)
                await session.execute(delete(SatScore))
                session.add_all(rows)
                logger.info(f"Loaded {len(rows)} rows into sat_scores from {sat_csv}")

            if college_csv:
                rows = read_college_rows(college_csv)
                await session.execute(delete(CollegeScore))
                session.add_all(rows)
                logger.info(f"Loaded {len(rows)} rows into college_scores from {college_csv}")

            await session.commit()

            stats["sat_scores"] = await SatScoreRepository(session).count()
            stats["college_scores"] = await CollegeScoreRepository(session).count()
    finally:
        await db.close()

    return stats


def main():
    parser = argparse.ArgumentParser(description="Load lookup store reference data")
    parser.add_argument("--database-url", default=None, help="Overrides DATABASE_URL")
    parser.add_argument("--sat-csv", type=Path, default=None)
    parser.add_argument("--college-csv", type=Path, default=None)
    args = parser.parse_args()

    if not args.sat_csv and not args.college_csv:
        parser.error("at least one of --sat-csv or --college-csv is required")

    stats = asyncio.run(load_reference_data(
        database_url=args.database_url,
        sat_csv=args.sat_csv,
        college_csv=args.college_csv,
    ))

    print("\n" + "=" * 50)
    print("LOAD COMPLETE")
    print("=" * 50)
    for table, count in stats.items():
        print(f"{table}: {count} rows")


if __name__ == "__main__":
    main()
