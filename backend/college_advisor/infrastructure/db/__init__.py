"""
Database Infrastructure Package for College Advisor

Exports database utilities, models, and repositories.
"""

from college_advisor.infrastructure.db.database import (
    DatabaseManager,
    build_database_url,
    get_db_manager,
    init_db,
    close_db,
)


__all__ = [
    "DatabaseManager",
    "build_database_url",
    "get_db_manager",
    "init_db",
    "close_db",
]
