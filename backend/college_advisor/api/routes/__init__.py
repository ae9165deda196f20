# API Routes Module
from college_advisor.api.routes import advice, lookups

__all__ = ["advice", "lookups"]
