"""
Dependency Injection Providers for College Advisor

Provides FastAPI dependencies for the completion client, the lookup
service and the advisor service. Tests swap them through
app.dependency_overrides.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from college_advisor.config.settings import Settings, get_settings
from college_advisor.domain.services import AdvisorService
from college_advisor.infrastructure.ai.completion_service import CompletionService
from college_advisor.infrastructure.db.database import get_db_manager
from college_advisor.infrastructure.services.lookup_service import LookupService


@lru_cache
def get_completion_service() -> CompletionService:
    """Process-wide completion client."""
    return CompletionService(get_settings())


@lru_cache
def get_lookup_service() -> LookupService:
    """Process-wide lookup service bound to the shared engine."""
    return LookupService(get_db_manager())


def get_advisor_service(
    completion: Annotated[CompletionService, Depends(get_completion_service)],
    lookups: Annotated[LookupService, Depends(get_lookup_service)],
) -> AdvisorService:
    """Advisor service wired to the current providers."""
    return AdvisorService(completion, lookups)


# Type aliases for route signatures
SettingsDep = Annotated[Settings, Depends(get_settings)]
LookupServiceDep = Annotated[LookupService, Depends(get_lookup_service)]
AdvisorServiceDep = Annotated[AdvisorService, Depends(get_advisor_service)]
