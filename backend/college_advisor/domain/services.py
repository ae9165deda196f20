"""
Advisor Service

Orchestrates one advice request: baseline SAT lookup, the counselor
completion, and admissions enrichment of the recommended colleges.
Which enrichment steps run is decided by the caller.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from college_advisor.domain.models import (
    CollegeAdmissions,
    CollegeRecommendations,
    CompletionResult,
    PLACEHOLDER_PERCENTILE,
    StudentProfile,
)
from college_advisor.infrastructure.ai.completion_service import CompletionService
from college_advisor.infrastructure.ai.prompts import (
    RECOMMENDATION_COUNT,
    parse_recommendations,
)
from college_advisor.infrastructure.exceptions import LookupStoreError
from college_advisor.infrastructure.services.lookup_service import (
    LookupService,
    SatLookup,
)


logger = logging.getLogger(__name__)


@dataclass
class AdviceResult:
    """Everything gathered for one profile submission."""
    api_response: CompletionResult
    sat_data: Optional[SatLookup] = None
    college_data: Optional[CollegeRecommendations] = None


class AdvisorService:
    """
    Domain service shared by the request handlers.

    Args:
        completion: Client for the hosted completion API
        lookups: Reference-table lookups
    """

    def __init__(self, completion: CompletionService, lookups: LookupService):
        self.completion = completion
        self.lookups = lookups

    async def advise(
        self,
        profile: StudentProfile,
        include_sat_data: bool = False,
        include_colleges: bool = False,
    ) -> AdviceResult:
        """
        Get counselor advice for a profile.

        The SAT lookup does not depend on the completion, so both run
        concurrently; college enrichment waits for the completion text.
        Both calls are settled before a failure of either propagates.
        """
        user_message = profile.to_prompt()

        if include_sat_data:
            results = await asyncio.gather(
                self.completion.complete(user_message),
                self.lookups.get_sat_data(profile.sat_score),
                return_exceptions=True,
            )
            for result in results:
                if isinstance(result, BaseException):
                    raise result
            api_response, sat_data = results
        else:
            api_response = await self.completion.complete(user_message)
            sat_data = None

        college_data = None
        if include_colleges:
            names = parse_recommendations(api_response.content)
            if len(names) >= RECOMMENDATION_COUNT:
                college_data = await self.enrich_colleges(names[:RECOMMENDATION_COUNT])
            else:
                logger.warning(
                    f"Expected {RECOMMENDATION_COUNT} recommendations, parsed {len(names)}"
                )

        return AdviceResult(
            api_response=api_response,
            sat_data=sat_data,
            college_data=college_data,
        )

    async def enrich_colleges(self, college_names: Sequence[str]) -> CollegeRecommendations:
        """
        Look up the three colleges concurrently.

        Each lookup settles independently: a miss or a failure yields a
        placeholder row for that position and never fails the others.
        """
        names = list(college_names)
        results = await asyncio.gather(
            *(self.lookups.get_college_admissions(name) for name in names),
            return_exceptions=True,
        )

        rows: List[CollegeAdmissions] = []
        for name, result in zip(names, results):
            if isinstance(result, BaseException):
                logger.error(f"College lookup failed for '{name}': {result}")
                rows.append(CollegeAdmissions.placeholder(name))
            elif result is None:
                rows.append(CollegeAdmissions.placeholder(name))
            else:
                rows.append(await self._with_percentile(
                    CollegeAdmissions.model_validate(result.model_dump())
                ))

        return CollegeRecommendations.from_list(rows)

    async def _with_percentile(self, college: CollegeAdmissions) -> CollegeAdmissions:
        """Attach the national percentile of the college's median SAT score."""
        if not college.has_scores:
            return college.model_copy(update={"percentile": PLACEHOLDER_PERCENTILE})

        try:
            percentile = await self.lookups.get_national_percentile(college.sat_50th_percentile)
        except LookupStoreError as e:
            logger.warning(f"Percentile lookup failed for '{college.college_name}': {e}")
            percentile = None

        return college.model_copy(update={"percentile": percentile or PLACEHOLDER_PERCENTILE})
