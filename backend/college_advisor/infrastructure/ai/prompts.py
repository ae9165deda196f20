"""
Prompts for the college counselor completion.

The system prompt fixes the answer format so the three recommended
colleges can be parsed back out of the completion text.
"""

import re
from typing import List, Optional


SYSTEM_PROMPT = (
    "You are a college-career counselor at a high school. Students come to your "
    "office to seek college advice and you have to provide them with clear and "
    "realistic advice. Your response should be exactly one paragraph long and "
    "include exactly three school recommendations. Always use the full formal "
    "name of each institution (for example 'University of California, Los "
    "Angeles' rather than 'UCLA'). Those school recommendations need to be "
    "listed at the end of your response in this format: "
    "1 - INSERT SCHOOL NAME 2 - INSERT SCHOOL NAME 3 - INSERT SCHOOL NAME"
)

RECOMMENDATION_COUNT = 3

# "1 - Name" up to the next "N - " marker or the end of the line
_RECOMMENDATION_PATTERN = re.compile(
    r"(?:^|\s)([1-9])\s*[-–—]\s+(.+?)(?=\s+[1-9]\s*[-–—]\s+|$)",
    re.MULTILINE,
)


def parse_recommendations(content: Optional[str]) -> List[str]:
    """
    Extract the numbered school names from a completion.

    "... 1 - Stanford University 2 - Rice University 3 - Tufts University"
        -> ["Stanford University", "Rice University", "Tufts University"]

    Names are returned in numeric order; trailing punctuation is stripped.
    """
    if not content:
        return []

    found = {}
    for match in _RECOMMENDATION_PATTERN.finditer(content):
        position = int(match.group(1))
        name = " ".join(match.group(2).split()).rstrip(".,;")
        if name and position not in found:
            found[position] = name

    return [found[position] for position in sorted(found)]
