"""
Domain Models for College Advisor

Pure Pydantic models with no framework dependencies.
These models define the request-scoped entities and validation rules.
"""

from typing import Any, List, Mapping, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from college_advisor.infrastructure.exceptions import ValidationError


PLACEHOLDER_PERCENTILE = "N/A"

# Form field names as posted by the profile form
REQUIRED_PROFILE_FIELDS = ("state", "satScore", "gpa", "financial-aid-importance")


def _format_number(value: float) -> str:
    """Render 1200.0 as '1200' and 3.7 as '3.7'."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


class StudentProfile(BaseModel):
    """
    Student profile collected from the profile form.

    Ephemeral: built once per request to construct the completion prompt.
    """

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    state: str = Field(..., min_length=1, max_length=100)
    sat_score: float = Field(..., ge=400, le=1600, alias="satScore")
    gpa: float = Field(..., ge=0.0)
    financial_aid_importance: int = Field(..., ge=1, le=5, alias="financial-aid-importance")
    major: Optional[str] = Field(None, max_length=100)
    school_size: Optional[str] = Field(None, max_length=50, alias="school-size")
    proximity_importance: Optional[int] = Field(None, ge=1, le=5, alias="proximity-importance")

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def has_preferences(self) -> bool:
        """True when the extended preference fields were supplied."""
        return any(
            value is not None
            for value in (self.major, self.school_size, self.proximity_importance)
        )

    def to_prompt(self) -> str:
        """Build the natural-language message sent to the completion API."""
        sat = _format_number(self.sat_score)
        gpa = _format_number(self.gpa)

        if not self.has_preferences:
            return (
                f"I'm from {self.state}, my SAT score is {sat}, my GPA is {gpa}, "
                f"and on a scale of 1-5, financial aid is {self.financial_aid_importance} "
                f"in importance to me. What are my college options?"
            )

        message = f"I'm from {self.state}"
        if self.proximity_importance is not None:
            message += (
                f", and staying close to home is a {self.proximity_importance} "
                f"out of 1-5 scale of importance for me"
            )
        message += f". My SAT score is {sat}, my GPA is {gpa}"
        if self.major:
            message += f", I'm interested in majoring in {self.major}"
        if self.school_size:
            message += f", and I have a {self.school_size} size school preference"
        return (
            f"{message}. Financial aid importance is a {self.financial_aid_importance} "
            f"out of 1-5 scale of importance for me. "
            f"Can you suggest colleges that fit my preferences?"
        )

    @classmethod
    def from_form(cls, form: Mapping[str, Any]) -> "StudentProfile":
        """
        Validate raw form fields into a profile.

        Raises:
            ValidationError: a required field is absent or a value is invalid
        """
        missing = [
            name for name in REQUIRED_PROFILE_FIELDS
            if form.get(name) is None or not str(form.get(name)).strip()
        ]
        if missing:
            raise ValidationError(
                f"Missing required field(s): {', '.join(missing)}",
                field=missing[0],
            )

        try:
            return cls.model_validate(dict(form))
        except PydanticValidationError as e:
            error = e.errors()[0]
            field = str(error["loc"][0]) if error.get("loc") else None
            raise ValidationError(
                f"Invalid value for {field}: {error['msg']}",
                field=field,
                original_error=e,
            )


class ChatMessage(BaseModel):
    """A single chat message returned by the completion API."""
    role: str
    content: Optional[str] = None


class CompletionResult(BaseModel):
    """Top choice of a hosted chat-completion response."""
    index: int = 0
    message: ChatMessage
    finish_reason: Optional[str] = None

    @property
    def role(self) -> str:
        return self.message.role

    @property
    def content(self) -> Optional[str]:
        return self.message.content


class CollegeAdmissions(BaseModel):
    """
    College admissions SAT band as returned to clients.

    Missing colleges are represented by a zero-filled placeholder carrying
    the submitted name, so every slot has the same shape.
    """

    model_config = ConfigDict(from_attributes=True)

    college_name: str
    sat_25th_percentile: int = 0
    sat_50th_percentile: int = 0
    sat_75th_percentile: int = 0
    percentile: Optional[str] = None

    @field_validator(
        "sat_25th_percentile", "sat_50th_percentile", "sat_75th_percentile",
        mode="before",
    )
    @classmethod
    def none_to_zero(cls, v: Any) -> Any:
        return 0 if v is None else v

    @classmethod
    def placeholder(cls, college_name: str) -> "CollegeAdmissions":
        """Zero-filled row for a college missing from the lookup store."""
        return cls(college_name=college_name, percentile=PLACEHOLDER_PERCENTILE)

    @property
    def has_scores(self) -> bool:
        return self.sat_50th_percentile != 0


class CollegeRecommendations(BaseModel):
    """Admissions data for the three recommended colleges, by position."""
    first: CollegeAdmissions
    second: CollegeAdmissions
    third: CollegeAdmissions

    @classmethod
    def from_list(cls, rows: List[CollegeAdmissions]) -> "CollegeRecommendations":
        first, second, third = rows
        return cls(first=first, second=second, third=third)
