"""Employee profile submitted for scoring."""

import math

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


def _coerce_text(value) -> str | None:
    """Booleans become "Yes"/"No", other scalars their str(); anything else None."""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return None


class Profile(BaseModel):
    """Structured scoring input. Wire names are camelCase.

    Numeric fields are permissive: anything that does not parse as a finite
    number is stored as None and the factor functions apply their defaults.
    Text fields accept scalars: booleans map to "Yes"/"No", numbers to their
    string form, and lists or objects are dropped.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    # Identity
    full_name: str = ""
    email: str = ""
    date_of_birth: str | None = None
    gender: str | None = None

    # Employment
    employment_status: str | None = None
    total_experience: float | None = None  # years
    notice_period_days: float | None = None

    # Skills / performance
    skill_proficiency_avg: float | None = None  # 1-5
    performance_rating: float | None = None  # 1-5
    training_hours_12mo: float | None = None

    # Network / mobility
    linkedin_network_size: str | None = None
    willing_to_relocate: str | None = None
    preferred_work_model: str | None = None

    @field_validator("full_name", "email", mode="before")
    @classmethod
    def _blank_text(cls, value):
        text = _coerce_text(value)
        return "" if text is None else text

    @field_validator(
        "date_of_birth",
        "gender",
        "employment_status",
        "linkedin_network_size",
        "willing_to_relocate",
        "preferred_work_model",
        mode="before",
    )
    @classmethod
    def _optional_text(cls, value):
        return _coerce_text(value)

    @field_validator(
        "total_experience",
        "notice_period_days",
        "skill_proficiency_avg",
        "performance_rating",
        "training_hours_12mo",
        mode="before",
    )
    @classmethod
    def _coerce_number(cls, value):
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, str) and not value.strip():
            return None
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
        return number if math.isfinite(number) else None
