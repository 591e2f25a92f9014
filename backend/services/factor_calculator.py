"""Deterministic risk factors for an employee profile.

Every factor is computed independently from the Profile and every input has
a defined default, so ``compute_factors`` never fails. Bucket lookups and
step functions are ordered rule lists (first match wins) so each threshold
can be inspected and tested on its own.
"""

from models.schemas.profile import Profile
from models.schemas.risk import FactorSet

# (bucket label, risk) - labels are compared after normalisation
NETWORK_RULES: list[tuple[str, int]] = [
    ("<500", 70),
    ("500–1,000", 50),
    ("1,001–5,000", 30),
    (">5,000", 10),
]
NETWORK_DEFAULT_RISK = 60

# (minimum notice days, risk), checked top to bottom
NOTICE_RULES: list[tuple[float, int]] = [
    (90, 80),
    (60, 70),
    (30, 50),
    (15, 30),
    (7, 20),
]
NOTICE_FLOOR_RISK = 10
DEFAULT_NOTICE_DAYS = 30

PLATEAU_EXPERIENCE_YEARS = 12
PLATEAU_RISK = 40
BALANCED_TENURE_RISK = 20

RELOCATE_RISK = 10
NO_RELOCATE_RISK = 40

RATING_SCALE = 5.0
# Missing rating/proficiency is scored at the middle of the 0-5 scale
DEFAULT_RATING = RATING_SCALE / 2


def _normalise_bucket(label: str) -> str:
    # "< 500" and "500-1,000" are accepted as "<500" and "500–1,000"
    return "".join(label.split()).replace("-", "–")


def _inverse_rating_risk(value: float | None) -> float:
    rating = DEFAULT_RATING if value is None else min(RATING_SCALE, max(0.0, value))
    return 100 - (rating / RATING_SCALE) * 100


def skills_risk(profile: Profile) -> float:
    return _inverse_rating_risk(profile.skill_proficiency_avg)


def performance_risk(profile: Profile) -> float:
    return _inverse_rating_risk(profile.performance_rating)


def network_risk(profile: Profile) -> int:
    if profile.linkedin_network_size is None:
        return NETWORK_DEFAULT_RISK
    bucket = _normalise_bucket(profile.linkedin_network_size)
    for label, risk in NETWORK_RULES:
        if bucket == label:
            return risk
    return NETWORK_DEFAULT_RISK


def is_willing_to_relocate(profile: Profile) -> bool:
    return (profile.willing_to_relocate or "").strip().lower() == "yes"


def mobility_risk(profile: Profile) -> int:
    return RELOCATE_RISK if is_willing_to_relocate(profile) else NO_RELOCATE_RISK


def notice_risk(profile: Profile) -> int:
    days = DEFAULT_NOTICE_DAYS if profile.notice_period_days is None else profile.notice_period_days
    for threshold, risk in NOTICE_RULES:
        if days >= threshold:
            return risk
    return NOTICE_FLOOR_RISK


def plateau_risk(profile: Profile) -> int:
    years = profile.total_experience or 0
    return PLATEAU_RISK if years >= PLATEAU_EXPERIENCE_YEARS else BALANCED_TENURE_RISK


def compute_factors(profile: Profile) -> FactorSet:
    """Map a profile to its six risk sub-scores. No side effects."""
    return FactorSet(
        skills_risk=skills_risk(profile),
        performance_risk=performance_risk(profile),
        network_risk=network_risk(profile),
        mobility_risk=mobility_risk(profile),
        notice_risk=notice_risk(profile),
        plateau_risk=plateau_risk(profile),
    )
