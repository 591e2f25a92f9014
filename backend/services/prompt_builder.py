"""Prompt template for the narrative generation call."""

from models.schemas.narrative import MAX_RECOMMENDATIONS
from models.schemas.profile import Profile
from models.schemas.risk import FactorSet
from services.score_aggregator import round_half_up


def _fmt(value) -> str:
    if value is None:
        return "not provided"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_narrative_prompt(profile: Profile, factors: FactorSet) -> str:
    """Explainability narrative + prioritized recommendations, as strict JSON."""
    return f"""You are an expert career advisor. Given the structured profile below, produce:
1) A concise, human-readable explainability narrative (2-3 short paragraphs) that explains why the candidate received the computed risk score. Use non-technical language and reference the specific factor values.
2) A prioritized list of up to {MAX_RECOMMENDATIONS} specific, actionable recommendations tailored to the candidate, each 1 sentence.

PROFILE:
---
Full name: {_fmt(profile.full_name)}
Email: {_fmt(profile.email)}
Employment status: {_fmt(profile.employment_status)}
Total experience (years): {_fmt(profile.total_experience)}
Avg skill proficiency (1-5): {_fmt(profile.skill_proficiency_avg)}
Training hours (12mo): {_fmt(profile.training_hours_12mo)}
Performance rating (1-5): {_fmt(profile.performance_rating)}
LinkedIn network: {_fmt(profile.linkedin_network_size)}
Willing to relocate: {_fmt(profile.willing_to_relocate)}
Preferred work model: {_fmt(profile.preferred_work_model)}
Notice period (days): {_fmt(profile.notice_period_days)}
---

COMPUTED FACTOR SCORES (0-100, higher means more risk):
SkillsRisk: {round_half_up(factors.skills_risk)}
PerformanceRisk: {round_half_up(factors.performance_risk)}
NetworkRisk: {round_half_up(factors.network_risk)}
MobilityRisk: {round_half_up(factors.mobility_risk)}
NoticeRisk: {round_half_up(factors.notice_risk)}
PlateauRisk: {round_half_up(factors.plateau_risk)}

Tone: empathetic, concise, professional.

Respond with ONLY valid JSON (no markdown, no code fences) in this exact structure:
{{
  "narrative": "<2-3 short paragraphs>",
  "recommendations": [<up to {MAX_RECOMMENDATIONS} strings, highest priority first>]
}}"""
