"""Risk engine: scores a profile and records the result.

Pipeline:
1. Factor computation (pure, from the profile)
2. Weight resolution (storage, default fallback) - concurrent with 1
3. Score aggregation + tier
4. Narrative generation (best-effort, never aborts the request)
5. Profile record write (fatal on failure)
6. LLM call audit write (best-effort)
7. Response shaping
"""

import asyncio
import logging
from enum import Enum

from models.responses import (
    PLACEHOLDER_RECOMMENDATION,
    ExplainabilityItem,
    ScoreResponse,
)
from models.schemas.caller import CallerIdentity
from models.schemas.profile import Profile
from models.schemas.risk import FactorSet
from services import audit_builder, factor_calculator, score_aggregator
from services.exceptions import AuthorizationError, PersistenceError
from services.narrative_client import NarrativeClient
from services.ports import NarrativeGenerator, ProfileStore, WeightStore
from services.score_aggregator import round_half_up
from services.weight_resolver import WeightResolver

logger = logging.getLogger(__name__)


class Stage(str, Enum):
    RECEIVED = "received"
    FACTORS_COMPUTED = "factors_computed"
    WEIGHTS_RESOLVED = "weights_resolved"
    SCORE_COMPUTED = "score_computed"
    NARRATIVE_ATTEMPTED = "narrative_attempted"
    PERSISTED = "persisted"
    RESPONDED = "responded"
    ABORTED = "aborted"


def build_explainability(profile: Profile, factors: FactorSet) -> list[ExplainabilityItem]:
    skills = round_half_up(factors.skills_risk)
    performance = round_half_up(factors.performance_risk)
    network = round_half_up(factors.network_risk)
    mobility = round_half_up(factors.mobility_risk)
    notice = round_half_up(factors.notice_risk)
    plateau = round_half_up(factors.plateau_risk)

    if factor_calculator.is_willing_to_relocate(profile):
        mobility_text = "Mobility lowers risk."
    else:
        mobility_text = "Limited mobility increases risk."

    if plateau == factor_calculator.PLATEAU_RISK:
        plateau_text = "Possible plateau."
    else:
        plateau_text = "Balanced tenure."

    return [
        ExplainabilityItem(factor="Skills relevance", value=skills, text=f"Skill-related risk is {skills}."),
        ExplainabilityItem(factor="Performance", value=performance, text=f"Performance risk {performance}."),
        ExplainabilityItem(factor="Network", value=network, text=f"Network risk {network}."),
        ExplainabilityItem(factor="Mobility", value=mobility, text=mobility_text),
        ExplainabilityItem(factor="Notice period", value=notice, text=f"Notice period risk {notice}."),
        ExplainabilityItem(factor="Experience plateau", value=plateau, text=plateau_text),
    ]


class RiskEngine:
    def __init__(
        self,
        weight_store: WeightStore | None,
        profile_store: ProfileStore,
        generator: NarrativeGenerator | None,
        narrative_client: NarrativeClient | None = None,
    ) -> None:
        self.weight_resolver = WeightResolver(weight_store)
        self.profile_store = profile_store
        self.narrative_client = narrative_client or NarrativeClient(generator)

    def _advance(self, stage: Stage, **context) -> Stage:
        logger.debug("scoring stage=%s %s", stage.value, context or "")
        return stage

    async def score(self, profile: Profile, caller: CallerIdentity | None) -> ScoreResponse:
        """Score ``profile`` for ``caller`` and persist the audit record.

        Raises AuthorizationError when no caller is given and PersistenceError
        when the profile record cannot be written. Everything else degrades.
        """
        stage = self._advance(Stage.RECEIVED)
        if caller is None or not caller.user_id:
            self._advance(Stage.ABORTED, reason="missing caller identity")
            raise AuthorizationError("Missing caller identity")

        # --- Layers 1 + 2: factors and weights are independent ---
        weights_task = asyncio.create_task(self.weight_resolver.resolve())
        factors = factor_calculator.compute_factors(profile)
        stage = self._advance(Stage.FACTORS_COMPUTED)
        weights = await weights_task
        stage = self._advance(Stage.WEIGHTS_RESOLVED)

        # --- Layer 3: aggregate ---
        result = score_aggregator.aggregate(factors, weights)
        stage = self._advance(Stage.SCORE_COMPUTED, score=result.score, tier=result.tier.value)

        # --- Layer 4: narrative (best-effort) ---
        prompt = self.narrative_client.build_prompt(profile, factors)
        narrative = await self.narrative_client.generate(prompt)
        if narrative.is_empty:
            logger.warning("Narrative unavailable, responding with score only")
        stage = self._advance(Stage.NARRATIVE_ATTEMPTED)

        # --- Layer 5: primary write ---
        record = audit_builder.build_profile_record(
            profile, factors, result, narrative, caller.user_id
        )
        try:
            profile_id = await self.profile_store.insert_profile_record(record)
        except PersistenceError:
            logger.error("Profile record write failed after stage=%s", stage.value)
            self._advance(Stage.ABORTED, reason="profile write failed")
            raise
        except Exception as e:
            logger.error("Profile record write failed after stage=%s: %s", stage.value, e)
            self._advance(Stage.ABORTED, reason="profile write failed")
            raise PersistenceError(str(e)) from e
        stage = self._advance(Stage.PERSISTED, profile_id=profile_id)

        # --- Layer 6: LLM audit (best-effort) ---
        llm_record = audit_builder.build_llm_call_record(
            profile_id,
            self.narrative_client.provider,
            self.narrative_client.model,
            prompt,
            narrative,
        )
        if llm_record is not None:
            try:
                await self.profile_store.insert_llm_call_record(llm_record)
            except Exception as e:
                logger.error("Failed to store LLM output for profile %s: %s", profile_id, e)

        # --- Layer 7: response ---
        response = ScoreResponse(
            score=result.score,
            tier=result.tier.value,
            explainability=build_explainability(profile, factors),
            recommendations=list(narrative.recommendations) or [PLACEHOLDER_RECOMMENDATION],
            profile_id=profile_id,
        )
        self._advance(Stage.RESPONDED)
        return response
