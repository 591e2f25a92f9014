"""Narrative + recommendations for a scored profile.

Stages, each with a defined fallback:
1. Call the generator (bounded by a timeout). Any failure -> empty result.
2. Classify the response envelope and extract its text.
3. Parse the text as the JSON payload the prompt asks for.
4. If that fails, use the whole text as the narrative and its first
   non-empty lines as recommendations.

The client never raises; the score is returned with or without a narrative.
"""

import asyncio
import json
import logging
from typing import Any, Mapping

from pydantic import ValidationError

from config import settings
from models.schemas.narrative import (
    MAX_RECOMMENDATIONS,
    ChoicesEnvelope,
    EmptyEnvelope,
    NarrativePayload,
    NarrativeResult,
    ResponseEnvelope,
    TextEnvelope,
)
from models.schemas.profile import Profile
from models.schemas.risk import FactorSet
from services import prompt_builder
from services.ports import NarrativeGenerator

logger = logging.getLogger(__name__)


def classify_envelope(response: Any) -> ResponseEnvelope:
    """Total classifier over the generator's response shapes."""
    if not isinstance(response, Mapping):
        return EmptyEnvelope()

    text = response.get("text")
    if isinstance(text, str) and text:
        return TextEnvelope(text=text)

    choices = response.get("choices")
    if isinstance(choices, list):
        try:
            return ChoicesEnvelope.model_validate({"choices": choices})
        except ValidationError:
            return EmptyEnvelope()

    return EmptyEnvelope()


def extract_text(envelope: ResponseEnvelope) -> str:
    if isinstance(envelope, TextEnvelope):
        return envelope.text
    if isinstance(envelope, ChoicesEnvelope) and envelope.choices:
        return envelope.choices[0].text or ""
    return ""


def _strip_code_fences(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else text[3:]
        if text.endswith("```"):
            text = text[:-3]
        text = text.strip()
    return text


def parse_payload(raw_text: str) -> NarrativePayload | None:
    """Parse the JSON payload; None when the text is not a JSON object."""
    try:
        data = json.loads(_strip_code_fences(raw_text))
    except json.JSONDecodeError:
        return None
    if not isinstance(data, dict):
        return None

    narrative = data.get("narrative")
    recommendations = data.get("recommendations")
    if not isinstance(recommendations, list):
        recommendations = []
    return NarrativePayload(
        narrative=narrative if isinstance(narrative, str) else None,
        recommendations=[r for r in recommendations if isinstance(r, str)],
    )


def fallback_recommendations(raw_text: str) -> list[str]:
    """First non-empty trimmed lines of free text."""
    lines = (line.strip() for line in raw_text.splitlines())
    return [line for line in lines if line][:MAX_RECOMMENDATIONS]


def parse_response(response: Any) -> NarrativeResult:
    raw_text = extract_text(classify_envelope(response))

    payload = parse_payload(raw_text)
    if payload is not None:
        return NarrativeResult(
            narrative=payload.narrative or raw_text or None,
            recommendations=payload.recommendations[:MAX_RECOMMENDATIONS],
            raw_text=raw_text,
        )

    logger.warning("Narrative response was not valid JSON, using plain-text fallback")
    return NarrativeResult(
        narrative=raw_text or None,
        recommendations=fallback_recommendations(raw_text),
        raw_text=raw_text,
    )


class NarrativeClient:
    def __init__(
        self,
        generator: NarrativeGenerator | None,
        max_tokens: int | None = None,
        temperature: float | None = None,
        timeout: float | None = None,
    ) -> None:
        self.generator = generator
        self.max_tokens = max_tokens if max_tokens is not None else settings.narrative_max_tokens
        self.temperature = temperature if temperature is not None else settings.narrative_temperature
        self.timeout = timeout if timeout is not None else settings.narrative_timeout_seconds

    @property
    def provider(self) -> str:
        return getattr(self.generator, "provider", "") or "unknown"

    @property
    def model(self) -> str:
        return getattr(self.generator, "model", "") or "unknown"

    def build_prompt(self, profile: Profile, factors: FactorSet) -> str:
        return prompt_builder.build_narrative_prompt(profile, factors)

    async def generate(self, prompt: str) -> NarrativeResult:
        """Run the generation call and parse it. Never raises."""
        if self.generator is None:
            logger.warning("No narrative generator configured")
            return NarrativeResult()

        try:
            response = await asyncio.wait_for(
                self.generator.generate(prompt, self.max_tokens, self.temperature),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.error("Narrative generation timed out after %.1fs", self.timeout)
            return NarrativeResult()
        except Exception as e:
            logger.error("Narrative generation error (%s): %s", self.provider, e)
            return NarrativeResult()

        try:
            return parse_response(response)
        except Exception as e:
            logger.error("Failed to parse narrative response: %s", e)
            return NarrativeResult()
