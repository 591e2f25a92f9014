"""Google Gemini API wrapper used as the narrative generator."""

import logging
from typing import Any

from google import genai
from google.genai import types

from config import settings
from services.exceptions import UpstreamDependencyError
from services.ports import NarrativeGenerator

logger = logging.getLogger(__name__)

_client: genai.Client | None = None


def get_client() -> genai.Client | None:
    global _client
    if not settings.gemini_api_key:
        logger.debug("No GEMINI_API_KEY set - narrative generation disabled")
        return None
    if _client is None:
        _client = genai.Client(api_key=settings.gemini_api_key)
    return _client


def _candidate_text(candidate: Any) -> str | None:
    content = getattr(candidate, "content", None)
    parts = getattr(content, "parts", None) or []
    texts = [p.text for p in parts if getattr(p, "text", None)]
    return "".join(texts) if texts else None


def to_envelope(response: Any) -> dict:
    """Map a Gemini response onto the generator envelope.

    ``response.text`` becomes ``{"text": ...}``; when it is empty, each
    candidate's text parts are exposed as ``{"choices": [{"text": ...}]}``.
    """
    text = getattr(response, "text", None)
    if text:
        return {"text": text}
    candidates = getattr(response, "candidates", None) or []
    return {"choices": [{"text": _candidate_text(c)} for c in candidates]}


class GeminiNarrativeGenerator(NarrativeGenerator):
    provider = "gemini"

    def __init__(self, model: str | None = None) -> None:
        self.model = model or settings.gemini_model

    async def generate(self, prompt: str, max_tokens: int, temperature: float) -> dict:
        client = get_client()
        if client is None:
            raise UpstreamDependencyError("Gemini API key not configured")

        response = await client.aio.models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(
                temperature=temperature,
                max_output_tokens=max_tokens,
            ),
        )
        return to_envelope(response)
