"""Narrative generation contracts.

The generation service answers with one of two loosely typed envelopes,
``{"text": ...}`` or ``{"choices": [{"text": ...}]}``. They are modelled as a
small tagged union so that every shape the client may see is enumerable.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict

MAX_RECOMMENDATIONS = 5


class TextEnvelope(BaseModel):
    kind: Literal["text"] = "text"
    text: str


class Choice(BaseModel):
    text: str | None = None


class ChoicesEnvelope(BaseModel):
    kind: Literal["choices"] = "choices"
    choices: list[Choice] = []


class EmptyEnvelope(BaseModel):
    """Response with neither recognised envelope."""
    kind: Literal["empty"] = "empty"


ResponseEnvelope = TextEnvelope | ChoicesEnvelope | EmptyEnvelope


class NarrativePayload(BaseModel):
    """JSON payload the model is instructed to return."""
    narrative: str | None = None
    recommendations: list[str] = []


class NarrativeResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    narrative: str | None = None
    recommendations: list[str] = []
    raw_text: str | None = None  # exact generator text, kept for the audit trail

    @property
    def is_empty(self) -> bool:
        return not self.narrative and not self.recommendations
