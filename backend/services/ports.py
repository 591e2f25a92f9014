"""Abstract collaborators injected into the risk engine.

Subclasses provide the storage and generation backends; the engine only
ever talks to these interfaces, so it runs without network or database in
tests.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping

from models.schemas.audit import AuditRecord, LLMCallRecord
from models.schemas.weights import WeightVector


class WeightStore(ABC):
    """Externally owned weight configuration."""

    @abstractmethod
    async def get_active_weights(self) -> Mapping[str, Any] | None:
        """Return the most recently updated stored vector, or None."""

    @abstractmethod
    async def save_weights(self, weights: WeightVector, updated_by: str) -> WeightVector:
        """Store a new vector; it becomes the active one."""


class ProfileStore(ABC):
    """Append-only audit store."""

    @abstractmethod
    async def insert_profile_record(self, record: AuditRecord) -> str:
        """Persist the profile record and return its id. Raises PersistenceError."""

    @abstractmethod
    async def insert_llm_call_record(self, record: LLMCallRecord) -> str:
        """Persist an LLM call audit entry and return its id. Raises PersistenceError."""


class NarrativeGenerator(ABC):
    """External text-generation service.

    ``generate`` returns the raw response envelope, either ``{"text": ...}``
    or ``{"choices": [{"text": ...}]}``, and raises on transport failure.
    """

    provider: str = ""
    model: str = ""

    @abstractmethod
    async def generate(self, prompt: str, max_tokens: int, temperature: float) -> Mapping[str, Any]:
        """Run one generation call."""
