"""Resolve the active weight vector, falling back to the built-in default."""

import logging

from pydantic import ValidationError

from models.schemas.weights import DEFAULT_WEIGHTS, WeightVector
from services.ports import WeightStore

logger = logging.getLogger(__name__)


class WeightResolver:
    def __init__(self, store: WeightStore | None) -> None:
        self._store = store

    async def resolve(self) -> WeightVector:
        """Return the active vector. Never raises."""
        if self._store is None:
            return DEFAULT_WEIGHTS

        try:
            stored = await self._store.get_active_weights()
        except Exception as e:
            logger.warning("Weight storage unavailable, using default weights: %s", e)
            return DEFAULT_WEIGHTS

        if stored is None:
            logger.debug("No stored weights, using default weights")
            return DEFAULT_WEIGHTS

        if isinstance(stored, WeightVector):
            return stored

        try:
            return WeightVector.model_validate(stored)
        except ValidationError as e:
            logger.warning("Stored weights malformed, using default weights: %s", e)
            return DEFAULT_WEIGHTS
