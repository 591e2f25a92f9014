"""Weight vector applied to the six risk factors."""

from pydantic import BaseModel, ConfigDict, field_validator

WEIGHT_NAMES = ("skills", "performance", "network", "mobility", "notice", "plateau")


class WeightVector(BaseModel):
    """Linear-combination coefficients, one per factor.

    Weights are not required to sum to 1.0 and are never normalised here;
    callers wanting a probability-style score must store a normalised vector.
    Negative values are clamped to zero.
    """
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    skills: float
    performance: float
    network: float
    mobility: float
    notice: float
    plateau: float

    @field_validator(*WEIGHT_NAMES)
    @classmethod
    def _non_negative(cls, value: float) -> float:
        return max(0.0, value)

    @property
    def total(self) -> float:
        return sum(getattr(self, name) for name in WEIGHT_NAMES)


DEFAULT_WEIGHTS = WeightVector(
    skills=0.28,
    performance=0.22,
    network=0.18,
    mobility=0.12,
    notice=0.12,
    plateau=0.08,
)
