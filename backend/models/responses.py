from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from models.schemas.weights import WeightVector

PLACEHOLDER_RECOMMENDATION = "See dashboard for recommended actions."


class ExplainabilityItem(BaseModel):
    factor: str
    value: int
    text: str


class ScoreResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    ok: bool = True
    score: int = 0
    tier: str = "Low"
    explainability: list[ExplainabilityItem] = []
    recommendations: list[str] = Field(default_factory=lambda: [PLACEHOLDER_RECOMMENDATION])
    profile_id: str = ""


class WeightsResponse(BaseModel):
    weights: WeightVector | None = None


class AdminStatusResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    is_admin: bool = False
