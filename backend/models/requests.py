from pydantic import BaseModel, Field

from models.schemas.weights import WeightVector


class WeightsUpdateRequest(BaseModel):
    weights: WeightVector = Field(..., description="New active weight vector")
