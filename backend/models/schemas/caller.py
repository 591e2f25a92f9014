"""Authenticated caller, resolved from the bearer token by the API layer."""

from pydantic import BaseModel, ConfigDict


class CallerIdentity(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: str
    email: str | None = None
