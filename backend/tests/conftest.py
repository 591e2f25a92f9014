"""Shared test configuration, markers and in-memory port fakes."""

import pytest

from models.schemas.caller import CallerIdentity
from models.schemas.profile import Profile
from models.schemas.weights import WeightVector
from services.exceptions import PersistenceError
from services.ports import NarrativeGenerator, ProfileStore, WeightStore


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: touches a real database engine (in-memory SQLite)"
    )


class FakeWeightStore(WeightStore):
    def __init__(self, stored=None, error: Exception | None = None):
        self.stored = stored
        self.error = error
        self.saved: list[tuple[WeightVector, str]] = []

    async def get_active_weights(self):
        if self.error:
            raise self.error
        return self.stored

    async def save_weights(self, weights, updated_by):
        self.saved.append((weights, updated_by))
        self.stored = weights.model_dump()
        return weights


class FakeProfileStore(ProfileStore):
    def __init__(self, fail_profile: bool = False, fail_llm: bool = False):
        self.fail_profile = fail_profile
        self.fail_llm = fail_llm
        self.profiles = []
        self.llm_calls = []

    async def insert_profile_record(self, record):
        if self.fail_profile:
            raise PersistenceError("profiles insert failed")
        self.profiles.append(record)
        return record.id

    async def insert_llm_call_record(self, record):
        if self.fail_llm:
            raise PersistenceError("llm_outputs insert failed")
        self.llm_calls.append(record)
        return record.id


class FakeGenerator(NarrativeGenerator):
    provider = "fake"
    model = "fake-model-1"

    def __init__(self, response=None, error: Exception | None = None):
        self.response = response
        self.error = error
        self.calls = []

    async def generate(self, prompt, max_tokens, temperature):
        self.calls.append((prompt, max_tokens, temperature))
        if self.error:
            raise self.error
        return self.response


LOW_RISK_PROFILE = {
    "fullName": "Ada Lovelace",
    "email": "ada@example.com",
    "employmentStatus": "Employed",
    "totalExperience": 5,
    "skillProficiencyAvg": 5,
    "trainingHours12mo": 40,
    "performanceRating": 5,
    "linkedinNetworkSize": ">5,000",
    "willingToRelocate": "Yes",
    "preferredWorkModel": "Hybrid",
    "noticePeriodDays": 0,
}


@pytest.fixture
def low_risk_profile() -> Profile:
    return Profile.model_validate(LOW_RISK_PROFILE)


@pytest.fixture
def caller() -> CallerIdentity:
    return CallerIdentity(user_id="user-123", email="ada@example.com")
