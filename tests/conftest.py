import random

import pytest
from fastapi.testclient import TestClient

from truthlens.config import Settings
from truthlens.main import create_app
from truthlens.service import AnalysisService


class FixedRandom:
    """Stands in for random.Random: randint() returns a fixed offset clamped
    into the requested range, random() a fixed float. Calls are recorded."""

    def __init__(self, offset: int = 0, value: float = 0.5):
        self.offset = offset
        self.value = value
        self.calls = []

    def randint(self, a, b):
        self.calls.append((a, b))
        return max(a, min(b, self.offset))

    def random(self):
        return self.value


@pytest.fixture
def fixed_rng():
    return FixedRandom()


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        USE_REAL_API=False,
        API_KEY="test-key",
        TEXT_DELAY_SECONDS=0,
        IMAGE_DELAY_SECONDS=0,
        VIDEO_DELAY_SECONDS=0,
        DEEPFAKE_DELAY_SECONDS=0,
        STATIC_DIR=str(tmp_path / "no-static"),
    )


@pytest.fixture
def real_settings(settings) -> Settings:
    return settings.model_copy(update={"USE_REAL_API": True})


@pytest.fixture
def service(settings) -> AnalysisService:
    return AnalysisService(settings, rng=random.Random(1234))


@pytest.fixture
def client(settings, service):
    return TestClient(create_app(settings, service))
