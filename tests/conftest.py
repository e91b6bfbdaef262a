"""
Pytest configuration and shared fixtures for the size recommender tests.
"""

import pytest
from fastapi.testclient import TestClient

from agents.size_recommender.main import app, get_recorder
from agents.size_recommender.recorder import RecommendationRecorder


class CollectingRecorder(RecommendationRecorder):
    """Keeps every record in memory."""

    def __init__(self):
        self.records = []

    def record(self, entry):
        self.records.append(entry)


class FailingRecorder(RecommendationRecorder):
    def __init__(self):
        self.calls = 0

    def record(self, entry):
        self.calls += 1
        raise RuntimeError("database unavailable")


@pytest.fixture
def payload():
    """Line up, water up, historical win."""
    return {
        "initialHandicap": 1.0,
        "currentHandicap": 1.5,
        "initialWater": 0.9,
        "currentWater": 0.95,
        "historicalRecord": "win",
    }


@pytest.fixture
def recorder():
    return CollectingRecorder()


@pytest.fixture
def failing_recorder():
    return FailingRecorder()


@pytest.fixture
def client(recorder):
    app.dependency_overrides[get_recorder] = lambda: recorder
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def failing_client(failing_recorder):
    app.dependency_overrides[get_recorder] = lambda: failing_recorder
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
