"""
Pytest configuration and fixtures.

Provides shared fixtures for the grading API tests.
"""

import pytest
from fastapi.testclient import TestClient

from grading_api.core import settings
from grading_api.main import app
from grading_api.models import AttemptSubmission
from grading_api.services import GradingService
from tutormath import AnswerType, MatchingMode


@pytest.fixture
def client() -> TestClient:
    """FastAPI test client"""
    return TestClient(app)


@pytest.fixture
def api_prefix() -> str:
    """Configured API prefix"""
    return settings.API_PREFIX


@pytest.fixture
def grading_service() -> GradingService:
    """Grading service in permissive mode"""
    return GradingService(MatchingMode.PERMISSIVE)


@pytest.fixture
def numeric_submission() -> AttemptSubmission:
    """A correct numeric attempt whose client verdict is wrong"""
    return AttemptSubmission(
        question_id="q-numeric",
        answer_type=AnswerType.NUMERIC,
        correct_answer={"value": "0.5"},
        answer="1/2",
        client_is_correct=False,
    )
