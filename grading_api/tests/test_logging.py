"""
Tests for structured logging.
"""

import json
import logging

from grading_api.core import settings
from grading_api.core.logging import StructuredFormatter, TextFormatter, get_context_logger


def _record(**extra_data) -> logging.LogRecord:
    record = logging.LogRecord("grading_api.test", logging.INFO, __file__, 10, "Attempt validated", None, None)
    if extra_data:
        record.extra_data = extra_data
    return record


def test_structured_formatter():
    """Test JSON lines carry the service and the extra data"""
    line = json.loads(StructuredFormatter().format(_record(question_id="q-1", is_correct=True)))

    assert line["message"] == "Attempt validated"
    assert line["level"] == "INFO"
    assert line["service"] == settings.APP_NAME
    assert line["question_id"] == "q-1"
    assert line["is_correct"] is True


def test_text_formatter():
    """Test text lines append the extra data"""
    line = TextFormatter().format(_record(match_type="fraction"))

    assert "Attempt validated" in line
    assert line.endswith("[match_type=fraction]")


def test_context_logger_merges_extra_data():
    """Test permanent context and per-call extra data are merged"""
    logger = get_context_logger("grading_api.test", question_id="q-2")

    _, kwargs = logger.process("Validating attempt", {"extra_data": {"answer_type": "numeric"}})

    assert kwargs["extra"]["extra_data"] == {"question_id": "q-2", "answer_type": "numeric"}


def test_engine_logger_level():
    """Test the engine loggers follow ENGINE_LOG_LEVEL"""
    assert logging.getLogger("tutormath").level == getattr(logging, settings.ENGINE_LOG_LEVEL)
