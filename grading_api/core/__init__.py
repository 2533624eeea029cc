"""Core utilities package"""

from .config import Settings, get_settings, settings
from .errors import (
    GradingError,
    GradingServiceError,
    InvalidAnswerSpecError,
    register_error_handlers,
)
from .logging import get_context_logger, get_logger, setup_logging

__all__ = [
    "Settings",
    "settings",
    "get_settings",
    "setup_logging",
    "get_logger",
    "get_context_logger",
    "GradingServiceError",
    "InvalidAnswerSpecError",
    "GradingError",
    "register_error_handlers",
]
