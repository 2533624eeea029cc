"""Domain models package"""

from .domain import (
    AnswerComparison,
    AttemptSubmission,
    GradedAttempt,
    GradingAudit,
    NormalizedAnswer,
    StudentAnswer,
)

__all__ = [
    "AttemptSubmission",
    "GradingAudit",
    "GradedAttempt",
    "AnswerComparison",
    "NormalizedAnswer",
    "StudentAnswer",
]
