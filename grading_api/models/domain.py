"""
Domain models for the grading service.

An attempt carries everything needed to grade it: the question's answer type,
its stored correct answer and the student's answer. The client's own verdict
is kept only for the audit record.
"""

from datetime import datetime, timezone
from typing import Any, List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from tutormath import AnswerType, Confidence, MatchingMode, MatchType, ValidationResult

StudentAnswer = Union[str, int, float, List[Union[str, int, float, None]], None]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AttemptSubmission(BaseModel):
    """A student's attempt at one question"""

    question_id: Optional[str] = None
    answer_type: AnswerType
    correct_answer: Any = Field(None, description="Stored correct answer (text or spec object)")
    answer: StudentAnswer = Field(None, description="Student answer; a list for fill-blank or matching")
    client_is_correct: Optional[bool] = Field(None, description="Client-side verdict, audited only")
    matching_mode: Optional[MatchingMode] = None
    submitted_at: datetime = Field(default_factory=_utcnow)

    @field_validator("answer")
    @classmethod
    def limit_answer_length(cls, v):
        """Reject oversized answers before grading"""
        if isinstance(v, str) and len(v) > 100_000:
            raise ValueError("Answer too long (max 100000 characters)")
        return v


class GradingAudit(BaseModel):
    """Server verdict versus client claim"""

    server_validated: bool = True
    client_claimed_correct: Optional[bool] = None
    client_server_agree: Optional[bool] = None

    @classmethod
    def record(cls, client_claim: Optional[bool], server_verdict: bool) -> "GradingAudit":
        """Audit a server verdict against the client's claim, if any"""
        return cls(
            client_claimed_correct=client_claim,
            client_server_agree=None if client_claim is None else client_claim == server_verdict,
        )


class GradedAttempt(BaseModel):
    """Outcome of grading one attempt"""

    question_id: Optional[str] = None
    result: ValidationResult
    audit: GradingAudit
    graded_at: datetime = Field(default_factory=_utcnow)

    @property
    def is_correct(self) -> bool:
        return self.result.is_correct


class AnswerComparison(BaseModel):
    """Two answers compared through the equivalence tiers"""

    is_correct: bool
    match_type: MatchType
    confidence: Confidence
    normalized_answer: str
    normalized_correct: str


class NormalizedAnswer(BaseModel):
    """Canonical and display forms of an answer"""

    normalized: str
    display: str
