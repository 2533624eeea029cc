"""
Answer result data structures.

This module provides the results returned by the matching engine:
- ValidationResult: verdict, how it was reached, and confidence
- FillBlankResult / BlankDetail: per-blank verdicts
- MatchingResult / MatchDetail: per-position verdicts

Results are created per call and never shared.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, StrictBool, field_validator, model_validator

from .types import Confidence, MatchType

# Confidence attached to each match type; numeric is downgraded when inexact
CONFIDENCE_BY_MATCH: dict[MatchType, Confidence] = {
    MatchType.EXACT: Confidence.HIGH,
    MatchType.FRACTION: Confidence.HIGH,
    MatchType.PERCENTAGE: Confidence.HIGH,
    MatchType.SCIENTIFIC: Confidence.HIGH,
    MatchType.MIXED_NUMBER: Confidence.HIGH,
    MatchType.NUMERIC: Confidence.HIGH,
    MatchType.ALTERNATE: Confidence.HIGH,
    MatchType.FILL_BLANK: Confidence.HIGH,
    MatchType.MATCHING: Confidence.HIGH,
    MatchType.EXPRESSION: Confidence.MEDIUM,
    MatchType.MANUAL_GRADING_REQUIRED: Confidence.LOW,
    MatchType.NONE: Confidence.LOW,
}


class ValidationResult(BaseModel):
    """
    Result of validating one answer.

    Attributes:
        is_correct: Whether the answer is accepted
        match_type: Which tier or validator decided the verdict
        confidence: How much to trust the verdict
        blanks_correct: Correct blanks (fill-in-the-blank only)
        blanks_total: Number of blanks (fill-in-the-blank only)
        matches_correct: Correct positions (matching only)
        matches_total: Number of positions (matching only)
    """

    model_config = ConfigDict(frozen=True)

    is_correct: StrictBool = False
    match_type: MatchType = MatchType.NONE
    confidence: Confidence = Confidence.LOW

    blanks_correct: int | None = None
    blanks_total: int | None = None
    matches_correct: int | None = None
    matches_total: int | None = None

    @classmethod
    def matched(cls, match_type: MatchType, confidence: Confidence | None = None, **counts: int) -> ValidationResult:
        """Build a correct result, with the match type's default confidence."""
        return cls(
            is_correct=True,
            match_type=match_type,
            confidence=confidence or CONFIDENCE_BY_MATCH[match_type],
            **counts,
        )

    @classmethod
    def no_match(cls) -> ValidationResult:
        """Build the "not correct" result."""
        return cls(is_correct=False, match_type=MatchType.NONE, confidence=Confidence.LOW)

    def __bool__(self) -> bool:
        return self.is_correct

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to dictionary for serialization.

        Returns:
            JSON-ready mapping without the unset structured counters
        """
        return self.model_dump(mode="json", exclude_none=True)


class BlankDetail(BaseModel):
    """Verdict for one blank."""

    position: int
    user_answer: str
    correct_answer: str
    is_correct: StrictBool


class FillBlankResult(BaseModel):
    """Result of validating a fill-in-the-blank answer."""

    is_correct: StrictBool = False
    blanks_correct: int = 0
    blanks_total: int = 0
    details: list[BlankDetail] = []

    @model_validator(mode="after")
    def check_counts(self) -> FillBlankResult:
        if not 0 <= self.blanks_correct <= self.blanks_total:
            raise ValueError("blanks_correct must be between 0 and blanks_total")
        return self

    def to_validation_result(self) -> ValidationResult:
        """Summarize as a ValidationResult."""
        return ValidationResult(
            is_correct=self.is_correct,
            match_type=MatchType.FILL_BLANK,
            confidence=Confidence.HIGH,
            blanks_correct=self.blanks_correct,
            blanks_total=self.blanks_total,
        )


class MatchDetail(BaseModel):
    """Verdict for one matching position."""

    position: int
    user_match: int | None
    correct_match: int
    is_correct: StrictBool
    left: str | None = None
    right: str | None = None


class MatchingResult(BaseModel):
    """Result of validating a matching answer."""

    is_correct: StrictBool = False
    matches_correct: int = 0
    matches_total: int = 0
    details: list[MatchDetail] = []

    @field_validator("details", mode="before")
    @classmethod
    def validate_details(cls, v: Any) -> Any:
        """Ensure details is a list."""
        if v is None:
            return []
        return v

    def to_validation_result(self) -> ValidationResult:
        """Summarize as a ValidationResult."""
        return ValidationResult(
            is_correct=self.is_correct,
            match_type=MatchType.MATCHING,
            confidence=Confidence.HIGH,
            matches_correct=self.matches_correct,
            matches_total=self.matches_total,
        )
