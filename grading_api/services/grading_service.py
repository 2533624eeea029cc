"""
Grading service for answer validation.

Grades attempts server-side with the tutormath engine, records whether the
client's own verdict agreed, and exposes the comparison and normalization
helpers used by tutor review tooling.
"""

from typing import Any, Optional, Sequence

from pydantic import ValidationError

from tutormath import (
    AnswerType,
    MatchingMode,
    format_math_for_display,
    normalize_math_answer,
    validate_answer,
)
from tutormath.answer import build_answer_spec, match_math_answers
from tutormath.answer.types import AnswerSpec

from ..core.errors import GradingError, InvalidAnswerSpecError
from ..core.logging import get_context_logger, get_logger
from ..models.domain import AnswerComparison, AttemptSubmission, GradedAttempt, GradingAudit, NormalizedAnswer

logger = get_logger(__name__)

# Answer types whose stored correct answer may be a bare list
_LIST_FIELDS = {
    AnswerType.FILL_BLANK: "blanks",
    AnswerType.MATCHING: "correct_matches",
    AnswerType.MULTIPLE_CHOICE: "choices",
}


class GradingService:
    """
    Service for answer grading operations.

    The client's verdict never influences the grade; it is only audited.
    """

    def __init__(self, default_mode: Optional[MatchingMode] = None):
        self.default_mode = default_mode

        logger.info(
            "GradingService initialized",
            extra_data={"default_mode": default_mode.value if default_mode else None},
        )

    def _split_correct_answer(
        self, answer_type: AnswerType, correct_answer: Any, question_id: Optional[str]
    ) -> tuple[Any, AnswerSpec]:
        """Separate a stored correct answer into its text and its spec."""
        if isinstance(correct_answer, dict):
            text, data = None, correct_answer
        elif isinstance(correct_answer, list) and answer_type in _LIST_FIELDS:
            text, data = None, {_LIST_FIELDS[answer_type]: correct_answer}
        else:
            text, data = correct_answer, None

        try:
            return text, build_answer_spec(answer_type, data)
        except (ValidationError, ValueError) as e:
            raise InvalidAnswerSpecError(answer_type.value, str(e), question_id)

    def validate_attempt(self, submission: AttemptSubmission) -> GradedAttempt:
        """
        Grade a student attempt.

        Args:
            submission: The attempt, with the question's stored correct answer

        Returns:
            GradedAttempt with the verdict and the audit record

        Raises:
            InvalidAnswerSpecError: If the stored correct answer does not fit
                the answer type
            GradingError: If grading fails unexpectedly
        """
        question_id = submission.question_id
        mode = submission.matching_mode or self.default_mode
        attempt_logger = get_context_logger(__name__, question_id=question_id)

        attempt_logger.info(
            "Validating attempt",
            extra_data={
                "answer_type": submission.answer_type.value,
                "matching_mode": mode.value if mode else None,
            },
        )

        text, spec = self._split_correct_answer(submission.answer_type, submission.correct_answer, question_id)

        try:
            result = validate_answer(submission.answer, text, submission.answer_type, spec, mode=mode)
        except Exception as e:
            attempt_logger.error(
                "Failed to validate attempt",
                extra_data={"error": str(e)},
                exc_info=True,
            )
            raise GradingError(question_id, str(e))

        audit = GradingAudit.record(submission.client_is_correct, result.is_correct)
        if audit.client_server_agree is False:
            attempt_logger.warning(
                "Client verdict disagrees with server",
                extra_data={
                    "client_claimed_correct": submission.client_is_correct,
                    "server_is_correct": result.is_correct,
                },
            )

        attempt_logger.info(
            "Attempt validated",
            extra_data={
                "is_correct": result.is_correct,
                "match_type": result.match_type.value,
                "confidence": result.confidence.value,
            },
        )

        return GradedAttempt(question_id=question_id, result=result, audit=audit)

    def compare_answers(
        self,
        answer: Any,
        correct_answer: Any,
        alternates: Optional[Sequence[Any]] = None,
        mode: Optional[MatchingMode] = None,
    ) -> AnswerComparison:
        """Compare two answers through the equivalence tiers, with their normalized forms."""
        result = match_math_answers(answer, correct_answer, alternates, mode=mode or self.default_mode)
        return AnswerComparison(
            is_correct=result.is_correct,
            match_type=result.match_type,
            confidence=result.confidence,
            normalized_answer=normalize_math_answer(answer),
            normalized_correct=normalize_math_answer(correct_answer),
        )

    def normalize(self, answer: Any) -> NormalizedAnswer:
        """Canonical and display forms of an answer."""
        return NormalizedAnswer(
            normalized=normalize_math_answer(answer),
            display=format_math_for_display(answer),
        )


# Factory function
def get_grading_service(default_mode: Optional[MatchingMode] = None) -> GradingService:
    """Create grading service instance"""
    return GradingService(default_mode)
