"""
Answer types and correct-answer specifications.

A correct-answer spec is a closed tagged union with one variant per answer
type. Stored question data is loosely shaped JSON, so every variant accepts
the platform's legacy keys (``correct``, ``correctIndex``, ``correctMatches``,
``allowExpressions``) and :func:`build_answer_spec` coerces a raw mapping into
the variant for its answer type.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter, field_validator


class AnswerType(str, Enum):
    """Question answer types."""

    EXACT = "exact"
    NUMERIC = "numeric"
    MULTIPLE_CHOICE = "multiple_choice"
    SHORT_ANSWER = "short_answer"
    LONG_ANSWER = "long_answer"
    EXPRESSION = "expression"
    TRUE_FALSE = "true_false"
    FILL_BLANK = "fill_blank"
    MATCHING = "matching"


class MatchType(str, Enum):
    """How an answer was matched."""

    EXACT = "exact"
    FRACTION = "fraction"
    PERCENTAGE = "percentage"
    SCIENTIFIC = "scientific"
    MIXED_NUMBER = "mixed_number"
    NUMERIC = "numeric"
    EXPRESSION = "expression"
    ALTERNATE = "alternate"
    MANUAL_GRADING_REQUIRED = "manual_grading_required"
    FILL_BLANK = "fill_blank"
    MATCHING = "matching"
    NONE = "none"


class Confidence(str, Enum):
    """Confidence in a verdict."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


def _as_text(value: Any) -> Any:
    """Stored values may be numbers; compare them as text."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return value


class _SpecBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class _ValueSpec(_SpecBase):
    """Spec carrying a textual value and alternate accepted answers."""

    value: str | None = Field(default=None, validation_alias=AliasChoices("value", "latex"))
    alternates: list[str] = []

    @field_validator("value", mode="before")
    @classmethod
    def coerce_value(cls, v: Any) -> Any:
        return _as_text(v)

    @field_validator("alternates", mode="before")
    @classmethod
    def coerce_alternates(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        if isinstance(v, (list, tuple)):
            return [_as_text(item) for item in v if item is not None]
        return v


class ExactSpec(_ValueSpec):
    answer_type: Literal["exact"] = "exact"


class ShortAnswerSpec(_ValueSpec):
    answer_type: Literal["short_answer"] = "short_answer"


class ExpressionSpec(_ValueSpec):
    answer_type: Literal["expression"] = "expression"


class NumericSpec(_SpecBase):
    """Numeric answer: a value, an optional tolerance and unit."""

    answer_type: Literal["numeric"] = "numeric"
    value: str | None = Field(default=None, validation_alias=AliasChoices("value", "latex"))
    tolerance: float | None = Field(default=None, ge=0)
    unit: str | None = None
    allow_expressions: bool = Field(
        default=False, validation_alias=AliasChoices("allow_expressions", "allowExpressions")
    )

    @field_validator("value", mode="before")
    @classmethod
    def coerce_value(cls, v: Any) -> Any:
        return _as_text(v)


class MultipleChoiceSpec(_SpecBase):
    """Multiple choice: the index of the correct choice."""

    answer_type: Literal["multiple_choice"] = "multiple_choice"
    choices: list[str] = []
    correct_index: int | None = Field(
        default=None, validation_alias=AliasChoices("correct_index", "correctIndex", "correct")
    )

    @field_validator("choices", mode="before")
    @classmethod
    def coerce_choices(cls, v: Any) -> Any:
        # Choices are stored either as strings or as {"text": ...} objects
        if v is None:
            return []
        if isinstance(v, (list, tuple)):
            return [item.get("text", "") if isinstance(item, dict) else _as_text(item) for item in v]
        return v


class LongAnswerSpec(_SpecBase):
    """Free-text answer, graded manually."""

    answer_type: Literal["long_answer"] = "long_answer"
    value: str | None = None

    @field_validator("value", mode="before")
    @classmethod
    def coerce_value(cls, v: Any) -> Any:
        return _as_text(v)


class TrueFalseSpec(_SpecBase):
    """True/false: the correct value as a bool, ``"true"``/``"false"`` or 1/0."""

    answer_type: Literal["true_false"] = "true_false"
    value: bool | int | str | None = Field(default=None, validation_alias=AliasChoices("value", "correct"))


class BlankSpec(_ValueSpec):
    """One blank of a fill-in-the-blank question."""

    position: int | None = None
    value: str = ""

    @field_validator("value", mode="before")
    @classmethod
    def coerce_value(cls, v: Any) -> Any:
        return "" if v is None else _as_text(v)


class FillBlankSpec(_SpecBase):
    answer_type: Literal["fill_blank"] = "fill_blank"
    blanks: list[BlankSpec] = []

    @field_validator("blanks", mode="before")
    @classmethod
    def coerce_blanks(cls, v: Any) -> Any:
        # A blank may be stored as its bare value
        if v is None:
            return []
        if isinstance(v, (list, tuple)):
            return [item if isinstance(item, (dict, BlankSpec)) else {"value": item} for item in v]
        return v


class MatchPair(_SpecBase):
    """A left/right pair shown to the student."""

    left: str = ""
    right: str = ""

    @field_validator("left", "right", mode="before")
    @classmethod
    def coerce_side(cls, v: Any) -> Any:
        return "" if v is None else _as_text(v)


class MatchingSpec(_SpecBase):
    """Matching: for each left item, the index of its right item."""

    answer_type: Literal["matching"] = "matching"
    pairs: list[MatchPair] = []
    correct_matches: list[int | None] = Field(
        default=[], validation_alias=AliasChoices("correct_matches", "correctMatches")
    )


AnswerSpec = Annotated[
    Union[
        ExactSpec,
        NumericSpec,
        MultipleChoiceSpec,
        ShortAnswerSpec,
        ExpressionSpec,
        LongAnswerSpec,
        TrueFalseSpec,
        FillBlankSpec,
        MatchingSpec,
    ],
    Field(discriminator="answer_type"),
]

_answer_spec_adapter: TypeAdapter[AnswerSpec] = TypeAdapter(AnswerSpec)


def build_answer_spec(answer_type: AnswerType | str, data: Any = None) -> AnswerSpec:
    """
    Coerce stored correct-answer data into the spec variant for ``answer_type``.

    Args:
        answer_type: The question's answer type
        data: A spec model, a mapping of stored fields, or ``None``

    Returns:
        The matching spec variant

    Raises:
        ValueError: If ``answer_type`` is unknown
        pydantic.ValidationError: If ``data`` does not fit the variant
    """
    kind = AnswerType(answer_type).value
    if isinstance(data, BaseModel):
        if getattr(data, "answer_type", None) == kind:
            return data
        data = data.model_dump(by_alias=False)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Correct answer for '{kind}' must be an object, got {type(data).__name__}")
    return _answer_spec_adapter.validate_python({**data, "answer_type": kind})
