"""Question type models for conditional questionnaires.

Each question type maps to a specific UI component and answer shape:

    - text: free text input                         → str
    - boolean: yes/no toggle                        → bool
    - number: numeric input                         → int | float
    - multiple-choice: pick one or more options     → str | list[str]
    - number-range: numeric min/max pair            → {min, max}
    - date: ISO date picker                         → "YYYY-MM-DD"
    - date-range: ISO start/end pair                → {start, end}

Any question may declare ``conditional_questions``: children that become
visible only when a :class:`Condition` holds against the parent's answer.
The parent is called the *anchor* of its conditional children.

The discriminated ``Question`` union uses ``type`` as its discriminator.
The ``question_mapper`` dict maps type strings to their Pydantic classes.

Field names are snake_case; the camelCase spelling (``conditionalQuestions``,
``minLength``, ...) is accepted on input as well.
"""

from __future__ import annotations

import re
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class WizardModel(BaseModel):
    """Base for every wizard model: snake_case fields, camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Shared option/rule models ---

class Option(WizardModel):
    """A selectable option for multiple-choice questions."""

    value: str
    label: str
    image: Optional[str] = None


class Validation(WizardModel):
    """Type-specific business rules.  Only the fields relevant to the
    question's type are consulted by the validator.

    ``min_date`` / ``max_date`` accept an ISO date or the sentinel ``"today"``.
    ``custom_message`` replaces the default message of any rule that fails
    (structural errors keep their own messages).
    """

    min: Optional[float] = None
    max: Optional[float] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[str] = None
    min_date: Optional[str] = None
    max_date: Optional[str] = None
    custom_message: Optional[str] = None

    @model_validator(mode="after")
    def _chk(self):
        if self.pattern is not None:
            try:
                re.compile(self.pattern)
            except re.error as exc:
                raise ValueError(f"invalid pattern {self.pattern!r}: {exc}") from exc
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError("min must be <= max")
        return self


class Condition(WizardModel):
    """A test applied to the anchor question's stored answer.

    Operators:
      - equals: strict equality
      - contains: element membership (list answers) or equality
      - greaterThan, lessThan: numeric comparisons
      - between: value is [min, max] inclusive

    ``operator`` is deliberately an open string: unknown operators load and
    evaluate to False rather than failing the whole config.
    """

    operator: str
    value: Any = None


class ConditionalQuestion(WizardModel):
    """A child question shown only while ``condition`` holds."""

    condition: Condition
    question: Question


# --- Base question type ---

class BaseQuestion(WizardModel):
    """Fields shared by all question types."""

    id: str
    question: str
    required: bool = False
    help_text: Optional[str] = None
    validation: Optional[Validation] = None
    conditional_questions: List[ConditionalQuestion] = Field(default_factory=list)

    @property
    def has_conditionals(self) -> bool:
        return bool(self.conditional_questions)


# --- Concrete question types ---

class TextQuestion(BaseQuestion):
    """Free text input."""

    type: Literal["text"] = "text"
    default: Optional[str] = None


class BooleanQuestion(BaseQuestion):
    """Yes/no question.  While unanswered, all of its conditional children
    are shown alongside it (eager lookahead)."""

    type: Literal["boolean"] = "boolean"
    default: Optional[bool] = None


class NumberQuestion(BaseQuestion):
    """Numeric input, optionally bounded by ``validation.min``/``max``."""

    type: Literal["number"] = "number"
    default: Optional[float] = None


class MultipleChoiceQuestion(BaseQuestion):
    """Pick one option, or several when ``allow_multiple`` is set."""

    type: Literal["multiple-choice"] = "multiple-choice"
    options: List[Option] = Field(default_factory=list)
    allow_multiple: bool = False
    default: Union[str, List[str], None] = None


class NumberRangeQuestion(BaseQuestion):
    """A ``{min, max}`` pair, each endpoint bounded by the validation rules."""

    type: Literal["number-range"] = "number-range"
    default: Optional[dict[str, float]] = None


class DateQuestion(BaseQuestion):
    """A single ISO calendar date."""

    type: Literal["date"] = "date"
    default: Optional[str] = None


class DateRangeQuestion(BaseQuestion):
    """A ``{start, end}`` pair of ISO calendar dates."""

    type: Literal["date-range"] = "date-range"
    default: Optional[dict[str, str]] = None


# --- Discriminated union of all question types ---

Question = Annotated[
    Union[
        TextQuestion,
        BooleanQuestion,
        NumberQuestion,
        MultipleChoiceQuestion,
        NumberRangeQuestion,
        DateQuestion,
        DateRangeQuestion,
    ],
    Field(discriminator="type"),
]

# Maps type string → Pydantic class for dynamic deserialization from YAML/JSON.
question_mapper: dict[str, type[BaseQuestion]] = {
    "text": TextQuestion,
    "boolean": BooleanQuestion,
    "number": NumberQuestion,
    "multiple-choice": MultipleChoiceQuestion,
    "number-range": NumberRangeQuestion,
    "date": DateQuestion,
    "date-range": DateRangeQuestion,
}


def parse_question(raw: Any) -> BaseQuestion:
    """Turn a raw dict (or an already-built model) into a typed question.

    Raises:
        ValueError: if ``type`` is missing or not a known question type.
    """
    if isinstance(raw, BaseQuestion):
        return raw
    qtype = raw.get("type")
    cls = question_mapper.get(qtype)
    if cls is None:
        raise ValueError(f"Unknown question type '{qtype}' for question {raw.get('id')!r}")
    return cls.model_validate(raw)


# Resolve the ConditionalQuestion ↔ Question recursion.
ConditionalQuestion.model_rebuild()
for _cls in (BaseQuestion, *question_mapper.values()):
    _cls.model_rebuild()
