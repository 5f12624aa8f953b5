"""Session and result models — the contract between the engine and callers.

These models define what the engine hands back: the per-session
``WizardState`` it mutates, the ``FlattenedQuestion`` entries it computes,
and the small result records (``ValidationResult``, ``ProgressReport``, ...)
returned by validation and navigation calls.

``WizardState`` is owned by exactly one session.  ``flattened_questions`` is
derived data: it is rebuilt from config + answers on every answer mutation
and is never persisted — ``WizardSnapshot`` is the persistable subset.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import Field

from wizarding.models.question import Question, WizardModel


class FlattenedQuestion(WizardModel):
    """A visible question annotated with the id of its anchor.

    ``conditional_parent_id`` is None for top-level questions.  Only the
    navigation engine may land on entries without a parent.
    """

    question: Question
    conditional_parent_id: Optional[str] = None

    @property
    def id(self) -> str:
        return self.question.id

    @property
    def is_conditional(self) -> bool:
        return self.conditional_parent_id is not None


class Answer(WizardModel):
    """A single submitted answer; ``value``'s shape depends on the question type."""

    question_id: str
    value: Any = None


class AnsweredQuestion(WizardModel):
    """A visible question paired with its stored answer."""

    question: Question
    answer: Any = None


class ValidationResult(WizardModel):
    """Outcome of validating one answer.  ``error`` is set iff not valid."""

    is_valid: bool
    error: Optional[str] = None


class AnswerTypeCheck(WizardModel):
    """Outcome of a structural type-guard check."""

    is_valid: bool
    error_message: Optional[str] = None


class ProgressReport(WizardModel):
    """Position within the flattened sequence (1-based ``current``)."""

    current: int
    total: int
    percentage: float


class WizardState(WizardModel):
    """Mutable per-session state.

    ``current_question_index`` may equal ``len(flattened_questions)``, which
    denotes the terminal (complete) position.  ``answers`` keeps insertion
    order and also holds answers for questions that are currently hidden.
    """

    current_question_index: int = 0
    answers: dict[str, Any] = Field(default_factory=dict)
    flattened_questions: list[FlattenedQuestion] = Field(default_factory=list)
    visited_questions: list[str] = Field(default_factory=list)
    is_complete: bool = False


class WizardSnapshot(WizardModel):
    """Persistable view of a ``WizardState``.

    ``flattened_questions`` is intentionally absent: it is recomputed from the
    config and ``answers`` on restore.
    """

    current_question_index: int = 0
    answers: list[Answer] = Field(default_factory=list)
    visited_questions: list[str] = Field(default_factory=list)
    is_complete: bool = False
