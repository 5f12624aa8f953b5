"""Navigation — index transitions and read-only views over a WizardState.

All functions here are plain functions over one state value; none of them
touch the question config.  The state machine has ``N + 1`` positions over
``N = len(state.flattened_questions)`` entries:

  - ``0 … N-1``: resting on a *top-level* entry (``conditional_parent_id``
    is None).  Conditional entries are never landed on; they are presented
    together with their anchor as one question-set.
  - ``N``: terminal.  Reached by :func:`go_next` when no further top-level
    entry exists; ``is_complete`` is set at the same time.

:func:`go_back` does not clear ``is_complete``: a session that was completed
once stays flagged even if the user steps back to revise an answer.
"""

from __future__ import annotations

from typing import Any

from wizarding.models.question import BaseQuestion
from wizarding.models.state import (
    Answer,
    AnsweredQuestion,
    FlattenedQuestion,
    ProgressReport,
    WizardState,
)


# ------------------------------------------------------------------
# Question-set
# ------------------------------------------------------------------

def get_question_set(state: WizardState, index: int | None = None) -> list[BaseQuestion]:
    """Return the entry at ``index`` plus its visible conditional descendants.

    The descendants are the maximal contiguous run of following entries
    whose ``conditional_parent_id`` chains back to the starting entry.
    ``index`` defaults to the current index; out-of-bounds yields ``[]``.
    """
    flat = state.flattened_questions
    i = state.current_question_index if index is None else index
    if i < 0 or i >= len(flat):
        return []

    start = flat[i]
    out = [start.question]
    lineage = {start.id}
    for entry in flat[i + 1:]:
        if entry.conditional_parent_id not in lineage:
            break
        lineage.add(entry.id)
        out.append(entry.question)
    return out


def get_current_answers(
    state: WizardState, questions: list[BaseQuestion] | None = None
) -> list[Any]:
    """Stored answers for ``questions`` (default: the current question-set).

    Unanswered questions map to None, keeping positions aligned.
    """
    if questions is None:
        questions = get_question_set(state)
    return [state.answers.get(q.id) for q in questions]


# ------------------------------------------------------------------
# Transitions
# ------------------------------------------------------------------

def find_next_index(state: WizardState) -> int | None:
    """Index of the next top-level entry after the current one, or None."""
    flat = state.flattened_questions
    i = state.current_question_index
    if i >= len(flat) - 1:
        return None
    for j in range(i + 1, len(flat)):
        if not flat[j].is_conditional:
            return j
    return None


def find_prev_index(state: WizardState) -> int | None:
    """Index of the nearest top-level entry before the current one, or None."""
    flat = state.flattened_questions
    i = min(state.current_question_index, len(flat))
    if i < 1:
        return None
    for j in range(i - 1, -1, -1):
        if not flat[j].is_conditional:
            return j
    return None


def go_next(state: WizardState) -> bool:
    """Advance to the next top-level entry.

    Returns False — after moving to the terminal index and marking the
    state complete — when there is nowhere further to go.
    """
    j = find_next_index(state)
    if j is None:
        state.is_complete = True
        state.current_question_index = len(state.flattened_questions)
        return False

    state.current_question_index = j
    qid = state.flattened_questions[j].id
    if qid not in state.visited_questions:
        state.visited_questions.append(qid)
    return True


def go_back(state: WizardState) -> bool:
    """Step back to the previous top-level entry; False if there is none."""
    j = find_prev_index(state)
    if j is None:
        return False
    state.current_question_index = j
    return True


def resting_index(flattened: list[FlattenedQuestion], index: int) -> int:
    """Nearest position at or before ``index`` that navigation may rest on.

    Positions past the end collapse to the terminal index ``N``.  Otherwise
    the result is the closest top-level entry at or before ``index``; entry
    0 is always top-level, so one always exists.
    """
    if index >= len(flattened):
        return len(flattened)
    for j in range(max(index, 0), -1, -1):
        if not flattened[j].is_conditional:
            return j
    return 0


def can_go_next(state: WizardState) -> bool:
    return find_next_index(state) is not None


def can_go_back(state: WizardState) -> bool:
    return find_prev_index(state) is not None


def get_progress(state: WizardState) -> ProgressReport:
    """Position report: ``current`` is 1-based and capped at ``total``."""
    total = len(state.flattened_questions)
    current = min(state.current_question_index + 1, total)
    percentage = current / total * 100 if total > 0 else 0.0
    return ProgressReport(current=current, total=total, percentage=percentage)


# ------------------------------------------------------------------
# Answer views
# ------------------------------------------------------------------

def get_answers(state: WizardState) -> list[Answer]:
    """All stored answers, visible or not, in the order they were first stored."""
    return [Answer(question_id=qid, value=value) for qid, value in state.answers.items()]


def get_answers_object(state: WizardState) -> dict[str, Any]:
    """A plain ``{question_id: value}`` copy of the answer map."""
    return dict(state.answers)


def get_answered_questions(state: WizardState) -> list[AnsweredQuestion]:
    """Visible questions that have a stored answer, in flattened order.

    Answers kept for hidden questions are left out; use
    :func:`get_answers_object` to see those.
    """
    return [
        AnsweredQuestion(question=entry.question, answer=state.answers[entry.id])
        for entry in state.flattened_questions
        if entry.id in state.answers
    ]
