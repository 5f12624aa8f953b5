"""Flattening — turns the question forest + answers into the visible sequence.

The walk is depth-first and pre-order, so a conditional child always sits
directly after its anchor and before the anchor's next sibling::

    q1 (boolean, answered True)
      c1  (equals True)      → q1, c1, q2
      c2  (equals False)
    q2

Visibility of a question's declared children:

  - anchor answered: a child is visible iff its condition holds against the
    anchor's stored answer
  - anchor unanswered, boolean: *all* children are visible (eager
    lookahead), so the user sees the follow-ups next to the yes/no toggle
  - anchor unanswered, any other type: no children are visible

The sequence is always rebuilt wholesale.  The walk uses an explicit stack
rather than recursion so that deeply nested configs cannot hit the
interpreter's recursion limit.
"""

from __future__ import annotations

import logging
from typing import Any

from wizarding.evaluator import ConditionEvaluator
from wizarding.models.question import BaseQuestion
from wizarding.models.state import FlattenedQuestion

logger = logging.getLogger(__name__)


def visible_children(
    question: BaseQuestion,
    answers: dict[str, Any],
    evaluator: ConditionEvaluator,
) -> list[BaseQuestion]:
    """Return the declared children of ``question`` that are currently visible."""
    if not question.conditional_questions:
        return []

    if question.id in answers:
        answer = answers[question.id]
        return [
            cq.question
            for cq in question.conditional_questions
            if evaluator.evaluate(cq.condition, answer)
        ]

    if question.type == "boolean":
        return [cq.question for cq in question.conditional_questions]

    return []


def rebuild(
    questions: list[BaseQuestion],
    answers: dict[str, Any],
    evaluator: ConditionEvaluator | None = None,
) -> list[FlattenedQuestion]:
    """Compute the ordered list of currently visible questions.

    Args:
        questions: the top-level questions, in display order
        answers: the session's answer map (question id → raw value)
        evaluator: condition evaluator; a fresh one is used when omitted

    Returns:
        FlattenedQuestion entries in depth-first order.
    """
    evaluator = evaluator or ConditionEvaluator()
    flattened: list[FlattenedQuestion] = []

    # (question, conditional_parent_id) pairs; reversed so pops come out in order
    stack: list[tuple[BaseQuestion, str | None]] = [(q, None) for q in reversed(questions)]
    while stack:
        question, parent_id = stack.pop()
        flattened.append(FlattenedQuestion(question=question, conditional_parent_id=parent_id))

        children = visible_children(question, answers, evaluator)
        stack.extend((child, question.id) for child in reversed(children))

    logger.debug(
        "Rebuilt flattened questions: %d visible from %d top-level",
        len(flattened),
        len(questions),
    )
    return flattened
