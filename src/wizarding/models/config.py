"""WizardConfig — a named questionnaire definition as loaded from a file.

Config files carry a little metadata around the question forest::

    wizardId: trip-planner
    title: Plan your trip
    questions:
      - id: destination
        type: text
        question: Where are you going?
        required: true

Question ids are used as answer-map keys, so they must be unique across the
whole forest, not just among siblings.  ``WizardConfig`` enforces that at
load time; the engine itself does not.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterator, List, Optional

from pydantic import Field, model_validator

from wizarding.models.question import BaseQuestion, Question, WizardModel


def iter_questions(questions: list[BaseQuestion]) -> Iterator[BaseQuestion]:
    """Yield every question in the forest, depth-first, parents first."""
    stack = list(reversed(questions))
    while stack:
        q = stack.pop()
        yield q
        stack.extend(reversed([cq.question for cq in q.conditional_questions]))


class WizardConfig(WizardModel):
    """A questionnaire: metadata plus the top-level question list."""

    wizard_id: str
    title: str
    description: Optional[str] = None
    questions: List[Question] = Field(default_factory=list)

    @model_validator(mode="after")
    def _chk_unique_ids(self):
        counts = Counter(q.id for q in iter_questions(self.questions))
        dupes = sorted(qid for qid, n in counts.items() if n > 1)
        if dupes:
            raise ValueError(f"Duplicate question ids in wizard '{self.wizard_id}': {dupes}")
        return self
