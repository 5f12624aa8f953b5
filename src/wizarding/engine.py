"""WizardEngine — owns a questionnaire config and drives per-session state.

Stateless engine pattern: the engine holds only the (effectively immutable)
question forest.  Each session's progress lives in a :class:`WizardState`
that the caller owns and passes back in on every call.  One engine can
serve any number of sessions; one state must only ever be mutated by one
caller at a time.

Typical flow::

    engine = WizardEngine(config)
    state = engine.init_state()

    questions = get_question_set(state)            # anchor + visible children
    results = engine.answer_questions(state, [
        {"question_id": q.id, "value": ...} for q in questions
    ])
    if all(r.is_valid for r in results):
        go_next(state)

Navigation and read-only views are the plain functions in
:mod:`wizarding.navigation`; the engine handles everything that needs the
config: seeding, answering, resetting, appending questions and restoring
persisted snapshots.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Iterable

from wizarding.evaluator import ConditionEvaluator
from wizarding.flattening import rebuild
from wizarding.models.config import WizardConfig, iter_questions
from wizarding.models.question import BaseQuestion, parse_question
from wizarding.models.state import (
    Answer,
    ValidationResult,
    WizardSnapshot,
    WizardState,
)
from wizarding.navigation import resting_index
from wizarding.validator import validate_answer

logger = logging.getLogger(__name__)


def _to_answer(raw: Answer | dict) -> Answer:
    return raw if isinstance(raw, Answer) else Answer.model_validate(raw)


def _answer_map(answers: Iterable[Answer | dict] | None) -> dict[str, Any]:
    """Build a fresh answer map; later entries win for repeated ids."""
    result: dict[str, Any] = {}
    for raw in answers or ():
        answer = _to_answer(raw)
        result[answer.question_id] = answer.value
    return result


class WizardEngine:
    """Orchestrates validation, answer storage and flattening.

    Args:
        questions: a :class:`WizardConfig`, or a list of top-level questions
            (models or raw dicts)
    """

    def __init__(self, questions: WizardConfig | Iterable[BaseQuestion | dict]) -> None:
        if isinstance(questions, WizardConfig):
            self.config: WizardConfig | None = questions
            self._questions: list[BaseQuestion] = list(questions.questions)
        else:
            self.config = None
            self._questions = [parse_question(q) for q in questions]

        self._evaluator = ConditionEvaluator()
        self._index: dict[str, BaseQuestion] = {}
        self._reindex()

    @property
    def questions(self) -> list[BaseQuestion]:
        """The top-level questions, in display order (a copy)."""
        return list(self._questions)

    # ==================================================================
    # Config lookup
    # ==================================================================

    def _reindex(self) -> None:
        """Rebuild the id → question lookup over the whole forest.

        Duplicate ids are a config error; ``WizardConfig`` rejects them at
        load time.  A bare question list is tolerated: the first occurrence
        wins and the rest are logged.
        """
        index: dict[str, BaseQuestion] = {}
        for q in iter_questions(self._questions):
            if q.id in index:
                logger.warning("Duplicate question id %r; keeping the first occurrence", q.id)
                continue
            index[q.id] = q
        self._index = index

    def get_question(self, question_id: str) -> BaseQuestion | None:
        """Look up any question in the forest (top-level or nested) by id."""
        return self._index.get(question_id)

    def _rebuild(self, state: WizardState) -> None:
        state.flattened_questions = rebuild(self._questions, state.answers, self._evaluator)

    def _rebuild_in_place(self, state: WizardState) -> None:
        """Rebuild and keep the cursor on the entry it was resting on.

        An answer to an earlier question can add or remove conditional
        entries before the cursor, shifting every later position.  The
        cursor follows its entry's id; if that entry is gone it falls back
        to the closest surviving entry before it.  A terminal state stays
        terminal over the new sequence.
        """
        flat = state.flattened_questions
        i = state.current_question_index
        if i >= len(flat):
            self._rebuild(state)
            state.current_question_index = len(state.flattened_questions)
            return

        trail = [entry.id for entry in flat[: max(i, 0) + 1]]
        self._rebuild(state)

        positions: dict[str, int] = {}
        for j, entry in enumerate(state.flattened_questions):
            positions.setdefault(entry.id, j)
        target = next((positions[qid] for qid in reversed(trail) if qid in positions), 0)
        state.current_question_index = resting_index(state.flattened_questions, target)

    # ==================================================================
    # Session lifecycle
    # ==================================================================

    def init_state(self, answers: Iterable[Answer | dict] | None = None) -> WizardState:
        """Create a fresh session state, optionally seeded with answers.

        Seed answers are stored as given (not validated): they typically
        come from a previous session that already validated them.
        """
        state = WizardState(answers=_answer_map(answers))
        self._rebuild(state)
        return state

    def reset(self, state: WizardState, new_answers: Iterable[Answer | dict] | None = None) -> None:
        """Return ``state`` to the start, replacing its answers.

        The answer map is always a new dict, so a map shared with an earlier
        snapshot is never mutated.
        """
        state.current_question_index = 0
        state.is_complete = False
        state.visited_questions = []
        state.answers = _answer_map(new_answers)
        self._rebuild(state)

    # ==================================================================
    # Answering
    # ==================================================================

    def answer_questions(
        self,
        state: WizardState,
        answers: Iterable[Answer | dict],
        *,
        today: date | None = None,
    ) -> list[ValidationResult]:
        """Validate and store a batch of answers, then rebuild once.

        Answers for ids not present in the config are dropped without a
        result entry.  Invalid answers are reported and not stored; any
        previously stored value for that id is kept.  After the rebuild the
        current index still points at the question the user was on.

        Args:
            state: the session state to update
            answers: ``Answer`` models or ``{question_id, value}`` dicts
            today: the date the ``"today"`` validation sentinel resolves to
                (defaults to the current UTC date)

        Returns:
            One ValidationResult per recognized answer, in submission order.

        Raises:
            pydantic.ValidationError: for a submission that is not an
                ``Answer`` and has no ``question_id``.  Nothing from the
                batch is stored in that case.
        """
        submitted = [_to_answer(raw) for raw in answers]

        results: list[ValidationResult] = []
        for answer in submitted:
            question = self.get_question(answer.question_id)
            if question is None:
                logger.debug("Dropping answer for unknown question id %r", answer.question_id)
                continue

            result = validate_answer(question, answer.value, today=today)
            if result.is_valid:
                state.answers[answer.question_id] = answer.value
            else:
                logger.debug("Rejected answer for %s: %s", answer.question_id, result.error)
            results.append(result)

        self._rebuild_in_place(state)
        return results

    # ==================================================================
    # Config mutation
    # ==================================================================

    def add_questions(self, state: WizardState, questions: Iterable[BaseQuestion | dict]) -> None:
        """Append top-level questions to the config and rebuild ``state``.

        Index, answers and visited list are left untouched.  Other states
        created from this engine pick the new questions up on their next
        rebuild.  ``config``, when set, is replaced by a copy that lists the
        appended questions too.
        """
        added = [parse_question(q) for q in questions]
        self._questions.extend(added)
        if self.config is not None:
            self.config = self.config.model_copy(update={"questions": list(self._questions)})
        self._reindex()
        self._rebuild(state)
        logger.info("Added %d question(s); %d top-level total", len(added), len(self._questions))

    # ==================================================================
    # Persistence
    # ==================================================================

    def snapshot(self, state: WizardState) -> WizardSnapshot:
        """The persistable subset of ``state`` (no flattened questions)."""
        return WizardSnapshot(
            current_question_index=state.current_question_index,
            answers=[Answer(question_id=k, value=v) for k, v in state.answers.items()],
            visited_questions=list(state.visited_questions),
            is_complete=state.is_complete,
        )

    def restore(self, snapshot: WizardSnapshot | dict) -> WizardState:
        """Rebuild a live state from a snapshot.

        The flattened sequence is recomputed from the current config.  If the
        config changed since the snapshot was taken, the index is clamped
        into ``[0, N]`` and moved back onto the nearest top-level entry.
        """
        if not isinstance(snapshot, WizardSnapshot):
            snapshot = WizardSnapshot.model_validate(snapshot)

        state = self.init_state(snapshot.answers)
        state.current_question_index = resting_index(
            state.flattened_questions, max(0, snapshot.current_question_index)
        )
        state.visited_questions = list(dict.fromkeys(snapshot.visited_questions))
        state.is_complete = snapshot.is_complete
        return state
