"""Navigation tests — index transitions, question-sets, progress, answer views.

Verifies the contract:

  | Call                    | Effect                                               |
  |-------------------------|------------------------------------------------------|
  | go_next, more top-level | move to next top-level entry, record it as visited   |
  | go_next, none left      | index = N, is_complete = True, returns False         |
  | go_back, earlier entry  | move to previous top-level entry                     |
  | go_back, at start       | returns False, state unchanged                       |

Conditional entries are never landed on: they ride along in their anchor's
question-set.
"""

import random

import pytest

from conftest import q
from wizarding.engine import WizardEngine
from wizarding.navigation import (
    can_go_back,
    can_go_next,
    find_next_index,
    find_prev_index,
    get_answered_questions,
    get_answers,
    get_answers_object,
    get_current_answers,
    get_progress,
    get_question_set,
    go_back,
    go_next,
    resting_index,
)


@pytest.fixture
def engine():
    """a (boolean, two lookahead children) → b (text) → c (number)."""
    a = q(
        "a",
        "boolean",
        children=[
            ("equals", True, q("a_yes", "boolean", children=[("equals", True, q("a_yes_more"))])),
            ("equals", False, q("a_no")),
        ],
    )
    return WizardEngine([a, q("b"), q("c", "number")])


@pytest.fixture
def state(engine):
    return engine.init_state()


# =====================================================================
# Transitions
# =====================================================================


class TestForward:

    def test_next_skips_conditional_entries(self, state):
        """From 'a', the next landing spot is 'b', past a's children."""
        assert [e.id for e in state.flattened_questions] == ["a", "a_yes", "a_yes_more", "a_no", "b", "c"]
        assert find_next_index(state) == 4
        assert go_next(state) is True
        assert state.current_question_index == 4
        assert state.visited_questions == ["b"]

    def test_next_at_last_entry_completes(self, state):
        state.current_question_index = 5
        assert can_go_next(state) is False
        assert go_next(state) is False
        assert state.is_complete is True
        assert state.current_question_index == 6

    def test_next_when_only_conditionals_remain_completes(self):
        only = WizardEngine([q("x", "boolean", children=[("equals", True, q("x1"))])])
        state = only.init_state()
        assert find_next_index(state) is None
        assert go_next(state) is False
        assert state.current_question_index == 2
        assert state.is_complete is True

    def test_next_on_empty_sequence(self):
        state = WizardEngine([]).init_state()
        assert go_next(state) is False
        assert state.current_question_index == 0
        assert state.is_complete is True


class TestBackward:

    def test_back_at_start(self, state):
        assert can_go_back(state) is False
        assert go_back(state) is False
        assert state.current_question_index == 0

    def test_back_skips_conditional_entries(self, state):
        state.current_question_index = 4
        assert find_prev_index(state) == 0
        assert go_back(state) is True
        assert state.current_question_index == 0

    def test_back_from_terminal_keeps_is_complete(self, state):
        """Completion survives stepping back to revise an answer."""
        while go_next(state):
            pass
        assert state.is_complete is True
        assert go_back(state) is True
        assert state.current_question_index == 5
        assert state.is_complete is True

    @pytest.mark.parametrize(
        "index, expected",
        [(0, 0), (1, 0), (2, 0), (3, 0), (4, 4), (5, 5), (6, 6), (40, 6), (-3, 0)],
    )
    def test_resting_index(self, state, index, expected):
        """Conditional positions fall back to their top-level anchor."""
        assert resting_index(state.flattened_questions, index) == expected

    def test_answering_an_earlier_anchor_keeps_the_cursor(self, engine, state):
        """Hiding a's two-deep branch from 'c' keeps the cursor on 'c'."""
        go_next(state)
        go_next(state)
        assert state.current_question_index == 5

        engine.answer_questions(state, [{"question_id": "a", "value": False}])
        assert [e.id for e in state.flattened_questions] == ["a", "a_no", "b", "c"]
        assert state.current_question_index == 3
        assert [x.id for x in get_question_set(state)] == ["c"]

    def test_visited_never_duplicates(self, state):
        """Arbitrary next/back walks keep visited_questions unique."""
        rng = random.Random(7)
        for _ in range(200):
            (go_next if rng.random() < 0.6 else go_back)(state)
        assert len(state.visited_questions) == len(set(state.visited_questions))
        assert set(state.visited_questions) <= {"b", "c"}


# =====================================================================
# Question-set
# =====================================================================


class TestQuestionSet:

    def test_set_includes_visible_descendants(self, state):
        assert [x.id for x in get_question_set(state)] == ["a", "a_yes", "a_yes_more", "a_no"]

    def test_set_shrinks_after_answer(self, engine, state):
        engine.answer_questions(state, [{"question_id": "a", "value": False}])
        assert [x.id for x in get_question_set(state)] == ["a", "a_no"]

    def test_set_for_plain_question(self, state):
        assert [x.id for x in get_question_set(state, 4)] == ["b"]

    def test_set_starting_on_a_conditional_entry(self, state):
        assert [x.id for x in get_question_set(state, 1)] == ["a_yes", "a_yes_more"]

    @pytest.mark.parametrize("index", [-1, 6, 99])
    def test_out_of_bounds(self, state, index):
        assert get_question_set(state, index) == []

    def test_terminal_index_has_no_set(self, state):
        state.current_question_index = len(state.flattened_questions)
        assert get_question_set(state) == []

    def test_current_answers_align_with_set(self, engine, state):
        engine.answer_questions(state, [{"question_id": "a_no", "value": "fine"}])
        assert get_current_answers(state) == [None, None, None, "fine"]


# =====================================================================
# Progress
# =====================================================================


class TestProgress:

    def test_progress_at_start(self, state):
        report = get_progress(state)
        assert (report.current, report.total, report.percentage) == (1, 6, pytest.approx(100 / 6))

    def test_progress_at_terminal_is_full(self, state):
        state.current_question_index = 6
        report = get_progress(state)
        assert (report.current, report.total, report.percentage) == (6, 6, 100)

    def test_progress_empty(self):
        report = get_progress(WizardEngine([]).init_state())
        assert (report.current, report.total, report.percentage) == (0, 0, 0)

    def test_percentage_bounds_hold_over_a_walk(self, state):
        """0 <= percentage <= 100, and 100 exactly when current == total."""
        for _ in range(10):
            report = get_progress(state)
            assert 0 <= report.percentage <= 100
            assert (report.percentage == 100) == (report.current == report.total)
            go_next(state)


# =====================================================================
# Answer views
# =====================================================================


class TestAnswerViews:

    def test_views_keep_insertion_order(self, engine, state):
        engine.answer_questions(
            state,
            [{"question_id": "c", "value": 3}, {"question_id": "b", "value": "hi"}],
        )
        assert [(x.question_id, x.value) for x in get_answers(state)] == [("c", 3), ("b", "hi")]
        assert get_answers_object(state) == {"c": 3, "b": "hi"}

    def test_answers_object_is_a_copy(self, engine, state):
        engine.answer_questions(state, [{"question_id": "b", "value": "hi"}])
        snapshot = get_answers_object(state)
        snapshot["b"] = "changed"
        assert state.answers["b"] == "hi"

    def test_answered_questions_only_lists_visible(self, engine, state):
        engine.answer_questions(
            state,
            [
                {"question_id": "a", "value": True},
                {"question_id": "a_yes", "value": True},
                {"question_id": "b", "value": "x"},
            ],
        )
        engine.answer_questions(state, [{"question_id": "a", "value": False}])

        answered = [(x.question.id, x.answer) for x in get_answered_questions(state)]
        assert answered == [("a", False), ("b", "x")]
        assert get_answers_object(state)["a_yes"] is True
