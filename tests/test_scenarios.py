"""End-to-end walkthroughs of the engine + navigation contract.

Each scenario drives a session the way a UI layer would: read the current
question-set, submit answers for it, then advance.
"""

from datetime import timedelta

from conftest import ids, q
from wizarding.engine import WizardEngine
from wizarding.navigation import (
    get_answers_object,
    get_progress,
    get_question_set,
    go_next,
)


def _progress(state):
    report = get_progress(state)
    return report.current, report.total, report.percentage


def test_linear_two_question_walk():
    """Text then number: progress moves from 50% to 100%."""
    engine = WizardEngine(
        [q("q1", "text", required=True), q("q2", "number", required=True)]
    )
    state = engine.init_state()
    assert [x.id for x in get_question_set(state)] == ["q1"]
    assert _progress(state) == (1, 2, 50)

    results = engine.answer_questions(state, [{"question_id": "q1", "value": "J"}])
    assert results[0].is_valid is True
    assert go_next(state) is True
    assert _progress(state) == (2, 2, 100)


def test_boolean_lookahead_toggles_child():
    """Unanswered boolean shows its child; answers then gate it."""
    engine = WizardEngine(
        [q("q1", "boolean", children=[("equals", True, q("c1", "text"))])]
    )
    state = engine.init_state()
    assert ids(state) == ["q1", "c1"]

    engine.answer_questions(state, [{"question_id": "q1", "value": False}])
    assert ids(state) == ["q1"]

    engine.answer_questions(state, [{"question_id": "q1", "value": True}])
    assert ids(state) == ["q1", "c1"]


def test_number_range_rules():
    engine = WizardEngine(
        [
            q("loose", "number-range"),
            q("bounded", "number-range", validation={"min": 10, "max": 1000}),
        ]
    )
    state = engine.init_state()
    inverted, in_bounds = engine.answer_questions(
        state,
        [
            {"question_id": "loose", "value": {"min": 100, "max": 10}},
            {"question_id": "bounded", "value": {"min": 50, "max": 500}},
        ],
    )
    assert inverted.is_valid is False
    assert inverted.error == "Minimum value cannot be greater than maximum value"
    assert in_bounds.is_valid is True
    assert get_answers_object(state) == {"bounded": {"min": 50, "max": 500}}


def test_yesterday_fails_min_today(today):
    engine = WizardEngine([q("when", "date", validation={"minDate": "today"})])
    state = engine.init_state()
    yesterday = (today - timedelta(days=1)).isoformat()
    (result,) = engine.answer_questions(
        state, [{"question_id": "when", "value": yesterday}], today=today
    )
    assert result.is_valid is False
    assert "today or later" in result.error


def test_flipping_root_hides_whole_branch(nested_engine):
    """Three nested levels disappear in one rebuild; their answers survive."""
    state = nested_engine.init_state()
    nested_engine.answer_questions(
        state,
        [
            {"question_id": "root", "value": True},
            {"question_id": "mid", "value": True},
            {"question_id": "leaf", "value": True},
            {"question_id": "detail", "value": "window seat"},
        ],
    )
    assert ids(state) == ["root", "mid", "leaf", "detail", "after"]
    assert [x.id for x in get_question_set(state)] == ["root", "mid", "leaf", "detail"]

    nested_engine.answer_questions(state, [{"question_id": "root", "value": False}])
    assert ids(state) == ["root", "after"]
    assert get_answers_object(state) == {
        "root": False,
        "mid": True,
        "leaf": True,
        "detail": "window seat",
    }

    # Flipping back restores the branch with the kept answers
    nested_engine.answer_questions(state, [{"question_id": "root", "value": True}])
    assert ids(state) == ["root", "mid", "leaf", "detail", "after"]


def test_full_walk_with_question_sets(nested_engine):
    """Answer each question-set in turn until the wizard completes."""
    state = nested_engine.init_state()
    assert [x.id for x in get_question_set(state)] == ["root", "mid", "leaf", "detail"]

    nested_engine.answer_questions(
        state,
        [{"question_id": "root", "value": True}, {"question_id": "mid", "value": False}],
    )
    assert [x.id for x in get_question_set(state)] == ["root", "mid"]
    assert go_next(state) is True
    assert [x.id for x in get_question_set(state)] == ["after"]

    nested_engine.answer_questions(state, [{"question_id": "after", "value": "done"}])
    assert go_next(state) is False
    assert state.is_complete is True
    assert _progress(state) == (3, 3, 100)
    assert state.visited_questions == ["after"]
