from datetime import date
from pathlib import Path

import pytest

from wizarding.engine import WizardEngine
from wizarding.models.question import parse_question

FIXTURES_DIR = Path(__file__).parent / "fixtures"

# Fixed "today" for deterministic date validation.
TODAY = date(2024, 6, 15)


def q(qid, qtype="text", *, required=False, validation=None, children=None, **extra):
    """Shorthand to build a typed question.

    ``children`` is a list of ``(operator, value, child_question)`` tuples.
    """
    raw = {"id": qid, "type": qtype, "question": f"{qid}?", "required": required, **extra}
    if validation is not None:
        raw["validation"] = validation
    if children:
        raw["conditional_questions"] = [
            {"condition": {"operator": op, "value": value}, "question": child}
            for op, value, child in children
        ]
    return parse_question(raw)


def ids(state):
    """Flattened question ids of a state, in order."""
    return [entry.id for entry in state.flattened_questions]


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def fixtures_dir():
    return FIXTURES_DIR


@pytest.fixture
def nested_engine():
    """Three-level chain of boolean anchors with a sibling after the root.

        root (boolean)
          └─ mid (boolean, root == True)
               └─ leaf (boolean, mid == True)
                    └─ detail (text, leaf == True)
        after (text)
    """
    detail = q("detail", "text")
    leaf = q("leaf", "boolean", children=[("equals", True, detail)])
    mid = q("mid", "boolean", children=[("equals", True, leaf)])
    root = q("root", "boolean", required=True, children=[("equals", True, mid)])
    return WizardEngine([root, q("after", "text")])
