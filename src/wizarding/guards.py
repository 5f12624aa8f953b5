"""Structural type guards for answer values.

Guards answer one question only: *does this value have the right shape for
its question type?*  They carry no business rules (ranges, patterns, date
bounds) — those live in :mod:`wizarding.validator`.  Use them to sanitise
untrusted input, e.g. answers restored from a client payload, before it
reaches the engine.

    Type            Accepted shape
    -------------   --------------------------------------------------
    text            str
    boolean         bool
    number          finite int/float (bool and NaN rejected)
    multiple-choice str, or list of str
    number-range    mapping with finite numeric ``min`` and ``max``
    date            ISO date string naming a real calendar day
    date-range      mapping with ISO date strings ``start`` and ``end``
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from datetime import date, datetime, timezone
from typing import Any, Callable

from wizarding.constants import EXPECTED_DESCRIPTIONS
from wizarding.models.state import AnswerTypeCheck

# Leading "YYYY-MM-DD" of an ISO date or datetime string.
_ISO_DATE_PREFIX = re.compile(r"^(\d{4})-(\d{2})-(\d{2})")

AnswerGuard = Callable[[Any], bool]


def parse_iso_date(value: Any) -> date | None:
    """Parse an ISO date/datetime string into its UTC calendar date.

    Returns None unless the string parses *and* its UTC year/month/day match
    the literal date prefix.  Out-of-range days such as ``2024-02-30`` are
    rejected rather than rolled over into the next month, and so is an
    offset datetime whose UTC instant falls on a different day.
    """
    if not isinstance(value, str):
        return None
    match = _ISO_DATE_PREFIX.match(value)
    if match is None:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)

    year, month, day = (int(g) for g in match.groups())
    if (parsed.year, parsed.month, parsed.day) != (year, month, day):
        return None
    return parsed.date()


def is_text_answer(value: Any) -> bool:
    return isinstance(value, str)


def is_boolean_answer(value: Any) -> bool:
    return isinstance(value, bool)


def is_number_answer(value: Any) -> bool:
    # bool is an int subclass; True is not a number answer
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def is_multiple_choice_answer(value: Any) -> bool:
    if isinstance(value, str):
        return True
    return isinstance(value, list) and all(isinstance(v, str) for v in value)


def is_number_range_answer(value: Any) -> bool:
    if not isinstance(value, Mapping):
        return False
    return is_number_answer(value.get("min")) and is_number_answer(value.get("max"))


def is_date_answer(value: Any) -> bool:
    return parse_iso_date(value) is not None


def is_date_range_answer(value: Any) -> bool:
    if not isinstance(value, Mapping):
        return False
    return is_date_answer(value.get("start")) and is_date_answer(value.get("end"))


# One guard per question type.
_GUARDS: dict[str, AnswerGuard] = {
    "text": is_text_answer,
    "boolean": is_boolean_answer,
    "number": is_number_answer,
    "multiple-choice": is_multiple_choice_answer,
    "number-range": is_number_range_answer,
    "date": is_date_answer,
    "date-range": is_date_range_answer,
}


def create_answer_type_guard(question_type: str) -> AnswerGuard:
    """Return the structural guard for ``question_type``.

    Raises:
        KeyError: if ``question_type`` is not a known question type.
    """
    return _GUARDS[question_type]


def validate_answer_type(question_type: str, value: Any) -> AnswerTypeCheck:
    """Check ``value`` against the guard for ``question_type``.

    The failure message names the expected shape and the runtime type that
    was actually received, e.g. ``Expected a number, but received str``.
    """
    guard = create_answer_type_guard(question_type)
    if guard(value):
        return AnswerTypeCheck(is_valid=True)

    return AnswerTypeCheck(
        is_valid=False,
        error_message=(
            f"Expected {EXPECTED_DESCRIPTIONS[question_type]}, "
            f"but received {type(value).__name__}"
        ),
    )
