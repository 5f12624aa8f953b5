"""Answer validation — per-question-type business rules.

:func:`validate_answer` is the single entry point used by the engine.  It
never raises for bad input: every problem is reported through a
``ValidationResult`` with ``is_valid=False`` and a human-readable ``error``.

Order of checks:
  1. Required — ``None`` or ``""`` fails for required questions and is
     accepted (skipping all further checks) for optional ones.
  2. Shape — the structural type guard for the question's type.
  3. Rules — the type-specific ``validation`` block (lengths, pattern,
     numeric bounds, date bounds).

``custom_message`` replaces the default message of a failing rule but never
the message of a shape or required failure.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from datetime import date, datetime, timezone
from typing import Any, Callable

from wizarding.constants import REQUIRED_MESSAGE, TODAY_SENTINEL
from wizarding.guards import (
    is_number_range_answer,
    parse_iso_date,
    validate_answer_type,
)
from wizarding.models.question import BaseQuestion, Validation
from wizarding.models.state import ValidationResult

logger = logging.getLogger(__name__)

_Rule = Callable[[Any, Validation, date], ValidationResult]


def _ok() -> ValidationResult:
    return ValidationResult(is_valid=True)


def _fail(message: str) -> ValidationResult:
    return ValidationResult(is_valid=False, error=message)


def _rule_fail(rules: Validation, default_message: str) -> ValidationResult:
    return _fail(rules.custom_message or default_message)


def _num(n: float) -> int | float:
    """Render 10.0 as 10 in messages."""
    return int(n) if float(n).is_integer() else n


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def utc_today() -> date:
    """The current calendar date in UTC — what ``"today"`` means in rules."""
    return datetime.now(timezone.utc).date()


# ------------------------------------------------------------------
# Entry point
# ------------------------------------------------------------------

def validate_answer(
    question: BaseQuestion,
    value: Any,
    *,
    today: date | None = None,
) -> ValidationResult:
    """Validate ``value`` as an answer to ``question``.

    Args:
        question: the question being answered
        value: the raw answer value
        today: the date that the ``"today"`` sentinel resolves to; defaults
            to the current UTC date at call time

    Returns:
        A ValidationResult; ``error`` is set when the answer is rejected.
    """
    if _is_empty(value):
        return _fail(REQUIRED_MESSAGE) if question.required else _ok()

    rules = question.validation or Validation()
    return _TYPE_RULES[question.type](value, rules, today or utc_today())


# ------------------------------------------------------------------
# Type-specific validators
# ------------------------------------------------------------------

def _shape(question_type: str, value: Any) -> ValidationResult | None:
    """Return a failure if ``value`` has the wrong shape, else None."""
    check = validate_answer_type(question_type, value)
    if check.is_valid:
        return None
    return _fail(check.error_message)


def _validate_text(value: Any, rules: Validation, today: date) -> ValidationResult:
    bad_shape = _shape("text", value)
    if bad_shape is not None:
        return bad_shape

    if rules.min_length is not None and len(value) < rules.min_length:
        return _rule_fail(rules, f"Minimum length is {rules.min_length} characters")

    if rules.max_length is not None and len(value) > rules.max_length:
        return _rule_fail(rules, f"Maximum length is {rules.max_length} characters")

    if rules.pattern and not re.search(rules.pattern, value):
        return _rule_fail(rules, "Invalid format")

    return _ok()


def _validate_number(value: Any, rules: Validation, today: date) -> ValidationResult:
    bad_shape = _shape("number", value)
    if bad_shape is not None:
        return bad_shape

    if rules.min is not None and value < rules.min:
        return _rule_fail(rules, f"Minimum value is {_num(rules.min)}")

    if rules.max is not None and value > rules.max:
        return _rule_fail(rules, f"Maximum value is {_num(rules.max)}")

    return _ok()


def _validate_number_range(value: Any, rules: Validation, today: date) -> ValidationResult:
    if not is_number_range_answer(value):
        return _fail("Both minimum and maximum values are required")

    lo, hi = value["min"], value["max"]
    if lo > hi:
        return _fail("Minimum value cannot be greater than maximum value")

    # lo <= hi, so checking the outer endpoint covers both
    if rules.min is not None and lo < rules.min:
        return _rule_fail(rules, f"Values must be at least {_num(rules.min)}")

    if rules.max is not None and hi > rules.max:
        return _rule_fail(rules, f"Values must be at most {_num(rules.max)}")

    return _ok()


def _resolve_bound(bound: str, today: date) -> date | None:
    if bound == TODAY_SENTINEL:
        return today
    resolved = parse_iso_date(bound)
    if resolved is None:
        logger.warning("Ignoring unparseable date bound: %r", bound)
    return resolved


def _validate_date(value: Any, rules: Validation, today: date) -> ValidationResult:
    checked = parse_iso_date(value)
    if checked is None:
        return _fail("Invalid date")

    if rules.min_date:
        lower = _resolve_bound(rules.min_date, today)
        if lower is not None and checked < lower:
            if rules.min_date == TODAY_SENTINEL:
                return _rule_fail(rules, "Date must be today or later")
            return _rule_fail(rules, f"Date must be after {rules.min_date}")

    if rules.max_date:
        upper = _resolve_bound(rules.max_date, today)
        if upper is not None and checked > upper:
            if rules.max_date == TODAY_SENTINEL:
                return _rule_fail(rules, "Date must be today or earlier")
            return _rule_fail(rules, f"Date must be before {rules.max_date}")

    return _ok()


def _validate_date_range(value: Any, rules: Validation, today: date) -> ValidationResult:
    if not isinstance(value, Mapping) or not value.get("start") or not value.get("end"):
        return _fail("Both start and end dates are required")

    start = parse_iso_date(value["start"])
    end = parse_iso_date(value["end"])
    if start is None or end is None:
        return _fail("Invalid date format")

    if start > end:
        return _fail("Start date cannot be after end date")

    for label, endpoint in (("Start date", value["start"]), ("End date", value["end"])):
        result = _validate_date(endpoint, rules, today)
        if not result.is_valid:
            return _fail(f"{label}: {result.error}")

    return _ok()


def _validate_boolean(value: Any, rules: Validation, today: date) -> ValidationResult:
    return _shape("boolean", value) or _ok()


def _validate_multiple_choice(value: Any, rules: Validation, today: date) -> ValidationResult:
    return _shape("multiple-choice", value) or _ok()


# One validator per question type.
_TYPE_RULES: dict[str, _Rule] = {
    "text": _validate_text,
    "boolean": _validate_boolean,
    "number": _validate_number,
    "multiple-choice": _validate_multiple_choice,
    "number-range": _validate_number_range,
    "date": _validate_date,
    "date-range": _validate_date_range,
}
