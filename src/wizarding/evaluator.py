"""ConditionEvaluator — decides whether a conditional question is visible.

A conditional question declares a :class:`Condition` that is tested against
the stored answer of its anchor (the question it is nested under).  The
flattening engine calls :meth:`evaluate` once per declared child whenever
the anchor has an answer.

Unknown operators and malformed operands never raise: they evaluate to
False, hiding the child, and are logged so config authors can spot them.
"""

from __future__ import annotations

import logging
from typing import Any

from wizarding.models.question import Condition

logger = logging.getLogger(__name__)


class ConditionEvaluator:
    """Evaluates a Condition against an anchor answer."""

    def evaluate(self, condition: Condition, answer: Any) -> bool:
        """Return True if ``answer`` satisfies ``condition``.

        Args:
            condition: the child's condition (operator + operand)
            answer: the anchor question's raw stored answer
        """
        return self._compare(condition.operator, answer, condition.value)

    @staticmethod
    def _strict_equals(answer: Any, value: Any) -> bool:
        """Equality that never treats booleans as the numbers 0/1."""
        if isinstance(answer, bool) != isinstance(value, bool):
            return False
        return answer == value

    @classmethod
    def _compare(cls, op: str, answer: Any, value: Any) -> bool:
        """Apply an operator to an answer and the condition's operand.

        Handles type coercion for numeric comparisons (answers restored from
        a client may be numeric strings).
        """
        if op == "equals":
            return cls._strict_equals(answer, value)

        if op == "contains":
            # Element membership for multi-select answers, equality otherwise
            if isinstance(answer, list):
                return any(cls._strict_equals(item, value) for item in answer)
            return cls._strict_equals(answer, value)

        # --- Numeric comparisons ---
        if op in ("greaterThan", "lessThan", "between"):
            if isinstance(answer, bool):
                return False
            try:
                ans_num = float(answer)
            except (TypeError, ValueError):
                return False

            try:
                if op == "greaterThan":
                    return ans_num > float(value)
                if op == "lessThan":
                    return ans_num < float(value)
                # value is expected to be [min, max]
                lo, hi = float(value[0]), float(value[1])
                return lo <= ans_num <= hi
            except (TypeError, ValueError, IndexError, KeyError):
                logger.warning("Malformed operand for %s condition: %r", op, value)
                return False

        logger.warning("Unknown condition operator: %s", op)
        return False
