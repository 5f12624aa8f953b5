"""Wizard constants shared across the SDK.

These values are referenced by the models, guards, validator and evaluator.
They mirror the vocabulary used in questionnaire config files (YAML/JSON).

A couple of constants can be overridden via environment variables so that
deployments can relocate config files or rename the date sentinel without
code changes.
"""

import os

# Closed set of question types.  Every dispatch table in the SDK (guards,
# validators, question_mapper) carries exactly one entry per type.
QUESTION_TYPES: tuple[str, ...] = (
    "text",
    "boolean",
    "number",
    "multiple-choice",
    "number-range",
    "date",
    "date-range",
)

# Condition operators understood by the ConditionEvaluator.  Anything else
# loads fine but evaluates to False.
CONDITION_OPERATORS: tuple[str, ...] = (
    "equals",
    "contains",
    "greaterThan",
    "lessThan",
    "between",
)

# Sentinel accepted in min_date / max_date meaning "the current UTC date".
# Overridable via WIZARD_TODAY_SENTINEL env var.
TODAY_SENTINEL = os.getenv("WIZARD_TODAY_SENTINEL", "today")

# Base directory for relative paths passed to loader.load_config().
# Overridable via WIZARD_CONFIG_DIR env var (None → current directory).
CONFIG_DIR = os.getenv("WIZARD_CONFIG_DIR") or None

# Human-readable descriptions used in "Expected ..., but received ..." messages.
EXPECTED_DESCRIPTIONS: dict[str, str] = {
    "text": "a string",
    "boolean": "a boolean",
    "number": "a number",
    "multiple-choice": "a string or array of strings",
    "number-range": "an object with min and max numbers",
    "date": "a valid ISO date string",
    "date-range": "an object with start and end date strings",
}

REQUIRED_MESSAGE = "This question is required"
