"""wizarding — conditional questionnaire engine.

Public API:
    WizardEngine      — owns a question forest; init/answer/reset/add/restore
    WizardConfig      — a named questionnaire as loaded from YAML/JSON
    load_config       — read a config file into a WizardConfig
    WizardState       — per-session mutable state
    WizardSnapshot    — persistable subset of a WizardState

Navigation (plain functions over a WizardState):
    get_question_set, get_current_answers, go_next, go_back,
    can_go_next, can_go_back, get_progress,
    get_answers, get_answers_object, get_answered_questions

Validation:
    validate_answer   — per-type business rules → ValidationResult
    validate_answer_type, create_answer_type_guard — structural type guards
"""

from wizarding.engine import WizardEngine
from wizarding.evaluator import ConditionEvaluator
from wizarding.flattening import rebuild
from wizarding.guards import (
    create_answer_type_guard,
    is_boolean_answer,
    is_date_answer,
    is_date_range_answer,
    is_multiple_choice_answer,
    is_number_answer,
    is_number_range_answer,
    is_text_answer,
    parse_iso_date,
    validate_answer_type,
)
from wizarding.loader import load_config
from wizarding.models import (
    Answer,
    AnsweredQuestion,
    AnswerTypeCheck,
    Condition,
    ConditionalQuestion,
    FlattenedQuestion,
    ProgressReport,
    Question,
    ValidationResult,
    WizardConfig,
    WizardSnapshot,
    WizardState,
)
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
)
from wizarding.validator import validate_answer

__all__ = [
    # Engine & config
    "WizardEngine",
    "WizardConfig",
    "load_config",
    "ConditionEvaluator",
    "rebuild",
    # Models
    "Answer",
    "AnsweredQuestion",
    "AnswerTypeCheck",
    "Condition",
    "ConditionalQuestion",
    "FlattenedQuestion",
    "ProgressReport",
    "Question",
    "ValidationResult",
    "WizardSnapshot",
    "WizardState",
    # Navigation
    "can_go_back",
    "can_go_next",
    "find_next_index",
    "find_prev_index",
    "get_answered_questions",
    "get_answers",
    "get_answers_object",
    "get_current_answers",
    "get_progress",
    "get_question_set",
    "go_back",
    "go_next",
    # Validation
    "validate_answer",
    "validate_answer_type",
    "create_answer_type_guard",
    "parse_iso_date",
    "is_text_answer",
    "is_boolean_answer",
    "is_number_answer",
    "is_multiple_choice_answer",
    "is_number_range_answer",
    "is_date_answer",
    "is_date_range_answer",
]
