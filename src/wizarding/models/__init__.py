"""Public model re-exports for wizarding.

Consumers should import from ``wizarding.models`` rather than reaching into
sub-modules directly.
"""

# --- Questions ---
from wizarding.models.question import (
    BaseQuestion,
    BooleanQuestion,
    Condition,
    ConditionalQuestion,
    DateQuestion,
    DateRangeQuestion,
    MultipleChoiceQuestion,
    NumberQuestion,
    NumberRangeQuestion,
    Option,
    Question,
    TextQuestion,
    Validation,
    WizardModel,
    parse_question,
    question_mapper,
)

# --- Config ---
from wizarding.models.config import WizardConfig, iter_questions

# --- Session / results ---
from wizarding.models.state import (
    Answer,
    AnsweredQuestion,
    AnswerTypeCheck,
    FlattenedQuestion,
    ProgressReport,
    ValidationResult,
    WizardSnapshot,
    WizardState,
)

__all__ = [
    # Questions
    "BaseQuestion",
    "BooleanQuestion",
    "Condition",
    "ConditionalQuestion",
    "DateQuestion",
    "DateRangeQuestion",
    "MultipleChoiceQuestion",
    "NumberQuestion",
    "NumberRangeQuestion",
    "Option",
    "Question",
    "TextQuestion",
    "Validation",
    "WizardModel",
    "parse_question",
    "question_mapper",
    # Config
    "WizardConfig",
    "iter_questions",
    # Session / results
    "Answer",
    "AnsweredQuestion",
    "AnswerTypeCheck",
    "FlattenedQuestion",
    "ProgressReport",
    "ValidationResult",
    "WizardSnapshot",
    "WizardState",
]
