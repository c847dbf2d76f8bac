"""Commit Message Post-Processing, Validation and Suggestions"""

from gait.message.postprocess import process_message, shorten_subject, strip_markdown
from gait.message.validator import (
    ValidationResult,
    validate_message,
    HARD_SUBJECT_LIMIT,
    RECOMMENDED_SUBJECT_LIMIT,
)
from gait.message.suggestions import Suggestion, get_suggestions

__all__ = [
    "process_message",
    "shorten_subject",
    "strip_markdown",
    "ValidationResult",
    "validate_message",
    "HARD_SUBJECT_LIMIT",
    "RECOMMENDED_SUBJECT_LIMIT",
    "Suggestion",
    "get_suggestions",
]
