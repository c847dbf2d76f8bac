"""Prompt Construction Package"""

from gait.prompts.builder import (
    PromptBuilder,
    GenerationOptions,
    STATUS_CATEGORIES,
    DEFAULT_MAX_LENGTH,
)
from gait.prompts.truncation import truncate_diff, TRUNCATION_MARKER, DEFAULT_MAX_DIFF_LENGTH

__all__ = [
    "PromptBuilder",
    "GenerationOptions",
    "STATUS_CATEGORIES",
    "DEFAULT_MAX_LENGTH",
    "DEFAULT_MAX_DIFF_LENGTH",
    "TRUNCATION_MARKER",
    "truncate_diff",
]
