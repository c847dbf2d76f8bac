"""Commit message validation against length and format policy."""

import re
from dataclasses import dataclass

from gait import COMMIT_TYPE_NAMES, DEFAULT_FORMAT

# Fixed policy, independent of the configured generation max_length
HARD_SUBJECT_LIMIT = 72
RECOMMENDED_SUBJECT_LIMIT = 50

CONVENTIONAL_RE = re.compile(rf"^({'|'.join(COMMIT_TYPE_NAMES)})(\(.+\))?: .+")
_PREFIX_RE = re.compile(r'^[^:]*:\s*')
# Crude past tense / gerund / third person check; false positives are expected
_NON_IMPERATIVE_RE = re.compile(r'(ed|ing|s)$', re.IGNORECASE)

ERROR_TOO_LONG = f"First line is too long (over {HARD_SUBJECT_LIMIT} characters)"
ERROR_NOT_CONVENTIONAL = "First line does not follow conventional commit format"
WARNING_LONG = f"First line is longer than recommended {RECOMMENDED_SUBJECT_LIMIT} characters"
WARNING_MOOD = 'Consider using imperative mood (e.g., "add" instead of "added")'
WARNING_BLANK_LINE = "Consider adding a blank line after the first line"


@dataclass(frozen=True)
class ValidationResult:
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.errors


def validate_message(message: str, format: str = DEFAULT_FORMAT) -> ValidationResult:
    """Check a finished message. Errors are policy violations, warnings are style hints."""
    lines = message.split('\n')
    first_line = lines[0]
    errors: list[str] = []
    warnings: list[str] = []

    if len(first_line) > HARD_SUBJECT_LIMIT:
        errors.append(ERROR_TOO_LONG)
    elif len(first_line) > RECOMMENDED_SUBJECT_LIMIT:
        warnings.append(WARNING_LONG)

    if format == 'conventional' and not CONVENTIONAL_RE.match(first_line):
        errors.append(ERROR_NOT_CONVENTIONAL)

    first_word = _PREFIX_RE.sub('', first_line, count=1).split(' ')[0]
    if _NON_IMPERATIVE_RE.search(first_word):
        warnings.append(WARNING_MOOD)

    if len(lines) > 1 and lines[1] != '':
        warnings.append(WARNING_BLANK_LINE)

    return ValidationResult(errors=tuple(errors), warnings=tuple(warnings))
