"""Advisory suggestions for a commit message and its change set."""

import re
from dataclasses import dataclass

from gait.git import GitStatus
from gait.message.validator import validate_message

SOURCE_FILE_RE = re.compile(r'\.(js|ts|py|java|go|rs|cpp|c)$')
DOCS_FILE_RE = re.compile(r'\.(md|rst|txt)$', re.IGNORECASE)

SUGGEST_TESTS = "Consider adding tests for your code changes"
SUGGEST_DOCS = "Consider updating documentation for API changes"
SUGGEST_BREAKING = "This may be a breaking change - consider using BREAKING CHANGE footer"


@dataclass(frozen=True)
class Suggestion:
    type: str  # 'error', 'warning' or 'info'
    message: str


def _has_code_without_tests(paths: list[str]) -> bool:
    has_code = any(SOURCE_FILE_RE.search(p) for p in paths)
    has_tests = any('test' in p or 'spec' in p for p in paths)
    return has_code and not has_tests


def _has_api_without_docs(paths: list[str], diff: str) -> bool:
    touches_api = 'export' in diff or 'public' in diff
    has_docs = any(DOCS_FILE_RE.search(p) or 'readme' in p.lower() for p in paths)
    return touches_api and not has_docs


def _may_break(status: GitStatus, diff: str) -> bool:
    return 'BREAKING' in diff or 'breaking' in diff or bool(status.deleted)


def get_suggestions(message: str, status: GitStatus, diff: str) -> list[Suggestion]:
    """Non-blocking advice for a message and the changes it describes.

    Order is part of the output: tests, docs, breaking change, then
    validation errors and warnings.
    """
    paths = status.changed_paths
    suggestions = []

    if _has_code_without_tests(paths):
        suggestions.append(Suggestion('warning', SUGGEST_TESTS))

    if _has_api_without_docs(paths, diff):
        suggestions.append(Suggestion('info', SUGGEST_DOCS))

    if _may_break(status, diff):
        suggestions.append(Suggestion('warning', SUGGEST_BREAKING))

    validation = validate_message(message)
    suggestions.extend(Suggestion('error', e) for e in validation.errors)
    suggestions.extend(Suggestion('warning', w) for w in validation.warnings)

    return suggestions
