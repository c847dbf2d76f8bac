"""Error presentation for CLI commands."""

import sys
import traceback

from gait.config import ConfigError
from gait.generator import NoChangesError
from gait.git import GitError
from gait.llm import LLMError
from gait.output import dim, print_error, print_hint

# (substring, hint) pairs, first match wins; matched case-insensitively
LLM_HINTS = [
    ('api key', 'Set your API key: gait config add-provider, or export OPENAI_API_KEY="your-key"'),
    ('quota', 'Check your API billing and usage limits'),
    ('billing', 'Check your API billing and usage limits'),
    ('rate limit', 'You are being rate limited. Wait and try again'),
    ('timed out', 'Request timed out. Check your connection or raise GAIT_TIMEOUT'),
    ('no llm provider', 'Add a provider with: gait config add-provider'),
]

GIT_HINTS = [
    ('not a git repository', 'Run "git init" to initialize a repository'),
    ('nothing to commit', 'Make some changes first, then try again'),
    ('no changes', 'Use "git add" to stage your changes'),
    ('not installed', 'Install git and make sure it is on your PATH'),
]

GENERIC_HINTS = [
    ('permission denied', 'Permission denied. Check file permissions'),
    ('no such file', 'File or directory not found'),
]


def _find_hint(message: str, hints: list[tuple[str, str]]) -> str | None:
    lowered = message.lower()
    return next((hint for needle, hint in hints if needle in lowered), None)


def describe_error(error: Exception) -> tuple[str, str | None]:
    """Headline and optional hint for an error."""
    message = str(error)
    if isinstance(error, LLMError):
        source = f" ({error.provider})" if error.provider else ""
        return f"AI Service Error{source}: {message}", _find_hint(message, LLM_HINTS)
    if isinstance(error, NoChangesError):
        return message, 'Make some changes first, then try again'
    if isinstance(error, GitError):
        return f"Git Error: {message}", _find_hint(message, GIT_HINTS)
    if isinstance(error, ConfigError):
        return f"Config Error: {message}", None
    return f"Unexpected Error: {message}", _find_hint(message, GENERIC_HINTS)


def handle_error(error: Exception, verbose: bool = False) -> int:
    """Print an error with a hint. Returns the process exit code."""
    headline, hint = describe_error(error)
    print_error(headline)
    if hint:
        print_hint(hint)

    if verbose:
        print(dim("\nStack trace:"), file=sys.stderr)
        print(dim("".join(traceback.format_exception(type(error), error, error.__traceback__)).rstrip()), file=sys.stderr)
    else:
        print(dim("\nUse --verbose for more details"), file=sys.stderr)
    return 1
