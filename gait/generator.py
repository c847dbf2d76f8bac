"""Commit Message Generator - runs the summarization pipeline end to end."""

import logging
from dataclasses import dataclass, replace

from gait import COMMIT_FORMATS, DEFAULT_FORMAT
from gait.git import DiffSummary
from gait.llm import LLMClient, LLMError
from gait.message import ValidationResult, Suggestion, process_message, validate_message, get_suggestions
from gait.prompts import GenerationOptions, PromptBuilder

logger = logging.getLogger(__name__)


class NoChangesError(Exception):
    """Raised when the working tree has nothing to describe."""

    def __init__(self, message: str = "No changes detected in repository"):
        super().__init__(message)


@dataclass(frozen=True)
class Alternative:
    format: str
    message: str


class CommitMessageGenerator:
    """Turns pending changes into a commit message.

    git is anything with get_diff_summary() (normally a GitAnalyzer),
    client is the LLM backend. Both are injected so tests can substitute fakes.
    """

    def __init__(self, git, client: LLMClient, builder: PromptBuilder | None = None):
        self.git = git
        self.client = client
        self.builder = builder or PromptBuilder()

    def _require_changes(self) -> DiffSummary:
        summary = self.git.get_diff_summary()
        if not summary.status.has_changes():
            raise NoChangesError()
        return summary

    def build_prompt(self, summary: DiffSummary, options: GenerationOptions | None = None) -> str:
        return self.builder.build(summary.status, summary.diff, options)

    def _generate_from(self, summary: DiffSummary, options: GenerationOptions) -> str:
        prompt = self.build_prompt(summary, options)
        logger.debug("Prompt built: %d chars, format=%s", len(prompt), options.format)

        response = self.client.generate(prompt)
        logger.debug("Backend %s returned %d chars (%d tokens)", self.client.name, len(response.content), response.tokens_used)

        return process_message(response.content, options)

    def generate(self, options: GenerationOptions | None = None) -> str:
        """Generate one commit message for the current changes.

        Raises NoChangesError before contacting the backend when the tree is
        clean. Backend and git errors propagate unchanged.
        """
        options = options or GenerationOptions()
        summary = self._require_changes()
        return self._generate_from(summary, options)

    def generate_alternatives(self, options: GenerationOptions | None = None, count: int = 3) -> list[Alternative]:
        """Generate several messages, cycling through the formats.

        A backend failure only drops that alternative.
        """
        options = options or GenerationOptions()
        summary = self._require_changes()

        alternatives = []
        for i in range(count):
            variant = replace(options, format=COMMIT_FORMATS[i % len(COMMIT_FORMATS)])
            try:
                message = self._generate_from(summary, variant)
            except LLMError as e:
                logger.warning("Failed to generate alternative %d: %s", i + 1, e)
                continue
            alternatives.append(Alternative(format=variant.format, message=message))
        return alternatives

    def validate(self, message: str, format: str = DEFAULT_FORMAT) -> ValidationResult:
        return validate_message(message, format)

    def get_suggestions(self, message: str) -> list[Suggestion]:
        summary = self.git.get_diff_summary()
        return get_suggestions(message, summary.status, summary.diff)
