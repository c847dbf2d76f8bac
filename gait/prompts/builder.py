"""Prompt Builder - Construct LLM prompts for commit message generation."""

from dataclasses import dataclass, fields

from gait import DEFAULT_FORMAT
from gait.git import GitStatus
from gait.prompts.truncation import DEFAULT_MAX_DIFF_LENGTH, truncate_diff

DEFAULT_MAX_LENGTH = 50

# Display order of status categories. Shared with `gait status` output,
# keep it fixed.
STATUS_CATEGORIES = [
    ("added", "Added"),
    ("modified", "Modified"),
    ("deleted", "Deleted"),
    ("untracked", "Untracked"),
]

# Extra instruction per format, placed before the length rule
FORMAT_INSTRUCTIONS = {
    "conventional": "- Use conventional commit format (type(scope): description)",
    "simple": "- Use a simple, direct subject line without type prefixes",
    "detailed": "- Follow the subject line with a blank line and a short body explaining the change",
}


@dataclass
class GenerationOptions:
    """Options that shape one generation run."""
    format: str = DEFAULT_FORMAT
    max_length: int = DEFAULT_MAX_LENGTH
    max_diff_length: int = DEFAULT_MAX_DIFF_LENGTH

    @classmethod
    def from_dict(cls, data: dict) -> 'GenerationOptions':
        """Build options from a loose mapping. Unknown keys and None values are ignored."""
        valid_keys = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in valid_keys and v is not None})


class PromptBuilder:
    """Turns a status snapshot and diff into a single generation request."""

    def build(self, status: GitStatus, diff: str, options: GenerationOptions | None = None) -> str:
        options = options or GenerationOptions()
        sections = [
            self._build_preamble(),
            self._build_files_section(status),
            self._build_diff_section(diff, options),
            self._build_instructions(options),
        ]
        return "\n\n".join(sections)

    def _build_preamble(self) -> str:
        return "Generate a commit message for the following Git changes:"

    def _build_files_section(self, status: GitStatus) -> str:
        lines = ["Files changed:"]
        for attr, label in STATUS_CATEGORIES:
            paths = getattr(status, attr)
            if paths:
                lines.append(f"- {label}: {', '.join(paths)}")
        return "\n".join(lines)

    def _build_diff_section(self, diff: str, options: GenerationOptions) -> str:
        return "Code changes:\n" + truncate_diff(diff, options.max_diff_length)

    def _build_instructions(self, options: GenerationOptions) -> str:
        lines = ["Instructions:"]
        format_rule = FORMAT_INSTRUCTIONS.get(options.format)
        if format_rule:
            lines.append(format_rule)
        lines.extend([
            f"- Keep the first line under {options.max_length} characters",
            "- Use present tense, imperative mood",
            "- Focus on what the change accomplishes",
        ])
        return "\n".join(lines)
