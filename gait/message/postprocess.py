"""Post-processing for generated commit messages."""

import re

from gait.prompts import DEFAULT_MAX_LENGTH, GenerationOptions

_CODE_BLOCK_RE = re.compile(r'```[^`]*```')
_INLINE_CODE_RE = re.compile(r'`([^`]+)`')
_BOLD_RE = re.compile(r'\*\*([^*]+)\*\*')
_ITALIC_RE = re.compile(r'\*([^*]+)\*')
_SPACES_RE = re.compile(r' +')
_BLANK_LINES_RE = re.compile(r'\n{3,}')


def strip_markdown(text: str) -> str:
    """Remove markdown artifacts models like to add.

    Fenced blocks are dropped with their contents; inline code and
    emphasis keep their inner text.
    """
    text = _CODE_BLOCK_RE.sub('', text)
    text = _INLINE_CODE_RE.sub(r'\1', text)
    text = _BOLD_RE.sub(r'\1', text)
    text = _ITALIC_RE.sub(r'\1', text)
    text = _SPACES_RE.sub(' ', text)
    text = _BLANK_LINES_RE.sub('\n\n', text)
    return text.strip()


def shorten_subject(subject: str, max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """Fit a subject line into max_length, keeping a 'type(scope):' prefix intact."""
    if len(subject) <= max_length:
        return subject

    colon_index = subject.find(':')
    if 0 < colon_index < max_length:
        prefix = subject[:colon_index + 1]
        description = subject[colon_index + 1:].strip()
        max_desc_length = max_length - len(prefix) - 1
        description = description[:max(max_desc_length, 0)].rstrip()
        if not description:
            return prefix[:max_length]
        return f"{prefix} {description}"

    return subject[:max_length].strip()


def process_message(raw: str, options: GenerationOptions | None = None) -> str:
    """Clean raw model output into a commit message.

    Never raises; the subject line of the result is at most
    options.max_length characters.
    """
    options = options or GenerationOptions()

    text = strip_markdown(raw.strip())
    lines = text.split('\n')
    lines[0] = shorten_subject(lines[0], options.max_length)

    return '\n'.join(lines).strip()
