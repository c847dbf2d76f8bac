"""Diff truncation - bound diff text before it goes into a prompt."""

DEFAULT_MAX_DIFF_LENGTH = 3000

TRUNCATION_MARKER = "[... diff truncated ...]"
_TRUNCATION_SUFFIX = "\n\n" + TRUNCATION_MARKER

# Cut at a line boundary only if it keeps at least this share of the budget
LINE_BOUNDARY_RATIO = 0.8


def truncate_diff(diff: str, max_length: int = DEFAULT_MAX_DIFF_LENGTH) -> str:
    """Bound diff to max_length characters plus the truncation marker.

    Prefers cutting at the last newline inside the budget when that loses
    no more than 20% of it; otherwise cuts mid-line at max_length.
    """
    if len(diff) <= max_length:
        return diff

    # Already truncated to this budget
    if diff.endswith(_TRUNCATION_SUFFIX) and len(diff) - len(_TRUNCATION_SUFFIX) <= max_length:
        return diff

    truncated = diff[:max_length]
    last_newline = truncated.rfind('\n')

    if last_newline >= max_length * LINE_BOUNDARY_RATIO:
        return truncated[:last_newline] + _TRUNCATION_SUFFIX

    return truncated + _TRUNCATION_SUFFIX
