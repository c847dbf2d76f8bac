"""Git Operations Package"""

from gait.git.analyzer import (
    GitAnalyzer,
    GitError,
    GitStatus,
    DiffSummary,
    CommitInfo,
    parse_porcelain_status,
)

__all__ = [
    "GitAnalyzer",
    "GitError",
    "GitStatus",
    "DiffSummary",
    "CommitInfo",
    "parse_porcelain_status",
]
