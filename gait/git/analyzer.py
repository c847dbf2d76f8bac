"""Git Analyzer - Extract working tree status and diffs from git."""

import subprocess
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class GitStatus:
    """Point-in-time classification of changed paths.

    Each path lands in exactly one list. ``added`` holds paths staged in the
    index (new or modified), ``modified`` holds unstaged worktree edits.
    """
    added: tuple[str, ...] = ()
    modified: tuple[str, ...] = ()
    deleted: tuple[str, ...] = ()
    untracked: tuple[str, ...] = ()
    conflicted: tuple[str, ...] = ()

    def has_changes(self) -> bool:
        # Conflicts alone don't count as something to describe
        return bool(self.added or self.modified or self.deleted or self.untracked)

    @property
    def total_files(self) -> int:
        return len(self.added) + len(self.modified) + len(self.deleted) + len(self.untracked)

    @property
    def changed_paths(self) -> list[str]:
        """Added and modified paths, the files whose content the diff describes."""
        return [*self.added, *self.modified]


@dataclass(frozen=True)
class DiffSummary:
    """Status snapshot plus the diff text handed to the prompt builder."""
    status: GitStatus
    diff: str


@dataclass(frozen=True)
class CommitInfo:
    hash: str
    message: str
    author: str
    date: str


class GitError(Exception):
    """Raised when git operations fail."""
    pass


# Porcelain v1 XY codes that mean the path is unmerged
_CONFLICT_CODES = {'DD', 'AU', 'UD', 'UA', 'DU', 'AA', 'UU'}
_STAGED_CODES = set('AMRCT')


def parse_porcelain_status(output: str) -> GitStatus:
    """Parse 'git status --porcelain=v1 -z' output into a GitStatus.

    Checks run in a fixed order (conflicted, untracked, deleted, added,
    modified) and the first match wins, so the lists stay disjoint.
    """
    added, modified, deleted, untracked, conflicted = [], [], [], [], []

    entries = output.split('\0')
    i = 0
    while i < len(entries):
        entry = entries[i]
        i += 1
        if len(entry) < 4:
            continue

        code, path = entry[:2], entry[3:]
        x, y = code[0], code[1]

        # Renames and copies carry the original path as the next entry
        if x in 'RC':
            i += 1

        if code in _CONFLICT_CODES:
            conflicted.append(path)
        elif code == '??':
            untracked.append(path)
        elif code == '!!':
            continue
        elif x == 'D' or y == 'D':
            deleted.append(path)
        elif x in _STAGED_CODES:
            added.append(path)
        elif y in ('M', 'T'):
            modified.append(path)

    return GitStatus(
        added=tuple(added),
        modified=tuple(modified),
        deleted=tuple(deleted),
        untracked=tuple(untracked),
        conflicted=tuple(conflicted),
    )


class GitAnalyzer:
    """Reads status and diffs from a git working tree and creates commits."""

    # Field separator for 'git log' output, unlikely to appear in messages
    _LOG_SEP = '\x1f'
    _RECORD_SEP = '\x1e'

    def __init__(self, repo_path: str = '.'):
        self.repo_path = Path(repo_path).resolve()
        self._verify_git_available()

    def _run_git(self, *args: str) -> str:
        """Run a git command in the repository and return stdout."""
        try:
            result = subprocess.run(
                ['git', *args],
                cwd=self.repo_path,
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace'
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            raise GitError(f"Git command failed: git {' '.join(args)}\n{e.stderr.strip()}")
        except FileNotFoundError:
            raise GitError("Git is not installed or not in PATH")
        except NotADirectoryError:
            raise GitError(f"Not a directory: {self.repo_path}")

    def _verify_git_available(self) -> None:
        """Fail fast if git isn't available."""
        try:
            subprocess.run(['git', '--version'], capture_output=True, check=True)
        except (FileNotFoundError, subprocess.CalledProcessError):
            raise GitError("Git is not installed or not in PATH")

    def is_repository(self) -> bool:
        try:
            self._run_git('rev-parse', '--git-dir')
            return True
        except GitError:
            return False

    def get_status(self) -> GitStatus:
        try:
            output = self._run_git('status', '--porcelain=v1', '-z', '--untracked-files=all')
        except GitError as e:
            raise GitError(f"Failed to get git status: {e}")
        return parse_porcelain_status(output)

    def get_diff(self) -> str:
        """Staged diff, or the working tree diff when nothing is staged."""
        try:
            diff = self._run_git('diff', '--cached')
            if not diff.strip():
                diff = self._run_git('diff')
            return diff
        except GitError as e:
            raise GitError(f"Failed to get git diff: {e}")

    def get_diff_summary(self) -> DiffSummary:
        return DiffSummary(status=self.get_status(), diff=self.get_diff())

    def _head_hash(self) -> str:
        return self._run_git('rev-parse', 'HEAD').strip()

    def commit_all(self, message: str) -> str:
        """Stage everything and commit. Returns the new commit hash."""
        try:
            self._run_git('add', '--all')
            self._run_git('commit', '-m', message)
            return self._head_hash()
        except GitError as e:
            raise GitError(f"Failed to commit all changes: {e}")

    def commit_staged(self, message: str) -> str:
        try:
            self._run_git('commit', '-m', message)
            return self._head_hash()
        except GitError as e:
            raise GitError(f"Failed to commit staged changes: {e}")

    def commit_files(self, message: str, files: list[str]) -> str:
        """Stage only the given files and commit them."""
        for file in files:
            if not (self.repo_path / file).exists():
                raise GitError(f"Failed to commit files: File not found: {file}")

        try:
            self._run_git('add', '--', *files)
            self._run_git('commit', '-m', message, '--', *files)
            return self._head_hash()
        except GitError as e:
            raise GitError(f"Failed to commit files: {e}")

    def get_current_branch(self) -> str:
        try:
            return self._run_git('rev-parse', '--abbrev-ref', 'HEAD').strip()
        except GitError as e:
            raise GitError(f"Failed to get current branch: {e}")

    def has_commits(self) -> bool:
        try:
            self._run_git('rev-parse', '--verify', '--quiet', 'HEAD')
            return True
        except GitError:
            return False

    def get_recent_commits(self, count: int = 5) -> list[CommitInfo]:
        fmt = self._LOG_SEP.join(['%H', '%B', '%an', '%aI']) + self._RECORD_SEP
        try:
            output = self._run_git('log', f'--max-count={count}', f'--format={fmt}')
        except GitError as e:
            raise GitError(f"Failed to get commit history: {e}")

        commits = []
        for record in output.split(self._RECORD_SEP):
            parts = record.strip('\n').split(self._LOG_SEP)
            if len(parts) == 4:
                commit_hash, message, author, date = parts
                commits.append(CommitInfo(hash=commit_hash, message=message.strip(), author=author, date=date))
        return commits
