"""CLI Commands: status, generate, commit"""

import sys

from gait.config import ConfigManager
from gait.generator import CommitMessageGenerator
from gait.git import GitAnalyzer, GitError
from gait.llm import get_client
from gait.message import validate_message
from gait.output import (
    success, warning, info, dim, bold, error, highlight,
    print_success, print_warning, print_error, print_rule,
    display_message, format_suggestions, format_validation, Spinner, CHECK,
)
from gait.prompts import GenerationOptions, STATUS_CATEGORIES
from gait.cli.utils import copy_to_clipboard, edit_message, prompt_choice

DIFF_PREVIEW_LINES = 100

# How 'gait status' shows each category: title, line marker, color
STATUS_DISPLAY = {
    'added': ("Staged files", '+', success),
    'modified': ("Modified files", '~', warning),
    'deleted': ("Deleted files", '-', error),
    'untracked': ("Untracked files", '?', dim),
}


def _open_repository(repo_path: str) -> GitAnalyzer:
    git = GitAnalyzer(repo_path)
    if not git.is_repository():
        raise GitError(f"Not a git repository: {git.repo_path}")
    return git


def _resolve_options(args, config) -> GenerationOptions:
    """Precedence: CLI args > config file > defaults."""
    return GenerationOptions.from_dict({
        'format': args.format or config.default_format,
        'max_length': args.max_length if args.max_length is not None else config.max_length,
        'max_diff_length': args.max_diff_length,
    })


def _build_generator(args) -> tuple[CommitMessageGenerator, GenerationOptions]:
    git = _open_repository(args.repo)

    manager = ConfigManager()
    config = manager.get_config()
    client = get_client(manager.get_default_provider(), timeout=config.timeout)

    return CommitMessageGenerator(git, client), _resolve_options(args, config)


def _short_hash(commit_hash: str) -> str:
    return commit_hash[:8]


# ---------------------------------------------------------------------------
# status
# ---------------------------------------------------------------------------

def _print_recent_commits(git: GitAnalyzer, count: int, verbose: bool) -> None:
    commits = git.get_recent_commits(count)
    print(info(f"\nRecent {count} commits:"))
    print_rule(40)
    for i, commit in enumerate(commits, 1):
        subject = commit.message.split('\n')[0]
        if len(subject) > 60:
            subject = subject[:57] + '...'
        print(dim(f"{i}. {_short_hash(commit.hash)} {subject}"))
        if verbose:
            print(dim(f"   {commit.author} {commit.date}"))


def _print_branch_info(git: GitAnalyzer) -> None:
    has_commits = git.has_commits()
    print(info("\nBranch Info:"))
    print_rule(20)
    print(f"Current branch: {bold(git.get_current_branch())}")
    print(f"Has commits: {'Yes' if has_commits else 'No'}")
    if not has_commits:
        print(dim("  This will be your initial commit"))


def run_status(args) -> int:
    """Show repository status and changes."""
    git = _open_repository(args.repo)
    status = git.get_status()

    if not status.has_changes():
        print_success("No changes detected")
        if args.branch_info:
            _print_branch_info(git)
        if args.recent_commits and git.has_commits():
            _print_recent_commits(git, args.recent_commits, args.verbose)
        return 0

    print(bold("Repository status:"))
    print_rule(50)
    for attr, _ in STATUS_CATEGORIES:
        paths = getattr(status, attr)
        if not paths:
            continue
        title, marker, color = STATUS_DISPLAY[attr]
        print(color(f"{title} ({len(paths)}):"))
        for path in paths:
            print(color(f"   {marker} {path}"))
    if status.conflicted:
        print(highlight(f"Conflicted files ({len(status.conflicted)}):"))
        for path in status.conflicted:
            print(highlight(f"   ! {path}"))

    if args.show_stats:
        print(info("\nStatistics:"))
        print_rule(20)
        print(f"Total changed files: {status.total_files}")
        print(f"Files ready to commit: {len(status.added)}")
        print(f"Files need staging: {len(status.modified) + len(status.untracked)}")
        if status.conflicted:
            print(error(f"Files in conflict: {len(status.conflicted)}"))

    if args.branch_info:
        _print_branch_info(git)

    if args.show_diff:
        print(info("\nChanges:"))
        print_rule(50)
        diff = git.get_diff()
        if not diff.strip():
            print(dim("No diff available (files may be binary or identical)"))
        else:
            lines = diff.split('\n')
            if len(lines) > DIFF_PREVIEW_LINES and not args.verbose:
                print('\n'.join(lines[:DIFF_PREVIEW_LINES]))
                print(dim(f"\n... ({len(lines) - DIFF_PREVIEW_LINES} more lines, use --verbose to see all)"))
            else:
                print(diff)

    if args.recent_commits and git.has_commits():
        _print_recent_commits(git, args.recent_commits, args.verbose)

    if not args.show_diff and (status.modified or status.untracked):
        print(info("\nSuggestions:"))
        print(dim("   Use --show-diff to see detailed changes"))
        print(dim("   Run 'gait generate' to preview a commit message"))
        print(dim("   Run 'gait commit' to generate and commit"))

    return 0


# ---------------------------------------------------------------------------
# generate
# ---------------------------------------------------------------------------

def _copy_and_report(message: str) -> None:
    copied, reason = copy_to_clipboard(message)
    if copied:
        print(f"{success(CHECK)} Copied to clipboard!")
    else:
        print(f"{warning('!')} Could not copy to clipboard{': ' + reason if reason else ''}")
        print(dim("  Select the message above to copy manually."))


def _print_suggestions(generator: CommitMessageGenerator, message: str) -> None:
    suggestions = generator.get_suggestions(message)
    if suggestions:
        print(info("\nSuggestions:"))
        print(format_suggestions(suggestions))


def _generate(args, generator: CommitMessageGenerator, options: GenerationOptions) -> int:
    is_pipe = not sys.stdout.isatty()

    if args.alternatives:
        with Spinner(f"Generating {args.alternatives} alternatives with {generator.client.name}..."):
            alternatives = generator.generate_alternatives(options, count=args.alternatives)
        if not alternatives:
            print_error("All alternatives failed to generate")
            return 1
        for i, alternative in enumerate(alternatives, 1):
            print(f"\n{info(f'[{i}]')} {dim(alternative.format)}")
            display_message(alternative.message)
        return 0

    with Spinner(f"Generating commit message with {generator.client.name}..."):
        message = generator.generate(options)

    if is_pipe:
        print(message)
        return 0

    print_success("Generated commit message:")
    display_message(message)

    if args.suggest:
        _print_suggestions(generator, message)

    if not args.no_copy:
        _copy_and_report(message)
    return 0


def run_generate(args) -> int:
    """Generate a commit message without committing."""
    generator, options = _build_generator(args)
    with generator.client:
        return _generate(args, generator, options)


# ---------------------------------------------------------------------------
# commit
# ---------------------------------------------------------------------------

def _review_message(message: str) -> str | None:
    """Interactive use/edit/cancel. Returns the message to commit, or None to cancel."""
    action = prompt_choice("What would you like to do?", [
        ('use', 'Use this message'),
        ('edit', 'Edit message'),
        ('cancel', 'Cancel'),
    ])
    if action == 'use':
        return message
    if action == 'edit':
        edited = edit_message(message)
        if edited is None:
            print_warning("Editor returned no message, keeping the generated one")
            return message
        display_message(edited)
        return edited
    return None


def _commit(args, generator: CommitMessageGenerator, options: GenerationOptions) -> int:
    git = generator.git

    if args.verbose:
        print(dim(f"Repository: {git.repo_path}"))
        print(dim(f"Staged only: {args.staged_only}"))
        if args.files:
            print(dim(f"Files: {args.files}"))

    with Spinner(f"Generating commit message with {generator.client.name}..."):
        message = generator.generate(options)

    print_success("Generated commit message:")
    display_message(message)

    if args.interactive:
        message = _review_message(message)
        if message is None:
            print(warning("Commit cancelled."))
            return 0

    if not args.skip_validation:
        result = validate_message(message, options.format)
        if not result.valid:
            print_error("Commit message failed validation:")
            print(format_validation(result))
            print(dim("\nUse --skip-validation to commit anyway"))
            return 1
        if result.warnings:
            print(format_validation(result))

    if args.dry_run:
        print(info("DRY RUN: Would create commit with message above"))
        return 0

    with Spinner("Creating commit..."):
        if args.staged_only:
            commit_hash, scope = git.commit_staged(message), "staged changes"
        elif args.files:
            files = [f.strip() for f in args.files.split(',') if f.strip()]
            commit_hash, scope = git.commit_files(message, files), f"{len(files)} files"
        else:
            commit_hash, scope = git.commit_all(message), "all changes"

    print_success(f"Created commit ({scope}): {success(_short_hash(commit_hash))}")
    return 0


def run_commit(args) -> int:
    """Generate a commit message and create the commit."""
    generator, options = _build_generator(args)
    with generator.client:
        return _commit(args, generator, options)


__all__ = ["run_status", "run_generate", "run_commit"]
