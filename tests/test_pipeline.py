"""
Unit tests for the generation pipeline stages: truncation, prompt building,
post-processing, validation and suggestions.

Run with:
    pytest tests/test_pipeline.py -v
"""

import pytest

from gait.git import GitStatus
from gait.message import (
    Suggestion,
    get_suggestions,
    process_message,
    shorten_subject,
    strip_markdown,
    validate_message,
)
from gait.message.suggestions import SUGGEST_BREAKING, SUGGEST_DOCS, SUGGEST_TESTS
from gait.message.validator import (
    ERROR_NOT_CONVENTIONAL,
    ERROR_TOO_LONG,
    WARNING_BLANK_LINE,
    WARNING_LONG,
    WARNING_MOOD,
)
from gait.prompts import (
    GenerationOptions,
    PromptBuilder,
    TRUNCATION_MARKER,
    truncate_diff,
)


# ---------------------------------------------------------------------------
# truncate_diff
# ---------------------------------------------------------------------------

class TestTruncateDiff:
    """truncate_diff() bounding behavior."""

    def test_short_diff_unchanged(self):
        assert truncate_diff("+a\n-b", 100) == "+a\n-b"

    def test_exact_length_unchanged(self):
        diff = "x" * 100
        assert truncate_diff(diff, 100) == diff

    def test_long_diff_gets_marker(self):
        result = truncate_diff("x" * 500, 100)
        assert result.endswith(TRUNCATION_MARKER)
        assert result == "x" * 100 + "\n\n" + TRUNCATION_MARKER

    def test_cuts_at_late_line_boundary(self):
        # Newline at offset 90 is past 80% of the budget
        diff = "a" * 90 + "\n" + "b" * 200
        result = truncate_diff(diff, 100)
        assert result == "a" * 90 + "\n\n" + TRUNCATION_MARKER

    def test_ignores_early_line_boundary(self):
        # Newline at offset 10 would throw away most of the budget
        diff = "a" * 10 + "\n" + "b" * 200
        result = truncate_diff(diff, 100)
        assert result == diff[:100] + "\n\n" + TRUNCATION_MARKER

    def test_boundary_exactly_at_ratio_is_used(self):
        diff = "a" * 80 + "\n" + "b" * 200
        result = truncate_diff(diff, 100)
        assert result == "a" * 80 + "\n\n" + TRUNCATION_MARKER

    @pytest.mark.parametrize("length", [0, 50, 101, 1000, 5000])
    def test_result_is_bounded(self, length):
        max_length = 100
        result = truncate_diff("line\n" * length, max_length)
        assert len(result) <= max_length + len("\n\n" + TRUNCATION_MARKER)

    def test_idempotent(self):
        diff = "\n".join(f"+line {i}" for i in range(1000))
        once = truncate_diff(diff, 300)
        assert truncate_diff(once, 300) == once

    def test_default_budget(self):
        result = truncate_diff("y" * 10_000)
        assert result == "y" * 3000 + "\n\n" + TRUNCATION_MARKER


# ---------------------------------------------------------------------------
# PromptBuilder
# ---------------------------------------------------------------------------

class TestPromptBuilder:
    """PromptBuilder.build() output."""

    @pytest.fixture
    def builder(self):
        return PromptBuilder()

    def test_added_file_and_length_instruction(self, builder):
        status = GitStatus(added=("a.ts",))
        prompt = builder.build(status, "+export function f(){}", GenerationOptions(format='conventional', max_length=50))
        assert "- Added: a.ts" in prompt.split("\n")
        assert "50 characters" in prompt

    def test_sections_in_order(self, builder):
        prompt = builder.build(GitStatus(modified=("x.py",)), "+x = 1")
        positions = [prompt.index(s) for s in ("Generate a commit message", "Files changed:", "Code changes:", "Instructions:")]
        assert positions == sorted(positions)

    def test_categories_in_fixed_order(self, builder):
        status = GitStatus(
            added=("new.py",),
            modified=("mod.py",),
            deleted=("gone.py",),
            untracked=("scratch.py",),
        )
        lines = builder.build(status, "").split("\n")
        category_lines = [l for l in lines if l.startswith(("- Added:", "- Modified:", "- Deleted:", "- Untracked:"))]
        assert category_lines == [
            "- Added: new.py",
            "- Modified: mod.py",
            "- Deleted: gone.py",
            "- Untracked: scratch.py",
        ]

    def test_empty_categories_omitted(self, builder):
        prompt = builder.build(GitStatus(modified=("a.py", "b.py")), "")
        assert "- Modified: a.py, b.py" in prompt
        assert "- Added:" not in prompt
        assert "- Deleted:" not in prompt
        assert "- Untracked:" not in prompt

    def test_conflicted_not_listed(self, builder):
        prompt = builder.build(GitStatus(modified=("a.py",), conflicted=("c.py",)), "")
        assert "c.py" not in prompt

    def test_diff_is_truncated(self, builder):
        prompt = builder.build(GitStatus(modified=("a.py",)), "z" * 500, GenerationOptions(max_diff_length=100))
        assert TRUNCATION_MARKER in prompt
        assert "z" * 101 not in prompt

    @pytest.mark.parametrize("fmt, expected", [
        ("conventional", "conventional commit format"),
        ("simple", "without type prefixes"),
        ("detailed", "blank line and a short body"),
    ])
    def test_format_instruction(self, builder, fmt, expected):
        prompt = builder.build(GitStatus(added=("a.py",)), "", GenerationOptions(format=fmt))
        assert expected in prompt

    def test_custom_max_length(self, builder):
        prompt = builder.build(GitStatus(added=("a.py",)), "", GenerationOptions(max_length=72))
        assert "- Keep the first line under 72 characters" in prompt

    def test_options_from_dict_ignores_unknown_and_none(self):
        options = GenerationOptions.from_dict({"format": "simple", "max_length": None, "bogus": 1})
        assert options == GenerationOptions(format="simple")


# ---------------------------------------------------------------------------
# Post-processing
# ---------------------------------------------------------------------------

class TestProcessMessage:
    """process_message() cleanup of raw model output."""

    def test_long_subject_keeps_prefix_and_budget(self):
        raw = "feat: add a very long description that exceeds the fifty character budget by a lot"
        subject = process_message(raw, GenerationOptions(max_length=50)).split("\n")[0]
        assert subject.startswith("feat:")
        assert len(subject) <= 50

    def test_scoped_prefix_preserved(self):
        raw = "fix(parser): handle deeply nested brackets in the expression tokenizer loop"
        subject = process_message(raw, GenerationOptions(max_length=40)).split("\n")[0]
        assert subject.startswith("fix(parser): handle")
        assert len(subject) <= 40

    def test_subject_without_prefix_cut(self):
        raw = "Update the configuration loader so that it reads every file"
        subject = process_message(raw, GenerationOptions(max_length=20))
        assert subject == "Update the configura"

    def test_short_message_untouched(self):
        assert process_message("fix: typo") == "fix: typo"

    def test_body_preserved(self):
        raw = "feat: add cache\n\nStores parsed configs in memory."
        assert process_message(raw) == raw

    def test_strips_markdown(self):
        raw = "**feat: add `cache` layer**\n\n*Speeds up* reads"
        assert process_message(raw) == "feat: add cache layer\n\nSpeeds up reads"

    def test_code_block_removed(self):
        raw = "fix: guard against empty input\n\n```\nif not x:\n    return\n```"
        assert process_message(raw) == "fix: guard against empty input"

    def test_collapses_blank_lines_and_spaces(self):
        raw = "  chore:   bump   deps\n\n\n\nRefresh lockfile  "
        assert process_message(raw) == "chore: bump deps\n\nRefresh lockfile"

    def test_empty_input(self):
        assert process_message("") == ""

    @pytest.mark.parametrize("max_length", [5, 10, 30, 50, 72])
    def test_subject_never_exceeds_budget(self, max_length):
        raw = "refactor(core-module): restructure the dependency resolution graph walker"
        subject = process_message(raw, GenerationOptions(max_length=max_length)).split("\n")[0]
        assert len(subject) <= max_length

    def test_shorten_subject_prefix_longer_than_budget(self):
        assert shorten_subject("feat: something", 3) == "fea"

    def test_strip_markdown_keeps_plain_text(self):
        assert strip_markdown("docs: explain setup") == "docs: explain setup"


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

class TestValidateMessage:
    """validate_message() errors and warnings."""

    def test_valid_conventional_message(self):
        result = validate_message("feat(auth): add OAuth2 integration", "conventional")
        assert result.valid is True
        assert result.errors == ()

    def test_too_long_is_error(self):
        result = validate_message("feat: " + "x" * 80)
        assert ERROR_TOO_LONG in result.errors
        assert WARNING_LONG not in result.warnings
        assert not result.valid

    def test_over_recommended_is_warning(self):
        result = validate_message("feat: " + "x" * 50)
        assert result.valid
        assert WARNING_LONG in result.warnings

    def test_non_conventional_rejected(self):
        result = validate_message("Add OAuth2 integration", "conventional")
        assert ERROR_NOT_CONVENTIONAL in result.errors

    def test_unknown_type_rejected(self):
        result = validate_message("feature: add login", "conventional")
        assert ERROR_NOT_CONVENTIONAL in result.errors

    @pytest.mark.parametrize("fmt", ["simple", "detailed"])
    def test_other_formats_skip_conventional_check(self, fmt):
        result = validate_message("Add OAuth2 integration", fmt)
        assert result.valid

    @pytest.mark.parametrize("message", [
        "feat: added login",
        "fix: fixing crash",
        "feat: adds login",
    ])
    def test_mood_warning(self, message):
        assert WARNING_MOOD in validate_message(message).warnings

    def test_imperative_has_no_mood_warning(self):
        assert WARNING_MOOD not in validate_message("fix: remove old module").warnings

    def test_mood_heuristic_false_positive_kept(self):
        # 'process' ends in s; the heuristic flags it anyway
        assert WARNING_MOOD in validate_message("perf: process rows lazily").warnings

    def test_missing_blank_line_warning(self):
        result = validate_message("feat: add login\nBody right after subject")
        assert WARNING_BLANK_LINE in result.warnings

    def test_blank_line_present(self):
        result = validate_message("feat: add login\n\nBody")
        assert WARNING_BLANK_LINE not in result.warnings

    def test_shortening_never_adds_errors(self):
        long_message = "feat: " + "word " * 30
        shorter = process_message(long_message, GenerationOptions(max_length=50))
        assert len(validate_message(shorter).errors) <= len(validate_message(long_message).errors)


# ---------------------------------------------------------------------------
# Suggestions
# ---------------------------------------------------------------------------

class TestGetSuggestions:
    """get_suggestions() rules and ordering."""

    def test_deleted_file_suggests_breaking_change(self):
        status = GitStatus(deleted=("old.ts",))
        suggestions = get_suggestions("fix: remove old module", status, "")
        assert Suggestion('warning', SUGGEST_BREAKING) in suggestions
        assert any("breaking change" in s.message for s in suggestions if s.type == 'warning')

    def test_code_without_tests(self):
        status = GitStatus(modified=("src/app.py",))
        suggestions = get_suggestions("fix: handle none", status, "")
        assert suggestions[0] == Suggestion('warning', SUGGEST_TESTS)

    def test_code_with_tests_no_warning(self):
        status = GitStatus(modified=("src/app.py", "tests/test_app.py"))
        suggestions = get_suggestions("fix: handle none", status, "")
        assert Suggestion('warning', SUGGEST_TESTS) not in suggestions

    def test_api_change_without_docs(self):
        status = GitStatus(modified=("lib/index.ts",))
        suggestions = get_suggestions("feat: expose parser", status, "+export function parse() {}")
        assert Suggestion('info', SUGGEST_DOCS) in suggestions

    def test_api_change_with_readme(self):
        status = GitStatus(modified=("lib/index.ts", "README.md"))
        suggestions = get_suggestions("feat: expose parser", status, "+export function parse() {}")
        assert Suggestion('info', SUGGEST_DOCS) not in suggestions

    def test_readme_without_extension_counts_as_docs(self):
        status = GitStatus(modified=("lib/index.ts", "docs/Readme"))
        suggestions = get_suggestions("fix: x", status, "+export x")
        assert Suggestion('info', SUGGEST_DOCS) not in suggestions

    def test_spec_file_counts_as_test(self):
        status = GitStatus(modified=("a.py", "a.spec.ts"))
        suggestions = get_suggestions("fix: x", status, "")
        assert Suggestion('warning', SUGGEST_TESTS) not in suggestions

    def test_breaking_keyword_in_diff(self):
        status = GitStatus(modified=("notes.txt",))
        suggestions = get_suggestions("fix: x", status, "+a breaking tweak")
        assert suggestions == [Suggestion('warning', SUGGEST_BREAKING)]

    def test_validation_results_appended_last(self):
        status = GitStatus(deleted=("old.ts",))
        suggestions = get_suggestions("Removed stuff", status, "")
        types = [s.type for s in suggestions]
        assert suggestions[0].message == SUGGEST_BREAKING
        assert types[1] == 'error'
        assert Suggestion('error', ERROR_NOT_CONVENTIONAL) in suggestions
        assert Suggestion('warning', WARNING_MOOD) == suggestions[-1]

    def test_rule_order(self):
        status = GitStatus(modified=("api.py",), deleted=("legacy.py",))
        suggestions = get_suggestions("feat: drop legacy api", status, "+public def handler():")
        assert [s.message for s in suggestions] == [SUGGEST_TESTS, SUGGEST_DOCS, SUGGEST_BREAKING]

    def test_deterministic(self):
        status = GitStatus(modified=("api.py",), deleted=("legacy.py",))
        first = get_suggestions("feat: drop legacy api", status, "BREAKING")
        assert first == get_suggestions("feat: drop legacy api", status, "BREAKING")

    def test_clean_change_has_no_suggestions(self):
        status = GitStatus(modified=("notes.txt",))
        assert get_suggestions("docs: clarify install notes", status, "+more text") == []
