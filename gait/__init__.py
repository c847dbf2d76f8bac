"""
gait

AI-powered commit message generation from pending git changes.
"""

__version__ = "1.0.0"

# Centralized commit types - single source of truth
# Used by: prompts/builder.py, message/validator.py, output (type colors)
COMMIT_TYPES = {
    'feat': 'A new feature or capability',
    'fix': 'A bug fix',
    'docs': 'Documentation only changes',
    'style': 'Formatting, whitespace, no code change',
    'refactor': 'Code restructuring without behavior change',
    'perf': 'Performance improvement',
    'test': 'Adding or updating tests',
    'chore': 'Maintenance tasks, dependencies, tooling',
    'ci': 'CI/CD configuration changes',
    'build': 'Build system or external dependency changes',
    'revert': 'Reverts a previous commit',
}

COMMIT_TYPE_NAMES = list(COMMIT_TYPES.keys())

# Message formats understood by the prompt builder and validator
COMMIT_FORMATS = ['conventional', 'simple', 'detailed']
DEFAULT_FORMAT = 'conventional'
