"""CLI Argument Parsing"""

import argparse
import argcomplete

from gait import COMMIT_FORMATS, __version__
from gait.config import PROVIDER_TYPES, SETTABLE_KEYS


def _common_options() -> argparse.ArgumentParser:
    """Options accepted both before and after the subcommand."""
    common = argparse.ArgumentParser(add_help=False)
    # SUPPRESS keeps the top-level value unless the flag is given after the subcommand
    common.add_argument('-r', '--repo', type=str, metavar='PATH', default=argparse.SUPPRESS, help='Repository path (default: .)')
    common.add_argument('--verbose', action='store_true', default=argparse.SUPPRESS, help='Show debug output and stack traces')
    return common


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{value}'")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def _add_generation_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('--format', type=str, choices=COMMIT_FORMATS, help='Message format (default: from config, else conventional)')
    parser.add_argument('--max-length', type=_positive_int, metavar='N', help='First line length budget (default: from config, else 50; validation rejects over 72)')
    parser.add_argument('--max-diff-length', type=_positive_int, metavar='N', help='Diff characters sent to the model (default: 3000)')


def _add_config_parser(subparsers, common: argparse.ArgumentParser) -> None:
    config_parser = subparsers.add_parser('config', parents=[common], help='Manage configuration settings')
    config_sub = config_parser.add_subparsers(dest='config_command', metavar='<action>')

    show = config_sub.add_parser('show', help='Show current configuration')
    show.add_argument('--show-keys', action='store_true', help='Show masked API keys')
    show.add_argument('--path', action='store_true', help='Show config file path only')

    set_parser = config_sub.add_parser('set', help='Set a configuration value')
    set_parser.add_argument('key', choices=SETTABLE_KEYS, help='Configuration key (max_length: 1-72, the validation limit)')
    set_parser.add_argument('value', help='Configuration value')

    add = config_sub.add_parser('add-provider', aliases=['add'], help='Add a new LLM provider')
    add.add_argument('--name', type=str, help='Provider name (omit for interactive mode)')
    add.add_argument('--type', type=str.upper, choices=PROVIDER_TYPES, help='Provider type')
    add.add_argument('--model', type=str, help='Model name')
    add.add_argument('--api-key', type=str, help='API key (OPENAI, ANTHROPIC)')
    add.add_argument('--url', type=str, help='Server URL (OLLAMA) or base URL (OPENAI)')

    config_sub.add_parser('list-providers', aliases=['list'], help='List configured providers')

    remove = config_sub.add_parser('remove-provider', aliases=['remove'], help='Remove a provider')
    remove.add_argument('name', nargs='?', help='Provider name (omit to choose)')

    default = config_sub.add_parser('set-default', help='Set the default provider')
    default.add_argument('name', nargs='?', help='Provider name (omit to choose)')

    config_sub.add_parser('reset', help='Clear all configuration')


def build_parser() -> argparse.ArgumentParser:
    common = _common_options()

    parser = argparse.ArgumentParser(
        prog='gait',
        description='Gait, your Git commit message generator',
        epilog='Example: gait commit -i (generate, review, then commit)'
    )
    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('-r', '--repo', type=str, metavar='PATH', default='.', help='Repository path (default: .)')
    parser.add_argument('--verbose', action='store_true', default=False, help='Show debug output and stack traces')

    subparsers = parser.add_subparsers(dest='command', metavar='<command>')

    status = subparsers.add_parser('status', aliases=['st'], parents=[common], help='Show repository status and changes')
    status.add_argument('--show-diff', action='store_true', help='Show diff of changes')
    status.add_argument('--show-stats', action='store_true', help='Show detailed statistics')
    status.add_argument('--branch-info', action='store_true', help='Show branch information')
    status.add_argument('--recent-commits', type=_positive_int, nargs='?', const=5, default=None, metavar='N', help='Show N recent commits (default: 5)')

    generate = subparsers.add_parser('generate', aliases=['gen', 'g'], parents=[common], help='Generate a commit message without committing')
    _add_generation_options(generate)
    generate.add_argument('-a', '--alternatives', type=_positive_int, nargs='?', const=3, default=None, metavar='N', help='Generate N alternatives in different formats (default: 3)')
    generate.add_argument('--suggest', action='store_true', help='Show validation results and suggestions')
    generate.add_argument('--no-copy', action='store_true', help='Print message only, do not copy to clipboard')

    commit = subparsers.add_parser('commit', aliases=['c'], parents=[common], help='Generate a commit message and create the commit')
    _add_generation_options(commit)
    commit.add_argument('-s', '--staged-only', action='store_true', help='Only commit staged changes')
    commit.add_argument('-f', '--files', type=str, metavar='FILES', help='Comma-separated list of files to commit')
    commit.add_argument('-n', '--dry-run', action='store_true', help='Show what would be committed without committing')
    commit.add_argument('-i', '--interactive', action='store_true', help='Review and edit message before committing')
    commit.add_argument('--skip-validation', action='store_true', help='Commit even when the message fails validation')

    _add_config_parser(subparsers, common)

    return parser


# Subcommand aliases resolved to their canonical names
COMMAND_ALIASES = {'st': 'status', 'gen': 'generate', 'g': 'generate', 'c': 'commit'}
CONFIG_ALIASES = {'add': 'add-provider', 'list': 'list-providers', 'remove': 'remove-provider'}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    argcomplete.autocomplete(parser)
    args = parser.parse_args(argv)

    args.command = COMMAND_ALIASES.get(args.command, args.command)
    if getattr(args, 'config_command', None):
        args.config_command = CONFIG_ALIASES.get(args.config_command, args.config_command)
    args.parser = parser
    return args
