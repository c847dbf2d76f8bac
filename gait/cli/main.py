"""CLI Main Entry Point"""

import sys

from gait.config import ConfigError
from gait.generator import NoChangesError
from gait.git import GitError
from gait.llm import LLMError
from gait.output import configure_logging, dim

from gait.cli.args import parse_args
from gait.cli.commands import run_status, run_generate, run_commit
from gait.cli.config_commands import run_config
from gait.cli.errors import handle_error

COMMANDS = {
    'status': run_status,
    'generate': run_generate,
    'commit': run_commit,
    'config': run_config,
}


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)
    configure_logging(args.verbose)

    if not args.command:
        args.parser.print_help()
        return 0

    try:
        return COMMANDS[args.command](args)
    except (GitError, LLMError, NoChangesError, ConfigError) as e:
        return handle_error(e, args.verbose)
    except KeyboardInterrupt:
        print(dim("\nCancelled."), file=sys.stderr)
        return 130


if __name__ == '__main__':
    sys.exit(main())
