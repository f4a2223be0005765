#!/usr/bin/env python

"""Local plugin repository manager with profiles."""

import argparse
import sys
from pathlib import Path

from plugman.cli_extensions import (
    EnableCommands,
    ImportCommands,
    ProfileCommands,
    RepoCommands,
)
from plugman.config import Config
from plugman.core.errors import EXIT_OK, ArgumentError, PlugmanError
from plugman.output import MessageType, VerbosityLevel, get_output, message

# Grouped command help text
COMMAND_GROUPS = """
repository commands:
  import              Import a local repository
  adopt               Register a directory left in the repos directory
  list                List imported repositories

profile commands:
  enable              Enable repositories in the current profile
  disable             Disable repositories in the current profile
  profile             Manage profiles

maintenance commands:
  rebuild             Regenerate the runtime directory
  unlock              Remove a stale transaction marker

exit status: 0 success, 10 invalid arguments, 11 operation failed
"""


class ArgumentParser(argparse.ArgumentParser):
    """Parser that raises :class:`ArgumentError` instead of exiting with 2."""

    def error(self, message):
        raise ArgumentError(message)


class GroupedHelpFormatter(argparse.RawDescriptionHelpFormatter):
    """Custom formatter that hides the subparser choices from positional arguments."""

    def _metavar_formatter(self, action, default_metavar):
        if action.choices is not None:
            result = action.metavar if action.metavar is not None else ""

            def format_fn(tuple_size):
                if isinstance(result, tuple):
                    return result
                return (result,) * tuple_size

            return format_fn
        return super()._metavar_formatter(action, default_metavar)

    def _format_action(self, action):
        # Skip formatting subparser actions entirely (we show them in epilog)
        if isinstance(action, argparse._SubParsersAction):
            return ""
        return super()._format_action(action)


def build_parser() -> ArgumentParser:
    """Create the top-level parser with every command registered."""
    parser = ArgumentParser(
        prog="plugman",
        description="Manage local plugin repositories and the profiles that enable them",
        formatter_class=GroupedHelpFormatter,
        epilog=COMMAND_GROUPS,
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="Increase verbosity (-v, -vv, -vvv)",
    )
    parser.add_argument(
        "--no-color", action="store_true",
        help="Disable colored output",
    )
    parser.add_argument(
        "--home", type=Path, default=None,
        help="plugman home directory (default: $PLUGMAN_HOME or ~/.plugman)",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    # Register all command parsers
    ImportCommands.add_cli_arguments(subparsers)     # import + adopt
    EnableCommands.add_cli_arguments(subparsers)     # enable + disable
    ProfileCommands.add_cli_arguments(subparsers)    # profile
    RepoCommands.add_cli_arguments(subparsers)       # list + rebuild + unlock

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the plugman CLI.

    Returns:
        Process exit status
    """
    parser = build_parser()

    try:
        args = parser.parse_args(argv)
    except ArgumentError as e:
        message(f"Failed to parse args: {e}", MessageType.ERROR, VerbosityLevel.ALWAYS)
        return e.exit_code

    # Configure output system
    output_mgr = get_output()
    output_mgr.verbosity = args.verbose
    output_mgr.use_color = not args.no_color and sys.stdout.isatty()

    message(f"Command: {args.command}", MessageType.DEBUG, VerbosityLevel.DEBUG)

    # No command specified
    if args.command is None:
        parser.print_help()
        return EXIT_OK

    try:
        config = Config(args.home)
        config.ensure_directories()

        if args.command in ImportCommands.COMMANDS:
            ImportCommands.process_cli_command(args, config)
        elif args.command in EnableCommands.COMMANDS:
            EnableCommands.process_cli_command(args, config)
        elif args.command in ProfileCommands.COMMANDS:
            ProfileCommands.process_cli_command(args, config)
        elif args.command in RepoCommands.COMMANDS:
            RepoCommands.process_cli_command(args, config)
    except ArgumentError as e:
        message(f"Failed to parse args: {e}", MessageType.ERROR, VerbosityLevel.ALWAYS)
        return e.exit_code
    except PlugmanError as e:
        message(f"Failed to {args.command}: {e}", MessageType.ERROR, VerbosityLevel.ALWAYS)
        return e.exit_code

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
