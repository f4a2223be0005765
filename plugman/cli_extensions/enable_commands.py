"""CLI commands for enabling and disabling repositories in the active profile."""

import argparse

from plugman.config import Config
from plugman.core.enable import disable_repositories, enable_repositories
from plugman.output import MessageType, VerbosityLevel, message
from plugman.utils import normalize_repos_path


class EnableCommands:
    """Manages the ``enable`` and ``disable`` shortcuts."""

    COMMANDS = ("enable", "disable")

    @staticmethod
    def add_cli_arguments(subparsers) -> None:
        """Add enable/disable CLI arguments.

        Args:
            subparsers: The argparse subparsers to add to
        """
        enable_parser = subparsers.add_parser(
            "enable",
            help="Enable repositories in the current profile",
            description="Shortcut of: plugman profile add {current profile} {repository}...",
            epilog="Example:\n  plugman enable tyru/caw.vim",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        enable_parser.add_argument("repos", nargs="+", metavar="repository", help="Repository to enable")

        disable_parser = subparsers.add_parser(
            "disable",
            help="Disable repositories in the current profile",
            description="Shortcut of: plugman profile rm {current profile} {repository}...",
        )
        disable_parser.add_argument("repos", nargs="+", metavar="repository", help="Repository to disable")

    @staticmethod
    def process_cli_command(args: argparse.Namespace, config: Config) -> None:
        """Process enable/disable commands.

        Args:
            args: Parsed command-line arguments
            config: Configuration for the plugman home directory
        """
        repos_paths = [normalize_repos_path(arg) for arg in args.repos]

        if args.command == "enable":
            changed = enable_repositories(config, repos_paths)
            verb = "Enabled"
        else:
            changed = disable_repositories(config, repos_paths)
            verb = "Disabled"

        for repos_path in changed:
            message(f"{verb} '{repos_path}'", MessageType.SUCCESS, VerbosityLevel.ALWAYS)
        if not changed:
            message("Nothing changed.", MessageType.NORMAL, VerbosityLevel.ALWAYS)
