"""CLI commands for importing local repositories."""

import argparse
from pathlib import Path

from plugman.config import Config
from plugman.core.errors import ArgumentError
from plugman.core.registrar import adopt_repository, import_repository
from plugman.output import MessageType, VerbosityLevel, message
from plugman.utils import full_repos_path_of, normalize_imported_repos_path, normalize_repos_path

IMPORT_USAGE = """\
forms:
  (1) plugman import {repository}
      Import the repos directory entry of {repository} in place; fails
      with "already exists" whenever that directory is present
  (2) plugman import {from} {repository}
      Copy the local directory {from} in as {repository}

To register a directory already under the repos directory (for example
one left behind by an interrupted import), use 'plugman adopt'.
"""


class ImportCommands:
    """Manages the ``import`` and ``adopt`` commands."""

    COMMANDS = ("import", "adopt")

    @staticmethod
    def add_cli_arguments(subparsers) -> None:
        """Add import CLI arguments.

        Args:
            subparsers: The argparse subparsers to add to
        """
        import_parser = subparsers.add_parser(
            "import",
            help="Import a local repository",
            epilog=IMPORT_USAGE,
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        import_parser.add_argument("args", nargs="+", metavar="arg", help="[from] repository")

        adopt_parser = subparsers.add_parser(
            "adopt",
            help="Register an unregistered directory under the repos directory",
        )
        adopt_parser.add_argument("repository", help="Repository identifier (host/user/name)")

    @staticmethod
    def parse_import_args(args: list[str]) -> tuple[Path | None, str]:
        """Split positional arguments into source directory and identifier.

        Returns:
            ``(source, repos_path)``; *source* is None for the one-argument form

        Raises:
            ArgumentError: On a wrong argument count or malformed identifier
        """
        if len(args) == 1:
            return None, normalize_repos_path(args[0])
        if len(args) == 2:
            return Path(args[0]).expanduser(), normalize_imported_repos_path(args[1])
        raise ArgumentError("invalid arguments")

    @classmethod
    def process_cli_command(cls, args: argparse.Namespace, config: Config) -> None:
        """Process the import and adopt commands.

        Args:
            args: Parsed command-line arguments
            config: Configuration for the plugman home directory
        """
        if args.command == "adopt":
            record = adopt_repository(config, normalize_imported_repos_path(args.repository))
        else:
            source, repos_path = cls.parse_import_args(args.args)
            if source is None:
                source = full_repos_path_of(config.repos_directory, repos_path)
            record = import_repository(config, source, repos_path)

        message(
            f"Imported '{record.path}' ({record.type.value}) and enabled it in the current profile",
            MessageType.SUCCESS,
            VerbosityLevel.ALWAYS,
        )
