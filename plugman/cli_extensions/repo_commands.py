"""CLI commands for inspecting repositories and maintaining the home directory."""

import argparse

from plugman.config import Config
from plugman.core.enable import rebuild_runtime
from plugman.core.manifest import read_manifest
from plugman.core.orphans import find_orphans
from plugman.core.profiles import active_profile
from plugman.core.transaction import unlock
from plugman.output import MessageType, VerbosityLevel, message
from plugman.repos import create_repo


class RepoCommands:
    """Manages the ``list``, ``rebuild`` and ``unlock`` commands."""

    COMMANDS = ("list", "rebuild", "unlock")

    @staticmethod
    def add_cli_arguments(subparsers) -> None:
        """Add repository-related CLI arguments.

        Args:
            subparsers: The argparse subparsers to add to
        """
        subparsers.add_parser("list", help="List imported repositories")

        subparsers.add_parser("rebuild", help="Regenerate the runtime directory from the manifest")

        unlock_parser = subparsers.add_parser(
            "unlock", help="Remove a transaction marker left by a crashed process",
        )
        unlock_parser.add_argument(
            "--force", action="store_true", help="Remove the marker even if its holder looks alive",
        )

    @classmethod
    def process_cli_command(cls, args: argparse.Namespace, config: Config) -> None:
        """Process repository CLI commands.

        Args:
            args: Parsed command-line arguments
            config: Configuration for the plugman home directory
        """
        if args.command == "list":
            cls.list_repos(config)
        elif args.command == "rebuild":
            installed = rebuild_runtime(config)
            message(
                f"Rebuilt {config.runtime_directory} ({len(installed)} repositories)",
                MessageType.SUCCESS,
                VerbosityLevel.ALWAYS,
            )
        elif args.command == "unlock":
            unlock(config.transaction_file, config.stale_transaction_seconds, force=args.force)

    @staticmethod
    def list_repos(config: Config) -> None:
        """List registered repositories and any orphaned directories."""
        manifest = read_manifest(config.manifest_file, config.default_profile)
        profile = active_profile(manifest)

        message(f"\n=== Repositories (profile: {profile.name}) ===\n", MessageType.NORMAL, VerbosityLevel.ALWAYS)

        if not manifest.repos:
            message("No repositories imported.", MessageType.NORMAL, VerbosityLevel.ALWAYS)
            message("Use 'plugman import <from> <repository>' to add one.", MessageType.NORMAL, VerbosityLevel.ALWAYS)

        for record in manifest.repos:
            mark = "x" if profile.contains(record.path) else " "
            version = create_repo(record, config.repos_directory).describe()
            message(
                f"  [{mark}] {record.path} ({record.type.value}, trx {record.trx_id}, {version})",
                MessageType.NORMAL,
                VerbosityLevel.ALWAYS,
            )

        orphans = find_orphans(config, manifest)
        if orphans:
            message("", MessageType.NORMAL, VerbosityLevel.ALWAYS)
            message("Unregistered directories (run 'plugman adopt <repository>' to register):",
                    MessageType.WARNING, VerbosityLevel.ALWAYS)
            for repos_path in orphans:
                message(f"  {repos_path}", MessageType.WARNING, VerbosityLevel.ALWAYS)

        message("", MessageType.NORMAL, VerbosityLevel.ALWAYS)
        message(f"Total: {len(manifest.repos)} repositories, {len(profile.repos_path)} enabled",
                MessageType.NORMAL, VerbosityLevel.ALWAYS)
