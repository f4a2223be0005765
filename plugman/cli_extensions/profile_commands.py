"""CLI commands for managing profiles."""

import argparse

from plugman.config import Config
from plugman.core.enable import (
    add_to_named_profile,
    create_profile,
    remove_from_named_profile,
    switch_profile,
)
from plugman.core.manifest import read_manifest
from plugman.core.profiles import find_profile
from plugman.output import MessageType, VerbosityLevel, message
from plugman.utils import normalize_repos_path


class ProfileCommands:
    """Manages CLI commands for profiles."""

    COMMANDS = ("profile",)

    @staticmethod
    def add_cli_arguments(subparsers) -> None:
        """Add profile commands to the argument parser."""
        profile_parser = subparsers.add_parser("profile", help="Manage profiles")
        profile_sub = profile_parser.add_subparsers(dest="profile_command", help="Profile commands")

        # profile list
        profile_sub.add_parser("list", help="List profiles")

        # profile show
        show_parser = profile_sub.add_parser("show", help="Show a profile")
        show_parser.add_argument("name", nargs="?", help="Profile name (default: current profile)")

        # profile new
        new_parser = profile_sub.add_parser("new", help="Create an empty profile")
        new_parser.add_argument("name", help="Profile name")

        # profile set
        set_parser = profile_sub.add_parser("set", help="Switch the current profile")
        set_parser.add_argument("name", help="Profile name")

        # profile add
        add_parser = profile_sub.add_parser("add", help="Add repositories to a profile")
        add_parser.add_argument("name", help="Profile name")
        add_parser.add_argument("repos", nargs="+", metavar="repository", help="Repository to add")

        # profile rm
        rm_parser = profile_sub.add_parser("rm", help="Remove repositories from a profile")
        rm_parser.add_argument("name", help="Profile name")
        rm_parser.add_argument("repos", nargs="+", metavar="repository", help="Repository to remove")

    @classmethod
    def process_cli_command(cls, args: argparse.Namespace, config: Config) -> None:
        """Process profile commands."""
        cmd = getattr(args, "profile_command", None)
        if cmd is None:
            cls._show_usage()
            return

        if cmd == "list":
            cls.list_profiles(config)
        elif cmd == "show":
            cls.show_profile(config, args.name)
        elif cmd == "new":
            create_profile(config, args.name)
            message(f"Created profile '{args.name}'", MessageType.SUCCESS, VerbosityLevel.ALWAYS)
        elif cmd == "set":
            if switch_profile(config, args.name):
                message(f"Changed current profile to '{args.name}'", MessageType.SUCCESS, VerbosityLevel.ALWAYS)
        elif cmd == "add":
            repos_paths = [normalize_repos_path(arg) for arg in args.repos]
            for repos_path in add_to_named_profile(config, args.name, repos_paths):
                message(f"Added '{repos_path}' to '{args.name}'", MessageType.SUCCESS, VerbosityLevel.ALWAYS)
        elif cmd == "rm":
            repos_paths = [normalize_repos_path(arg) for arg in args.repos]
            for repos_path in remove_from_named_profile(config, args.name, repos_paths):
                message(f"Removed '{repos_path}' from '{args.name}'", MessageType.SUCCESS, VerbosityLevel.ALWAYS)

    @staticmethod
    def _show_usage() -> None:
        message("Usage: plugman profile <command>", MessageType.NORMAL, VerbosityLevel.ALWAYS)
        message("", MessageType.NORMAL, VerbosityLevel.ALWAYS)
        message("Available commands:", MessageType.NORMAL, VerbosityLevel.ALWAYS)
        message("  list      List profiles", MessageType.NORMAL, VerbosityLevel.ALWAYS)
        message("  show      Show a profile", MessageType.NORMAL, VerbosityLevel.ALWAYS)
        message("  new       Create an empty profile", MessageType.NORMAL, VerbosityLevel.ALWAYS)
        message("  set       Switch the current profile", MessageType.NORMAL, VerbosityLevel.ALWAYS)
        message("  add       Add repositories to a profile", MessageType.NORMAL, VerbosityLevel.ALWAYS)
        message("  rm        Remove repositories from a profile", MessageType.NORMAL, VerbosityLevel.ALWAYS)

    @staticmethod
    def list_profiles(config: Config) -> None:
        """List profile names, marking the current one."""
        manifest = read_manifest(config.manifest_file, config.default_profile)
        for profile in manifest.profiles:
            mark = "*" if profile.name == manifest.active_profile else " "
            message(f"{mark} {profile.name}", MessageType.NORMAL, VerbosityLevel.ALWAYS)

    @staticmethod
    def show_profile(config: Config, name: str | None) -> None:
        """Print the repositories enabled in a profile."""
        manifest = read_manifest(config.manifest_file, config.default_profile)
        profile = find_profile(manifest, name or manifest.active_profile)

        suffix = " (current)" if profile.name == manifest.active_profile else ""
        message(f"name: {profile.name}{suffix}", MessageType.NORMAL, VerbosityLevel.ALWAYS)
        message("repos path:", MessageType.NORMAL, VerbosityLevel.ALWAYS)
        if not profile.repos_path:
            message("  (none)", MessageType.NORMAL, VerbosityLevel.ALWAYS)
        for repos_path in profile.repos_path:
            message(f"  {repos_path}", MessageType.NORMAL, VerbosityLevel.ALWAYS)
