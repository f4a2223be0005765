"""CLI command extensions for plugman."""

from .enable_commands import EnableCommands
from .import_commands import ImportCommands
from .profile_commands import ProfileCommands
from .repo_commands import RepoCommands

__all__ = [
    "EnableCommands",
    "ImportCommands",
    "ProfileCommands",
    "RepoCommands",
]
