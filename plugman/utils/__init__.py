"""Utility functions for plugman."""

from .copy import copy_directory
from .paths import (
    full_repos_path_of,
    normalize_imported_repos_path,
    normalize_repos_path,
)

__all__ = [
    "copy_directory",
    "full_repos_path_of",
    "normalize_imported_repos_path",
    "normalize_repos_path",
]
