"""Static (unversioned) repository implementation."""

from pathlib import Path

from plugman.core.manifest import RepoType
from plugman.repos.abstract_repo import AbstractRepo
from plugman.utils import copy_directory


class StaticRepo(AbstractRepo):
    """A plain directory of plugin files."""

    REPO_TYPE = RepoType.STATIC

    def install(self, dest: Path) -> None:
        copy_directory(self.local_path, dest)

    def describe(self) -> str:
        return "static"
