"""Repository plugins, one per :class:`~plugman.core.manifest.RepoType`."""

from pathlib import Path

from plugman.core.manifest import Repository, RepoType

from .abstract_repo import AbstractRepo
from .git_repo import GitRepo
from .static_repo import StaticRepo

REPO_TYPE_MAP: dict[RepoType, type[AbstractRepo]] = {
    GitRepo.REPO_TYPE: GitRepo,
    StaticRepo.REPO_TYPE: StaticRepo,
}


def create_repo(record: Repository, repos_dir: Path) -> AbstractRepo:
    """Create the plugin object for a repository record.

    The class is chosen from the stored type, never from the files on
    disk.
    """
    return REPO_TYPE_MAP[record.type](record.path, repos_dir)


__all__ = ["AbstractRepo", "GitRepo", "REPO_TYPE_MAP", "StaticRepo", "create_repo"]
