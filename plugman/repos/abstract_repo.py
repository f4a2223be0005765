"""Abstract base class for repository implementations."""

from abc import ABC, abstractmethod
from pathlib import Path

from plugman.core.manifest import RepoType
from plugman.utils import full_repos_path_of


class AbstractRepo(ABC):
    """Abstract base class for an imported repository on disk."""

    # Subclasses must define this to identify their type
    REPO_TYPE: RepoType

    def __init__(self, repos_path: str, repos_dir: Path):
        """Initialize a repository.

        Args:
            repos_path: Canonical identifier (``host/user/name``)
            repos_dir: Base directory where repos are stored
        """
        self.repos_path = repos_path
        self.repos_dir = repos_dir
        self.local_path = full_repos_path_of(repos_dir, repos_path)

    def get_path(self) -> Path:
        """Get the local path to the repository.

        Returns:
            Path to the local repository
        """
        return self.local_path

    def exists(self) -> bool:
        """Check if the repository exists locally.

        Returns:
            True if the repository exists, False otherwise
        """
        return self.local_path.is_dir()

    def is_valid(self) -> bool:
        """Check if the repository can be installed as its recorded type.

        Returns:
            True if :meth:`install` can read the repository
        """
        return self.exists()

    @abstractmethod
    def install(self, dest: Path) -> None:
        """Materialize the repository's files into *dest*.

        *dest* does not exist beforehand and is created by this call.

        Args:
            dest: Directory inside the runtime directory

        Raises:
            OSError: On any I/O failure
        """
        pass

    @abstractmethod
    def describe(self) -> str:
        """Get a short human-friendly version string for listings."""
        pass

    # ------------------------------------------------------------------
    # String representations
    # ------------------------------------------------------------------
    def __str__(self) -> str:
        """String representation of the repository."""
        return f"Repo(path='{self.repos_path}', type={self.REPO_TYPE.value})"

    def __repr__(self) -> str:
        """Developer representation of the repository."""
        return (
            f"{self.__class__.__name__}(repos_path='{self.repos_path}', "
            f"local_path={self.local_path})"
        )
