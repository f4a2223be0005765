"""Git repository implementation."""

import os
from pathlib import Path

import git

from plugman.core.manifest import RepoType
from plugman.output import MessageType, VerbosityLevel, message
from plugman.repos.abstract_repo import AbstractRepo
from plugman.utils import copy_directory


class GitRepo(AbstractRepo):
    """A repository under git version control.

    Only the files committed at ``HEAD`` are installed, so scratch files
    and local edits in the working copy stay out of the runtime
    directory.
    """

    REPO_TYPE = RepoType.VCS

    def _open(self) -> git.Repo:
        try:
            return git.Repo(self.local_path)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
            raise OSError(f"not a valid git repository: {self.local_path}") from e

    def is_valid(self) -> bool:
        """Check that the directory holds a git repository GitPython can open."""
        try:
            with self._open():
                return True
        except OSError:
            return False

    def install(self, dest: Path) -> None:
        """Write the ``HEAD`` tree of the repository into *dest*.

        Falls back to copying the working tree (without ``.git``) when
        the repository has no commits yet.
        """
        with self._open() as repo:
            if not repo.head.is_valid():
                message(
                    f"'{self.repos_path}' has no commits, copying working tree",
                    MessageType.DEBUG,
                    VerbosityLevel.DEBUG,
                )
                copy_directory(self.local_path, dest, ignore=(".git",))
                return

            dest.mkdir(parents=True)
            try:
                commit = repo.head.commit
                for item in commit.tree.traverse():
                    # Submodules and trees are skipped; trees are created on demand
                    if item.type != "blob":
                        continue
                    target = dest / item.path
                    target.parent.mkdir(parents=True, exist_ok=True)
                    data = item.data_stream.read()
                    if item.mode == git.Blob.link_mode:
                        os.symlink(data.decode(), target)
                        continue
                    target.write_bytes(data)
                    if item.mode == git.Blob.executable_mode:
                        target.chmod(0o755)
            except git.exc.GitError as e:
                raise OSError(f"failed to read '{self.repos_path}' at HEAD: {e}") from e

        message(
            f"Installed '{self.repos_path}' at {commit.hexsha[:8]}",
            MessageType.DEBUG,
            VerbosityLevel.DEBUG,
        )

    def describe(self) -> str:
        """Return the short ``HEAD`` commit, or a placeholder."""
        try:
            repo = self._open()
        except OSError:
            return "(invalid git repository)"
        with repo:
            if not repo.head.is_valid():
                return "(no commits)"
            return repo.head.commit.hexsha[:8]
