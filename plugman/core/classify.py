"""Repository type detection."""

from pathlib import Path

from plugman.core.manifest import RepoType

# Directory whose presence marks a version-controlled repository
VCS_MARKER = ".git"


def classify(path: Path) -> RepoType:
    """Return the management type of the repository at *path*.

    Only checks for ``path/.git``; nested markers deeper in the tree do
    not count.
    """
    if (path / VCS_MARKER).exists():
        return RepoType.VCS
    return RepoType.STATIC
