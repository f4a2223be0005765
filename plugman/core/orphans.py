"""Detection of imported directories the manifest does not know about.

An import copies files before it persists the manifest, so a crash in
between leaves a directory under ``repos/`` with no repository record.
Such orphans are reported, never deleted; ``plugman adopt {repo}``
registers one in place.
"""

from __future__ import annotations

from plugman.core.manifest import Manifest

# host/user/name
_DEPTH = 3


def find_orphans(config, manifest: Manifest) -> list[str]:
    """List repository paths present on disk but absent from *manifest*.

    Args:
        config: Config providing ``repos_directory``
        manifest: Current manifest

    Returns:
        Sorted ``host/user/name`` identifiers
    """
    root = config.repos_directory
    if not root.is_dir():
        return []

    known = {r.path for r in manifest.repos}
    orphans: list[str] = []
    for candidate in root.glob("/".join(["*"] * _DEPTH)):
        if not candidate.is_dir():
            continue
        repos_path = candidate.relative_to(root).as_posix()
        if repos_path not in known:
            orphans.append(repos_path)
    return sorted(orphans)
