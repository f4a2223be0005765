"""Regenerate the runtime plugin directory from the manifest.

The runtime directory holds one ``host/user/name`` subdirectory per
repository enabled in the active profile, laid out like the repos
directory.
It is derived state: every rebuild wipes and recreates it.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from plugman.core.errors import RebuildFailed
from plugman.core.manifest import Manifest
from plugman.core.profiles import active_profile
from plugman.output import MessageType, VerbosityLevel, message
from plugman.repos import create_repo
from plugman.utils import full_repos_path_of

# Written into the runtime directory so rebuild never wipes a foreign directory
RUNTIME_MARKER = ".plugman-runtime"


def _reset_runtime(runtime: Path) -> None:
    if runtime.exists():
        if any(runtime.iterdir()) and not (runtime / RUNTIME_MARKER).exists():
            raise RebuildFailed(runtime, "directory is not managed by plugman; refusing to overwrite it")
        shutil.rmtree(runtime)
    runtime.mkdir(parents=True)
    (runtime / RUNTIME_MARKER).write_text("")


def rebuild(config, manifest: Manifest) -> list[str]:
    """Recreate ``config.runtime_directory`` for the active profile.

    Enabled paths with no repository record, whose directory is gone, or
    whose directory no longer matches its recorded type are skipped with
    a warning.

    Args:
        config: Config providing ``runtime_directory`` and ``repos_directory``
        manifest: Manifest to build from

    Returns:
        Repository paths that were installed

    Raises:
        ProfileNotFound: If the active profile is missing
        RebuildFailed: On any I/O failure
    """
    runtime = config.runtime_directory
    profile = active_profile(manifest)
    installed: list[str] = []

    message(f"Rebuilding {runtime} for profile '{profile.name}'", MessageType.INFO, VerbosityLevel.VERBOSE)

    try:
        _reset_runtime(runtime)
        for repos_path in profile.repos_path:
            record = manifest.find_repos(repos_path)
            if record is None:
                message(
                    f"'{repos_path}' is enabled in '{profile.name}' but not registered, skipping",
                    MessageType.WARNING,
                    VerbosityLevel.ALWAYS,
                )
                continue

            repo = create_repo(record, config.repos_directory)
            if not repo.exists():
                message(
                    f"'{repos_path}' is missing from {repo.get_path()}, skipping",
                    MessageType.WARNING,
                    VerbosityLevel.ALWAYS,
                )
                continue
            if not repo.is_valid():
                message(
                    f"'{repos_path}' at {repo.get_path()} is not a valid {record.type.value} repository, skipping",
                    MessageType.WARNING,
                    VerbosityLevel.ALWAYS,
                )
                continue

            repo.install(full_repos_path_of(runtime, repos_path))
            installed.append(repos_path)
            message(f"  Installed {repos_path}", MessageType.INFO, VerbosityLevel.EXTRA_VERBOSE)
    except OSError as e:
        raise RebuildFailed(runtime, e) from e

    message(
        f"Rebuilt {runtime} ({len(installed)} repositories)",
        MessageType.DEBUG,
        VerbosityLevel.DEBUG,
    )
    return installed
