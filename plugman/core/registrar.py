"""Repository registrar: the import workflow.

Importing copies a local directory into the repos directory, records it
in the manifest with its detected type, enables it in the active profile
and rebuilds the runtime directory, all while holding the transaction
guard.

The workflow is transactional with respect to the manifest only. If the
copy fails halfway, or the process dies between copy and persist, the
copied files stay on disk; :mod:`plugman.core.orphans` reports them and
:func:`adopt_repository` registers them.
"""

from __future__ import annotations

from pathlib import Path

from plugman.core.classify import classify
from plugman.core.errors import CopyFailed, DestinationExists, SourceNotFound
from plugman.core.manifest import Manifest, Repository, read_manifest, write_manifest
from plugman.core.profiles import active_profile, add_to_profile
from plugman.core.rebuild import rebuild
from plugman.core.transaction import transaction
from plugman.output import MessageType, VerbosityLevel, message
from plugman.utils import copy_directory, full_repos_path_of


def _register(config, manifest: Manifest, repos_path: str, dst: Path) -> Repository:
    """Classify *dst*, record it, enable it, persist and rebuild."""
    repo_type = classify(dst)
    message(f"Detected '{repos_path}' as {repo_type.value}", MessageType.DEBUG, VerbosityLevel.DEBUG)

    profile = active_profile(manifest)

    manifest.trx_id += 1
    record = Repository(type=repo_type, trx_id=manifest.trx_id, path=repos_path)
    manifest.repos.append(record)

    add_to_profile(profile, repos_path)

    write_manifest(config.manifest_file, manifest)

    rebuild(config, manifest)
    return record


def _hint_orphan(config, repos_path: str) -> None:
    """Point at ``adopt {repo}`` when *repos_path* is an unregistered directory."""
    manifest = read_manifest(config.manifest_file, config.default_profile)
    if manifest.find_repos(repos_path) is None:
        message(
            f"'{repos_path}' exists on disk but is not registered; "
            f"run 'plugman adopt {repos_path}' to register it",
            MessageType.WARNING,
            VerbosityLevel.ALWAYS,
        )


def import_repository(config, source: Path, repos_path: str) -> Repository:
    """Import the local directory *source* as *repos_path*.

    Args:
        config: Config providing the home directory layout
        source: Existing local directory to copy
        repos_path: Canonical identifier for the new repository

    Returns:
        The new repository record

    Raises:
        SourceNotFound: If *source* is not a directory
        DestinationExists: If the destination directory or record exists
        TransactionInProgress: If another operation holds the guard
        CorruptManifest: If the manifest cannot be loaded
        CopyFailed: If copying fails (copied files are left behind)
        ProfileNotFound: If the active profile is missing
        PersistFailed: If the manifest cannot be written
        RebuildFailed: If the runtime directory cannot be rebuilt
    """
    source = Path(source)
    if not source.is_dir():
        raise SourceNotFound(source)

    dst = full_repos_path_of(config.repos_directory, repos_path)
    if dst.exists() or dst.is_symlink():
        _hint_orphan(config, repos_path)
        raise DestinationExists(repos_path)

    with transaction(config):
        manifest = read_manifest(config.manifest_file, config.default_profile)
        if manifest.find_repos(repos_path) is not None:
            raise DestinationExists(repos_path)

        message(f"Importing '{source}' as '{repos_path}' ...", MessageType.INFO, VerbosityLevel.ALWAYS)

        try:
            copy_directory(source, dst)
        except OSError as e:
            raise CopyFailed(source, dst, e) from e

        return _register(config, manifest, repos_path, dst)


def adopt_repository(config, repos_path: str) -> Repository:
    """Register a directory that already sits at its place in ``repos/``.

    Same as :func:`import_repository` with the copy step skipped. Used to
    recover orphans left by an interrupted import.

    Raises:
        SourceNotFound: If the directory does not exist
        DestinationExists: If *repos_path* is already registered
    """
    dst = full_repos_path_of(config.repos_directory, repos_path)
    if not dst.is_dir():
        raise SourceNotFound(dst)

    with transaction(config):
        manifest = read_manifest(config.manifest_file, config.default_profile)
        if manifest.find_repos(repos_path) is not None:
            raise DestinationExists(repos_path)

        message(f"Adopting '{dst}' as '{repos_path}' ...", MessageType.INFO, VerbosityLevel.ALWAYS)
        return _register(config, manifest, repos_path, dst)
