"""Profile-mutating operations: enable, disable and profile management.

Each operation is one transaction: it holds the guard, loads the
manifest, applies the whole batch in memory, then persists and rebuilds
at most once. The transaction counter moves only when the batch changes
something. Enable always persists and rebuilds, so re-enabling a
repository repairs a stale runtime directory; the other operations
write nothing when nothing changed.
"""

from __future__ import annotations

from collections.abc import Callable

from plugman.core.manifest import Manifest, Profile, read_manifest, write_manifest
from plugman.core.profiles import (
    active_profile,
    add_to_profile,
    find_profile,
    new_profile,
    remove_from_profile,
    require_repos,
    set_active_profile,
)
from plugman.core.rebuild import rebuild
from plugman.core.transaction import transaction
from plugman.output import MessageType, VerbosityLevel, message


def _commit(config, manifest: Manifest, rebuild_runtime: bool, bump: bool = True) -> None:
    if bump:
        manifest.trx_id += 1
    write_manifest(config.manifest_file, manifest)
    if rebuild_runtime:
        rebuild(config, manifest)


def _apply_batch(
    config,
    profile_name: str | None,
    repos_paths: list[str],
    apply: Callable[[Profile, str], bool],
    check_registered: bool,
    always_commit: bool = False,
) -> list[str]:
    with transaction(config):
        manifest = read_manifest(config.manifest_file, config.default_profile)
        if profile_name is None:
            profile = active_profile(manifest)
        else:
            profile = find_profile(manifest, profile_name)

        if check_registered:
            require_repos(manifest, repos_paths)

        changed = [p for p in repos_paths if apply(profile, p)]
        for repos_path in repos_paths:
            if repos_path not in changed:
                message(
                    f"'{repos_path}' is unchanged in profile '{profile.name}'",
                    MessageType.INFO,
                    VerbosityLevel.VERBOSE,
                )

        if not changed and not always_commit:
            message("Nothing to do", MessageType.DEBUG, VerbosityLevel.DEBUG)
            return []

        _commit(
            config,
            manifest,
            rebuild_runtime=profile.name == manifest.active_profile,
            bump=bool(changed),
        )
        return changed


def enable_repositories(config, repos_paths: list[str]) -> list[str]:
    """Add *repos_paths* to the active profile.

    Every path must be registered; otherwise nothing changes. The
    manifest is persisted and the runtime directory rebuilt even when
    every path was already enabled.

    Returns:
        Paths that were newly enabled

    Raises:
        RepositoryNotFound: If any path has no repository record
    """
    return _apply_batch(
        config, None, repos_paths, add_to_profile, check_registered=True, always_commit=True,
    )


def disable_repositories(config, repos_paths: list[str]) -> list[str]:
    """Remove *repos_paths* from the active profile.

    Returns:
        Paths that were disabled
    """
    return _apply_batch(config, None, repos_paths, remove_from_profile, check_registered=False)


def add_to_named_profile(config, name: str, repos_paths: list[str]) -> list[str]:
    """Add *repos_paths* to profile *name* (``profile add``)."""
    return _apply_batch(config, name, repos_paths, add_to_profile, check_registered=True)


def remove_from_named_profile(config, name: str, repos_paths: list[str]) -> list[str]:
    """Remove *repos_paths* from profile *name* (``profile rm``)."""
    return _apply_batch(config, name, repos_paths, remove_from_profile, check_registered=False)


def create_profile(config, name: str) -> Profile:
    """Create an empty profile.

    Raises:
        ProfileExists: If the name is taken
    """
    with transaction(config):
        manifest = read_manifest(config.manifest_file, config.default_profile)
        profile = new_profile(manifest, name)
        _commit(config, manifest, rebuild_runtime=False)
        return profile


def switch_profile(config, name: str) -> bool:
    """Make *name* the active profile and rebuild.

    Returns:
        ``True`` if the active profile changed

    Raises:
        ProfileNotFound: If no profile has that name
    """
    with transaction(config):
        manifest = read_manifest(config.manifest_file, config.default_profile)
        if not set_active_profile(manifest, name):
            message(f"'{name}' is already the active profile", MessageType.INFO, VerbosityLevel.ALWAYS)
            return False
        _commit(config, manifest, rebuild_runtime=True)
        return True


def rebuild_runtime(config) -> list[str]:
    """Rebuild the runtime directory under the guard without touching the manifest."""
    with transaction(config):
        manifest = read_manifest(config.manifest_file, config.default_profile)
        return rebuild(config, manifest)
