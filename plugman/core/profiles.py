"""Profile registry: lookup and membership helpers for profiles."""

from __future__ import annotations

from plugman.core.errors import ProfileExists, ProfileNotFound, RepositoryNotFound
from plugman.core.manifest import Manifest, Profile


def find_profile(manifest: Manifest, name: str) -> Profile:
    """Return the profile called *name*.

    Raises:
        ProfileNotFound: If no profile has that name
    """
    for profile in manifest.profiles:
        if profile.name == name:
            return profile
    raise ProfileNotFound(name)


def active_profile(manifest: Manifest) -> Profile:
    """Return the manifest's active profile."""
    return find_profile(manifest, manifest.active_profile)


def add_to_profile(profile: Profile, repos_path: str) -> bool:
    """Enable *repos_path* in *profile*.

    Idempotent, and unaware of whether a matching repository record
    exists.

    Returns:
        ``True`` if the path was added, ``False`` if it was already there
    """
    if profile.contains(repos_path):
        return False
    profile.repos_path.append(repos_path)
    return True


def remove_from_profile(profile: Profile, repos_path: str) -> bool:
    """Disable *repos_path* in *profile*.

    Returns:
        ``True`` if the path was removed, ``False`` if it was not present
    """
    if not profile.contains(repos_path):
        return False
    profile.repos_path.remove(repos_path)
    return True


def require_repos(manifest: Manifest, repos_paths: list[str]) -> None:
    """Check that every path in *repos_paths* has a repository record.

    Raises:
        RepositoryNotFound: Listing every unknown path
    """
    missing = [p for p in repos_paths if manifest.find_repos(p) is None]
    if missing:
        raise RepositoryNotFound(missing)


def new_profile(manifest: Manifest, name: str) -> Profile:
    """Append an empty profile called *name*.

    Raises:
        ProfileExists: If the name is taken
    """
    if any(p.name == name for p in manifest.profiles):
        raise ProfileExists(name)
    profile = Profile(name=name)
    manifest.profiles.append(profile)
    return profile


def set_active_profile(manifest: Manifest, name: str) -> bool:
    """Make *name* the active profile.

    Returns:
        ``True`` if the active profile changed

    Raises:
        ProfileNotFound: If no profile has that name
    """
    find_profile(manifest, name)
    if manifest.active_profile == name:
        return False
    manifest.active_profile = name
    return True
