"""Manifest store: the shared record of repositories and profiles.

The manifest is a single YAML file read fresh at the start of every
operation and rewritten in full at the end of a mutating one::

    trx_id: 3
    active_profile: default
    repos:
      - type: vcs
        trx_id: 3
        path: github.com/tyru/caw.vim
    profiles:
      - name: default
        repos_path: [github.com/tyru/caw.vim]
"""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from plugman.core.errors import CorruptManifest, PersistFailed
from plugman.output import MessageType, VerbosityLevel, message

DEFAULT_PROFILE = "default"


class RepoType(Enum):
    """How a repository is managed. Assigned once, at registration."""

    VCS = "vcs"
    STATIC = "static"


@dataclass(frozen=True)
class Repository:
    """A registered repository. Never updated after creation."""

    type: RepoType
    trx_id: int
    path: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "trx_id": self.trx_id, "path": self.path}


@dataclass
class Profile:
    """A named set of enabled repository paths."""

    name: str
    repos_path: list[str] = field(default_factory=list)

    def contains(self, repos_path: str) -> bool:
        return repos_path in self.repos_path

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "repos_path": list(self.repos_path)}


@dataclass
class Manifest:
    """In-memory manifest, passed explicitly into every operation."""

    trx_id: int = 0
    active_profile: str = DEFAULT_PROFILE
    repos: list[Repository] = field(default_factory=list)
    profiles: list[Profile] = field(default_factory=list)

    def find_repos(self, repos_path: str) -> Repository | None:
        for repo in self.repos:
            if repo.path == repos_path:
                return repo
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "trx_id": self.trx_id,
            "active_profile": self.active_profile,
            "repos": [r.to_dict() for r in self.repos],
            "profiles": [p.to_dict() for p in self.profiles],
        }


def initial_manifest(profile_name: str = DEFAULT_PROFILE) -> Manifest:
    """Return the manifest used when none exists on disk yet."""
    return Manifest(
        trx_id=0,
        active_profile=profile_name,
        profiles=[Profile(name=profile_name)],
    )


# ------------------------------------------------------------------
# Validation
# ------------------------------------------------------------------
def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate(data: Any) -> list[str]:
    """Check raw manifest data against the manifest invariants.

    Collects every violation instead of stopping at the first one.

    Args:
        data: Object produced by ``yaml.safe_load``

    Returns:
        List of error messages (empty if the data is valid)
    """
    if not isinstance(data, dict):
        return ["top level must be a mapping"]

    errors: list[str] = []

    trx_id = data.get("trx_id")
    if not _is_int(trx_id) or trx_id < 0:
        errors.append("'trx_id' must be a non-negative integer")
        trx_id = None

    # --- repos ---
    repos = data.get("repos", [])
    if not isinstance(repos, list):
        errors.append("'repos' must be a list")
        repos = []
    seen_paths: set[str] = set()
    valid_types = {t.value for t in RepoType}
    for idx, entry in enumerate(repos):
        if not isinstance(entry, dict):
            errors.append(f"repos entry {idx} must be a mapping")
            continue
        if entry.get("type") not in valid_types:
            errors.append(f"repos entry {idx} has unknown type {entry.get('type')!r}")
        entry_trx = entry.get("trx_id")
        if not _is_int(entry_trx) or entry_trx < 1:
            errors.append(f"repos entry {idx} 'trx_id' must be a positive integer")
        elif trx_id is not None and entry_trx > trx_id:
            errors.append(f"repos entry {idx} 'trx_id' {entry_trx} is newer than the manifest ({trx_id})")
        path = entry.get("path")
        if not isinstance(path, str) or not path:
            errors.append(f"repos entry {idx} 'path' must be a non-empty string")
        elif path in seen_paths:
            errors.append(f"repos entry {idx} has duplicate path '{path}'")
        else:
            seen_paths.add(path)

    # --- profiles ---
    profiles = data.get("profiles", [])
    if not isinstance(profiles, list):
        errors.append("'profiles' must be a list")
        profiles = []
    seen_names: set[str] = set()
    for idx, entry in enumerate(profiles):
        if not isinstance(entry, dict):
            errors.append(f"profiles entry {idx} must be a mapping")
            continue
        name = entry.get("name")
        if not isinstance(name, str) or not name:
            errors.append(f"profiles entry {idx} 'name' must be a non-empty string")
        elif name in seen_names:
            errors.append(f"profiles entry {idx} has duplicate name '{name}'")
        else:
            seen_names.add(name)
        members = entry.get("repos_path", [])
        if not isinstance(members, list) or not all(isinstance(m, str) for m in members):
            errors.append(f"profiles entry {idx} 'repos_path' must be a list of strings")
        elif len(set(members)) != len(members):
            errors.append(f"profiles entry {idx} 'repos_path' contains duplicates")

    active = data.get("active_profile")
    if not isinstance(active, str) or not active:
        errors.append("'active_profile' must be a non-empty string")
    elif active not in seen_names:
        errors.append(f"'active_profile' names unknown profile '{active}'")

    return errors


def _from_dict(data: dict[str, Any]) -> Manifest:
    return Manifest(
        trx_id=data["trx_id"],
        active_profile=data["active_profile"],
        repos=[
            Repository(type=RepoType(r["type"]), trx_id=r["trx_id"], path=r["path"])
            for r in data.get("repos", [])
        ],
        profiles=[
            Profile(name=p["name"], repos_path=list(p.get("repos_path", [])))
            for p in data.get("profiles", [])
        ],
    )


# ------------------------------------------------------------------
# Read / Write
# ------------------------------------------------------------------
def read_manifest(path: Path, default_profile: str = DEFAULT_PROFILE) -> Manifest:
    """Load the manifest at *path*.

    A missing file yields :func:`initial_manifest`.

    Args:
        path: Manifest file
        default_profile: Profile name used for a fresh manifest

    Returns:
        Parsed manifest

    Raises:
        CorruptManifest: If the file is unreadable or invalid
    """
    if not path.exists():
        message(f"No manifest at {path}, starting fresh", MessageType.DEBUG, VerbosityLevel.DEBUG)
        return initial_manifest(default_profile)

    try:
        with open(path, "rb") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise CorruptManifest(f"failed to parse {path}: {e}") from e
    except OSError as e:
        raise CorruptManifest(f"failed to read {path}: {e}") from e

    errors = validate(data)
    if errors:
        raise CorruptManifest(errors)

    message(f"Manifest loaded from {path}", MessageType.DEBUG, VerbosityLevel.DEBUG)
    return _from_dict(data)


def write_manifest(path: Path, manifest: Manifest) -> None:
    """Write *manifest* to *path*, replacing the previous file atomically.

    The YAML is written to a temporary file in the same directory and
    renamed over *path*, so a crash leaves either the old or the new
    manifest, never a truncated one.

    Raises:
        PersistFailed: If the file cannot be written
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
        try:
            with os.fdopen(fd, "w") as f:
                yaml.safe_dump(manifest.to_dict(), f, default_flow_style=False, sort_keys=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as e:
        raise PersistFailed(path, e) from e

    message(f"Manifest written to {path}", MessageType.DEBUG, VerbosityLevel.DEBUG)
