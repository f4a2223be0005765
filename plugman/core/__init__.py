"""Core infrastructure for plugman: manifest, profiles and transactions."""

from .classify import classify
from .errors import (
    ArgumentError,
    CopyFailed,
    CorruptManifest,
    DestinationExists,
    PersistFailed,
    PlugmanError,
    PreconditionError,
    ProfileExists,
    ProfileNotFound,
    RebuildFailed,
    RepositoryNotFound,
    SourceNotFound,
    TransactionInProgress,
)
from .manifest import Manifest, Profile, Repository, RepoType, read_manifest, write_manifest
from .profiles import add_to_profile, find_profile
from .transaction import TransactionGuard, transaction

__all__ = [
    "ArgumentError",
    "CopyFailed",
    "CorruptManifest",
    "DestinationExists",
    "Manifest",
    "PersistFailed",
    "PlugmanError",
    "PreconditionError",
    "Profile",
    "ProfileExists",
    "ProfileNotFound",
    "RebuildFailed",
    "RepoType",
    "RepositoryNotFound",
    "Repository",
    "SourceNotFound",
    "TransactionGuard",
    "TransactionInProgress",
    "add_to_profile",
    "classify",
    "find_profile",
    "read_manifest",
    "transaction",
    "write_manifest",
]
