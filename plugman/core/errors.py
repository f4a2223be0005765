"""Exception hierarchy for plugman operations.

Every failure surfaces as a :class:`PlugmanError` subclass. The CLI maps
``exit_code`` to the process exit status; nothing below the CLI catches
these.
"""

from __future__ import annotations

EXIT_OK = 0
EXIT_ARGUMENT_ERROR = 10
EXIT_OPERATION_ERROR = 11


class PlugmanError(Exception):
    """Base class for all plugman errors."""

    exit_code = EXIT_OPERATION_ERROR


class ArgumentError(PlugmanError):
    """Malformed or missing command-line input."""

    exit_code = EXIT_ARGUMENT_ERROR


# ------------------------------------------------------------------
# Precondition errors
# ------------------------------------------------------------------
class PreconditionError(PlugmanError):
    """An operation refused to start or could not complete its effect."""


class SourceNotFound(PreconditionError):
    def __init__(self, path):
        self.path = path
        super().__init__(f"no such a directory: {path}")


class DestinationExists(PreconditionError):
    def __init__(self, repos_path: str):
        self.repos_path = repos_path
        super().__init__(f"the repository already exists: {repos_path}")


class ProfileNotFound(PreconditionError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"profile '{name}' does not exist")


class ProfileExists(PreconditionError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"profile '{name}' already exists")


class RepositoryNotFound(PreconditionError):
    def __init__(self, repos_paths: list[str]):
        self.repos_paths = list(repos_paths)
        joined = ", ".join(self.repos_paths)
        super().__init__(f"repository not found in manifest: {joined}")


class TransactionInProgress(PreconditionError):
    """Another process holds the transaction marker.

    Attributes:
        marker: Path of the marker file
        holder: Parsed marker contents (may be empty if unreadable)
        stale: Whether the holder looks dead or expired
    """

    def __init__(self, marker, holder: dict | None = None, stale: bool = False):
        self.marker = marker
        self.holder = holder or {}
        self.stale = stale
        text = f"another operation is in progress (marker: {marker}"
        if self.holder.get("pid") is not None:
            text += f", pid {self.holder['pid']} on {self.holder.get('host', '?')}"
        text += ")"
        if stale:
            text += "; the marker looks stale, run 'plugman unlock' to remove it"
        super().__init__(text)


# ------------------------------------------------------------------
# Persistence and I/O errors
# ------------------------------------------------------------------
class CorruptManifest(PlugmanError):
    """The manifest file cannot be parsed or violates its invariants.

    Can contain multiple error messages.
    """

    def __init__(self, errors: str | list[str]):
        if isinstance(errors, str):
            self.errors = [errors]
        else:
            self.errors = errors
        super().__init__(self._format_errors())

    def _format_errors(self) -> str:
        if len(self.errors) == 1:
            return f"corrupt manifest: {self.errors[0]}"
        error_list = "\n".join(f"  - {err}" for err in self.errors)
        return f"corrupt manifest ({len(self.errors)} errors):\n{error_list}"


class PersistFailed(PlugmanError):
    def __init__(self, path, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"could not write to {path}: {cause}")


class CopyFailed(PlugmanError):
    def __init__(self, src, dst, cause: Exception):
        self.src = src
        self.dst = dst
        self.cause = cause
        super().__init__(f"failed to copy {src} to {dst}: {cause}")


class RebuildFailed(PlugmanError):
    def __init__(self, directory, cause: Exception | str):
        self.directory = directory
        self.cause = cause
        super().__init__(f"could not rebuild {directory}: {cause}")
