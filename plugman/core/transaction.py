"""Transaction guard: an exclusive on-disk marker for mutating operations.

Only one process may mutate the manifest at a time. The marker file is
created with ``O_EXCL`` so that two processes racing to acquire it
cannot both succeed. It records who holds it, which lets ``plugman
unlock`` tell a crashed holder from a live one; the guard itself never
clears a marker it did not create.
"""

from __future__ import annotations

import os
import socket
import time
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import yaml

from plugman.core.errors import TransactionInProgress
from plugman.output import MessageType, VerbosityLevel, message

# Grace period for a marker whose holder details are not written yet
FRESH_MARKER_SECONDS = 5


def _pid_alive(pid: int) -> bool:
    """Return ``True`` if a process with *pid* exists on this host."""
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        return True
    except OSError:
        return False
    return True


def read_holder(marker: Path) -> dict[str, Any]:
    """Parse the marker file.

    Returns:
        Holder info (``pid``, ``host``, ``created``), or an empty dict if
        the marker is missing or unreadable
    """
    try:
        with open(marker, "rb") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError):
        return {}
    return data if isinstance(data, dict) else {}


def _check_marker(marker: Path, stale_after: int | None) -> tuple[dict[str, Any], bool]:
    """Read *marker* and decide whether it is stale.

    A marker with no usable holder yet is live while it is younger than
    ``FRESH_MARKER_SECONDS``, since its creator may still be writing it.
    """
    holder = read_holder(marker)
    if not isinstance(holder.get("pid"), int):
        try:
            age = time.time() - marker.stat().st_mtime
        except OSError:
            age = None
        if age is not None and age < FRESH_MARKER_SECONDS:
            return holder, False
    return holder, is_stale(holder, stale_after)


def is_stale(holder: dict[str, Any], stale_after: int | None = None, now: float | None = None) -> bool:
    """Decide whether a marker's holder is gone.

    A marker is stale when it is unreadable, when its holder ran on this
    host and that pid is no longer alive, or when it is older than
    *stale_after* seconds.

    Args:
        holder: Result of :func:`read_holder`
        stale_after: Optional maximum age in seconds
        now: Current time (for tests)
    """
    pid = holder.get("pid")
    if not isinstance(pid, int):
        return True

    if holder.get("host") == socket.gethostname() and not _pid_alive(pid):
        return True

    if stale_after is not None:
        created = holder.get("created")
        if isinstance(created, str):
            try:
                started = datetime.fromisoformat(created).timestamp()
            except ValueError:
                return True
            current = time.time() if now is None else now
            if current - started > stale_after:
                return True

    return False


class TransactionGuard:
    """Exclusive marker guarding the manifest.

    Use as a context manager so the marker is released on every exit
    path once it has been acquired::

        with TransactionGuard(config.transaction_file):
            ...
    """

    def __init__(self, marker: Path, stale_after: int | None = None):
        self.marker = marker
        self.stale_after = stale_after
        self.acquired = False

    def acquire(self) -> None:
        """Create the marker.

        Raises:
            TransactionInProgress: If the marker already exists
        """
        self.marker.parent.mkdir(parents=True, exist_ok=True)
        try:
            fd = os.open(self.marker, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644)
        except FileExistsError:
            holder, stale = _check_marker(self.marker, self.stale_after)
            raise TransactionInProgress(self.marker, holder, stale=stale) from None

        holder = {
            "pid": os.getpid(),
            "host": socket.gethostname(),
            "created": datetime.now(tz=UTC).isoformat(timespec="seconds"),
        }
        try:
            with os.fdopen(fd, "w") as f:
                yaml.safe_dump(holder, f, default_flow_style=False, sort_keys=False)
        except OSError:
            self.marker.unlink(missing_ok=True)
            raise

        self.acquired = True
        message(f"Began transaction ({self.marker})", MessageType.DEBUG, VerbosityLevel.DEBUG)

    def release(self) -> None:
        """Remove the marker unconditionally."""
        self.marker.unlink(missing_ok=True)
        self.acquired = False
        message(f"Ended transaction ({self.marker})", MessageType.DEBUG, VerbosityLevel.DEBUG)

    def __enter__(self) -> TransactionGuard:
        self.acquire()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()


@contextmanager
def transaction(config) -> Iterator[TransactionGuard]:
    """Hold the transaction guard described by *config* for a block."""
    with TransactionGuard(config.transaction_file, config.stale_transaction_seconds) as guard:
        yield guard


def unlock(marker: Path, stale_after: int | None = None, force: bool = False) -> bool:
    """Remove a leftover marker.

    Args:
        marker: Marker file
        stale_after: Optional maximum age in seconds
        force: Remove the marker even if its holder looks alive

    Returns:
        ``True`` if a marker was removed, ``False`` if there was none

    Raises:
        TransactionInProgress: If the holder looks alive and *force* is off
    """
    if not marker.exists():
        message("No transaction in progress", MessageType.INFO, VerbosityLevel.ALWAYS)
        return False

    holder, stale = _check_marker(marker, stale_after)
    if not stale and not force:
        raise TransactionInProgress(marker, holder, stale=False)

    if not stale:
        message(
            f"Removing marker held by live pid {holder.get('pid')} (--force)",
            MessageType.WARNING,
            VerbosityLevel.ALWAYS,
        )
    marker.unlink(missing_ok=True)
    message(f"Removed transaction marker {marker}", MessageType.SUCCESS, VerbosityLevel.ALWAYS)
    return True
