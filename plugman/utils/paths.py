"""Repository identifier utilities for plugman.

A repository identifier ("repos path") is always ``host/user/name``,
e.g. ``github.com/tyru/caw.vim``.
"""

import re
from pathlib import Path

from plugman.core.errors import ArgumentError

DEFAULT_HOST = "github.com"
LOCAL_HOST = "localhost"
LOCAL_USER = "local"

_COMPONENT = re.compile(r"^[A-Za-z0-9_.\-]+$")
_SCP_LIKE = re.compile(r"^[^@/]+@(?P<host>[^:/]+):(?P<rest>.+)$")


def _strip_remote(text: str) -> str:
    """Reduce URL-ish input to ``host/user/name`` or ``user/name``."""
    scp = _SCP_LIKE.match(text)
    if scp:
        text = f"{scp.group('host')}/{scp.group('rest')}"
    else:
        for scheme in ("https://", "http://", "git://", "ssh://"):
            if text.startswith(scheme):
                text = text[len(scheme):]
                # ssh://git@host/...
                if "@" in text.split("/", 1)[0]:
                    text = text.split("@", 1)[1]
                break
    text = text.rstrip("/")
    if text.endswith(".git"):
        text = text[:-4]
    return text


def _check_components(parts: list[str], original: str) -> str:
    for part in parts:
        if not _COMPONENT.match(part) or part in (".", ".."):
            raise ArgumentError(f"invalid repository path: {original!r}")
    return "/".join(parts)


def normalize_repos_path(text: str) -> str:
    """Turn user input into a canonical repository identifier.

    Accepts ``user/name``, ``host/user/name`` and remote URLs
    (``https://host/user/name.git``, ``git@host:user/name.git``).

    Raises:
        ArgumentError: If the input is malformed
    """
    if not text or text != text.strip():
        raise ArgumentError(f"invalid repository path: {text!r}")

    parts = _strip_remote(text).split("/")
    if len(parts) == 2:
        parts = [DEFAULT_HOST, *parts]
    if len(parts) != 3:
        raise ArgumentError(f"invalid repository path: {text!r}")
    return _check_components(parts, text)


def normalize_imported_repos_path(text: str) -> str:
    """Like :func:`normalize_repos_path`, but also accepts a bare name.

    ``foo`` becomes ``localhost/local/foo``, for plugins with no remote.
    """
    if text and "/" not in text and ":" not in text:
        return _check_components([LOCAL_HOST, LOCAL_USER, text], text)
    return normalize_repos_path(text)


def full_repos_path_of(repos_directory: Path, repos_path: str) -> Path:
    """Return where *repos_path* lives under *repos_directory*."""
    return repos_directory.joinpath(*repos_path.split("/"))
