"""Directory copy helper."""

import shutil
from pathlib import Path


def copy_directory(src: Path, dst: Path, ignore: tuple[str, ...] = ()) -> None:
    """Recursively copy *src* to *dst*.

    *dst* must not exist. Symlinks are copied as links. Files copied
    before an error are left in place.

    Args:
        src: Source directory
        dst: Destination directory (created)
        ignore: Glob patterns of names to skip

    Raises:
        OSError: On any I/O failure
    """
    dst.parent.mkdir(parents=True, exist_ok=True)
    shutil.copytree(
        src,
        dst,
        symlinks=True,
        ignore=shutil.ignore_patterns(*ignore) if ignore else None,
    )
