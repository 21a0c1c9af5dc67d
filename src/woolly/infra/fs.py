from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform path manipulation, sorted directory enumeration and
the two write disciplines used by the toolchain: don't-clobber writes for
scaffolded sources and atomic always-overwrite writes for generated manifests.
"""

import logging
import os
import stat
import tempfile
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def to_posix(path: str) -> str:
    """Convert host separators to forward slashes."""
    return path.replace(os.sep, "/").replace("\\", "/")


def relative_posix(target: str, base_dir: str) -> str:
    """
    Express `target` relative to `base_dir` using '/' separators.

    Args:
        target: Absolute path being referenced.
        base_dir: Directory the reference is resolved from.

    Returns:
        str: POSIX-style relative path.
    """
    return to_posix(os.path.relpath(os.path.abspath(target), os.path.abspath(base_dir)))


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion and '~'. Reverts to fallback if the
    input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))

# -----------------------------------------------------------------------------
# DIRECTORY ENUMERATION
# -----------------------------------------------------------------------------

def list_entries(directory: str) -> List[os.DirEntry]:
    """
    Enumerate a directory sorted by entry name.

    Sorting makes the generated output independent of the host's
    enumeration order.

    Returns:
        List[os.DirEntry]: Entries of `directory`, empty if it cannot be read.
    """
    try:
        with os.scandir(directory) as it:
            entries = list(it)
    except OSError as e:
        logger.debug(f"Cannot enumerate '{directory}': {e}")
        return []
    entries.sort(key=lambda e: e.name)
    return entries


def list_subdirectories(directory: str) -> List[str]:
    """Names of the immediate sub-directories of `directory`, sorted."""
    return [e.name for e in list_entries(directory) if e.is_dir()]

# -----------------------------------------------------------------------------
# WRITE OPERATIONS
# -----------------------------------------------------------------------------

def ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Attempt to recursively create a directory structure safely.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        os.makedirs(path, exist_ok=True)
        return True, None
    except OSError as e:
        return False, str(e)


def write_if_missing(path: str, content: str) -> bool:
    """
    Create `path` with `content` unless it already exists.

    Args:
        path: Target file.
        content: Text to write.

    Returns:
        bool: True if the file was written, False if it already existed.
    """
    if os.path.exists(path):
        logger.info(f"exists  {path}")
        return False
    ensure_dir(os.path.dirname(os.path.abspath(path)))
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)
    logger.info(f"wrote   {path}")
    return True


def write_text_atomic(path: str, content: str) -> None:
    """
    Replace `path` with `content` in a single rename.

    The text is staged in a sibling temporary file so that readers never
    observe a partially written document. An existing file keeps its
    permission bits; a new one gets the regular umask-derived mode.

    Raises:
        OSError: If the destination cannot be written.
    """
    out_dir = os.path.dirname(os.path.abspath(path))
    ensure_dir(out_dir)
    fd, tmp_path = tempfile.mkstemp(prefix=".tmp-", suffix=".json", dir=out_dir)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
        os.chmod(tmp_path, _target_mode(path))
        os.replace(tmp_path, path)
    except OSError:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise


def _target_mode(path: str) -> int:
    """Mode a freshly written `path` should carry (mkstemp always creates 0600)."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask
