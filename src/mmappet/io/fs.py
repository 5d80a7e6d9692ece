"""
Filesystem helpers for mmappet.io (read-only, file protocol).

Responsibilities
- Existence checks, size queries, and text reads used while opening a dataset.
- Translate OSError into MmappetIoError so callers see one error family.

Notes
- All helpers are synchronous; nothing here writes to disk.
"""

from __future__ import annotations

import os

from mmappet.core.errors import MmappetIoError


def is_file(path: str | os.PathLike[str]) -> bool:
    """True if path exists and is a regular file (symlinks followed)."""
    return os.path.isfile(path)


def is_dir(path: str | os.PathLike[str]) -> bool:
    """True if path exists and is a directory."""
    return os.path.isdir(path)


def file_size(path: str | os.PathLike[str]) -> int:
    """
    Size of a file in bytes.

    Raises:
        FileNotFoundError: If the file does not exist (left to callers that map it to a
            domain error naming the missing piece).
        MmappetIoError: On any other OS failure.
    """
    try:
        return os.stat(path).st_size
    except FileNotFoundError:
        raise
    except OSError as exc:
        raise MmappetIoError(path, exc) from exc


def read_text(path: str | os.PathLike[str], encoding: str = "utf-8") -> str:
    """
    Read a whole text file.

    Raises:
        MmappetIoError: If the file cannot be opened or decoded.
    """
    try:
        with open(path, encoding=encoding) as fh:
            return fh.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise MmappetIoError(path, exc) from exc
