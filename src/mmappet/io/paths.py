"""
Path and layout helpers for mmappet dataset directories.

Layout
- <dataset>/schema.txt
- <dataset>/0.bin, <dataset>/1.bin, ... (one file per declared column, in schema order)

Notes
- File names come from mmappet.core.constants; this module only joins paths.
"""

from __future__ import annotations

import os

from mmappet.core.constants import COLUMN_FILE_SUFFIX, SCHEMA_FILE_NAME


def schema_path(root: str | os.PathLike[str]) -> str:
    """
    Path to a dataset's schema file.

    Returns:
        str: "<root>/schema.txt".
    """
    return os.path.join(os.fspath(root), SCHEMA_FILE_NAME)


def column_file_name(index: int) -> str:
    """
    File name of the column at a schema index.

    Raises:
        ValueError: If index < 0.
    """
    if index < 0:
        raise ValueError("column index must be >= 0")
    return f"{index}{COLUMN_FILE_SUFFIX}"


def column_path(root: str | os.PathLike[str], index: int) -> str:
    """
    Path to the binary file of the column at a schema index.

    Returns:
        str: "<root>/<index>.bin".
    """
    return os.path.join(os.fspath(root), column_file_name(index))
