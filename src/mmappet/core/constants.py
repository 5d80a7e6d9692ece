"""
mmappet on-disk layout names and presentation defaults.

Defines the fixed file names of a dataset directory and the defaults consumed by
mmappet.io.config and the CLI. This module is zero-IO and uses only the Python
standard library.

Notes:
    - A dataset directory holds ``schema.txt`` plus one ``<index>.bin`` per column.
    - Changing the layout names breaks compatibility with existing datasets.
"""

from __future__ import annotations

__all__ = [
    "SCHEMA_FILE_NAME",
    "COLUMN_FILE_SUFFIX",
    "HEAD_ROWS",
    "PLOT_ROWS",
    "PLOT_WIDTH",
    "FLOAT_PRECISION",
    "LOG_LEVEL",
    "LOG_FORMAT",
]

# Schema text file at the root of every dataset directory.
SCHEMA_FILE_NAME: str = "schema.txt"

# Column payload files are named "<index><suffix>" (e.g., "0.bin").
COLUMN_FILE_SUFFIX: str = ".bin"

# CLI defaults (overridable via MmappetSettings).
HEAD_ROWS: int = 10
PLOT_ROWS: int = 30
PLOT_WIDTH: int = 60
FLOAT_PRECISION: int = 6

LOG_LEVEL: str = "WARNING"
LOG_FORMAT: str = "console"
