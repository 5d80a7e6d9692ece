"""
Dataset facade for mmappet.

Opens a dataset directory (schema.txt + one <index>.bin per column), validates it as a
whole, and provides name- and type-checked read access to the mapped columns.

Open pipeline (all-or-nothing)
1. Read <path>/schema.txt (MissingSchemaError if absent) and parse it (SchemaParseError,
   DuplicateColumnNameError).
2. For each ColumnDef in index order, require <path>/<index>.bin (MissingColumnFileError)
   and map it via Column.open (InvalidFileSizeError, MmappetIoError).
3. The first column fixes the row count; the first column that disagrees raises
   LengthMismatchError naming both columns, before any later file is touched.
Any failure discards the columns mapped so far; no partially opened Dataset escapes.

Notes
- A Dataset is immutable once open and safe to read from many threads.
- There is no close(); mappings are released when the Dataset and every view borrowed
  from it are garbage collected.
- A dataset with zero columns is valid and reports 0 rows by convention.

Examples:
    >>> from mmappet import Dataset  # doctest: +SKIP
    >>> ds = Dataset.open("data.mmappet")  # doctest: +SKIP
    >>> ds.schema.column_names()  # doctest: +SKIP
    ['tof', 'mz']
    >>> ds.get("tof", "uint32").tolist()  # doctest: +SKIP
    [10, 20, 30]
"""

from __future__ import annotations

import os
from collections.abc import Iterator, Sequence

import numpy as np
import polars as pl
import pyarrow as pa

from mmappet.core.dtype import DTypeLike
from mmappet.core.errors import (
    ColumnNotFoundError,
    LengthMismatchError,
    MissingColumnFileError,
    MissingSchemaError,
    MmappetError,
)
from mmappet.core.logging_config import get_logger
from mmappet.core.schema import Schema

from .column import Column
from .fs import is_dir, is_file, read_text
from .paths import column_path, schema_path
from .summary import DatasetSummary

logger = get_logger(__name__)

__all__ = ["Dataset", "open_dataset"]


class Dataset:
    """
    An opened, validated collection of memory-mapped columns sharing one row count.

    Notes:
        - Construct with Dataset.open (or open_dataset); the constructor trusts its inputs.
        - ``ds[name]`` returns the Column and raises ColumnNotFoundError (a KeyError) when
          the name is unknown; ``ds.column(name)`` returns None instead.
    """

    __slots__ = ("_path", "_schema", "_columns", "_row_count")

    def __init__(self, path: str, schema: Schema, columns: Sequence[Column], row_count: int) -> None:
        if len(columns) != len(schema):
            raise ValueError(f"schema declares {len(schema)} columns, got {len(columns)}")
        self._path = path
        self._schema = schema
        self._columns = tuple(columns)
        self._row_count = row_count

    @classmethod
    def open(cls, path: str | os.PathLike[str]) -> Dataset:
        """
        Open and validate a dataset directory.

        Args:
            path: Dataset directory.

        Returns:
            Dataset: Ready-to-query, immutable handle.

        Raises:
            MissingSchemaError: No schema.txt under path.
            SchemaParseError / DuplicateColumnNameError: Invalid schema text.
            MissingColumnFileError: A declared column has no <index>.bin (index reported).
            InvalidFileSizeError: A column file's size is not a multiple of its width.
            LengthMismatchError: Columns disagree on row count.
            MmappetIoError: Any other filesystem or mapping failure.
        """
        root = os.fspath(path)
        try:
            ds = cls._open(root)
        except MmappetError as exc:
            logger.info("dataset_open_failed", path=root, error=type(exc).__name__, message=str(exc))
            raise
        logger.info("dataset_opened", path=root, rows=ds.row_count, columns=ds.num_columns)
        return ds

    @classmethod
    def _open(cls, root: str) -> Dataset:
        spath = schema_path(root)
        if not is_dir(root) or not is_file(spath):
            raise MissingSchemaError(root)
        schema = Schema.parse(read_text(spath))

        columns: list[Column] = []
        row_count: int | None = None
        reference: str | None = None

        for col_def in schema:
            cpath = column_path(root, col_def.index)
            try:
                column = Column.open(cpath, col_def.dtype)
            except MissingColumnFileError as exc:
                raise MissingColumnFileError(col_def.index, cpath) from exc

            if row_count is None:
                row_count = len(column)
                reference = col_def.name
            elif len(column) != row_count:
                raise LengthMismatchError(col_def.name, row_count, len(column), reference)
            columns.append(column)

        return cls(root, schema, columns, row_count or 0)

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------
    @property
    def path(self) -> str:
        return self._path

    @property
    def schema(self) -> Schema:
        return self._schema

    @property
    def row_count(self) -> int:
        """Shared row count; 0 when the dataset has no columns."""
        return self._row_count

    @property
    def num_columns(self) -> int:
        return len(self._columns)

    def column_names(self) -> list[str]:
        return self._schema.column_names()

    def __len__(self) -> int:
        return self._row_count

    def __repr__(self) -> str:
        return f"Dataset(path={self._path!r}, rows={self._row_count}, schema={self._schema!r})"

    # ------------------------------------------------------------------
    # Column access
    # ------------------------------------------------------------------
    def __getitem__(self, name: str) -> Column:
        index = self._schema.index_of(name)
        if index is None:
            raise ColumnNotFoundError(name)
        return self._columns[index]

    def __contains__(self, name: object) -> bool:
        return name in self._schema

    def column(self, name: str) -> Column | None:
        """Column by name, or None when absent."""
        index = self._schema.index_of(name)
        return None if index is None else self._columns[index]

    def items(self) -> Iterator[tuple[str, Column]]:
        """(name, Column) pairs in schema order."""
        for col_def, column in zip(self._schema, self._columns, strict=True):
            yield col_def.name, column

    def get(self, name: str, requested: DTypeLike) -> memoryview:
        """
        Typed read-only memoryview of a column.

        Raises:
            ColumnNotFoundError: Unknown column name.
            TypeMismatchError: requested differs from the column's dtype.
        """
        return self[name].as_slice(requested)

    def get_array(self, name: str, requested: DTypeLike) -> np.ndarray:
        """
        Typed read-only numpy view of a column.

        Raises:
            ColumnNotFoundError: Unknown column name.
            TypeMismatchError: requested differs from the column's dtype.
        """
        return self[name].as_array(requested)

    # ------------------------------------------------------------------
    # Interop
    # ------------------------------------------------------------------
    def _select(self, columns: Sequence[str] | None) -> list[str]:
        names = self.column_names() if columns is None else list(columns)
        for name in names:
            if name not in self._schema:
                raise ColumnNotFoundError(name)
        return names

    def to_polars(self, columns: Sequence[str] | None = None) -> pl.DataFrame:
        """
        Polars DataFrame over selected columns (all by default, schema order).

        Raises:
            ColumnNotFoundError: A selected name is not in the schema.
        """
        names = self._select(columns)
        return pl.DataFrame([self[name].to_polars(name) for name in names])

    def to_arrow(self, columns: Sequence[str] | None = None) -> pa.Table:
        """
        Arrow Table over selected columns (all by default, schema order).

        Raises:
            ColumnNotFoundError: A selected name is not in the schema.
        """
        names = self._select(columns)
        return pa.table({name: self[name].to_arrow() for name in names})

    def describe(self) -> DatasetSummary:
        """Structured summary (schema, row count, file sizes) as a pydantic model."""
        return DatasetSummary.from_dataset(self)


def open_dataset(path: str | os.PathLike[str]) -> Dataset:
    """Functional alias for Dataset.open."""
    return Dataset.open(path)
