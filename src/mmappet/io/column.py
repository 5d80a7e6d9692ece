"""
Memory-mapped columns.

A Column maps one ``<index>.bin`` file read-only and exposes the mapped bytes as
typed views without copying them. Three access modes share the one mapping:

- as_slice(requested) -> memoryview: typed, read-only buffer (stdlib sequence protocol).
- as_array(requested) -> numpy.ndarray: 1-D read-only array view for numeric work.
- as_typed_array() -> TypedArrayView: the array tagged with its DType, for callers that
  do not know the type in advance (e.g., the CLI printing arbitrary columns).

Typed access is checked: the requested type must resolve (DType.from_requested) to the
column's declared dtype, otherwise TypeMismatchError is raised before any view is built.

Size invariant
- ``nbytes == len(column) * dtype.size_bytes`` is established at open and never changes.
  A file whose size is not a multiple of the element width fails with InvalidFileSizeError
  (a 7-byte uint32 file is rejected, never truncated to one row).

Notes
- Views keep a reference to the mapping, so they stay valid for as long as they are alive;
  the mapping is released once the Column and every view borrowed from it are gone.
- Values are interpreted in native byte order.
- A zero-byte file is valid (zero rows) but cannot be memory-mapped; it is backed by an
  empty read-only array instead.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

import numpy as np
import polars as pl
import pyarrow as pa

from mmappet.core.dtype import DType, DTypeLike
from mmappet.core.errors import (
    InvalidFileSizeError,
    LengthMismatchError,
    MissingColumnFileError,
    MmappetIoError,
    TypeMismatchError,
)
from mmappet.core.logging_config import get_logger

from .fs import file_size

logger = get_logger(__name__)

__all__ = ["Column", "TypedArrayView"]


@dataclass(frozen=True, slots=True)
class TypedArrayView:
    """
    A column's values tagged with their DType.

    Attributes:
        dtype (DType): Discriminant; one variant per DType kind.
        array (np.ndarray): 1-D read-only view whose numpy dtype is ``dtype.numpy_dtype``.

    Examples:
        >>> import numpy as np
        >>> from mmappet.core.dtype import DType
        >>> view = TypedArrayView(DType.FLOAT32, np.array([1.5], dtype=np.float32))
        >>> view.format_value(0, precision=2)
        '1.50'
    """

    dtype: DType
    array: np.ndarray

    def __len__(self) -> int:
        return int(self.array.shape[0])

    def __iter__(self) -> Iterator[Any]:
        return iter(self.array)

    def __getitem__(self, index: Any) -> Any:
        return self.array[index]

    @property
    def is_empty(self) -> bool:
        return len(self) == 0

    def format_value(self, index: int, precision: int = 6) -> str:
        """Render one element for display: fixed-precision floats, true/false for bools."""
        value = self.array[index]
        if self.dtype is DType.BOOL:
            return "true" if value else "false"
        if self.dtype.is_float:
            return f"{float(value):.{precision}f}"
        return str(int(value))


class Column:
    """
    One memory-mapped column file with its declared dtype and row count.

    Notes:
        - Construct with Column.open; instances are immutable.
        - ``len(column)`` is the row count.
    """

    __slots__ = ("_data", "_dtype", "_path")

    def __init__(self, data: np.ndarray, dtype: DType, path: str) -> None:
        if data.dtype != dtype.numpy_dtype or data.ndim != 1:
            raise ValueError(f"column data must be 1-D {dtype.numpy_dtype}, got {data.ndim}-D {data.dtype}")
        self._data = data
        self._dtype = dtype
        self._path = path

    @classmethod
    def open(
        cls,
        path: str | os.PathLike[str],
        dtype: DTypeLike,
        expected_row_count: int | None = None,
    ) -> Column:
        """
        Map a column file read-only.

        Args:
            path: Column file (typically "<dataset>/<index>.bin").
            dtype: Declared dtype (DType or anything DType.from_requested accepts).
            expected_row_count: When given, the file must hold exactly this many rows.

        Returns:
            Column: Mapped column.

        Raises:
            MissingColumnFileError: The file does not exist (index unknown at this level).
            InvalidFileSizeError: File size is not a multiple of the dtype width.
            LengthMismatchError: Row count differs from expected_row_count.
            MmappetIoError: Any other OS or mapping failure.
        """
        p = os.fspath(path)
        kind = DType.from_requested(dtype)
        try:
            size = file_size(p)
        except FileNotFoundError as exc:
            raise MissingColumnFileError(None, p) from exc

        width = kind.size_bytes
        if size % width != 0:
            raise InvalidFileSizeError(p, size, width)
        length = size // width
        if expected_row_count is not None and length != expected_row_count:
            raise LengthMismatchError(p, expected_row_count, length)

        data = _map_file(p, kind, length)
        logger.debug("column_mapped", path=p, dtype=kind.value, rows=length, nbytes=size)
        return cls(data, kind, p)

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------
    @property
    def dtype(self) -> DType:
        return self._dtype

    @property
    def path(self) -> str:
        return self._path

    @property
    def length(self) -> int:
        return int(self._data.shape[0])

    @property
    def nbytes(self) -> int:
        """Size of the mapped region; always ``length * dtype.size_bytes``."""
        return int(self._data.nbytes)

    def __len__(self) -> int:
        return self.length

    def __repr__(self) -> str:
        return f"Column(path={self._path!r}, dtype={self._dtype}, rows={self.length})"

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------
    def _check(self, requested: DTypeLike) -> None:
        kind = DType.from_requested(requested)
        if kind is not self._dtype:
            raise TypeMismatchError(kind, self._dtype)

    def as_bytes(self) -> memoryview:
        """Raw mapped bytes as a read-only ``B``-format memoryview."""
        return memoryview(self._data).cast("B")

    def as_slice(self, requested: DTypeLike) -> memoryview:
        """
        Typed read-only memoryview over the mapped bytes.

        Args:
            requested: The element type the caller expects (DType, schema token, numpy type).

        Returns:
            memoryview: ``len(view) == len(column)``, format ``dtype.format_char``.

        Raises:
            TypeMismatchError: If requested does not match the declared dtype.
            UnknownDTypeError: If requested names no supported kind.
        """
        self._check(requested)
        return self.as_bytes().cast(self._dtype.format_char)

    def as_array(self, requested: DTypeLike) -> np.ndarray:
        """
        1-D read-only numpy view over the mapped bytes.

        Raises:
            TypeMismatchError: If requested does not match the declared dtype.
            UnknownDTypeError: If requested names no supported kind.
        """
        self._check(requested)
        return self._view()

    def as_typed_array(self) -> TypedArrayView:
        """Array view tagged with the declared dtype; no type argument needed."""
        return TypedArrayView(self._dtype, self._view())

    def _view(self) -> np.ndarray:
        view = self._data.view(np.ndarray)
        view.flags.writeable = False
        return view

    # ------------------------------------------------------------------
    # Interop
    # ------------------------------------------------------------------
    def to_arrow(self) -> pa.Array:
        """Arrow array over the column (numeric kinds wrap the buffer; bools are bit-packed copies)."""
        return pa.array(self._view(), type=pa.from_numpy_dtype(self._dtype.numpy_dtype))

    def to_polars(self, name: str = "") -> pl.Series:
        """Polars Series over the column values."""
        return pl.Series(name, self._view())


def _map_file(path: str, dtype: DType, length: int) -> np.ndarray:
    if length == 0:
        return np.frombuffer(b"", dtype=dtype.numpy_dtype)
    try:
        return np.memmap(path, dtype=dtype.numpy_dtype, mode="r", shape=(length,))
    except (OSError, ValueError) as exc:
        raise MmappetIoError(path, exc) from exc
