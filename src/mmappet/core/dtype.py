"""
Primitive scalar kinds supported by mmappet columns.

Defines the DType enum together with its schema-token grammar, fixed byte widths,
and the mapping onto native-byte-order numpy dtypes and buffer-protocol format codes.

Token grammar (case-insensitive, surrounding whitespace ignored)
| token(s)             | kind    | width |
|----------------------|---------|-------|
| uint8, u8            | UINT8   | 1     |
| int8, i8             | INT8    | 1     |
| uint16, u16          | UINT16  | 2     |
| int16, i16           | INT16   | 2     |
| uint32, u32          | UINT32  | 4     |
| int32, i32           | INT32   | 4     |
| uint64, u64, size_t  | UINT64  | 8     |
| int64, i64           | INT64   | 8     |
| float32, f32         | FLOAT32 | 4     |
| float64, f64, double | FLOAT64 | 8     |
| bool, boolean        | BOOL    | 1     |

Notes:
    - Widths and canonical names are pure functions of the kind.
    - Values are stored in native byte order; datasets are not portable across
      machines with a different endianness.
    - Short tokens follow the schema grammar, not numpy: "u8" is a 1-byte unsigned
      integer here, whereas numpy reads "u8" as an 8-byte one.

Examples:
    >>> from mmappet.core.dtype import DType
    >>> DType.parse("SIZE_T")
    <DType.UINT64: 'uint64'>
    >>> DType.FLOAT32.size_bytes
    4
    >>> DType.parse(DType.BOOL.canonical_name) is DType.BOOL
    True
"""

from __future__ import annotations

from enum import Enum
from typing import Any

import numpy as np

from .errors import UnknownDTypeError

__all__ = ["DType", "DTypeLike"]


class DType(Enum):
    """
    Closed set of scalar kinds; ``.value`` is the canonical lowercase name.

    Notes:
        Use DType.parse for schema tokens and DType.from_requested for the type
        argument of typed accessors (Column.as_slice/as_array, Dataset.get/get_array).
    """

    UINT8 = "uint8"
    INT8 = "int8"
    UINT16 = "uint16"
    INT16 = "int16"
    UINT32 = "uint32"
    INT32 = "int32"
    UINT64 = "uint64"
    INT64 = "int64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    BOOL = "bool"

    def __str__(self) -> str:
        return self.value

    @property
    def canonical_name(self) -> str:
        """Primary (non-alias) token; round-trips through DType.parse."""
        return self.value

    @property
    def size_bytes(self) -> int:
        """Fixed width of one element in bytes."""
        return _SIZE_BYTES[self]

    @property
    def numpy_dtype(self) -> np.dtype[Any]:
        """Native-byte-order numpy dtype whose itemsize equals size_bytes."""
        return _NUMPY_DTYPES[self]

    @property
    def format_char(self) -> str:
        """Native struct/buffer-protocol format code used for typed memoryviews."""
        return _FORMAT_CHARS[self]

    @property
    def is_integer(self) -> bool:
        return self.numpy_dtype.kind in ("u", "i")

    @property
    def is_float(self) -> bool:
        return self.numpy_dtype.kind == "f"

    @classmethod
    def parse(cls, token: str) -> DType:
        """
        Parse a schema dtype token.

        Args:
            token (str): Canonical name or alias, any case.

        Returns:
            DType: The matching kind.

        Raises:
            UnknownDTypeError: If the token matches no name or alias (token kept verbatim).
        """
        found = _TOKENS.get(token.strip().lower())
        if found is None:
            raise UnknownDTypeError(token)
        return found

    @classmethod
    def from_requested(cls, requested: DTypeLike) -> DType:
        """
        Resolve the type a caller requests for typed access.

        Args:
            requested: A DType, a schema token (str), or anything numpy.dtype() accepts
                (np.uint32, np.dtype("<f4"), bool, float, ...).

        Returns:
            DType: The matching kind.

        Raises:
            UnknownDTypeError: If the request names no supported kind, or a numpy dtype
                has non-native byte order.
        """
        if isinstance(requested, DType):
            return requested
        if isinstance(requested, str):
            return cls.parse(requested)
        if requested is None:
            # numpy.dtype(None) silently means float64
            raise UnknownDTypeError("None")
        try:
            np_dtype = np.dtype(requested)
        except (TypeError, ValueError) as exc:
            raise UnknownDTypeError(repr(requested)) from exc
        if not np_dtype.isnative:
            raise UnknownDTypeError(np_dtype.str)
        found = _BY_NUMPY_KIND.get((np_dtype.kind, np_dtype.itemsize))
        if found is None:
            raise UnknownDTypeError(np_dtype.str)
        return found


DTypeLike = DType | str | type | np.dtype

_SIZE_BYTES: dict[DType, int] = {
    DType.UINT8: 1,
    DType.INT8: 1,
    DType.UINT16: 2,
    DType.INT16: 2,
    DType.UINT32: 4,
    DType.INT32: 4,
    DType.UINT64: 8,
    DType.INT64: 8,
    DType.FLOAT32: 4,
    DType.FLOAT64: 8,
    DType.BOOL: 1,
}

_NUMPY_DTYPES: dict[DType, np.dtype[Any]] = {
    DType.UINT8: np.dtype(np.uint8),
    DType.INT8: np.dtype(np.int8),
    DType.UINT16: np.dtype(np.uint16),
    DType.INT16: np.dtype(np.int16),
    DType.UINT32: np.dtype(np.uint32),
    DType.INT32: np.dtype(np.int32),
    DType.UINT64: np.dtype(np.uint64),
    DType.INT64: np.dtype(np.int64),
    DType.FLOAT32: np.dtype(np.float32),
    DType.FLOAT64: np.dtype(np.float64),
    DType.BOOL: np.dtype(np.bool_),
}

_FORMAT_CHARS: dict[DType, str] = {
    DType.UINT8: "B",
    DType.INT8: "b",
    DType.UINT16: "H",
    DType.INT16: "h",
    DType.UINT32: "I",
    DType.INT32: "i",
    DType.UINT64: "Q",
    DType.INT64: "q",
    DType.FLOAT32: "f",
    DType.FLOAT64: "d",
    DType.BOOL: "?",
}

_ALIASES: dict[str, DType] = {
    "u8": DType.UINT8,
    "i8": DType.INT8,
    "u16": DType.UINT16,
    "i16": DType.INT16,
    "u32": DType.UINT32,
    "i32": DType.INT32,
    "u64": DType.UINT64,
    "size_t": DType.UINT64,
    "i64": DType.INT64,
    "f32": DType.FLOAT32,
    "f64": DType.FLOAT64,
    "double": DType.FLOAT64,
    "boolean": DType.BOOL,
}

_TOKENS: dict[str, DType] = {d.value: d for d in DType} | _ALIASES

_BY_NUMPY_KIND: dict[tuple[str, int], DType] = {
    (dt.kind, dt.itemsize): d for d, dt in _NUMPY_DTYPES.items()
}
