"""
Core contracts for mmappet datasets (dtypes, schema, errors, constants, logging).

## Contracts
- DType: closed set of scalar kinds, token grammar, widths, numpy mapping.
- Schema / ColumnDef: parsed column declarations with name lookup.
- Errors: one exception type per failure kind, rooted at MmappetError.
- Constants: on-disk file names and presentation defaults.

## Notes
- Zero-IO policy: nothing here touches the filesystem; mmappet.io does.
- Depends on stdlib, numpy (dtype mapping) and structlog (logging only).

## Examples
```python
from mmappet.core import DType, Schema
schema = Schema.parse("uint32 tof\\nfloat32 mz\\n")
schema.column("mz").dtype is DType.FLOAT32  # True
```
"""

from __future__ import annotations

from .dtype import DType, DTypeLike
from .errors import (
    ColumnNotFoundError,
    DuplicateColumnNameError,
    InvalidFileSizeError,
    LengthMismatchError,
    MissingColumnFileError,
    MissingSchemaError,
    MmappetConfigError,
    MmappetError,
    MmappetIoError,
    SchemaParseError,
    TypeMismatchError,
    UnknownDTypeError,
)
from .schema import ColumnDef, Schema, parse_schema

__all__ = [
    "DType",
    "DTypeLike",
    "ColumnDef",
    "Schema",
    "parse_schema",
    "MmappetError",
    "MmappetIoError",
    "SchemaParseError",
    "UnknownDTypeError",
    "ColumnNotFoundError",
    "TypeMismatchError",
    "LengthMismatchError",
    "MissingSchemaError",
    "MissingColumnFileError",
    "InvalidFileSizeError",
    "DuplicateColumnNameError",
    "MmappetConfigError",
]
