"""
mmappet: memory-mapped columnar datasets.

A dataset is a directory holding ``schema.txt`` (one ``<dtype> <name>`` pair per line)
and one flat binary file per column (``0.bin``, ``1.bin``, ...) of packed, fixed-width,
native-byte-order values. mmappet opens such a directory, validates it, and exposes every
column as a typed, read-only view over mapped memory without copying the bytes.

## Examples
```python
import mmappet

ds = mmappet.open_dataset("data.mmappet")
ds.schema.column_names()          # ['tof', 'mz']
len(ds)                           # shared row count
ds.get("tof", "uint32")           # typed memoryview
ds.get_array("mz", "float32")     # numpy view
ds["mz"].as_typed_array()         # dtype-tagged view for dynamic callers
```

## Notes
- Datasets are not portable across machines with different native byte order.
- Read-only: there is no write path.
"""

from __future__ import annotations

from .core import (
    ColumnDef,
    ColumnNotFoundError,
    DType,
    DuplicateColumnNameError,
    InvalidFileSizeError,
    LengthMismatchError,
    MissingColumnFileError,
    MissingSchemaError,
    MmappetConfigError,
    MmappetError,
    MmappetIoError,
    Schema,
    SchemaParseError,
    TypeMismatchError,
    UnknownDTypeError,
    parse_schema,
)
from .io import (
    Column,
    ColumnSummary,
    Dataset,
    DatasetSummary,
    MmappetSettings,
    TypedArrayView,
    open_dataset,
)

__version__ = "0.1.0"

__all__ = [
    "DType",
    "ColumnDef",
    "Schema",
    "parse_schema",
    "Column",
    "TypedArrayView",
    "Dataset",
    "open_dataset",
    "ColumnSummary",
    "DatasetSummary",
    "MmappetSettings",
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
