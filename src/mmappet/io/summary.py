"""
Pydantic v2 summary models describing an opened dataset.

Used by ``Dataset.describe()`` and ``mmappet info --json``. The models carry metadata
only (names, dtypes, row counts, byte sizes); they never hold column values.

Style
- ``extra="forbid"`` and frozen, matching the rest of the read-only API.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from mmappet.core.dtype import DType

if TYPE_CHECKING:
    from .dataset import Dataset

__all__ = ["ColumnSummary", "DatasetSummary"]


class ColumnSummary(BaseModel):
    """
    Metadata for one column.

    Attributes:
        index (int): Schema index (also the file stem, "<index>.bin").
        name (str): Column name.
        dtype (DType): Declared dtype (serialized as its canonical name).
        rows (int): Row count.
        nbytes (int): Mapped size in bytes (rows * dtype width).
        file (str): Column file name relative to the dataset directory.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    index: int = Field(..., ge=0)
    name: str = Field(..., min_length=1)
    dtype: DType
    rows: int = Field(..., ge=0)
    nbytes: int = Field(..., ge=0)
    file: str


class DatasetSummary(BaseModel):
    """
    Metadata for a whole dataset.

    Attributes:
        path (str): Dataset directory as given to Dataset.open.
        rows (int): Shared row count.
        columns (list[ColumnSummary]): Columns in schema order.

    Examples:
        >>> ds.describe().model_dump(mode="json")  # doctest: +SKIP
        {'path': 'data', 'rows': 3, 'columns': [{'index': 0, 'name': 'tof', 'dtype': 'uint32', ...}]}
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    path: str
    rows: int = Field(..., ge=0)
    columns: list[ColumnSummary] = Field(default_factory=list)

    @property
    def total_bytes(self) -> int:
        return sum(c.nbytes for c in self.columns)

    @classmethod
    def from_dataset(cls, ds: Dataset) -> DatasetSummary:
        columns = []
        for col_def, (_, column) in zip(ds.schema, ds.items(), strict=True):
            columns.append(
                ColumnSummary(
                    index=col_def.index,
                    name=col_def.name,
                    dtype=col_def.dtype,
                    rows=len(column),
                    nbytes=column.nbytes,
                    file=os.path.basename(column.path),
                )
            )
        return cls(path=ds.path, rows=len(ds), columns=columns)
