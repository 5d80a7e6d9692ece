"""
mmappet.io: filesystem and memory-mapping layer for mmappet datasets.

## Responsibilities
- Map column files read-only and expose them as typed, zero-copy views (Column).
- Open whole dataset directories with all-or-nothing validation (Dataset).
- Load runtime settings with env > TOML > defaults precedence (MmappetSettings).

## Public API
- Dataset / open_dataset: validated, immutable dataset handle.
- Column / TypedArrayView: one mapped column and its dtype-tagged view.
- DatasetSummary / ColumnSummary: pydantic metadata models.
- MmappetSettings: presentation/logging configuration.

## Import DAG discipline
- Depends on stdlib, numpy, polars/pyarrow (interop), pydantic (summaries), and mmappet.core.
- MUST NOT import mmappet.cli.
"""

from __future__ import annotations

from .column import Column, TypedArrayView
from .config import MmappetSettings
from .dataset import Dataset, open_dataset
from .summary import ColumnSummary, DatasetSummary

__all__ = [
    "Column",
    "TypedArrayView",
    "Dataset",
    "open_dataset",
    "ColumnSummary",
    "DatasetSummary",
    "MmappetSettings",
]
