from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import numpy as np
import pytest

# (dtype token, column name, payload); payload is an array-like written with
# ndarray.tofile, raw bytes written verbatim, or None to leave the file out.
ColumnPayload = tuple[str, str, Any]


@pytest.fixture
def make_dataset(tmp_path: Path) -> Callable[..., Path]:
    def _make(columns: Sequence[ColumnPayload], name: str = "data.mmappet") -> Path:
        root = tmp_path / name
        root.mkdir()
        schema = "".join(f"{token} {col}\n" for token, col, _ in columns)
        (root / "schema.txt").write_text(schema)
        for index, (_, _, payload) in enumerate(columns):
            path = root / f"{index}.bin"
            if payload is None:
                continue
            if isinstance(payload, bytes):
                path.write_bytes(payload)
            else:
                np.asarray(payload).tofile(path)
        return root

    return _make


@pytest.fixture
def tof_mz(make_dataset: Callable[..., Path]) -> Path:
    return make_dataset(
        [
            ("uint32", "tof", np.array([10, 20, 30], dtype=np.uint32)),
            ("float32", "mz", np.array([1.5, 2.5, 3.5], dtype=np.float32)),
        ]
    )
