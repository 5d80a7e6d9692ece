"""
Schema model and parser for mmappet dataset directories.

A schema is the ordered list of column declarations read from ``schema.txt``:
one ``<dtype-token> <column-name>`` pair per nonblank line. Declaration order is
the on-disk file order, so the column at index ``i`` lives in ``<i>.bin``.

Responsibilities
- Parse schema text into immutable ColumnDef records (single pass, zero IO).
- Maintain a name -> index mapping consistent with the declaration sequence.
- Reject malformed lines (SchemaParseError) and repeated names (DuplicateColumnNameError).

Notes:
    - Blank lines are ignored and do not consume a column index; line numbers in
      errors are 1-based positions in the raw text, blank lines included.
    - Reading the file is the caller's job (see mmappet.io.dataset).

Examples:
    >>> from mmappet.core.schema import Schema
    >>> schema = Schema.parse("uint32 tof\\n\\nfloat32 mz\\n")
    >>> schema.column_names()
    ['tof', 'mz']
    >>> schema.index_of("mz")
    1
    >>> schema.get(0).dtype
    <DType.UINT32: 'uint32'>
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from types import MappingProxyType

from .dtype import DType
from .errors import (
    ColumnNotFoundError,
    DuplicateColumnNameError,
    SchemaParseError,
    UnknownDTypeError,
)

__all__ = ["ColumnDef", "Schema", "parse_schema"]


@dataclass(frozen=True, slots=True)
class ColumnDef:
    """
    One declared column.

    Attributes:
        index (int): 0-based position among declared columns (matches "<index>.bin").
        name (str): Column name, unique within the schema.
        dtype (DType): Declared scalar kind.
    """

    index: int
    name: str
    dtype: DType


class Schema:
    """
    Ordered, immutable collection of ColumnDef with name lookup.

    Notes:
        - Build with Schema.parse (or parse_schema); the constructor also accepts
          ColumnDefs directly and enforces the same invariants.
        - Equality compares the declared columns in order.
    """

    __slots__ = ("_columns", "_index")

    def __init__(self, columns: Iterable[ColumnDef] = ()) -> None:
        cols = tuple(columns)
        index: dict[str, int] = {}
        for pos, col in enumerate(cols):
            if col.index != pos:
                raise ValueError(f"column {col.name!r} has index {col.index}, expected {pos}")
            if col.name in index:
                first = index[col.name]
                raise DuplicateColumnNameError(col.name, first, pos, first + 1, pos + 1)
            index[col.name] = pos
        self._columns = cols
        self._index = MappingProxyType(index)

    @classmethod
    def parse(cls, text: str) -> Schema:
        """
        Parse schema text.

        Args:
            text (str): Full contents of schema.txt.

        Returns:
            Schema: Columns in declaration order.

        Raises:
            SchemaParseError: A nonblank line does not hold exactly two tokens, or its
                dtype token is unknown (chained to the UnknownDTypeError).
            DuplicateColumnNameError: Two lines declare the same name, whatever their dtypes.
        """
        columns: list[ColumnDef] = []
        seen: dict[str, tuple[int, int]] = {}

        for line_no, raw in enumerate(text.splitlines(), start=1):
            line = raw.strip()
            if not line:
                continue

            parts = line.split()
            if len(parts) != 2:
                raise SchemaParseError(
                    line_no, raw, f"expected '<dtype> <name>', found {len(parts)} token(s)"
                )
            token, name = parts
            try:
                dtype = DType.parse(token)
            except UnknownDTypeError as exc:
                raise SchemaParseError(line_no, raw, f"unknown dtype {token!r}") from exc

            index = len(columns)
            if name in seen:
                first_index, first_line = seen[name]
                raise DuplicateColumnNameError(name, first_index, index, first_line, line_no)
            seen[name] = (index, line_no)
            columns.append(ColumnDef(index=index, name=name, dtype=dtype))

        return cls(columns)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    @property
    def column_count(self) -> int:
        return len(self._columns)

    @property
    def columns(self) -> tuple[ColumnDef, ...]:
        return self._columns

    def column_names(self) -> list[str]:
        """Column names in declaration order."""
        return [c.name for c in self._columns]

    def index_of(self, name: str) -> int | None:
        """Index of ``name``, or None when the schema does not declare it."""
        return self._index.get(name)

    def get(self, index: int) -> ColumnDef:
        """
        ColumnDef at a schema index.

        Raises:
            ColumnNotFoundError: If index is outside [0, column_count).
        """
        if not 0 <= index < len(self._columns):
            raise ColumnNotFoundError(index)
        return self._columns[index]

    def column(self, name: str) -> ColumnDef:
        """
        ColumnDef for a column name.

        Raises:
            ColumnNotFoundError: If no column has this name.
        """
        index = self._index.get(name)
        if index is None:
            raise ColumnNotFoundError(name)
        return self._columns[index]

    def to_text(self) -> str:
        """Render canonical schema text (canonical dtype names, one column per line)."""
        return "".join(f"{c.dtype.canonical_name} {c.name}\n" for c in self._columns)

    # ------------------------------------------------------------------
    # Container protocol
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self._columns)

    def __iter__(self) -> Iterator[ColumnDef]:
        return iter(self._columns)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Schema):
            return NotImplemented
        return self._columns == other._columns

    def __hash__(self) -> int:
        return hash(self._columns)

    def __repr__(self) -> str:
        cols = ", ".join(f"{c.name}: {c.dtype}" for c in self._columns)
        return f"Schema({cols})"


def parse_schema(text: str) -> Schema:
    """Functional alias for Schema.parse."""
    return Schema.parse(text)
