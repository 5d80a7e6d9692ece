"""Tests for `mmappet.core.schema` parsing and lookup."""

import pytest

from mmappet.core.dtype import DType
from mmappet.core.errors import (
    ColumnNotFoundError,
    DuplicateColumnNameError,
    SchemaParseError,
    UnknownDTypeError,
)
from mmappet.core.schema import ColumnDef, Schema, parse_schema


def test_parse_schema_basic() -> None:
    schema = Schema.parse("uint32 tof\nuint32 intensity\nfloat32 score\nfloat32 mz")

    assert schema.column_count == 4
    assert len(schema) == 4
    assert schema.column_names() == ["tof", "intensity", "score", "mz"]

    tof = schema.column("tof")
    assert tof == ColumnDef(index=0, name="tof", dtype=DType.UINT32)
    mz = schema.column("mz")
    assert mz.index == 3
    assert mz.dtype is DType.FLOAT32


def test_blank_lines_do_not_consume_indices() -> None:
    schema = Schema.parse("\nuint32 a\n\n   \nfloat64 b\n")

    assert schema.column_names() == ["a", "b"]
    assert [c.index for c in schema] == [0, 1]


def test_tokens_split_on_any_whitespace_and_aliases_resolve() -> None:
    schema = parse_schema("  SIZE_T\tcount  \r\nboolean   flag\n")

    assert schema.get(0) == ColumnDef(0, "count", DType.UINT64)
    assert schema.get(1) == ColumnDef(1, "flag", DType.BOOL)


def test_empty_text_gives_empty_schema() -> None:
    schema = Schema.parse("")
    assert len(schema) == 0
    assert schema.column_names() == []


@pytest.mark.parametrize("line", ["uint32", "uint32 a b", "invalid line format here"])
def test_wrong_token_count_raises_schema_parse(line: str) -> None:
    with pytest.raises(SchemaParseError) as info:
        Schema.parse(f"uint32 ok\n\n{line}\n")
    assert info.value.line == 3
    assert info.value.content == line


def test_unknown_dtype_raises_schema_parse_chained() -> None:
    with pytest.raises(SchemaParseError) as info:
        Schema.parse("uint32 a\ncomplex64 b\n")

    err = info.value
    assert err.line == 2
    assert err.content == "complex64 b"
    assert isinstance(err.__cause__, UnknownDTypeError)
    assert err.__cause__.token == "complex64"


def test_duplicate_name_raises_regardless_of_dtype() -> None:
    with pytest.raises(DuplicateColumnNameError) as info:
        Schema.parse("uint32 col\n\nint8 other\nfloat32 col\n")

    err = info.value
    assert err.name == "col"
    assert (err.first_index, err.second_index) == (0, 2)
    assert (err.first_line, err.second_line) == (1, 4)


def test_lookup_helpers() -> None:
    schema = Schema.parse("u8 a\nf64 b\n")

    assert schema.index_of("b") == 1
    assert schema.index_of("missing") is None
    assert "a" in schema
    assert "missing" not in schema
    assert list(schema) == list(schema.columns)


@pytest.mark.parametrize("index", [-1, 2, 100])
def test_get_out_of_range_raises_column_not_found(index: int) -> None:
    schema = Schema.parse("u8 a\nf64 b\n")
    with pytest.raises(ColumnNotFoundError) as info:
        schema.get(index)
    assert info.value.key == index


def test_column_by_unknown_name_raises() -> None:
    schema = Schema.parse("u8 a\n")
    with pytest.raises(ColumnNotFoundError):
        schema.column("b")


def test_to_text_is_canonical_and_reparses() -> None:
    schema = Schema.parse("U32 tof\n\ndouble mz\nboolean ok\n")

    assert schema.to_text() == "uint32 tof\nfloat64 mz\nbool ok\n"
    assert Schema.parse(schema.to_text()) == schema


def test_constructor_enforces_invariants() -> None:
    with pytest.raises(ValueError):
        Schema([ColumnDef(1, "a", DType.UINT8)])
    with pytest.raises(DuplicateColumnNameError):
        Schema([ColumnDef(0, "a", DType.UINT8), ColumnDef(1, "a", DType.INT8)])
