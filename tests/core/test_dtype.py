"""Tests for `mmappet.core.dtype` token parsing and numpy mapping."""

import struct

import numpy as np
import pytest

from mmappet.core.dtype import DType
from mmappet.core.errors import UnknownDTypeError

TOKEN_TABLE = [
    (("uint8", "u8"), DType.UINT8, 1),
    (("int8", "i8"), DType.INT8, 1),
    (("uint16", "u16"), DType.UINT16, 2),
    (("int16", "i16"), DType.INT16, 2),
    (("uint32", "u32"), DType.UINT32, 4),
    (("int32", "i32"), DType.INT32, 4),
    (("uint64", "u64", "size_t"), DType.UINT64, 8),
    (("int64", "i64"), DType.INT64, 8),
    (("float32", "f32"), DType.FLOAT32, 4),
    (("float64", "f64", "double"), DType.FLOAT64, 8),
    (("bool", "boolean"), DType.BOOL, 1),
]


@pytest.mark.parametrize("tokens,kind,width", TOKEN_TABLE)
def test_every_token_parses_case_insensitively(tokens: tuple[str, ...], kind: DType, width: int) -> None:
    for token in tokens:
        assert DType.parse(token) is kind
        assert DType.parse(token.upper()) is kind
        assert DType.parse(f"  {token.title()}\t") is kind
    assert kind.size_bytes == width


def test_token_table_covers_every_kind() -> None:
    assert {kind for _, kind, _ in TOKEN_TABLE} == set(DType)


@pytest.mark.parametrize("kind", list(DType))
def test_canonical_name_round_trips(kind: DType) -> None:
    assert DType.parse(kind.canonical_name) is kind
    assert str(kind) == kind.canonical_name == kind.value
    assert kind.canonical_name == kind.canonical_name.lower()


@pytest.mark.parametrize("kind", list(DType))
def test_numpy_dtype_and_format_match_width(kind: DType) -> None:
    assert kind.numpy_dtype.itemsize == kind.size_bytes
    assert kind.numpy_dtype.isnative
    assert struct.calcsize(kind.format_char) == kind.size_bytes


@pytest.mark.parametrize("token", ["complex128", "", "uint", "string", "float16", "u 8"])
def test_unknown_token_raises_with_token(token: str) -> None:
    with pytest.raises(UnknownDTypeError) as info:
        DType.parse(token)
    assert info.value.token == token


def test_integer_and_float_predicates() -> None:
    assert DType.INT16.is_integer and not DType.INT16.is_float
    assert DType.FLOAT64.is_float and not DType.FLOAT64.is_integer
    assert not DType.BOOL.is_integer and not DType.BOOL.is_float


@pytest.mark.parametrize(
    "requested,expected",
    [
        (DType.INT32, DType.INT32),
        ("f32", DType.FLOAT32),
        ("u8", DType.UINT8),  # schema grammar, not numpy's 8-byte "u8"
        (np.uint32, DType.UINT32),
        (np.dtype("f8"), DType.FLOAT64),
        (np.int8, DType.INT8),
        (bool, DType.BOOL),
        (np.bool_, DType.BOOL),
        (float, DType.FLOAT64),
    ],
)
def test_from_requested_resolves(requested: object, expected: DType) -> None:
    assert DType.from_requested(requested) is expected


@pytest.mark.parametrize(
    "requested",
    [None, np.complex64, np.float16, np.dtype("u4").newbyteorder(), object, "nope"],
)
def test_from_requested_rejects(requested: object) -> None:
    with pytest.raises(UnknownDTypeError):
        DType.from_requested(requested)
