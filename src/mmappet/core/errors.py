"""
Exception types raised while opening and reading mmappet datasets.

Purpose
- Provide one error type per failure kind so callers (notably the CLI) can render
  precise, user-facing messages.
- Keep the taxonomy flat: every error derives directly from MmappetError. Where a
  builtin category fits (ValueError, KeyError, TypeError) it is mixed in so generic
  handlers keep working.

Kinds
- MmappetIoError: underlying filesystem or mapping failure (carries the OS cause).
- SchemaParseError: malformed schema line (line number and raw content).
- UnknownDTypeError: unrecognized type token.
- ColumnNotFoundError: name or index lookup failed.
- TypeMismatchError: requested type disagrees with a column's declared dtype.
- LengthMismatchError: a column disagrees with the dataset row count.
- MissingSchemaError: schema.txt absent.
- MissingColumnFileError: a column's <index>.bin absent.
- InvalidFileSizeError: byte length not a multiple of the dtype width.
- DuplicateColumnNameError: two schema lines declare the same name.
- MmappetConfigError: invalid runtime settings.

Notes:
    - This module performs no IO and is stdlib-only.
    - Attributes hold the structured payload; ``str(err)`` is the rendered message.

Examples:
    >>> from mmappet.core.errors import UnknownDTypeError
    >>> err = UnknownDTypeError("complex128")
    >>> err.token
    'complex128'
    >>> str(err)
    "unknown dtype: 'complex128'"
"""

from __future__ import annotations

import os
from typing import Any

__all__ = [
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


class MmappetError(Exception):
    """
    Base class for all mmappet failures.

    Notes:
        Catch this to handle any dataset error; the CLI renders it and exits non-zero.
    """


class MmappetIoError(MmappetError):
    """Filesystem or memory-mapping failure; ``cause`` is the underlying OSError."""

    def __init__(self, path: str | os.PathLike[str], cause: BaseException) -> None:
        self.path = os.fspath(path)
        self.cause = cause
        super().__init__(f"IO error on {self.path}: {cause}")


class SchemaParseError(MmappetError, ValueError):
    """
    A schema line could not be parsed.

    Attributes:
        line (int): 1-based line number within the raw schema text.
        content (str): The offending line, verbatim.
        reason (str): Short description of what was wrong.
    """

    def __init__(self, line: int, content: str, reason: str) -> None:
        self.line = line
        self.content = content
        self.reason = reason
        super().__init__(f"schema parse error at line {line}: {reason} (got {content!r})")


class UnknownDTypeError(MmappetError, ValueError):
    """A dtype token matched no canonical name or alias."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"unknown dtype: {token!r}")


class ColumnNotFoundError(MmappetError, KeyError):
    """
    A column lookup failed.

    Attributes:
        key (str | int): The requested column name or schema index.
    """

    def __init__(self, key: str | int) -> None:
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return f"column not found: {self.key!r}"


class TypeMismatchError(MmappetError, TypeError):
    """
    A typed access requested a dtype different from the column's declared dtype.

    Attributes:
        requested (DType): The dtype the caller asked for.
        actual (DType): The column's declared dtype.
    """

    def __init__(self, requested: Any, actual: Any) -> None:
        self.requested = requested
        self.actual = actual
        super().__init__(f"type mismatch: requested {requested}, column is {actual}")


class LengthMismatchError(MmappetError, ValueError):
    """
    A column's row count disagrees with the expected count.

    Attributes:
        name (str): Identifier of the disagreeing column (name or file path).
        expected (int): Row count the column was expected to have.
        actual (int): Row count the column actually has.
        reference (str | None): Column that established the expected count, if any.
    """

    def __init__(self, name: str, expected: int, actual: int, reference: str | None = None) -> None:
        self.name = name
        self.expected = expected
        self.actual = actual
        self.reference = reference
        if reference is None:
            msg = f"length mismatch: column {name!r} has {actual} rows, expected {expected}"
        else:
            msg = (
                f"length mismatch: column {name!r} has {actual} rows, "
                f"but column {reference!r} has {expected}"
            )
        super().__init__(msg)


class MissingSchemaError(MmappetError):
    """The dataset directory has no schema file."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = os.fspath(path)
        super().__init__(f"missing schema.txt in {self.path}")


class MissingColumnFileError(MmappetError):
    """
    A column's binary file does not exist.

    Attributes:
        index (int | None): Schema index of the column, when known.
        path (str): Expected file path.
    """

    def __init__(self, index: int | None, path: str | os.PathLike[str]) -> None:
        self.index = index
        self.path = os.fspath(path)
        if index is None:
            msg = f"missing column file: {self.path}"
        else:
            msg = f"missing column file for column {index}: {self.path}"
        super().__init__(msg)


class InvalidFileSizeError(MmappetError, ValueError):
    """
    A column file's byte length is not a multiple of its element width.

    Attributes:
        path (str): Column file path.
        actual (int): File size in bytes.
        element_size (int): Width of one element of the declared dtype.
    """

    def __init__(self, path: str | os.PathLike[str], actual: int, element_size: int) -> None:
        self.path = os.fspath(path)
        self.actual = actual
        self.element_size = element_size
        super().__init__(
            f"invalid column file size: {self.path} has {actual} bytes, "
            f"expected a multiple of {element_size}"
        )


class DuplicateColumnNameError(MmappetError, ValueError):
    """
    Two schema lines declare the same column name.

    Attributes:
        name (str): The duplicated name.
        first_index (int): Column index of the first declaration.
        second_index (int): Column index the second declaration would have taken.
        first_line (int): 1-based schema line of the first declaration.
        second_line (int): 1-based schema line of the second declaration.
    """

    def __init__(
        self,
        name: str,
        first_index: int,
        second_index: int,
        first_line: int,
        second_line: int,
    ) -> None:
        self.name = name
        self.first_index = first_index
        self.second_index = second_index
        self.first_line = first_line
        self.second_line = second_line
        super().__init__(
            f"duplicate column name {name!r}: declared as column {first_index} (line {first_line}) "
            f"and column {second_index} (line {second_line})"
        )


class MmappetConfigError(MmappetError, ValueError):
    """Raised when runtime settings are invalid (e.g., a non-positive row count)."""
