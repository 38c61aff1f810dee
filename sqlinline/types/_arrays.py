"""PostgreSQL array wrappers that serialize themselves to array literals.

Each wrapper is a read-only :class:`~collections.abc.Sequence` over its
elements. ``values=None`` represents a SQL NULL array, an empty iterable an
empty array (``{}``).
"""

import datetime
import math
import struct
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Sequence
from decimal import Decimal
from typing import Any, Final, Generic, Optional, TypeVar, Union, overload

from sqlinline.exceptions import ArrayEncodingError

__all__ = (
    "BoolArray",
    "ByteaArray",
    "Float32Array",
    "Float64Array",
    "GenericArray",
    "Int32Array",
    "Int64Array",
    "PgArray",
    "StringArray",
    "quote_array_element",
)

T = TypeVar("T")

NULL_ELEMENT: Final[str] = "NULL"
INT32_MIN: Final[int] = -(2**31)
INT32_MAX: Final[int] = 2**31 - 1


def quote_array_element(text: str) -> str:
    """Quote one array element, escaping backslashes and double quotes."""
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    text = repr(value)
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    if text.endswith(".0"):
        text = text[:-2]
    return text


def _to_float32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _format_float32(value: float) -> str:
    """Format the shortest decimal that reads back as the same single-precision value."""
    single = _to_float32(value)
    if not math.isfinite(single):
        return _format_float(single)
    for precision in range(1, 10):
        text = f"{single:.{precision}g}"
        if _to_float32(float(text)) == single:
            break
    return format(Decimal(text), "f")


def _format_bytea(value: "Union[bytes, bytearray, memoryview]") -> str:
    return quote_array_element("\\x" + bytes(value).hex())


class PgArray(Sequence[T], ABC, Generic[T]):
    """Base class for array wrappers.

    Subclasses implement :meth:`encode_element` for a single non-NULL element.
    """

    __slots__ = ("values",)

    def __init__(self, values: "Optional[Iterable[T]]" = ()) -> None:
        self.values: Optional[tuple[T, ...]] = None if values is None else tuple(values)

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> "tuple[T, ...]": ...

    def __getitem__(self, index: "Union[int, slice]") -> Any:
        if self.values is None:
            msg = f"{type(self).__name__} is NULL"
            raise IndexError(msg)
        return self.values[index]

    def __len__(self) -> int:
        return 0 if self.values is None else len(self.values)

    def __iter__(self) -> "Iterator[T]":
        return iter(self.values or ())

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return False
        return self.values == other.values  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self.values))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({None if self.values is None else list(self.values)!r})"

    def array_literal(self) -> Optional[str]:
        """Return the PostgreSQL array literal, or ``None`` for a NULL array.

        Raises:
            ArrayEncodingError: If an element cannot be encoded.
        """
        if self.values is None:
            return None
        return "{" + ",".join(NULL_ELEMENT if v is None else self.encode_element(v) for v in self.values) + "}"

    @abstractmethod
    def encode_element(self, value: T) -> str:
        """Encode one non-NULL element.

        Raises:
            ArrayEncodingError: If the element has the wrong type or is out of range.
        """

    def _reject(self, value: Any) -> ArrayEncodingError:
        msg = f"{type(self).__name__} cannot encode element of type {type(value).__name__}: {value!r}"
        return ArrayEncodingError(msg, element=value)


class BoolArray(PgArray[bool]):
    __slots__ = ()

    def encode_element(self, value: bool) -> str:
        if not isinstance(value, bool):
            raise self._reject(value)
        return "t" if value else "f"


class Int64Array(PgArray[int]):
    __slots__ = ()

    def encode_element(self, value: int) -> str:
        if isinstance(value, bool) or not isinstance(value, int):
            raise self._reject(value)
        return str(value)


class Int32Array(PgArray[int]):
    __slots__ = ()

    def encode_element(self, value: int) -> str:
        if isinstance(value, bool) or not isinstance(value, int) or not INT32_MIN <= value <= INT32_MAX:
            raise self._reject(value)
        return str(value)


class Float32Array(PgArray[float]):
    """Single-precision array; elements are rounded to float32 before formatting."""

    __slots__ = ()

    def encode_element(self, value: float) -> str:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise self._reject(value)
        try:
            return _format_float32(float(value))
        except OverflowError:
            raise self._reject(value) from None


class Float64Array(PgArray[float]):
    __slots__ = ()

    def encode_element(self, value: float) -> str:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise self._reject(value)
        return _format_float(float(value))


class StringArray(PgArray[str]):
    __slots__ = ()

    def encode_element(self, value: str) -> str:
        if not isinstance(value, str):
            raise self._reject(value)
        return quote_array_element(value)


class ByteaArray(PgArray[bytes]):
    __slots__ = ()

    def encode_element(self, value: bytes) -> str:
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise self._reject(value)
        return _format_bytea(value)


class GenericArray(PgArray[Any]):
    """Array of arbitrary elements; nested sequences become nested dimensions."""

    __slots__ = ()

    def encode_element(self, value: Any) -> str:
        if value is None:
            return NULL_ELEMENT
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, float):
            return _format_float(value)
        if isinstance(value, (int, Decimal)):
            return str(value)
        if isinstance(value, (bytes, bytearray, memoryview)):
            return _format_bytea(value)
        if isinstance(value, str):
            return quote_array_element(value)
        if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
            return quote_array_element(value.isoformat())
        if isinstance(value, Sequence):
            return "{" + ",".join(self.encode_element(v) for v in value) + "}"
        return quote_array_element(str(value))
