"""Nullable primitives pairing an inner value with an explicit validity flag.

These mirror the ``sql.Null*`` family found in database drivers: a wrapper
with ``valid=False`` is SQL NULL whatever its ``value`` holds.
"""

import datetime
from dataclasses import dataclass
from typing import ClassVar, Generic, Optional, TypeVar

__all__ = (
    "NullBool",
    "NullByte",
    "NullFloat64",
    "NullInt16",
    "NullInt32",
    "NullInt64",
    "NullString",
    "NullTime",
    "Nullable",
)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Nullable(Generic[T]):
    """Generic nullable value."""

    __sql_nullable__: ClassVar[bool] = True

    value: "Optional[T]" = None
    valid: bool = False

    @classmethod
    def of(cls, value: T) -> "Nullable[T]":
        """Return a valid wrapper around ``value``."""
        return cls(value, True)

    @classmethod
    def null(cls) -> "Nullable[T]":
        """Return an invalid (NULL) wrapper."""
        return cls()

    def get(self, default: "Optional[T]" = None) -> "Optional[T]":
        return self.value if self.valid else default


class NullBool(Nullable[bool]):
    __slots__ = ()


class NullByte(Nullable[int]):
    __slots__ = ()


class NullInt16(Nullable[int]):
    __slots__ = ()


class NullInt32(Nullable[int]):
    __slots__ = ()


class NullInt64(Nullable[int]):
    __slots__ = ()


class NullFloat64(Nullable[float]):
    __slots__ = ()


class NullString(Nullable[str]):
    __slots__ = ()


class NullTime(Nullable[datetime.datetime]):
    __slots__ = ()
