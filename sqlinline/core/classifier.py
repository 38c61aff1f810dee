"""Value classification.

Every value is assigned exactly one :class:`Category`. Rules are probed in a
fixed precedence order and the first match wins, so overlapping shapes are
resolved by position: bytes and native arrays are sequences but never
``SLICE``, time values and nullable wrappers may be dataclasses but are never
``STRUCT``.
"""

import datetime
from collections.abc import Callable
from decimal import Decimal
from enum import Enum
from typing import Any, Final
from uuid import UUID

from sqlinline.core.fields import is_struct
from sqlinline.utils.logging import get_logger
from sqlinline.utils.type_guards import (
    has_array_literal,
    is_bytes_like,
    is_dereferenceable,
    is_element_sequence,
    is_enum_member,
    is_mapping,
    is_named_tuple,
    is_nullable,
    is_weak_reference,
)

__all__ = ("CATEGORY_RULES", "Category", "classify", "dereference")

logger = get_logger("classify")


class Category(str, Enum):
    """Rendering category of a value."""

    NULL = "null"
    POINTER = "pointer"
    TIME = "time"
    STRING = "string"
    BYTES = "bytes"
    NATIVE_ARRAY = "native_array"
    SLICE = "slice"
    NULLABLE = "nullable"
    BOOLEAN = "boolean"
    FLOAT = "float"
    MAP = "map"
    STRUCT = "struct"
    INTEGER = "integer"

    def __str__(self) -> str:
        """String representation for better error messages.

        Returns:
            The enum value as a string.
        """
        return self.value


_TIME_TYPES: Final = (datetime.datetime, datetime.date, datetime.time)


def _is_reference(value: Any) -> bool:
    return is_weak_reference(value) or is_enum_member(value) or is_dereferenceable(value)


def dereference(value: Any) -> Any:
    """Unwrap one level of indirection.

    Args:
        value: A weak reference, enum member or dereferenceable wrapper.

    Returns:
        The referenced value, ``None`` when the reference is absent.
    """
    if is_weak_reference(value):
        return value()
    if is_enum_member(value):
        return value.value
    return value.deref()


def _is_null(value: Any) -> bool:
    return value is None or (_is_reference(value) and dereference(value) is None)


def _is_pointer(value: Any) -> bool:
    return _is_reference(value) and dereference(value) is not None


def _is_time(value: Any) -> bool:
    return isinstance(value, _TIME_TYPES)


def _is_string(value: Any) -> bool:
    return isinstance(value, (str, UUID))


def _is_slice(value: Any) -> bool:
    return is_element_sequence(value) and not has_array_literal(value) and not is_named_tuple(value)


def _is_nullable(value: Any) -> bool:
    return is_nullable(value) and not _is_time(value)


def _is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def _is_float(value: Any) -> bool:
    return isinstance(value, (float, Decimal))


def _is_struct(value: Any) -> bool:
    return not _is_time(value) and not is_nullable(value) and is_struct(value)


CATEGORY_RULES: Final[tuple[tuple[Category, Callable[[Any], bool]], ...]] = (
    (Category.NULL, _is_null),
    (Category.POINTER, _is_pointer),
    (Category.TIME, _is_time),
    (Category.STRING, _is_string),
    (Category.BYTES, is_bytes_like),
    (Category.NATIVE_ARRAY, has_array_literal),
    (Category.SLICE, _is_slice),
    (Category.NULLABLE, _is_nullable),
    (Category.BOOLEAN, _is_boolean),
    (Category.FLOAT, _is_float),
    (Category.MAP, is_mapping),
    (Category.STRUCT, _is_struct),
)
"""Classification rules in precedence order; ``INTEGER`` is the fallback."""


def classify(value: Any) -> Category:
    """Return the rendering category of a value.

    Args:
        value: Any Python object.

    Returns:
        The first matching category, ``Category.INTEGER`` when nothing matches.
    """
    for category, predicate in CATEGORY_RULES:
        try:
            matched = predicate(value)
        except Exception as exc:
            logger.debug("Skipping %s rule for %s: %s", category, type(value).__name__, exc)
            continue
        if matched:
            return category
    return Category.INTEGER
