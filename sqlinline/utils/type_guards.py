"""Type guard functions for runtime type checking in sqlinline.

This module provides type-safe runtime checks that help the type checker
understand type narrowing, replacing defensive hasattr() and duck typing patterns.
Guards for optional libraries return False when the library is not installed.
"""

from collections.abc import Mapping, Sequence
from collections.abc import Set as AbstractSet
from enum import Enum
from typing import TYPE_CHECKING, Any
from weakref import ReferenceType

from sqlinline.protocols import (
    NULLABLE_MARKER,
    ArrayLiteralProtocol,
    DataclassProtocol,
    DereferenceProtocol,
    NullableProtocol,
)
from sqlinline.typing import ATTRS_INSTALLED, MSGSPEC_INSTALLED, PYDANTIC_INSTALLED

if TYPE_CHECKING:
    from attrs import AttrsInstance
    from msgspec import Struct
    from pydantic import BaseModel
    from typing_extensions import TypeGuard

__all__ = (
    "has_array_literal",
    "is_attrs_instance",
    "is_bytes_like",
    "is_dataclass_instance",
    "is_dereferenceable",
    "is_element_sequence",
    "is_enum_member",
    "is_mapping",
    "is_msgspec_struct",
    "is_named_tuple",
    "is_nullable",
    "is_pydantic_model",
    "is_weak_reference",
)


def is_dataclass_instance(obj: Any) -> "TypeGuard[DataclassProtocol]":
    """Check if an object is a dataclass instance.

    Args:
        obj: An object to check.

    Returns:
        True if the object is a dataclass instance.
    """
    return not isinstance(obj, type) and hasattr(type(obj), "__dataclass_fields__")


def is_msgspec_struct(obj: Any) -> "TypeGuard[Struct]":
    """Check if a value is a msgspec struct.

    Args:
        obj: Value to check.

    Returns:
        bool
    """
    if not MSGSPEC_INSTALLED:
        return False
    from msgspec import Struct

    return isinstance(obj, Struct)


def is_pydantic_model(obj: Any) -> "TypeGuard[BaseModel]":
    """Check if a value is a pydantic model instance.

    Args:
        obj: Value to check.

    Returns:
        bool
    """
    if not PYDANTIC_INSTALLED:
        return False
    from pydantic import BaseModel

    return isinstance(obj, BaseModel)


def is_attrs_instance(obj: Any) -> "TypeGuard[AttrsInstance]":
    """Check if a value is an attrs class instance.

    Args:
        obj: Value to check.

    Returns:
        bool
    """
    if not ATTRS_INSTALLED or isinstance(obj, type):
        return False
    import attrs

    return attrs.has(type(obj))


def is_named_tuple(obj: Any) -> "TypeGuard[tuple[Any, ...]]":
    """Check if a value is a named tuple instance."""
    return isinstance(obj, tuple) and hasattr(type(obj), "_fields")


def is_mapping(obj: Any) -> "TypeGuard[Mapping[Any, Any]]":
    """Check if a value is a mapping.

    Args:
        obj: Value to check.

    Returns:
        bool
    """
    return isinstance(obj, Mapping)


def is_bytes_like(obj: Any) -> "TypeGuard[bytes | bytearray | memoryview]":
    return isinstance(obj, (bytes, bytearray, memoryview))


def is_element_sequence(obj: Any) -> "TypeGuard[Sequence[Any] | AbstractSet[Any]]":
    """Check if a value is an ordered sequence or set that is not text or bytes.

    Args:
        obj: Value to check.

    Returns:
        bool
    """
    if isinstance(obj, (str, bytes, bytearray, memoryview)):
        return False
    return isinstance(obj, (Sequence, AbstractSet))


def is_weak_reference(obj: Any) -> "TypeGuard[ReferenceType[Any]]":
    return isinstance(obj, ReferenceType)


def is_enum_member(obj: Any) -> "TypeGuard[Enum]":
    return isinstance(obj, Enum)


def is_dereferenceable(obj: Any) -> "TypeGuard[DereferenceProtocol]":
    """Check if an object implements the dereference protocol.

    Args:
        obj: The object to check

    Returns:
        True if the object has a callable ``deref`` method
    """
    return not isinstance(obj, type) and isinstance(obj, DereferenceProtocol)


def has_array_literal(obj: Any) -> "TypeGuard[ArrayLiteralProtocol]":
    """Check if an object serializes itself to a native array literal.

    Args:
        obj: The object to check

    Returns:
        True if the object has a callable ``array_literal`` method
    """
    return not isinstance(obj, type) and isinstance(obj, ArrayLiteralProtocol)


def is_nullable(obj: Any) -> "TypeGuard[NullableProtocol]":
    """Check if an object is a nullable primitive with a validity flag.

    Args:
        obj: The object to check

    Returns:
        True if the object's type sets ``__sql_nullable__`` and the object
        exposes ``valid`` and ``value``
    """
    if isinstance(obj, type) or getattr(type(obj), NULLABLE_MARKER, False) is not True:
        return False
    return isinstance(obj, NullableProtocol)
