"""Field descriptors for rendering structured values.

A struct is rendered as a JSON-like object whose keys come from its field
descriptors. Descriptors are either registered explicitly per type or
introspected from dataclasses, msgspec structs, pydantic models, attrs classes
and named tuples.
"""

import dataclasses
from collections.abc import Iterable
from typing import Any, Final, Optional, Union

from sqlinline.exceptions import MissingDependencyError
from sqlinline.typing import ATTRS_INSTALLED
from sqlinline.utils.type_guards import (
    is_attrs_instance,
    is_dataclass_instance,
    is_msgspec_struct,
    is_named_tuple,
    is_pydantic_model,
)

__all__ = (
    "FIELD_ALIAS_KEY",
    "FIELD_SKIP_KEY",
    "FieldDescriptor",
    "FieldRegistry",
    "attrs_sql_field",
    "field_registry",
    "is_struct",
    "register_fields",
    "sql_field",
    "struct_fields",
    "unregister_fields",
)

FIELD_ALIAS_KEY: Final[str] = "alias"
FIELD_SKIP_KEY: Final[str] = "skip"


@dataclasses.dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """Describes one field of a structured value."""

    name: str
    serialized_name: Optional[str] = None
    skip: bool = False

    @property
    def key(self) -> str:
        """The key used in the rendered object."""
        return self.serialized_name or self.name

    @property
    def visible(self) -> bool:
        return not self.skip and not self.name.startswith("_")


class FieldRegistry:
    """Type to field-descriptor registry with cached MRO resolution.

    Subclasses of a registered type inherit its descriptors unless they are
    registered themselves.
    """

    __slots__ = ("_cache", "_registry")

    def __init__(self) -> None:
        self._cache: dict[type, Optional[tuple[FieldDescriptor, ...]]] = {}
        self._registry: dict[type, tuple[FieldDescriptor, ...]] = {}

    def register(self, type_: type, fields: "Iterable[Union[FieldDescriptor, str]]") -> None:
        """Register the field descriptors for a type.

        Args:
            type_: The type to register.
            fields: Descriptors, or plain attribute names.
        """
        self._registry[type_] = tuple(f if isinstance(f, FieldDescriptor) else FieldDescriptor(f) for f in fields)
        self._cache.clear()

    def unregister(self, type_: type) -> None:
        self._registry.pop(type_, None)
        self._cache.clear()

    def get(self, obj: Any) -> Optional[tuple[FieldDescriptor, ...]]:
        """Get the descriptors registered for the object's type.

        Args:
            obj: The object to look up.

        Returns:
            The registered descriptors or None if the type is not registered.
        """
        obj_type = type(obj)
        if obj_type in self._cache:
            return self._cache[obj_type]
        return self._resolve(obj_type)

    def _resolve(self, obj_type: type) -> Optional[tuple[FieldDescriptor, ...]]:
        for base in obj_type.__mro__:
            if base in self._registry:
                self._cache[obj_type] = self._registry[base]
                return self._registry[base]
        self._cache[obj_type] = None
        return None

    def __contains__(self, obj: Any) -> bool:
        return self.get(obj) is not None

    def clear(self) -> None:
        self._registry.clear()
        self._cache.clear()


field_registry = FieldRegistry()


def register_fields(type_: type, fields: "Iterable[Union[FieldDescriptor, str]]") -> None:
    """Register explicit field descriptors for ``type_`` on the default registry."""
    field_registry.register(type_, fields)


def unregister_fields(type_: type) -> None:
    field_registry.unregister(type_)


def sql_field(*, alias: Optional[str] = None, skip: bool = False, **kwargs: Any) -> Any:
    """Declare a dataclass field with a rendered-name override or skip flag.

    Args:
        alias: Key to use instead of the attribute name.
        skip: Omit the field from rendered output.
        **kwargs: Passed through to :func:`dataclasses.field`.

    Returns:
        A dataclass field.
    """
    return dataclasses.field(metadata=_field_metadata(kwargs.pop("metadata", None), alias, skip), **kwargs)


def attrs_sql_field(*, alias: Optional[str] = None, skip: bool = False, **kwargs: Any) -> Any:
    """Declare an attrs field with a rendered-name override or skip flag.

    Args:
        alias: Key to use instead of the attribute name.
        skip: Omit the field from rendered output.
        **kwargs: Passed through to :func:`attrs.field`.

    Raises:
        MissingDependencyError: If attrs is not installed.

    Returns:
        An attrs field.
    """
    if not ATTRS_INSTALLED:
        raise MissingDependencyError(package="attrs")
    import attrs

    return attrs.field(metadata=_field_metadata(kwargs.pop("metadata", None), alias, skip), **kwargs)


def _field_metadata(metadata: Any, alias: Optional[str], skip: bool) -> "dict[str, Any]":
    merged = dict(metadata or {})
    if alias is not None:
        merged[FIELD_ALIAS_KEY] = alias
    if skip:
        merged[FIELD_SKIP_KEY] = True
    return merged


def _from_metadata(name: str, metadata: Any) -> FieldDescriptor:
    metadata = metadata or {}
    return FieldDescriptor(name, metadata.get(FIELD_ALIAS_KEY), bool(metadata.get(FIELD_SKIP_KEY, False)))


def _dataclass_fields(obj: Any) -> tuple[FieldDescriptor, ...]:
    return tuple(_from_metadata(f.name, f.metadata) for f in dataclasses.fields(obj))


def _msgspec_fields(obj: Any) -> tuple[FieldDescriptor, ...]:
    names: tuple[str, ...] = type(obj).__struct_fields__
    encoded: tuple[str, ...] = type(obj).__struct_encode_fields__
    return tuple(FieldDescriptor(name, key if key != name else None) for name, key in zip(names, encoded))


def _pydantic_fields(obj: Any) -> tuple[FieldDescriptor, ...]:
    descriptors = []
    for name, info in type(obj).model_fields.items():
        alias = info.serialization_alias or info.alias
        descriptors.append(FieldDescriptor(name, alias, bool(info.exclude)))
    return tuple(descriptors)


def _attrs_fields(obj: Any) -> tuple[FieldDescriptor, ...]:
    import attrs

    return tuple(_from_metadata(a.name, a.metadata) for a in attrs.fields(type(obj)))


def _named_tuple_fields(obj: Any) -> tuple[FieldDescriptor, ...]:
    return tuple(FieldDescriptor(name) for name in type(obj)._fields)


def is_struct(obj: Any) -> bool:
    """Check whether a value has a field layout the renderer understands.

    Args:
        obj: Value to check.

    Returns:
        bool
    """
    if isinstance(obj, type):
        return False
    return (
        obj in field_registry
        or is_dataclass_instance(obj)
        or is_msgspec_struct(obj)
        or is_pydantic_model(obj)
        or is_attrs_instance(obj)
        or is_named_tuple(obj)
    )


def struct_fields(obj: Any) -> tuple[FieldDescriptor, ...]:
    """Return the visible field descriptors of a structured value.

    Registered descriptors take precedence over introspection. Skipped and
    private (underscore-prefixed) fields are omitted.

    Args:
        obj: A structured value.

    Returns:
        The visible descriptors in declaration order, or an empty tuple when
        the value has no recognised field layout.
    """
    descriptors = field_registry.get(obj)
    if descriptors is None:
        if is_dataclass_instance(obj):
            descriptors = _dataclass_fields(obj)
        elif is_msgspec_struct(obj):
            descriptors = _msgspec_fields(obj)
        elif is_pydantic_model(obj):
            descriptors = _pydantic_fields(obj)
        elif is_attrs_instance(obj):
            descriptors = _attrs_fields(obj)
        elif is_named_tuple(obj):
            descriptors = _named_tuple_fields(obj)
        else:
            descriptors = ()
    return tuple(d for d in descriptors if d.visible)
