"""Tests for runtime type guards."""

import weakref
from collections import namedtuple
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional
from unittest.mock import patch

import pytest

from sqlinline.types import Int64Array, NullInt64, Ref
from sqlinline.typing import module_available
from sqlinline.utils import type_guards
from sqlinline.utils.type_guards import (
    has_array_literal,
    is_bytes_like,
    is_dataclass_instance,
    is_dereferenceable,
    is_element_sequence,
    is_enum_member,
    is_mapping,
    is_named_tuple,
    is_nullable,
    is_weak_reference,
)


@dataclass
class Row:
    id: int


class Colour(Enum):
    RED = 1


Pair = namedtuple("Pair", ["a", "b"])


class Target:
    pass


class Literal:
    def array_literal(self) -> Optional[str]:
        return "{}"


def test_is_dataclass_instance() -> None:
    assert is_dataclass_instance(Row(1))
    assert not is_dataclass_instance(Row)
    assert not is_dataclass_instance({"id": 1})


def test_is_named_tuple() -> None:
    assert is_named_tuple(Pair(1, 2))
    assert not is_named_tuple((1, 2))


@pytest.mark.parametrize(
    ("value", "expected"),
    [([1], True), ((1,), True), ({1}, True), ("ab", False), (b"ab", False), (bytearray(), False), ({}, False)],
)
def test_is_element_sequence(value: Any, expected: bool) -> None:
    assert is_element_sequence(value) is expected


def test_simple_guards() -> None:
    assert is_mapping({"a": 1})
    assert is_bytes_like(memoryview(b"x"))
    assert not is_bytes_like("x")
    assert is_enum_member(Colour.RED)
    assert not is_enum_member(Colour)

    target = Target()
    assert is_weak_reference(weakref.ref(target))
    assert not is_weak_reference(target)


def test_protocol_guards_exclude_classes() -> None:
    assert is_dereferenceable(Ref(1))
    assert not is_dereferenceable(Ref)
    assert has_array_literal(Int64Array([1]))
    assert has_array_literal(Literal())
    assert not has_array_literal(Literal)
    assert is_nullable(NullInt64())
    assert not is_nullable(NullInt64)


def test_is_nullable_requires_marker() -> None:
    class Unmarked:
        value = 1
        valid = True

    class Marked(Unmarked):
        __sql_nullable__ = True

    class FalselyMarked(Unmarked):
        __sql_nullable__ = "yes"

    assert not is_nullable(Unmarked())
    assert is_nullable(Marked())
    assert not is_nullable(FalselyMarked())


def test_optional_library_guards_when_missing() -> None:
    with (
        patch.object(type_guards, "MSGSPEC_INSTALLED", False),
        patch.object(type_guards, "PYDANTIC_INSTALLED", False),
        patch.object(type_guards, "ATTRS_INSTALLED", False),
    ):
        assert not type_guards.is_msgspec_struct(object())
        assert not type_guards.is_pydantic_model(object())
        assert not type_guards.is_attrs_instance(object())


def test_module_available() -> None:
    assert module_available("msgspec")
    assert not module_available("sqlinline_missing_module")
