"""Tests for struct field descriptors and the field registry."""

from dataclasses import dataclass, field
from typing import NamedTuple
from unittest.mock import patch

import attrs
import msgspec
import pytest
from pydantic import BaseModel, Field

from sqlinline import render
from sqlinline.core.fields import (
    FIELD_ALIAS_KEY,
    FIELD_SKIP_KEY,
    FieldDescriptor,
    FieldRegistry,
    attrs_sql_field,
    field_registry,
    is_struct,
    register_fields,
    sql_field,
    struct_fields,
    unregister_fields,
)
from sqlinline.exceptions import MissingDependencyError


@dataclass
class Account:
    id: int
    owner: str = sql_field(alias="owner_name")
    password: str = sql_field(skip=True, default="secret")
    _cache: int = 0


class AccountStruct(msgspec.Struct, rename="camel"):
    account_id: int
    owner: str = msgspec.field(name="ownerName")


class AccountModel(BaseModel):
    account_id: int = Field(alias="accountId")
    owner: str = Field(serialization_alias="ownerName")
    password: str = Field(default="secret", exclude=True)


@attrs.define
class AccountAttrs:
    account_id: int = attrs.field(metadata={FIELD_ALIAS_KEY: "accountId"})
    password: str = attrs_sql_field(default="secret", skip=True)
    owner: str = attrs_sql_field(default="ann", alias="ownerName")


class AccountTuple(NamedTuple):
    id: int
    owner: str


class Plain:
    def __init__(self, id: int, owner: str) -> None:
        self.id = id
        self.owner = owner


class Special(Plain):
    pass


def keys(value: object) -> "list[str]":
    return [f.key for f in struct_fields(value)]


def test_field_descriptor_key_and_visibility() -> None:
    assert FieldDescriptor("name").key == "name"
    assert FieldDescriptor("name", "alias").key == "alias"
    assert FieldDescriptor("name").visible
    assert not FieldDescriptor("name", skip=True).visible
    assert not FieldDescriptor("_name").visible


def test_sql_field_metadata() -> None:
    declared = sql_field(alias="x", skip=True, default=1, metadata={"other": 2})

    assert declared.metadata == {"other": 2, FIELD_ALIAS_KEY: "x", FIELD_SKIP_KEY: True}
    assert declared.default == 1


def test_sql_field_with_default_factory() -> None:
    @dataclass
    class Tags:
        values: "list[str]" = sql_field(alias="tags", default_factory=list)

    assert Tags().values == []
    assert keys(Tags()) == ["tags"]


def test_dataclass_fields() -> None:
    assert keys(Account(1, "ann")) == ["id", "owner_name"]


def test_dataclass_plain_field_metadata() -> None:
    @dataclass
    class Row:
        a: int = field(default=1, metadata={FIELD_ALIAS_KEY: "A"})

    assert keys(Row()) == ["A"]


def test_msgspec_fields() -> None:
    assert keys(AccountStruct(1, "ann")) == ["accountId", "ownerName"]


def test_pydantic_fields() -> None:
    model = AccountModel(accountId=1, owner="ann")

    assert keys(model) == ["accountId", "ownerName"]


def test_attrs_fields() -> None:
    assert keys(AccountAttrs(1)) == ["accountId", "ownerName"]


def test_attrs_sql_field_requires_attrs() -> None:
    with patch("sqlinline.core.fields.ATTRS_INSTALLED", False), pytest.raises(MissingDependencyError, match="attrs"):
        attrs_sql_field(alias="x")


def test_named_tuple_fields() -> None:
    assert keys(AccountTuple(1, "ann")) == ["id", "owner"]


def test_unrecognised_value_has_no_fields() -> None:
    assert struct_fields(Plain(1, "ann")) == ()
    assert not is_struct(Plain(1, "ann"))


def test_registered_fields_take_precedence() -> None:
    register_fields(Account, [FieldDescriptor("owner", "who")])

    assert keys(Account(1, "ann")) == ["who"]


def test_registered_fields_are_inherited() -> None:
    register_fields(Plain, ["id", FieldDescriptor("owner", "by")])

    assert is_struct(Special(1, "ann"))
    assert keys(Special(1, "ann")) == ["id", "by"]
    assert render(Special(1, "ann")) == "'{\"id\":1,\"by\":\"ann\"}'"


def test_subclass_registration_overrides_base() -> None:
    register_fields(Plain, ["id"])
    register_fields(Special, ["owner"])

    assert keys(Plain(1, "ann")) == ["id"]
    assert keys(Special(1, "ann")) == ["owner"]


def test_unregister_fields() -> None:
    register_fields(Plain, ["id"])
    assert is_struct(Plain(1, "ann"))

    unregister_fields(Plain)

    assert not is_struct(Plain(1, "ann"))
    assert Plain(1, "ann") not in field_registry


def test_registry_caches_resolution() -> None:
    registry = FieldRegistry()
    registry.register(Plain, ["id"])

    first = registry.get(Special(1, "a"))
    assert first is registry.get(Special(2, "b"))
    assert registry.get(1) is None

    registry.clear()
    assert registry.get(Special(1, "a")) is None


def test_classes_are_not_structs() -> None:
    assert not is_struct(Account)
    assert not is_struct(AccountStruct)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (Account(1, "ann"), "'{\"id\":1,\"owner_name\":\"ann\"}'"),
        (AccountStruct(1, "ann"), "'{\"accountId\":1,\"ownerName\":\"ann\"}'"),
        (AccountModel(accountId=1, owner="ann"), "'{\"accountId\":1,\"ownerName\":\"ann\"}'"),
        (AccountAttrs(1), "'{\"accountId\":1,\"ownerName\":\"ann\"}'"),
        (AccountTuple(1, "ann"), "'{\"id\":1,\"owner\":\"ann\"}'"),
    ],
    ids=["dataclass", "msgspec", "pydantic", "attrs", "named tuple"],
)
def test_struct_rendering(value: object, expected: str) -> None:
    assert render(value) == expected
