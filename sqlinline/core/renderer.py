"""Value rendering.

Turns a classified value into its literal text: unquoted for numbers and
booleans, single-quoted for text and time values, ``NULL`` for absent values,
``'{...}'`` for sequences and ``'{"key":value,...}'`` for mappings and structs.

Rendering never raises for finite input. Values that cannot be rendered by
their category rule, containers nested beyond ``RenderConfig.max_depth`` and
containers that contain themselves fall back to ``str(value)``.
"""

import datetime
from collections.abc import Callable, Iterable
from decimal import Decimal
from typing import Any, Final, Optional

from mypy_extensions import mypyc_attr

from sqlinline.config import DEFAULT_CONFIG, RenderConfig
from sqlinline.core.classifier import Category, classify, dereference
from sqlinline.core.fields import struct_fields
from sqlinline.utils.logging import get_logger

__all__ = ("NULL_LITERAL", "ValueRenderer", "format_time", "quote_string", "render")

logger = get_logger("render")

NULL_LITERAL: Final[str] = "NULL"

_NESTED_CATEGORIES: Final[frozenset[Category]] = frozenset({
    Category.POINTER,
    Category.NULLABLE,
    Category.SLICE,
    Category.MAP,
    Category.STRUCT,
})


def quote_string(text: str) -> str:
    """Single-quote text, doubling embedded single quotes."""
    return "'" + text.replace("'", "''") + "'"


def format_time(value: "datetime.datetime | datetime.date | datetime.time") -> str:
    """Format a time value as an RFC 3339 string with second precision.

    A zero UTC offset is written as ``Z``; naive values carry no offset.
    """
    if isinstance(value, (datetime.datetime, datetime.time)):
        text = value.isoformat(timespec="seconds")
    else:
        text = value.isoformat()
    if text.endswith("+00:00"):
        text = text[:-6] + "Z"
    return text


def _object_pair(key: str, rendered: str) -> str:
    if len(rendered) >= 2 and rendered.startswith("'") and rendered.endswith("'"):
        inner = rendered[1:-1].replace('"', '\\"')
        return f'"{key}":"{inner}"'
    return f'"{key}":{rendered}'


@mypyc_attr(allow_interpreted_subclasses=True)
class ValueRenderer:
    """Renders values to literal text.

    A renderer tracks the containers on the current rendering path to detect
    cycles, so an instance must not be shared between threads. The module
    level :func:`render` creates one per call.
    """

    __slots__ = ("_active", "config")

    def __init__(self, config: Optional[RenderConfig] = None) -> None:
        self.config = config or DEFAULT_CONFIG
        self._active: set[int] = set()

    def render(self, value: Any) -> str:
        """Render one value.

        Args:
            value: Any Python object.

        Returns:
            The literal text of the value.
        """
        return self._render(value, 0)

    def _render(self, value: Any, depth: int) -> str:
        category = classify(value)
        if category not in _NESTED_CATEGORIES:
            return self._render_category(category, value, depth)

        if depth >= self.config.max_depth:
            return self._fallback(value, "max_depth")
        marker = id(value)
        if marker in self._active:
            return self._fallback(value, "cycle")
        self._active.add(marker)
        try:
            return self._render_category(category, value, depth)
        finally:
            self._active.discard(marker)

    def _render_category(self, category: Category, value: Any, depth: int) -> str:
        try:
            return _HANDLERS[category](self, value, depth)
        except Exception as exc:
            return self._fallback(value, f"{category} rendering failed: {exc}")

    def _fallback(self, value: Any, reason: str) -> str:
        logger.debug(
            "Rendering %s with fallback (%s)",
            type(value).__name__,
            reason,
            extra={"extra_fields": {"type": type(value).__name__, "reason": reason}},
        )
        try:
            return str(value)
        except Exception:
            return f"<unrenderable {type(value).__name__}>"

    def _render_null(self, value: Any, depth: int) -> str:
        return NULL_LITERAL

    def _render_pointer(self, value: Any, depth: int) -> str:
        return self._render(dereference(value), depth + 1)

    def _render_time(self, value: Any, depth: int) -> str:
        return quote_string(format_time(value))

    def _render_string(self, value: Any, depth: int) -> str:
        return quote_string(str(value))

    def _render_bytes(self, value: Any, depth: int) -> str:
        return "'\\x" + bytes(value).hex() + "'"

    def _render_native_array(self, value: Any, depth: int) -> str:
        try:
            literal = value.array_literal()
        except Exception as exc:
            logger.debug(
                "Array literal of %s unavailable: %s",
                type(value).__name__,
                exc,
                extra={"extra_fields": {"type": type(value).__name__, "reason": str(exc)}},
            )
            return NULL_LITERAL
        if literal is None:
            return NULL_LITERAL
        literal = str(literal)
        if not literal.startswith("'"):
            literal = f"'{literal}'"
        return literal

    def _render_slice(self, value: Any, depth: int) -> str:
        return "'{" + ",".join(self._render(element, depth + 1) for element in value) + "}'"

    def _render_nullable(self, value: Any, depth: int) -> str:
        if not value.valid:
            return NULL_LITERAL
        return self._render(value.value, depth + 1)

    def _render_boolean(self, value: Any, depth: int) -> str:
        return "true" if value else "false"

    def _render_float(self, value: Any, depth: int) -> str:
        if isinstance(value, Decimal):
            return str(value)
        return repr(float(value))

    def _render_object(self, items: "Iterable[tuple[str, Any]]", depth: int) -> str:
        pairs = [_object_pair(key, self._render(item, depth + 1)) for key, item in items]
        return "'{" + ",".join(pairs) + "}'"

    def _render_map(self, value: Any, depth: int) -> str:
        return self._render_object(((str(key), item) for key, item in value.items()), depth)

    def _render_struct(self, value: Any, depth: int) -> str:
        return self._render_object(((f.key, getattr(value, f.name)) for f in struct_fields(value)), depth)

    def _render_integer(self, value: Any, depth: int) -> str:
        return str(value)


_HANDLERS: Final[dict[Category, Callable[[ValueRenderer, Any, int], str]]] = {
    Category.NULL: ValueRenderer._render_null,
    Category.POINTER: ValueRenderer._render_pointer,
    Category.TIME: ValueRenderer._render_time,
    Category.STRING: ValueRenderer._render_string,
    Category.BYTES: ValueRenderer._render_bytes,
    Category.NATIVE_ARRAY: ValueRenderer._render_native_array,
    Category.SLICE: ValueRenderer._render_slice,
    Category.NULLABLE: ValueRenderer._render_nullable,
    Category.BOOLEAN: ValueRenderer._render_boolean,
    Category.FLOAT: ValueRenderer._render_float,
    Category.MAP: ValueRenderer._render_map,
    Category.STRUCT: ValueRenderer._render_struct,
    Category.INTEGER: ValueRenderer._render_integer,
}


def render(value: Any, *, config: Optional[RenderConfig] = None) -> str:
    """Render one value to its literal text.

    Args:
        value: Any Python object.
        config: Optional render configuration.

    Returns:
        The literal text of the value.
    """
    return ValueRenderer(config).render(value)
