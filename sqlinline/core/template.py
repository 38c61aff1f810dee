"""Placeholder scanning and substitution.

Templates use numbered placeholders (``$1``, ``$2``, ...). A placeholder token
is ``$`` followed by all consecutive digits, so ``$1`` is never found inside
``$10``. The template is scanned once into segments and the segments are
joined in a single pass.

**The result is for debug output only.** Substitution is purely textual:
placeholders inside quoted SQL literals are replaced too, and passing the
result to a database may lead to SQL injection.
"""

import re
from functools import lru_cache
from typing import Final, Optional, Union

from sqlinline.config import DEFAULT_CONFIG, RenderConfig
from sqlinline.core.renderer import ValueRenderer
from sqlinline.exceptions import TemplateError
from sqlinline.typing import QueryArguments

__all__ = ("Placeholder", "render_query", "scan_template")

_PLACEHOLDER_REGEX: Final = re.compile(r"\$(?P<digits>[0-9]+)")
TEMPLATE_CACHE_SIZE: Final[int] = 512


class Placeholder:
    """Immutable placeholder token information."""

    __slots__ = ("index", "position", "text")

    def __init__(self, index: Optional[int], position: int, text: str) -> None:
        self.index = index
        self.position = position
        self.text = text

    def __eq__(self, other: object) -> bool:
        """Equality comparison for Placeholder objects."""
        if not isinstance(other, type(self)):
            return False
        return self.index == other.index and self.position == other.position and self.text == other.text

    def __hash__(self) -> int:
        return hash((self.index, self.position, self.text))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(index={self.index!r}, position={self.position!r}, text={self.text!r})"


Segment = Union[str, Placeholder]


@lru_cache(maxsize=TEMPLATE_CACHE_SIZE)
def scan_template(template: str) -> "tuple[Segment, ...]":
    """Split a template into literal text and placeholder segments.

    Tokens whose digits are not the canonical form of an argument position
    (``$0``, ``$01``) get ``index=None`` and are never substituted.

    Args:
        template: The query template.

    Returns:
        Literal strings and :class:`Placeholder` objects in template order.
    """
    segments: list[Segment] = []
    last = 0
    for match in _PLACEHOLDER_REGEX.finditer(template):
        start = match.start()
        if start > last:
            segments.append(template[last:start])
        digits = match.group("digits")
        index = int(digits) if digits[0] != "0" else None
        segments.append(Placeholder(index=index, position=start, text=match.group(0)))
        last = match.end()
    if last < len(template):
        segments.append(template[last:])
    return tuple(segments)


def render_query(template: str, args: "QueryArguments" = (), *, config: Optional[RenderConfig] = None) -> str:
    """Return the template with every placeholder replaced by its rendered argument.

    Each argument is rendered exactly once and the text is reused for every
    occurrence of its placeholder. Placeholders beyond the number of
    arguments are left as they are.

    Example:
        >>> render_query("SELECT * FROM users WHERE id = $1 AND name = $2", [1, "John"])
        "SELECT * FROM users WHERE id = 1 AND name = 'John'"

    Args:
        template: Query template with ``$N`` placeholders.
        args: Positional arguments; ``args[0]`` replaces ``$1``.
        config: Optional render configuration.

    Raises:
        TemplateError: If ``template`` is not a string.

    Returns:
        The substituted query text.
    """
    if not isinstance(template, str):
        raise TemplateError(template=template)

    config = config or DEFAULT_CONFIG
    renderer = ValueRenderer(config)
    rendered = [renderer.render(arg) for arg in args]

    parts: list[str] = []
    for segment in scan_template(template):
        if isinstance(segment, str):
            parts.append(segment)
        elif segment.index is not None and segment.index <= len(rendered):
            parts.append(rendered[segment.index - 1])
        else:
            parts.append(segment.text)
    result = "".join(parts)

    if config.pretty:
        from sqlinline.core.pretty import format_sql

        result = format_sql(result, dialect=config.dialect)
    return result
