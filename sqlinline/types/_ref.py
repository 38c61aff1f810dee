"""Optional references.

A :class:`Ref` stands in for a value that may be absent. The renderer looks
through present references and renders absent ones as ``NULL``.
"""

import reprlib
from typing import Generic, Optional, TypeVar

__all__ = ("Ref",)

T = TypeVar("T")


class Ref(Generic[T]):
    """Optional reference to another value.

    ``Ref()`` and ``Ref(None)`` are absent references and render as ``NULL``;
    any other target is rendered as if it had been passed directly.
    """

    __slots__ = ("target",)

    def __init__(self, target: "Optional[T]" = None) -> None:
        self.target = target

    def deref(self) -> "Optional[T]":
        return self.target

    @property
    def is_absent(self) -> bool:
        return self.target is None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ref):
            return False
        return bool(self.target == other.target)

    def __hash__(self) -> int:
        try:
            return hash((Ref, self.target))
        except TypeError:
            return id(self)

    @reprlib.recursive_repr()
    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.target!r})"
