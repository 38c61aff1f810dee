"""Runtime-checkable protocols used by the value classifier.

Wrapper types from database drivers (or application code) opt into special
rendering by implementing one of these protocols; the classifier probes them
with ``isinstance`` instead of hard-coding a list of types.
"""

from typing import Any, ClassVar, Final, Optional, Protocol, runtime_checkable

__all__ = ("NULLABLE_MARKER", "ArrayLiteralProtocol", "DataclassProtocol", "DereferenceProtocol", "NullableProtocol")

NULLABLE_MARKER: Final[str] = "__sql_nullable__"


@runtime_checkable
class DereferenceProtocol(Protocol):
    """Protocol for optional references to another value."""

    def deref(self) -> Any:
        """Return the referenced value, or ``None`` when absent."""
        ...


@runtime_checkable
class ArrayLiteralProtocol(Protocol):
    """Protocol for values that serialize themselves to an engine array literal."""

    def array_literal(self) -> Optional[str]:
        """Return the array literal (e.g. ``{1,2,3}``), or ``None`` for SQL NULL."""
        ...


@runtime_checkable
class DataclassProtocol(Protocol):
    """Protocol for instance checking dataclasses."""

    __dataclass_fields__: "ClassVar[dict[str, Any]]"


@runtime_checkable
class NullableProtocol(Protocol):
    """Protocol for nullable primitives carrying an explicit validity flag.

    A type opts in by setting the class attribute ``__sql_nullable__ = True``.
    Matching attribute names alone do not make a value nullable.
    """

    valid: bool
    value: Any
