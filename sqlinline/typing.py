"""Optional dependency detection and shared type aliases."""

from collections.abc import Sequence
from importlib.util import find_spec
from typing import Any

from typing_extensions import TypeAlias


def module_available(name: str) -> bool:
    """Return whether a top-level module can be imported.

    Args:
        name: The module name.

    Returns:
        True when the import system can locate the module.
    """
    try:
        return find_spec(name) is not None
    except (ImportError, ValueError):
        return False


MSGSPEC_INSTALLED = module_available("msgspec")
PYDANTIC_INSTALLED = module_available("pydantic")
ATTRS_INSTALLED = module_available("attrs")


QueryArguments: TypeAlias = Sequence[Any]
"""Type alias for the positional arguments of a query template.

``args[0]`` replaces ``$1``, ``args[1]`` replaces ``$2`` and so on.
"""

__all__ = (
    "ATTRS_INSTALLED",
    "MSGSPEC_INSTALLED",
    "PYDANTIC_INSTALLED",
    "QueryArguments",
    "module_available",
)
