"""Configuration objects for query rendering."""

from dataclasses import dataclass
from typing import Any, Final

from sqlinline.exceptions import ImproperConfigurationError

__all__ = ("DEFAULT_CONFIG", "DEFAULT_MAX_DEPTH", "RenderConfig")

DEFAULT_MAX_DEPTH: Final[int] = 32


@dataclass(slots=True)
class RenderConfig:
    """Controls recursion limits and output formatting of rendered queries."""

    max_depth: int = DEFAULT_MAX_DEPTH
    pretty: bool = False
    dialect: str = "postgres"

    def __post_init__(self) -> None:
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int) or self.max_depth < 1:
            msg = f"max_depth must be a positive integer, got {self.max_depth!r}"
            raise ImproperConfigurationError(msg)
        if not self.dialect:
            msg = "dialect must be a non-empty dialect name"
            raise ImproperConfigurationError(msg)

    def copy(self) -> "RenderConfig":
        """Return a copy to avoid sharing mutable state."""

        return RenderConfig(max_depth=self.max_depth, pretty=self.pretty, dialect=self.dialect)

    def replace(self, **changes: Any) -> "RenderConfig":
        """Return a copy with the given fields replaced.

        Args:
            **changes: Field values to override.

        Raises:
            ImproperConfigurationError: If an unknown field is given or a value is invalid.

        Returns:
            A new validated configuration.
        """
        unknown = set(changes) - set(self.__slots__)
        if unknown:
            msg = f"Unknown render options: {', '.join(sorted(unknown))}"
            raise ImproperConfigurationError(msg)
        values = {"max_depth": self.max_depth, "pretty": self.pretty, "dialect": self.dialect}
        values.update(changes)
        return RenderConfig(**values)


DEFAULT_CONFIG: Final[RenderConfig] = RenderConfig()
