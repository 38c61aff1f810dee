from typing import Any, Optional

__all__ = (
    "ArrayEncodingError",
    "ImproperConfigurationError",
    "MissingDependencyError",
    "SQLInlineError",
    "TemplateError",
)


class SQLInlineError(Exception):
    """Base exception class from which all sqlinline exceptions inherit."""

    detail: str

    def __init__(self, *args: Any, detail: str = "") -> None:
        """Initialize ``SQLInlineError``.

        Args:
            *args: args are converted to :class:`str` before passing to :class:`Exception`
            detail: detail of the exception.
        """
        str_args = [str(arg) for arg in args if arg]
        if not detail:
            if str_args:
                detail, *str_args = str_args
            elif hasattr(self, "detail"):
                detail = self.detail
        self.detail = detail
        super().__init__(*str_args)

    def __repr__(self) -> str:
        if self.detail:
            return f"{self.__class__.__name__} - {self.detail}"
        return self.__class__.__name__

    def __str__(self) -> str:
        return " ".join((*self.args, self.detail)).strip()


class MissingDependencyError(SQLInlineError, ImportError):
    """Missing optional dependency.

    This exception is raised only when a module depends on a dependency that has not been installed.
    """

    def __init__(self, package: str, install_package: Optional[str] = None) -> None:
        super().__init__(
            f"Package {package!r} is not installed but required. You can install it by running "
            f"'pip install sqlinline[{install_package or package}]' to install sqlinline with the required extra "
            f"or 'pip install {install_package or package}' to install the package separately",
        )


class ImproperConfigurationError(SQLInlineError):
    """Improper Configuration error.

    Raised when a render configuration holds values that cannot be honoured.
    """


class TemplateError(SQLInlineError, TypeError):
    """The query template could not be scanned for placeholders."""

    template: Any

    def __init__(self, message: Optional[str] = None, template: Any = None) -> None:
        if message is None:
            message = "Query template must be a string."
        detail_message = message
        if template is not None:
            detail_message = f"{message} (got {type(template).__name__})"
        super().__init__(detail=detail_message)
        self.template = template


class ArrayEncodingError(SQLInlineError, ValueError):
    """A native array wrapper could not encode one of its elements."""

    element: Any

    def __init__(self, message: str, element: Any = None) -> None:
        super().__init__(detail=message)
        self.element = element
