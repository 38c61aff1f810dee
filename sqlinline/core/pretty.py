"""Pretty printing of rendered queries with sqlglot."""

from typing import Final

import sqlglot
from sqlglot.errors import ParseError, TokenError, UnsupportedError

from sqlinline.utils.logging import get_logger

__all__ = ("format_sql",)

logger = get_logger("pretty")

_STATEMENT_SEPARATOR: Final[str] = ";\n"


def format_sql(sql: str, dialect: str = "postgres") -> str:
    """Re-emit SQL text in sqlglot's pretty layout.

    Args:
        sql: The SQL text.
        dialect: The sqlglot dialect used to read and write the SQL.

    Returns:
        The formatted SQL, or ``sql`` unchanged when it cannot be parsed.
    """
    if not sql.strip():
        return sql
    try:
        statements = sqlglot.transpile(sql, read=dialect, write=dialect, pretty=True)
    except (ParseError, TokenError, UnsupportedError, ValueError) as exc:
        logger.debug("Could not pretty print SQL: %s", exc, extra={"extra_fields": {"dialect": dialect}})
        return sql
    if not statements:
        return sql
    return _STATEMENT_SEPARATOR.join(statements)
