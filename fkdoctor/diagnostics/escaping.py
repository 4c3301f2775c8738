"""SQL escaping for values spliced into inspection query text.

Constraint names come from LLM output and table names from catalog rows, so
both are treated as untrusted. Anything interpolated into SQL text goes
through one of these functions; anything else goes through bound parameters.
"""

from __future__ import annotations

from typing import NewType

QuotedIdentifier = NewType("QuotedIdentifier", str)
QuotedLiteral = NewType("QuotedLiteral", str)


def escape_identifier(name: str) -> QuotedIdentifier:
    """Quote ``name`` for an identifier position, doubling embedded backticks."""
    return QuotedIdentifier("`" + name.replace("`", "``") + "`")


def escape_literal(value: str) -> QuotedLiteral:
    """Quote ``value`` for a string literal position, doubling embedded single quotes.

    Backslashes are doubled too: under the default sql_mode MySQL reads ``\\'``
    as an escaped quote, which would otherwise reopen the literal.
    """
    escaped = value.replace("\\", "\\\\").replace("'", "''")
    return QuotedLiteral("'" + escaped + "'")
