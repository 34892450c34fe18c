"""
Statement Binding

Binds positional ``?`` placeholders into SQL text before a statement is sent to
the gateway. The gateway only accepts complete statements, so values are
rendered as SQL literals on the client side.
"""

import math
from typing import Any, Sequence


_READ_KEYWORDS = ("SELECT", "WITH")


def to_sql_literal(value: Any) -> str:
    """
    Render a Python value as a SQL literal

    Args:
        value: None, bool, int, float, str or bytes

    Returns:
        SQL literal text

    Raises:
        ValueError: Non-finite float
        TypeError: Unsupported value type
    """
    if value is None:
        return "NULL"
    # bool before int, bool is an int subclass
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Cannot bind non-finite float: {value}")
        return repr(value)
    if isinstance(value, str):
        return "'" + value.replace("'", "''") + "'"
    if isinstance(value, (bytes, bytearray)):
        return f"X'{bytes(value).hex()}'"
    raise TypeError(f"Unsupported bind value type: {type(value).__name__}")


def bind_statement(template: str, params: Sequence[Any] = ()) -> str:
    """
    Replace positional placeholders with literal values

    Placeholders inside quoted strings or quoted identifiers are left alone.

    Args:
        template: Statement with ``?`` placeholders
        params: Values in placeholder order

    Returns:
        Statement text with every placeholder bound

    Raises:
        ValueError: Placeholder and value counts differ
    """
    out: list[str] = []
    quote: str | None = None
    index = 0

    for char in template:
        if quote:
            if char == quote:
                quote = None
            out.append(char)
        elif char in ("'", '"', "`"):
            quote = char
            out.append(char)
        elif char == "?":
            if index >= len(params):
                raise ValueError(f"Statement has more placeholders than the {len(params)} values bound")
            out.append(to_sql_literal(params[index]))
            index += 1
        else:
            out.append(char)

    if index != len(params):
        raise ValueError(f"Statement has {index} placeholders but {len(params)} values were bound")

    return "".join(out)


def is_read_statement(statement: str) -> bool:
    """Check whether a statement only reads"""
    words = statement.lstrip().split(None, 1)
    return bool(words) and words[0].upper() in _READ_KEYWORDS
