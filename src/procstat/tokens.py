"""Primitive tokenizers for /proc/stat lines.

Each helper takes the unconsumed part of a line and returns a
``(rest, value)`` pair, or ``None`` when nothing of the requested kind is
at the cursor.  ``None`` means "no match", not an error: callers decide
whether a missing value is fatal (a mandatory counter) or just absent (an
optional trailing counter).
"""

from __future__ import annotations

# Column separators used by the kernel when formatting /proc/stat.
_SEPARATORS = " \t"

# Counters are unsigned 64-bit values on the kernel side.
U64_MAX = 2**64 - 1
_U64_MAX_DIGITS = len(str(U64_MAX))


def consume_space(text: str) -> str:
    """Drop leading spaces and tabs."""
    return text.lstrip(_SEPARATORS)


def parse_token(text: str) -> tuple[str, str] | None:
    """Read the next separator-delimited token.

    Args:
        text: Remaining line content.

    Returns:
        ``(rest, token)`` where ``rest`` starts right after the token, or
        ``None`` if only separators (or nothing) remain.
    """
    text = consume_space(text)
    end = 0
    while end < len(text) and text[end] not in _SEPARATORS:
        end += 1
    if end == 0:
        return None
    return text[end:], text[:end]


def parse_u64(text: str) -> tuple[str, int] | None:
    """Read the next unsigned decimal integer.

    The number is the run of ASCII digits at the cursor (after separators).
    Anything following the digits is left in ``rest`` for the caller.

    Args:
        text: Remaining line content.

    Returns:
        ``(rest, value)``, or ``None`` if the cursor is not on a digit or
        the digits do not fit in an unsigned 64-bit integer.
    """
    text = consume_space(text)
    end = 0
    # str.isdigit() also accepts non-ASCII digits, so compare explicitly
    while end < len(text) and "0" <= text[end] <= "9":
        end += 1
    if end == 0:
        return None
    digits = text[:end].lstrip("0") or "0"
    # int() refuses digit strings past sys.get_int_max_str_digits()
    if len(digits) > _U64_MAX_DIGITS:
        return None
    value = int(digits)
    if value > U64_MAX:
        return None
    return text[end:], value
