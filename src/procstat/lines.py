"""Newline-delimited reader that applies a parser to one line at a time."""

from __future__ import annotations

import logging
from typing import BinaryIO, Callable, TypeVar

from .errors import StatFormatError, UnexpectedEof

log = logging.getLogger(__name__)

T = TypeVar("T")


class LineParser:
    """Feed lines of a binary stream to line-level parsers.

    The stream is consumed sequentially and never rewound.  A line that a
    :meth:`try_parse_line` parser rejects is kept pending, so the next call
    sees the same line again.
    """

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._pending: str | None = None
        self._line_number = 0

    @property
    def line_number(self) -> int:
        """Number of lines read from the stream so far."""
        return self._line_number

    def _next_line(self) -> str | None:
        """Return the next line without its terminator, or None at EOF."""
        if self._pending is not None:
            line, self._pending = self._pending, None
            return line

        raw = self._stream.readline()
        if not raw:
            return None
        self._line_number += 1
        if raw.endswith(b"\n"):
            raw = raw[:-1]
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise StatFormatError(
                f"line is not valid UTF-8: {exc.reason}", self._line_number
            ) from exc

    def parse_line(self, func: Callable[[str], T]) -> T:
        """Parse the next mandatory line with ``func``.

        Raises:
            UnexpectedEof: The stream has no more lines.
            StatFormatError: ``func`` rejected the line.
        """
        line = self._next_line()
        if line is None:
            raise UnexpectedEof(
                "unexpected end of input", self._line_number + 1
            )
        try:
            return func(line)
        except StatFormatError as exc:
            if exc.line_number is None:
                exc.line_number = self._line_number
            raise

    def try_parse_line(self, func: Callable[[str], T]) -> T | None:
        """Parse the next line with ``func`` if there is one and it fits.

        Returns:
            The parsed value, or ``None`` when the stream is exhausted or
            ``func`` rejected the line.  A rejected line stays pending.
        """
        line = self._next_line()
        if line is None:
            return None
        try:
            return func(line)
        except StatFormatError as exc:
            log.debug(
                "Line %d not accepted (%s), keeping it pending",
                self._line_number,
                exc,
            )
            self._pending = line
            return None
