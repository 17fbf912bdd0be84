"""Errors raised while reading /proc/stat."""

from __future__ import annotations


class ProcStatError(Exception):
    """Base error for this package."""


class StatFormatError(ProcStatError, ValueError):
    """Raised when a line does not match the expected /proc/stat grammar.

    ``line_number`` is filled in by the line reader once it knows which
    line failed; it is ``None`` for errors raised by a line parser called
    directly.
    """

    def __init__(self, message: str, line_number: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.line_number = line_number

    def __str__(self) -> str:
        if self.line_number is None:
            return self.message
        return f"line {self.line_number}: {self.message}"


class UnexpectedEof(StatFormatError):
    """Raised when the stream ends before a mandatory line."""


class CounterOverflowError(ProcStatError, OverflowError):
    """Raised when summing CPU counters exceeds the unsigned 64-bit range."""
