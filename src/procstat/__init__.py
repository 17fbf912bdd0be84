"""Typed parser for the Linux /proc/stat pseudo-file."""

from __future__ import annotations

from .errors import (
    CounterOverflowError,
    ProcStatError,
    StatFormatError,
    UnexpectedEof,
)
from .lines import LineParser
from .snapshot import CpuCounters, SystemStat, parse_cpu_line, parse_single
from .tokens import consume_space, parse_token, parse_u64

__all__ = [
    "CounterOverflowError",
    "CpuCounters",
    "LineParser",
    "ProcStatError",
    "StatFormatError",
    "SystemStat",
    "UnexpectedEof",
    "consume_space",
    "parse_cpu_line",
    "parse_single",
    "parse_token",
    "parse_u64",
]
