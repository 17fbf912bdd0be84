"""Typed snapshot of /proc/stat.

Parses the per-CPU time accounting lines and the scheduler counters that
follow them.  The ``intr`` and ``softirq`` detail lines are not modelled.

Line order is fixed by the kernel::

    cpu  <user> <nice> <system> <idle> <iowait> <irq> <softirq> [<steal> [<guest> [<guest_nice>]]]
    cpu0 ...
    cpuN ...
    intr ...
    ctxt <n>
    btime <n>
    processes <n>
    procs_running <n>
    procs_blocked <n>
    softirq ...
"""

from __future__ import annotations

import io
import logging
from dataclasses import asdict, dataclass
from typing import Any, BinaryIO, Callable, ClassVar

from . import tokens
from .errors import CounterOverflowError, StatFormatError
from .lines import LineParser

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CpuCounters:
    """Time spent by one CPU (or all of them) in each context since boot.

    Values are in kernel *units* (usually USER_HZ ticks) and only make
    sense as a proportion of :meth:`total`.  Optional columns are ``None``
    when the running kernel does not report them.
    """

    FIELDS: ClassVar[tuple[str, ...]] = (
        "user",
        "nice",
        "system",
        "idle",
        "iowait",
        "irq",
        "softirq",
    )
    OPTIONAL_FIELDS: ClassVar[tuple[str, ...]] = ("steal", "guest", "guest_nice")

    user: int
    nice: int
    system: int
    idle: int
    iowait: int
    irq: int
    softirq: int
    steal: int | None = None
    guest: int | None = None
    guest_nice: int | None = None

    def total(self) -> int:
        """Sum all counters, counting absent optional ones as zero.

        Raises:
            CounterOverflowError: The sum does not fit in 64 unsigned bits.
        """
        total = 0
        for name in self.FIELDS + self.OPTIONAL_FIELDS:
            total += getattr(self, name) or 0
            if total > tokens.U64_MAX:
                raise CounterOverflowError(
                    f"cpu counter total overflows u64 at {name!r}"
                )
        return total

    def as_dict(self) -> dict[str, int | None]:
        """Return the counters as a plain dict in column order."""
        return asdict(self)


def parse_cpu_line(line: str) -> CpuCounters:
    """Parse a ``cpu`` or ``cpu<N>`` line.

    Columns beyond ``guest_nice`` are ignored so newer kernels that append
    counters still parse.

    Raises:
        StatFormatError: The label is not ``cpu*`` or a mandatory counter
            is missing.
    """
    parsed = tokens.parse_token(line)
    if parsed is None:
        raise StatFormatError("cannot read cpu label")
    rest, label = parsed
    if not label.startswith("cpu"):
        raise StatFormatError(f"expected cpu<N> label, actual: {label}")

    values: dict[str, int | None] = {}
    for name in CpuCounters.FIELDS:
        parsed_value = tokens.parse_u64(rest)
        if parsed_value is None:
            raise StatFormatError(f"{label}: cannot read {name}")
        rest, values[name] = parsed_value

    for name in CpuCounters.OPTIONAL_FIELDS:
        parsed_value = tokens.parse_u64(rest)
        if parsed_value is None:
            break
        rest, values[name] = parsed_value

    return CpuCounters(**values)


def parse_single(name: str) -> Callable[[str], int]:
    """Build a parser for a ``<name> <value>`` line.

    The returned function checks the label, reads one unsigned integer
    and rejects anything but separators after it.
    """

    def parse(line: str) -> int:
        parsed = tokens.parse_token(line)
        if parsed is None:
            raise StatFormatError(f"cannot read name, expected: {name}")
        rest, actual = parsed
        if actual != name:
            raise StatFormatError(
                f"incorrect name, expected: {name}, actual: {actual}"
            )
        parsed_value = tokens.parse_u64(rest)
        if parsed_value is None:
            raise StatFormatError(f"cannot read value for {name}")
        rest, value = parsed_value
        rest = tokens.consume_space(rest)
        if rest:
            raise StatFormatError(f"trailing content on {name} line: {rest!r}")
        return value

    return parse


def _skip_line(line: str) -> None:
    """Accept any line; used for the unmodelled ``intr`` line."""


@dataclass(frozen=True)
class SystemStat:
    """The stats from ``/proc/stat``."""

    PATH: ClassVar[str] = "/proc/stat"

    # Aggregate of all CPUs (the ``cpu`` line)
    cpu_totals: CpuCounters
    # One entry per ``cpu<N>`` line, in file order
    cpus: tuple[CpuCounters, ...]
    # Context switches since boot
    context_switches: int
    # Boot time, seconds since the epoch
    boot_time: int
    # Processes and threads created since boot
    processes: int
    # Processes currently runnable
    procs_running: int
    # Processes blocked waiting for I/O
    procs_blocked: int

    @property
    def num_cpus(self) -> int:
        """Number of per-CPU lines in the snapshot."""
        return len(self.cpus)

    @classmethod
    def from_system(cls) -> SystemStat:
        """Read and parse the live ``/proc/stat``.

        Raises:
            OSError: The file cannot be opened or read.
            StatFormatError: The file does not match the expected layout.
        """
        log.debug("Reading %s", cls.PATH)
        with open(cls.PATH, "rb") as stream:
            return cls.from_reader(stream)

    @classmethod
    def from_bytes(cls, data: bytes) -> SystemStat:
        """Parse a captured snapshot held in memory."""
        return cls.from_reader(io.BytesIO(data))

    @classmethod
    def from_reader(cls, stream: BinaryIO) -> SystemStat:
        """Parse a ``/proc/stat`` snapshot from a binary stream.

        Reading stops after ``procs_blocked``; later lines are left
        unread.

        Raises:
            UnexpectedEof: A mandatory line is missing.
            StatFormatError: A line does not match the expected layout.
        """
        reader = LineParser(stream)
        cpu_totals = reader.parse_line(parse_cpu_line)

        cpus: list[CpuCounters] = []
        while True:
            cpu = reader.try_parse_line(parse_cpu_line)
            if cpu is None:
                break
            cpus.append(cpu)
        log.debug("Parsed %d per-cpu lines", len(cpus))

        reader.parse_line(_skip_line)
        context_switches = reader.parse_line(parse_single("ctxt"))
        boot_time = reader.parse_line(parse_single("btime"))
        processes = reader.parse_line(parse_single("processes"))
        procs_running = reader.parse_line(parse_single("procs_running"))
        procs_blocked = reader.parse_line(parse_single("procs_blocked"))

        return cls(
            cpu_totals=cpu_totals,
            cpus=tuple(cpus),
            context_switches=context_switches,
            boot_time=boot_time,
            processes=processes,
            procs_running=procs_running,
            procs_blocked=procs_blocked,
        )

    def as_dict(self) -> dict[str, Any]:
        """Return the snapshot as nested plain dicts and lists."""
        return {
            "cpu_totals": self.cpu_totals.as_dict(),
            "cpus": [cpu.as_dict() for cpu in self.cpus],
            "context_switches": self.context_switches,
            "boot_time": self.boot_time,
            "processes": self.processes,
            "procs_running": self.procs_running,
            "procs_blocked": self.procs_blocked,
        }
