"""Command-line interface for procstat."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from .errors import ProcStatError
from .snapshot import CpuCounters, SystemStat

_CPU_HEADER = (
    ("cpu",) + CpuCounters.FIELDS + CpuCounters.OPTIONAL_FIELDS + ("total",)
)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="procstat",
        description="Print a parsed snapshot of /proc/stat",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help=(
            "Captured snapshot to parse, or '-' for stdin "
            f"(default: the live {SystemStat.PATH})"
        ),
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the snapshot as JSON",
    )
    parser.add_argument(
        "--totals-only",
        action="store_true",
        help="Omit per-cpu rows",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr",
    )
    return parser.parse_args(argv)


def load_snapshot(path: str | None) -> SystemStat:
    """Parse the live file, a captured snapshot, or stdin."""
    if path is None:
        return SystemStat.from_system()
    if path == "-":
        return SystemStat.from_reader(sys.stdin.buffer)
    with open(path, "rb") as stream:
        return SystemStat.from_reader(stream)


def _format_cpu(label: str, cpu: CpuCounters) -> str:
    values = [getattr(cpu, name) for name in _CPU_HEADER[1:-1]]
    values.append(cpu.total())
    cells = ["-" if value is None else str(value) for value in values]
    return "  ".join([f"{label:<6}"] + [f"{cell:>10}" for cell in cells])


def render_text(stat: SystemStat, totals_only: bool = False) -> str:
    """Format a human-readable summary of ``stat``.

    Absent optional counters are shown as ``-``.

    Raises:
        CounterOverflowError: A cpu row total does not fit in 64 bits.
    """
    header = "  ".join(
        [f"{_CPU_HEADER[0]:<6}"] + [f"{name:>10}" for name in _CPU_HEADER[1:]]
    )
    lines = [header, _format_cpu("all", stat.cpu_totals)]
    if not totals_only:
        for idx, cpu in enumerate(stat.cpus):
            lines.append(_format_cpu(str(idx), cpu))
    lines += [
        "",
        f"cpus:              {stat.num_cpus}",
        f"context switches:  {stat.context_switches}",
        f"boot time:         {stat.boot_time}",
        f"processes:         {stat.processes}",
        f"procs running:     {stat.procs_running}",
        f"procs blocked:     {stat.procs_blocked}",
    ]
    return "\n".join(lines) + "\n"


def render_json(stat: SystemStat, totals_only: bool = False) -> str:
    """Format ``stat`` as a JSON document."""
    data = stat.as_dict()
    if totals_only:
        del data["cpus"]
    return json.dumps(data, indent=2) + "\n"


def main(argv: list[str] | None = None) -> int:
    """Entry point for the procstat CLI."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    render = render_json if args.json else render_text
    try:
        output = render(load_snapshot(args.path), args.totals_only)
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except ProcStatError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    sys.stdout.write(output)
    return 0
