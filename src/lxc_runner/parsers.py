"""Parsers for the text printed by the lxc tools.

Grammars:

- ``lxc-info``: lines ``state: <TOKEN>`` and ``pid: <signed int>``; only the
  first occurrence of each counts, a missing line yields ``None``.
- ``lxc-ls``: one container name per line, duplicates allowed.
- ``lxc-ps``: a header line, then ``<idx> <pid> <user> <cpu> <mem> <command> [args...]``.
- cgroup counters: a single integer, possibly padded with whitespace.
"""

from __future__ import annotations

import re
from typing import TypedDict

__all__ = [
    "ProcessRecord",
    "Status",
    "parse_counter",
    "parse_info",
    "parse_list",
    "parse_process_line",
    "parse_process_table",
]

_STATE_RE = re.compile(r"^state:\s+(\w+)$", re.MULTILINE)
_PID_RE = re.compile(r"^pid:\s+(-?\d+)$", re.MULTILINE)


class Status(TypedDict):
    """State and pid as last reported by lxc-info."""

    state: str | None
    pid: str | None


class ProcessRecord(TypedDict):
    """One row of lxc-ps output."""

    pid: str
    user: str
    cpu: str
    memory: str
    command: str
    args: str


def _first(pattern: re.Pattern[str], text: str) -> str | None:
    match = pattern.search(text)
    return match.group(1) if match else None


def parse_info(output: str) -> Status:
    """Extract state and pid from ``lxc-info`` output."""
    return {"state": _first(_STATE_RE, output), "pid": _first(_PID_RE, output)}


def parse_list(output: str) -> list[str]:
    """Return the distinct container names from ``lxc-ls``, in listing order."""
    names = (line.strip() for line in output.splitlines())
    return list(dict.fromkeys(name for name in names if name))


def parse_process_line(line: str) -> ProcessRecord:
    """Parse one ``lxc-ps`` row.

    The first column is dropped; the next five are positional and whatever
    remains is rejoined with single spaces as ``args``. User and command names
    must not contain whitespace.
    """
    chunks = line.split()[1:]
    fields = chunks[:5] + [""] * (5 - len(chunks[:5]))
    pid, user, cpu, mem, command = fields
    return {
        "pid": pid,
        "user": user,
        "cpu": cpu,
        "memory": mem,
        "command": command,
        "args": " ".join(chunks[5:]),
    }


def parse_process_table(output: str) -> list[ProcessRecord]:
    """Parse ``lxc-ps`` output, skipping the header line."""
    lines = output.strip().splitlines()[1:]
    return [parse_process_line(line) for line in lines if line.strip()]


def parse_counter(output: str) -> int:
    """Parse a cgroup counter value in bytes.

    Raises:
        ValueError: If the output is not an integer.
    """
    return int(output.strip())
