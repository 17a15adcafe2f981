"""enigma_sim.messages.

Message stream processing and output grouping.

An input stream interleaves setup lines (starting with ``*``) and message
lines. Each setup line re-installs the rotors, resets their positions and
replaces the plugboard; each message line is converted with the machine in
whatever state the previous lines left it.

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .config import apply_setup, is_setup_line, parse_setup
from .errors import StateError
from .machine import Machine

GROUP_SIZE = 5


def process_lines(machine: Machine, lines: Iterable[str]) -> Iterator[str]:
    """Convert every message line of ``lines``.

    Setup lines produce no output. Blank message lines yield ``""``.

    Args:
        machine: A machine built from the configuration.
        lines: Input lines, with or without trailing newlines.

    Yields:
        The converted text of each message line (no spaces).

    Raises:
        StateError: If a non-blank message line precedes the first setup line.

    """
    configured = False
    for raw in lines:
        line = raw.rstrip("\r\n")
        if is_setup_line(line):
            apply_setup(machine, parse_setup(line, machine.num_rotors()))
            configured = True
            continue
        if line.strip() == "":
            yield ""
            continue
        if not configured:
            raise StateError("Machine was not set up.")
        yield machine.convert(line)


def format_groups(text: str, size: int = GROUP_SIZE) -> str:
    """Split ``text`` into space-separated blocks of ``size`` symbols.

    The last block may be shorter.

    Raises:
        ValueError: If ``size`` is <= 0.

    """
    if size <= 0:
        raise ValueError("size must be >= 1")
    return " ".join(text[i : i + size] for i in range(0, len(text), size))
