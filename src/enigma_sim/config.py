"""enigma_sim.config.

Parsing of machine configuration files and setup lines.

Configuration file
------------------
::

    ABCDEFGHIJKLMNOPQRSTUVWXYZ
    5 3
     I MQ      (AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)
     Beta N    (ALBEVFCYODJWUGNMQTZSKPR) (HIX)
     B R       (AE) (BN) (CK) (DQ) (FU) (GY) (HW) (IJ) (LO) (MP)
               (RX) (SZ) (TV)

1) The first non-blank line is the alphabet. It may not contain whitespace,
   parentheses or ``*``.
2) Two integers follow: the number of rotor slots and the number of pawls.
   They may share a line or be on separate lines.
3) Each remaining non-blank line describes a rotor as ``NAME TYPE CYCLES``:

   - ``R``: reflector
   - ``N``: fixed rotor (characters after the ``N`` are ignored)
   - ``M<notches>``: moving rotor with the given notch symbols

   A line whose first token starts with ``(`` continues the wiring of the
   rotor above it.

Setup line
----------
``* B Beta III IV I AXLE (HQ) (EX)``: the ``*`` marker, ``num_rotors`` rotor
names (reflector first), one position symbol per non-reflector slot, and
optional plugboard cycles.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .alphabet import Alphabet
from .errors import ConfigError, DuplicateError, FormatError
from .machine import Machine
from .permutation import Permutation
from .rotors import Rotor, RotorKind

logger = logging.getLogger(__name__)

SETUP_MARKER = "*"
_FORBIDDEN_SYMBOLS = frozenset("()*")


@dataclass(frozen=True)
class MachineConfig:
    """Everything read from a configuration file.

    Attributes:
        alphabet:
            The machine alphabet.
        num_rotors:
            Number of rotor slots, including the reflector.
        pawls:
            Number of moving rotor slots.
        rotors:
            The rotor catalog, in file order.

    """

    alphabet: Alphabet
    num_rotors: int
    pawls: int
    rotors: tuple[Rotor, ...]

    def build_machine(self) -> Machine:
        """Create a :class:`~enigma_sim.machine.Machine` from this config."""
        return Machine(self.alphabet, self.num_rotors, self.pawls, self.rotors)


@dataclass(frozen=True)
class Setup:
    """A parsed setup line.

    Attributes:
        rotors:
            Rotor names, reflector first.
        positions:
            One position symbol per non-reflector slot.
        plugboard:
            Plugboard cycle text; empty for no plugboard swaps.

    """

    rotors: tuple[str, ...]
    positions: str
    plugboard: str = ""


def parse_alphabet(line: str) -> Alphabet:
    """Parse the alphabet line of a configuration file.

    Raises:
        FormatError: If the line is empty or holds a reserved character.
        ConfigError: If a symbol is duplicated.

    """
    chars = line.strip()
    if chars == "" or any(ch.isspace() for ch in chars):
        raise FormatError(f"Not a proper alphabet: {line!r}")
    bad = sorted(set(chars) & _FORBIDDEN_SYMBOLS)
    if bad:
        raise FormatError(f"Alphabet may not contain {''.join(bad)!r}")
    return Alphabet(chars)


def parse_rotor(line: str, alphabet: Alphabet) -> Rotor:
    """Parse a ``NAME TYPE CYCLES`` rotor descriptor.

    Raises:
        FormatError: On a missing field, unknown type or bad cycles.

    """
    parts = line.split(None, 2)
    if len(parts) < 2:
        raise FormatError(f"Bad rotor description: {line.strip()!r}")
    name, type_field = parts[0], parts[1]
    cycles = parts[2] if len(parts) == 3 else ""
    if name.startswith("(") or type_field.startswith("("):
        raise FormatError(f"Bad rotor description: {line.strip()!r}")

    try:
        kind = RotorKind(type_field[0])
    except ValueError as exc:
        raise FormatError(f"Improper rotor type {type_field!r} for rotor {name}") from exc

    perm = Permutation(cycles, alphabet)
    if kind is RotorKind.MOVING:
        return Rotor(name, perm, kind, type_field[1:])
    return Rotor(name, perm, kind)


def _split_counts(lines: list[str]) -> tuple[int, int, int]:
    """Read the two slot/pawl integers; return them and the next line number."""
    numbers: list[int] = []
    i = 0
    while len(numbers) < 2:
        if i >= len(lines):
            raise FormatError("Configuration file truncated: missing rotor and pawl counts.")
        for tok in lines[i].split():
            if len(numbers) == 2:
                raise FormatError(f"Unexpected text after rotor and pawl counts: {tok!r}")
            try:
                numbers.append(int(tok))
            except ValueError as exc:
                raise FormatError(f"Expected an integer, got {tok!r}") from exc
        i += 1
    return numbers[0], numbers[1], i


def parse_config(text: str) -> MachineConfig:
    """Parse the full text of a configuration file.

    Args:
        text: Configuration file contents.

    Returns:
        The parsed configuration.

    Raises:
        FormatError: If the text is malformed.
        ConfigError: If the slot/pawl counts are inconsistent.
        DuplicateError: If two rotors share a name.
        NotFoundError: If a wiring or notch symbol is not in the alphabet.

    """
    lines = [ln for ln in text.splitlines() if ln.strip() != ""]
    if not lines:
        raise FormatError("Configuration file is empty.")

    alphabet = parse_alphabet(lines[0])
    num_rotors, pawls, consumed = _split_counts(lines[1:])
    if num_rotors < 2:
        raise ConfigError(f"Need at least 2 rotor slots, got {num_rotors}.")
    if pawls < 0 or num_rotors <= pawls:
        raise ConfigError("Can't have fewer slots than pawls.")

    rotors: list[Rotor] = []
    names: set[str] = set()
    for line in lines[1 + consumed :]:
        if line.lstrip().startswith("("):
            if not rotors:
                raise FormatError(f"Wiring continuation with no rotor: {line.strip()!r}")
            rotors[-1].permutation().add_cycles(line)
            continue

        rotor = parse_rotor(line, alphabet)
        key = rotor.name.upper()
        if key in names:
            raise DuplicateError(f"Duplicate rotor name: {rotor.name}")
        names.add(key)
        rotors.append(rotor)

    for rotor in rotors:
        if rotor.reflecting() and not rotor.permutation().derangement():
            logger.warning("Reflector %s maps some symbols to themselves.", rotor.name)

    logger.debug(
        "Loaded %d rotors over %r (%d slots, %d pawls)",
        len(rotors),
        alphabet.chars,
        num_rotors,
        pawls,
    )
    return MachineConfig(
        alphabet=alphabet,
        num_rotors=num_rotors,
        pawls=pawls,
        rotors=tuple(rotors),
    )


def is_setup_line(line: str) -> bool:
    """Return True if ``line`` is a setup directive."""
    return line.startswith(SETUP_MARKER)


def parse_setup(line: str, num_rotors: int) -> Setup:
    """Parse a setup line for a machine with ``num_rotors`` slots.

    Args:
        line: The setup line, including the leading ``*``.
        num_rotors: Slot count of the target machine.

    Returns:
        The parsed setup.

    Raises:
        FormatError: If the marker, a rotor name or the positions are missing.
        ConfigError: If the positions do not cover every non-reflector slot.

    """
    if not is_setup_line(line):
        raise FormatError(f"Setup line must start with {SETUP_MARKER!r}: {line!r}")
    body = line[len(SETUP_MARKER) :]

    paren = body.find("(")
    if paren == -1:
        head, plugboard = body, ""
    else:
        head, plugboard = body[:paren], body[paren:].strip()

    tokens = head.split()
    if len(tokens) < num_rotors + 1:
        raise FormatError(f"Setup needs {num_rotors} rotor names and positions: {line!r}")
    if len(tokens) > num_rotors + 1:
        raise FormatError(f"Unexpected text in setup: {' '.join(tokens[num_rotors + 1 :])!r}")

    positions = tokens[num_rotors]
    if len(positions) != num_rotors - 1:
        raise ConfigError(
            f"Setting {positions!r} must have {num_rotors - 1} symbols."
        )
    return Setup(rotors=tuple(tokens[:num_rotors]), positions=positions, plugboard=plugboard)


def apply_setup(machine: Machine, setup: Setup) -> None:
    """Install the rotors, positions and plugboard described by ``setup``."""
    plugboard = Permutation(setup.plugboard, machine.alphabet)
    machine.insert_rotors(setup.rotors)
    machine.set_rotors(setup.positions)
    machine.set_plugboard(plugboard)
