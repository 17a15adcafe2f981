"""enigma_sim.machine.

The rotor machine: slot array, stepping and signal path.

A :class:`Machine` has ``num_rotors`` slots. Slot 0 (leftmost) holds a
reflector, the rightmost ``pawls`` slots hold moving rotors and the slots in
between hold fixed rotors. The rotors themselves come from a catalog shared
with the configuration; a setup line chooses which ones fill the slots.

Stepping
--------
Before each character is converted the machine steps. The notch state of
every moving rotor is read first, then all moves are applied at once:

- the rightmost rotor always advances;
- when a moving rotor (other than the leftmost moving one) is at a notch,
  its pawl engages both it and its left neighbour, so both advance.

The second rule is what makes the middle rotor of a classic three-pawl
machine "double step": it advances once when the right rotor reaches its
notch and again on the next key press because it is then at its own notch.
No rotor advances more than once per character.

Signal path
-----------
plugboard -> rotors right to left (ending at the reflector) -> rotors left
to right (skipping the reflector) -> plugboard. The plugboard must be
self-inverse, so the same lookup serves both directions.

"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from .alphabet import Alphabet
from .errors import ConfigError, DuplicateError, NotFoundError, StateError
from .permutation import Permutation
from .rotors import Rotor

logger = logging.getLogger(__name__)


class Machine:
    """A configured rotor machine.

    Args:
        alphabet:
            Alphabet shared by every rotor and the plugboard.
        num_rotors:
            Number of rotor slots, including the reflector slot. Must be >= 2.
        pawls:
            Number of moving rotors, in ``[0, num_rotors)``.
        all_rotors:
            Catalog of available rotors. Names must be unique, ignoring case.

    Raises:
        ConfigError: On invalid slot/pawl counts or a rotor over a different
            alphabet.
        DuplicateError: If two catalog rotors share a name.

    """

    def __init__(
        self,
        alphabet: Alphabet,
        num_rotors: int,
        pawls: int,
        all_rotors: Iterable[Rotor],
    ) -> None:
        if num_rotors < 2:
            raise ConfigError(f"Need at least 2 rotor slots, got {num_rotors}.")
        if pawls < 0 or pawls >= num_rotors:
            raise ConfigError(
                f"Pawls must be in [0, {num_rotors}), got {pawls}."
            )

        catalog: dict[str, Rotor] = {}
        for rotor in all_rotors:
            key = rotor.name.upper()
            if key in catalog:
                raise DuplicateError(f"Duplicate rotor name: {rotor.name}")
            if rotor.alphabet != alphabet:
                raise ConfigError(f"Rotor {rotor.name} uses a different alphabet.")
            catalog[key] = rotor

        self._alphabet = alphabet
        self._num_rotors = num_rotors
        self._pawls = pawls
        self._catalog = catalog
        self._using: list[Rotor] = []
        self._plugboard: Permutation | None = None

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    def num_rotors(self) -> int:
        """Return the number of rotor slots."""
        return self._num_rotors

    def num_pawls(self) -> int:
        """Return the number of pawls (and thus moving rotors)."""
        return self._pawls

    @property
    def catalog(self) -> tuple[Rotor, ...]:
        """All available rotors, in configuration order."""
        return tuple(self._catalog.values())

    @property
    def rotors(self) -> tuple[Rotor, ...]:
        """The installed rotors, left to right. Empty before setup."""
        return tuple(self._using)

    @property
    def plugboard(self) -> Permutation | None:
        return self._plugboard

    def insert_rotors(self, names: Sequence[str]) -> None:
        """Fill the slots with the named rotors, left to right.

        Names are matched ignoring case. Every inserted rotor is reset to
        position 0.

        Args:
            names: Exactly ``num_rotors`` rotor names; ``names[0]`` is the
                reflector.

        Raises:
            ConfigError: On a wrong name count, a non-reflector in slot 0, or
                a rotor whose kind does not fit its slot.
            NotFoundError: If a name is not in the catalog.
            DuplicateError: If a name is used twice.

        """
        if len(names) != self._num_rotors:
            raise ConfigError(
                f"Expected {self._num_rotors} rotor names, got {len(names)}."
            )

        first_moving = self._num_rotors - self._pawls
        using: list[Rotor] = []
        for slot, name in enumerate(names):
            rotor = self._catalog.get(name.upper())
            if rotor is None:
                raise NotFoundError(f"Rotor {name} not found.")
            if any(r is rotor for r in using):
                raise DuplicateError(f"Rotor {rotor.name} used more than once.")

            if slot == 0:
                if not rotor.reflecting():
                    raise ConfigError(f"Rotor {rotor.name} is not a reflector.")
            elif rotor.reflecting():
                raise ConfigError(f"Reflector {rotor.name} must be in the first slot.")
            elif slot < first_moving and rotor.rotates():
                raise ConfigError(f"Wrong place for moving rotor {rotor.name}.")
            elif slot >= first_moving and not rotor.rotates():
                raise ConfigError(f"Wrong place for non-moving rotor {rotor.name}.")
            using.append(rotor)

        for rotor in using:
            rotor.set(0)
        self._using = using
        logger.debug("Inserted rotors: %s", " ".join(r.name for r in using))

    def set_rotors(self, setting: str) -> None:
        """Set the positions of the non-reflector slots, left to right.

        Args:
            setting: One symbol per non-reflector slot.

        Raises:
            StateError: If no rotors are inserted.
            ConfigError: If ``setting`` has the wrong length.
            NotFoundError: If a symbol is not in the alphabet.

        """
        self._require_setup()
        if len(setting) != self._num_rotors - 1:
            raise ConfigError(
                f"Setting {setting!r} must have {self._num_rotors - 1} symbols."
            )
        for rotor, ch in zip(self._using[1:], setting):
            rotor.set(ch)
        logger.debug("Rotor positions set to %s", setting)

    def set_plugboard(self, plugboard: Permutation | None) -> None:
        """Replace the plugboard; None removes it.

        Raises:
            ConfigError: If the permutation is over another alphabet or is
                not self-inverse.

        """
        if plugboard is not None:
            if plugboard.alphabet != self._alphabet:
                raise ConfigError("Plugboard uses a different alphabet.")
            if not plugboard.self_inverse():
                raise ConfigError(
                    f"Plugboard must consist of swaps (2-cycles): {plugboard!r}"
                )
        self._plugboard = plugboard
        logger.debug("Plugboard set to %r", plugboard)

    def positions(self) -> str:
        """Return the current position symbols of the non-reflector slots."""
        self._require_setup()
        return "".join(r.setting() for r in self._using[1:])

    def _require_setup(self) -> None:
        if not self._using:
            raise StateError("Machine was not set up.")

    def _step(self) -> None:
        first_moving = self._num_rotors - self._pawls
        right = self._num_rotors - 1
        if first_moving > right:
            return

        # Read every notch before anything moves.
        at_notch = [r.at_notch() for r in self._using]
        moves = {right}
        for slot in range(first_moving + 1, self._num_rotors):
            if at_notch[slot]:
                moves.add(slot)
                moves.add(slot - 1)
        for slot in sorted(moves):
            self._using[slot].advance()

    def convert_index(self, index: int) -> int:
        """Step the machine, then convert the character with index ``index``.

        Raises:
            StateError: If no rotors are inserted.
            RangeError: If ``index`` is outside the alphabet.

        """
        self._require_setup()
        self._alphabet.to_char(index)
        self._step()

        c = index
        if self._plugboard is not None:
            c = self._plugboard.permute(c)
        for rotor in reversed(self._using):
            c = rotor.convert_forward(c)
        for rotor in self._using[1:]:
            c = rotor.convert_backward(c)
        if self._plugboard is not None:
            c = self._plugboard.permute(c)
        return c

    def convert(self, msg: str) -> str:
        """Convert a message, advancing the rotors once per symbol.

        The message is uppercased and whitespace is dropped. Rotor positions
        carry over from one call to the next.

        Raises:
            StateError: If no rotors are inserted.
            NotFoundError: If a symbol is not in the alphabet.

        """
        self._require_setup()
        out: list[str] = []
        for ch in msg.upper():
            if ch.isspace():
                continue
            out.append(self._alphabet.to_char(self.convert_index(self._alphabet.to_int(ch))))
        return "".join(out)
