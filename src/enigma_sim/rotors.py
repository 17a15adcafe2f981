"""enigma_sim.rotors.

Rotors: wired wheels that permute the signal through the machine.

Every rotor wraps a :class:`~enigma_sim.permutation.Permutation` (its fixed
internal wiring) and a rotational offset, ``position``. The wiring is applied
relative to the offset:

    forward(i)  = wrap(permute(wrap(i + position)) - position)
    backward(i) = wrap(invert(wrap(i + position)) - position)

There are three kinds of rotor, distinguished by :class:`RotorKind`:

- ``REFLECTOR``: sits in the leftmost slot and sends the signal back. Its
  position is always 0 and it never moves.
- ``FIXED``: its position can be set by a setup line but it never advances.
- ``MOVING``: advances when the machine's stepping logic commands it and has
  one or more notch symbols that drive its left neighbour.

The kind is a closed tag on a single class rather than a subclass hierarchy;
each capability method branches on it.

"""

from __future__ import annotations

from enum import Enum

from .alphabet import Alphabet
from .errors import ConfigError, FormatError, NotFoundError
from .permutation import Permutation


class RotorKind(Enum):
    """Rotor variants, valued by their configuration type letter."""

    REFLECTOR = "R"
    FIXED = "N"
    MOVING = "M"


class Rotor:
    """A rotor of one of the three kinds.

    Prefer the :func:`reflector`, :func:`fixed_rotor` and :func:`moving_rotor`
    factories to calling the constructor directly.

    """

    def __init__(
        self,
        name: str,
        perm: Permutation,
        kind: RotorKind,
        notches: str = "",
    ) -> None:
        if kind is RotorKind.MOVING:
            if notches == "":
                raise FormatError(f"Moving rotor {name} needs at least one notch.")
            for ch in notches:
                if ch not in perm.alphabet:
                    raise NotFoundError(f"Notch {ch!r} of rotor {name} not in alphabet")
        elif notches != "":
            raise FormatError(f"Only moving rotors have notches (rotor {name}).")

        self._name = name
        self._permutation = perm
        self._kind = kind
        self._notches = frozenset(notches)
        self.position = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def kind(self) -> RotorKind:
        return self._kind

    @property
    def notches(self) -> frozenset[str]:
        return self._notches

    @property
    def alphabet(self) -> Alphabet:
        return self._permutation.alphabet

    def permutation(self) -> Permutation:
        """Return the rotor's wiring."""
        return self._permutation

    def size(self) -> int:
        return self._permutation.size()

    def rotates(self) -> bool:
        """Return True for rotors that have a pawl and can advance."""
        return self._kind is RotorKind.MOVING

    def reflecting(self) -> bool:
        """Return True for reflectors."""
        return self._kind is RotorKind.REFLECTOR

    def setting(self) -> str:
        """Return the symbol for the current position."""
        return self.alphabet.to_char(self.position)

    def set(self, pos: int | str) -> None:
        """Set the position from an index or from a symbol of the alphabet.

        Args:
            pos: Index in ``[0, size)`` or a symbol.

        Raises:
            ConfigError: If this is a reflector and ``pos`` is not 0.
            RangeError: If an integer position is out of bounds.
            NotFoundError: If a symbol position is not in the alphabet.

        """
        if isinstance(pos, str):
            p = self.alphabet.to_int(pos)
        else:
            p = pos
            self.alphabet.to_char(p)

        if self._kind is RotorKind.REFLECTOR and p != 0:
            raise ConfigError(f"Reflector {self._name} cannot be repositioned.")
        self.position = p

    def at_notch(self) -> bool:
        """Return True if a moving rotor's current position is a notch."""
        if self._kind is RotorKind.MOVING:
            return self.setting() in self._notches
        return False

    def advance(self) -> None:
        """Advance one position.

        Raises:
            ConfigError: If the rotor does not rotate.

        """
        if self._kind is not RotorKind.MOVING:
            raise ConfigError(f"Rotor {self._name} does not rotate.")
        self.position = self._permutation.wrap(self.position + 1)

    def convert_forward(self, index: int) -> int:
        """Convert a signal entering contact ``index`` from the right."""
        perm = self._permutation
        shifted = perm.wrap(index + self.position)
        return perm.wrap(perm.permute(shifted) - self.position)

    def convert_backward(self, index: int) -> int:
        """Convert a signal entering contact ``index`` from the left."""
        perm = self._permutation
        shifted = perm.wrap(index + self.position)
        return perm.wrap(perm.invert(shifted) - self.position)

    def __repr__(self) -> str:
        return f"<Rotor {self._name} {self._kind.name} pos={self.position}>"


def reflector(name: str, perm: Permutation) -> Rotor:
    return Rotor(name, perm, RotorKind.REFLECTOR)


def fixed_rotor(name: str, perm: Permutation) -> Rotor:
    return Rotor(name, perm, RotorKind.FIXED)


def moving_rotor(name: str, perm: Permutation, notches: str) -> Rotor:
    return Rotor(name, perm, RotorKind.MOVING, notches)
