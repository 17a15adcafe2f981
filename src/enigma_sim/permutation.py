"""enigma_sim.permutation.

Permutations of an alphabet written in cycle notation.

A permutation is described by a string such as ``"(AELTPHQXRU) (BKNW) (S)"``.
Each cycle ``(s0 s1 ... sm)`` maps ``s_i`` to ``s_(i+1) mod (m+1)``; symbols
that appear in no cycle map to themselves.

Parsing
-------
- Whitespace between cycles is ignored; cycles may also be written back to
  back, e.g. ``"(AB)(CD)"``.
- A cycle must be non-empty and may not contain whitespace or nested
  parentheses.
- A symbol may appear at most once across all cycles of a permutation.

Lookup
------
The cycles are compiled into two index tables (forward and inverse) whenever
cycles are added, so applying the permutation is a single list lookup. The
cycle strings are kept for display and introspection.

"""

from __future__ import annotations

from .alphabet import Alphabet
from .errors import FormatError, NotFoundError


def parse_cycles(text: str) -> list[str]:
    """Split cycle notation into its cycle bodies.

    Args:
        text: Cycle notation, e.g. ``"(AB) (CDE)"``. May be empty.

    Returns:
        The symbols of each cycle, in order, without parentheses.

    Raises:
        FormatError: On unbalanced or nested parentheses, empty cycles or
            text outside a cycle.

    """
    cycles: list[str] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch.isspace():
            i += 1
            continue
        if ch != "(":
            raise FormatError(f"Improper cycle format: unexpected {ch!r} in {text!r}")
        end = text.find(")", i + 1)
        if end == -1:
            raise FormatError(f"Improper cycle format: unclosed '(' in {text!r}")
        body = text[i + 1 : end]
        if body == "":
            raise FormatError(f"Improper cycle format: empty cycle in {text!r}")
        if "(" in body or any(c.isspace() for c in body):
            raise FormatError(f"Improper cycle format: bad cycle ({body}) in {text!r}")
        cycles.append(body)
        i = end + 1
    return cycles


class Permutation:
    """A permutation of an :class:`~enigma_sim.alphabet.Alphabet`.

    The alphabet is shared, not owned: every rotor of a machine refers to the
    same instance.

    """

    def __init__(self, cycles: str, alphabet: Alphabet) -> None:
        self._alphabet = alphabet
        self._cycles: list[str] = []
        self._forward: list[int] = list(range(alphabet.size()))
        self._inverse: list[int] = list(range(alphabet.size()))
        self.add_cycles(cycles)

    def add_cycles(self, cycles: str) -> None:
        """Parse ``cycles`` and append them to this permutation.

        The existing cycles are kept. Used when a rotor's wiring continues on
        a following configuration line.

        Raises:
            FormatError: If the notation is malformed or a symbol is already
                used by another cycle.
            NotFoundError: If a cycle symbol is not in the alphabet.

        """
        new_cycles = parse_cycles(cycles)
        seen = {ch for cycle in self._cycles for ch in cycle}
        for cycle in new_cycles:
            for ch in cycle:
                if ch not in self._alphabet:
                    raise NotFoundError(f"Cycle symbol {ch!r} not in alphabet")
                if ch in seen:
                    raise FormatError(f"Symbol {ch!r} appears in more than one place")
                seen.add(ch)

        # Validated; compile into the lookup tables.
        for cycle in new_cycles:
            idx = [self._alphabet.to_int(ch) for ch in cycle]
            for k, src in enumerate(idx):
                dst = idx[(k + 1) % len(idx)]
                self._forward[src] = dst
                self._inverse[dst] = src
            self._cycles.append(cycle)

    @property
    def alphabet(self) -> Alphabet:
        """The alphabet this permutation was built over."""
        return self._alphabet

    @property
    def cycles(self) -> tuple[str, ...]:
        """The cycle bodies, in the order they were added."""
        return tuple(self._cycles)

    def size(self) -> int:
        return self._alphabet.size()

    def wrap(self, p: int) -> int:
        """Return ``p`` modulo the alphabet size, in ``[0, size)``."""
        return p % self.size()

    def permute(self, p: int) -> int:
        """Apply the permutation to index ``p`` (taken modulo the size)."""
        return self._forward[self.wrap(p)]

    def invert(self, c: int) -> int:
        """Apply the inverse permutation to index ``c`` (taken modulo the size)."""
        return self._inverse[self.wrap(c)]

    def permute_char(self, symbol: str) -> str:
        """Apply the permutation to a symbol of the alphabet."""
        return self._alphabet.to_char(self._forward[self._alphabet.to_int(symbol)])

    def invert_char(self, symbol: str) -> str:
        """Apply the inverse permutation to a symbol of the alphabet."""
        return self._alphabet.to_char(self._inverse[self._alphabet.to_int(symbol)])

    def derangement(self) -> bool:
        """Return True iff no symbol maps to itself."""
        return all(dst != src for src, dst in enumerate(self._forward))

    def self_inverse(self) -> bool:
        """Return True iff applying the permutation twice is the identity."""
        return all(self._forward[dst] == src for src, dst in enumerate(self._forward))

    def __repr__(self) -> str:
        body = " ".join(f"({c})" for c in self._cycles)
        return f"Permutation({body!r}, {self._alphabet.chars!r})"
