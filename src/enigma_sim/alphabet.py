"""enigma_sim.alphabet.

Ordered symbol sets.

An :class:`Alphabet` is a bijection between a string of distinct symbols and
the integer range ``[0, size)``. Every permutation and rotor in a machine
shares one alphabet; it is built once from the configuration and never
mutated afterwards.

"""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import ConfigError, NotFoundError, RangeError


@dataclass(frozen=True)
class Alphabet:
    """An immutable ordered sequence of distinct symbols.

    Attributes:
        chars:
            The symbols in index order. Symbol ``chars[k]`` has index ``k``.

    """

    chars: str
    _index: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if len(self.chars) == 0:
            raise ConfigError("Alphabet must contain at least one symbol.")
        index = {ch: i for i, ch in enumerate(self.chars)}
        if len(index) != len(self.chars):
            raise ConfigError(f"Alphabet has duplicate symbols: {self.chars!r}")
        object.__setattr__(self, "_index", index)

    def size(self) -> int:
        """Return the number of symbols."""
        return len(self.chars)

    def __len__(self) -> int:
        return len(self.chars)

    def contains(self, symbol: str) -> bool:
        """Return True if ``symbol`` is one of the alphabet's symbols."""
        return symbol in self._index

    def __contains__(self, symbol: object) -> bool:
        return isinstance(symbol, str) and self.contains(symbol)

    def to_char(self, index: int) -> str:
        """Return the symbol at ``index``.

        Args:
            index: Position in ``[0, size)``.

        Returns:
            The symbol with that index.

        Raises:
            RangeError: If ``index`` is outside ``[0, size)``.

        """
        if index < 0 or index >= len(self.chars):
            raise RangeError(f"Alphabet index out of bounds: {index}")
        return self.chars[index]

    def to_int(self, symbol: str) -> int:
        """Return the index of ``symbol``.

        Raises:
            NotFoundError: If the symbol is not in the alphabet.

        """
        try:
            return self._index[symbol]
        except KeyError as exc:
            raise NotFoundError(f"Symbol {symbol!r} not in alphabet") from exc
