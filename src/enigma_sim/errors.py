"""enigma_sim.errors.

Domain exceptions.

Every error raised by the simulator derives from :class:`EnigmaError`, so the
command line can convert any of them into a single non-zero exit status. The
subclasses name the kind of failure; some also derive from the matching
builtin so callers can catch them either way.

"""

from __future__ import annotations


class EnigmaError(Exception):
    """Base class for all simulator errors."""


class FormatError(EnigmaError):
    """Malformed cycle notation, rotor descriptor or setup line."""


class RangeError(EnigmaError, IndexError):
    """An alphabet index outside ``[0, size)``."""


class NotFoundError(EnigmaError, LookupError):
    """A symbol or rotor name that does not exist."""


class DuplicateError(EnigmaError):
    """A rotor name used twice where names must be unique."""


class ConfigError(EnigmaError):
    """A structural machine invariant was violated."""


class StateError(EnigmaError):
    """The machine was asked to convert before it was set up."""
