"""Rotor cipher machine simulator."""

from .alphabet import Alphabet
from .errors import (
    ConfigError,
    DuplicateError,
    EnigmaError,
    FormatError,
    NotFoundError,
    RangeError,
    StateError,
)
from .machine import Machine
from .permutation import Permutation
from .rotors import Rotor, RotorKind, fixed_rotor, moving_rotor, reflector

__all__ = [
    "Alphabet",
    "ConfigError",
    "DuplicateError",
    "EnigmaError",
    "FormatError",
    "Machine",
    "NotFoundError",
    "Permutation",
    "RangeError",
    "Rotor",
    "RotorKind",
    "StateError",
    "fixed_rotor",
    "moving_rotor",
    "reflector",
]
