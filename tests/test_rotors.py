import pytest

from enigma_sim.alphabet import Alphabet
from enigma_sim.errors import ConfigError, FormatError, NotFoundError
from enigma_sim.permutation import Permutation
from enigma_sim.rotors import RotorKind, fixed_rotor, moving_rotor, reflector

UPPER = Alphabet("ABCDEFGHIJKLMNOPQRSTUVWXYZ")
ROTOR_I = "(AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)"
REFLECTOR_B = "(AE) (BN) (CK) (DQ) (FU) (GY) (HW) (IJ) (LO) (MP) (RX) (SZ) (TV)"


def test_capability_flags() -> None:
    r = reflector("B", Permutation(REFLECTOR_B, UPPER))
    f = fixed_rotor("Beta", Permutation("(AB)", UPPER))
    m = moving_rotor("I", Permutation(ROTOR_I, UPPER), "Q")

    assert (r.kind, r.reflecting(), r.rotates()) == (RotorKind.REFLECTOR, True, False)
    assert (f.kind, f.reflecting(), f.rotates()) == (RotorKind.FIXED, False, False)
    assert (m.kind, m.reflecting(), m.rotates()) == (RotorKind.MOVING, False, True)


def test_convert_at_position_zero_is_wiring() -> None:
    rotor = moving_rotor("I", Permutation(ROTOR_I, UPPER), "Q")
    assert rotor.convert_forward(UPPER.to_int("A")) == UPPER.to_int("E")
    assert rotor.convert_backward(UPPER.to_int("E")) == UPPER.to_int("A")


def test_convert_applies_offset() -> None:
    rotor = moving_rotor("I", Permutation(ROTOR_I, UPPER), "Q")
    rotor.set("B")
    # A enters contact B, which is wired to K; shifted back by one gives J.
    assert rotor.convert_forward(0) == UPPER.to_int("J")
    assert rotor.convert_backward(UPPER.to_int("J")) == 0


def test_forward_backward_are_inverse_at_every_position() -> None:
    rotor = moving_rotor("I", Permutation(ROTOR_I, UPPER), "Q")
    for pos in range(26):
        rotor.set(pos)
        for i in range(26):
            assert rotor.convert_backward(rotor.convert_forward(i)) == i


def test_notch_and_advance() -> None:
    rotor = moving_rotor("I", Permutation(ROTOR_I, UPPER), "Q")
    rotor.set("Q")
    assert rotor.at_notch()
    rotor.advance()
    assert not rotor.at_notch()
    assert rotor.setting() == "R"


def test_advance_wraps() -> None:
    rotor = moving_rotor("I", Permutation(ROTOR_I, UPPER), "Q")
    rotor.set("Z")
    rotor.advance()
    assert rotor.position == 0


def test_several_notches() -> None:
    rotor = moving_rotor("VI", Permutation("", UPPER), "ZM")
    rotor.set("M")
    assert rotor.at_notch()
    rotor.set("Z")
    assert rotor.at_notch()
    rotor.set("A")
    assert not rotor.at_notch()


def test_fixed_rotor_sets_but_never_advances() -> None:
    rotor = fixed_rotor("Beta", Permutation("(AB)", UPPER))
    rotor.set("C")
    assert rotor.position == 2
    assert not rotor.at_notch()
    with pytest.raises(ConfigError):
        rotor.advance()


def test_reflector_is_immovable() -> None:
    rotor = reflector("B", Permutation(REFLECTOR_B, UPPER))
    rotor.set(0)
    assert not rotor.at_notch()
    with pytest.raises(ConfigError):
        rotor.set("C")
    with pytest.raises(ConfigError):
        rotor.advance()


def test_set_rejects_unknown_positions() -> None:
    rotor = fixed_rotor("Beta", Permutation("", UPPER))
    with pytest.raises(NotFoundError):
        rotor.set("a")
    with pytest.raises(IndexError):
        rotor.set(26)


def test_moving_rotor_notch_validation() -> None:
    with pytest.raises(FormatError):
        moving_rotor("I", Permutation("", UPPER), "")
    with pytest.raises(NotFoundError):
        moving_rotor("I", Permutation("", UPPER), "q")
