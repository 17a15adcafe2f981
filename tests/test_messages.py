import pytest

from enigma_sim.config import MachineConfig
from enigma_sim.errors import NotFoundError, StateError
from enigma_sim.messages import format_groups, process_lines


def test_format_groups() -> None:
    assert format_groups("QVPQSOKOILPUBKJZPISFXDW") == "QVPQS OKOIL PUBKJ ZPISF XDW"
    assert format_groups("ABCDE") == "ABCDE"
    assert format_groups("") == ""
    assert format_groups("ABCDEFG", size=3) == "ABC DEF G"
    with pytest.raises(ValueError):
        format_groups("ABC", size=0)


def test_process_lines(default_config: MachineConfig) -> None:
    machine = default_config.build_machine()
    lines = [
        "* B Beta I II III AAAA\n",
        "AAA\n",
        "AA\n",
        "\n",
        "* B Beta I II III AAAA",
        "a a a a a",
    ]
    assert list(process_lines(machine, lines)) == ["BDZ", "GO", "", "BDZGO"]


def test_message_before_setup(default_config: MachineConfig) -> None:
    machine = default_config.build_machine()
    with pytest.raises(StateError):
        list(process_lines(machine, ["HELLO"]))


def test_blank_lines_before_setup(default_config: MachineConfig) -> None:
    machine = default_config.build_machine()
    out = list(process_lines(machine, ["", "* B Beta I II III AAAA", "A"]))
    assert out == ["", "B"]


def test_bad_symbol_aborts(default_config: MachineConfig) -> None:
    machine = default_config.build_machine()
    with pytest.raises(NotFoundError):
        list(process_lines(machine, ["* B Beta I II III AAAA", "HELLO, WORLD"]))
