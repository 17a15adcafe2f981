from __future__ import annotations

import pytest

from enigma_sim.config import MachineConfig, parse_config

DEFAULT_CONF = """\
ABCDEFGHIJKLMNOPQRSTUVWXYZ
5 3
 I MQ      (AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)
 II ME     (FIXVYOMW) (CDKLHUP) (ESZ) (BJ) (GR) (NT) (A) (Q)
 III MV    (ABDHPEJT) (CFLVMZOYQIRWUKXSG) (N)
 IV MJ     (AEPLIYWCOXMRFZBSTGJQNH) (DV) (KU)
 V MZ      (AVOLDRWFIUQ)(BZKSMNHYC) (EGTJPX)
 VI MZM    (AJQDVLEOZWIYTS) (CGMNHFUX) (BPRK)
 VII MZM   (ANOUPFRIMBZTLWKSVEGCJYDHXQ)
 VIII MZM  (AFLSETWUNDHOZVICQ) (BKJ) (GXY) (MPR)
 Beta N    (ALBEVFCYODJWUGNMQTZSKPR) (HIX)
 Gamma N   (AFNIRLBSQWVXGUZDKMTPCOYJHE)
 B R       (AE) (BN) (CK) (DQ) (FU) (GY) (HW) (IJ) (LO) (MP)
           (RX) (SZ) (TV)
 C R       (AR) (BD) (CO) (EJ) (FN) (GT) (HK) (IV) (LM) (PW)
           (QZ) (SX) (UY)
"""

# Four slots: reflector plus three moving rotors.
M3_CONF = DEFAULT_CONF.replace("5 3", "4 3", 1)


@pytest.fixture
def default_config() -> MachineConfig:
    return parse_config(DEFAULT_CONF)


@pytest.fixture
def m3_config() -> MachineConfig:
    return parse_config(M3_CONF)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "default.conf"
    path.write_text(DEFAULT_CONF, encoding="utf-8")
    return path


@pytest.fixture
def config_text() -> str:
    return DEFAULT_CONF
