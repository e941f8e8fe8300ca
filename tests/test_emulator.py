"""Tests for ROM file loading in the host layer."""

import pytest

pytest.importorskip("PyQt6.QtMultimedia")

from emulator import readRom, loadMachine


def test_read_rom(tmp_path):
    rom = tmp_path / "test.ch8"
    rom.write_bytes(bytes([0x1A, 0xBC]))
    assert readRom(str(rom)) == bytes([0x1A, 0xBC])


def test_read_missing_rom(tmp_path, capsys):
    assert readRom(str(tmp_path / "missing.ch8")) == b""
    assert "missing.ch8" in capsys.readouterr().out


def test_read_no_rom():
    assert readRom(None) == b""
    assert readRom("") == b""


def test_load_machine_runs_rom(tmp_path):
    rom = tmp_path / "jump.ch8"
    rom.write_bytes(bytes([0x1A, 0xBC]))
    machine = loadMachine(str(rom))
    machine.step()
    assert machine.examine()["PC"] == 0xABC


def test_load_machine_with_oversized_rom(tmp_path, capsys):
    rom = tmp_path / "big.ch8"
    rom.write_bytes(bytes(4000))
    machine = loadMachine(str(rom))
    assert machine.memory().readByte(0x200) == 0
    assert "big.ch8" in capsys.readouterr().out
