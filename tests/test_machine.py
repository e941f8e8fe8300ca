"""Tests for the public machine operations used by the host."""

import pytest

from machine import Machine
from memory import RomTooLargeError
from cpu import InvalidInstructionError, MachineError


def test_construct_loads_program_and_font():
    machine = Machine(bytes([0x60, 0x05]))
    assert machine.memory().readByte(0x200) == 0x60
    assert machine.memory().readByte(0) == 0xF0
    assert machine.examine()["PC"] == 0x200


def test_construct_rejects_oversized_rom():
    with pytest.raises(RomTooLargeError):
        Machine(bytes(4096))


def test_jump_example():
    machine = Machine(bytes([0x1A, 0xBC]))
    machine.step()
    assert machine.examine()["PC"] == 0xABC


def test_call_return_example():
    program = bytes([0x22, 0x04, 0x00, 0x00, 0x00, 0xEE])
    machine = Machine(program)
    machine.step()
    assert machine.examine()["PC"] == 0x204
    assert machine.examine()["SP"] == 1
    machine.step()
    assert machine.examine()["PC"] == 0x202
    assert machine.examine()["SP"] == 0


def test_wait_for_key_example():
    machine = Machine(bytes([0xF0, 0x0A]))
    for _ in range(3):
        machine.step()
    assert machine.examine()["PC"] == 0x200
    assert machine.isWaiting()
    machine.pressKey(1)
    assert machine.examine()["PC"] == 0x202
    assert machine.examine()["V"][0] == 1
    assert not machine.isWaiting()
    assert machine.isPressed(1)


def test_wait_for_key_ignores_earlier_release():
    machine = Machine(bytes([0xF5, 0x0A, 0x12, 0x02]))
    machine.pressKey(7)
    machine.step()
    machine.releaseKey(7)
    machine.step()
    assert machine.examine()["PC"] == 0x200
    machine.pressKey(0xC)
    assert machine.examine()["V"][5] == 0xC
    machine.step()
    assert machine.examine()["PC"] == 0x202


def test_key_events():
    machine = Machine()
    machine.pressKey(0xF)
    assert machine.isPressed(0xF)
    machine.releaseKey(0xF)
    assert not machine.isPressed(0xF)
    with pytest.raises(ValueError):
        machine.pressKey(16)


def test_timers_saturate():
    # LD V0, 3; LD DT, V0; LD ST, V0
    machine = Machine(bytes([0x60, 0x03, 0xF0, 0x15, 0xF0, 0x18]))
    for _ in range(3):
        machine.step()
    assert machine.sound() == 3
    for _ in range(5):
        machine.decrementDelay()
        machine.decrementSound()
    assert machine.sound() == 0
    assert machine.examine()["DT"] == 0


def test_draw_font_glyph():
    # LD V0, 0xA; LD F, V0; DRW V1, V1, 5
    machine = Machine(bytes([0x60, 0x0A, 0xF0, 0x29, 0xD1, 0x15]))
    for _ in range(3):
        machine.step()
    screen = machine.screen()
    assert [row >> 56 for row in screen[:5]] == [0xF0, 0x90, 0xF0, 0x90, 0x90]
    assert all(row == 0 for row in screen[5:])
    assert sum(machine.pixels()) == 14


def test_clear_after_draws():
    # DRW V0, V0, 15; DRW V0, V1, 15; CLS
    machine = Machine(bytes([0xD0, 0x0F, 0xD0, 0x1F, 0x00, 0xE0]))
    machine.cpu().setV(1, 20)
    machine.step()
    machine.step()
    assert any(machine.screen())
    machine.step()
    assert machine.screen() == (0,) * 32


def test_bcd_example():
    # LD V3, 123; LD I, 0x300; LD B, V3
    machine = Machine(bytes([0x63, 0x7B, 0xA3, 0x00, 0xF3, 0x33]))
    for _ in range(3):
        machine.step()
    assert machine.memory().readBytes(0x300, 3) == bytes([1, 2, 3])


def test_invalid_opcode_stops_machine():
    machine = Machine(bytes([0x00, 0x00]))
    with pytest.raises(MachineError):
        machine.step()
    with pytest.raises(InvalidInstructionError):
        machine.step()
    assert machine.executed() == 0


def test_random_source_is_injectable():
    class FixedRandom():
        def randint(self, a, b):
            return 0xAB

    machine = Machine(bytes([0xC2, 0xF0]), rand=FixedRandom())
    machine.step()
    assert machine.examine()["V"][2] == 0xA0
