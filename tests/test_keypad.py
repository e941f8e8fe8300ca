import pytest

from keypad import Keypad


def test_press_and_release():
    keypad = Keypad()
    keypad.press(1)
    keypad.press(10)
    assert keypad.mask() == 0b0000010000000010
    assert keypad.isPressed(1)
    assert keypad.isPressed(10)
    assert not keypad.isPressed(0)
    keypad.release(1)
    assert not keypad.isPressed(1)
    assert keypad.mask() == 0b0000010000000000


def test_release_unpressed_key_is_noop():
    keypad = Keypad()
    keypad.release(5)
    assert keypad.mask() == 0


def test_keys_out_of_range_are_never_pressed():
    keypad = Keypad()
    keypad.press(0xF)
    assert not keypad.isPressed(0x10)
    assert not keypad.isPressed(0xFF)


@pytest.mark.parametrize("key", [-1, 16, 255])
def test_invalid_keys_rejected(key):
    keypad = Keypad()
    with pytest.raises(ValueError):
        keypad.press(key)
    with pytest.raises(ValueError):
        keypad.release(key)
