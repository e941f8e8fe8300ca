from cpu import CPU, WaitingForKey
from display import Display
from keypad import Keypad
from memory import Memory

class Machine():
    """A complete CHIP-8 machine built around one program image.

    The host drives three independent cadences: step() at any rate,
    decrementDelay()/decrementSound() at 60 Hz, and key events whenever
    they arrive. Nothing here blocks or keeps time.
    """

    def __init__(self, program=b"", rand=None):
        self._memory = Memory(program)
        self._display = Display()
        self._keypad = Keypad()
        self._CPU = CPU(self._memory, self._display, self._keypad, rand)

    def step(self):
        self._CPU.step()

    def decrementDelay(self):
        self._CPU.decrementDelay()

    def decrementSound(self):
        self._CPU.decrementSound()

    def sound(self):
        return self._CPU.sound()

    def screen(self):
        return self._display.rows()

    def pixels(self):
        return self._display.getPixels()

    def pressKey(self, key):
        self._CPU.keyPressed(key)

    def releaseKey(self, key):
        self._CPU.keyReleased(key)

    def isPressed(self, key):
        return self._keypad.isPressed(key)

    def isWaiting(self):
        return isinstance(self._CPU.state(), WaitingForKey)

    def executed(self):
        return self._CPU.executed()

    def cpu(self):
        return self._CPU

    def memory(self):
        return self._memory

    def examine(self):
        return self._CPU.examine()
