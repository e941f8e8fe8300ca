KEY_COUNT = 16

def checkKey(key):
    if (key < 0 or key >= KEY_COUNT):
        raise ValueError("No such key: %r" % key)
    return key

class Keypad():
    def __init__(self):
        self._mask = 0

    def press(self, key):
        self._mask |= 0x1 << checkKey(key)

    def release(self, key):
        self._mask &= ~(0x1 << checkKey(key))

    def isPressed(self, key):
        return (self._mask >> key) & 0x1 == 1

    def mask(self):
        return self._mask
