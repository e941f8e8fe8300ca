SCR_WIDTH = 64
SCR_HEIGHT = 32

ROW_MASK = (1 << SCR_WIDTH) - 1

class Display():
    def __init__(self):
        self._rows = [0] * SCR_HEIGHT

    def clear(self):
        self._rows = [0] * SCR_HEIGHT

    def setPixel(self, bit, x, y):
        """XOR one pixel, return True if it was set and got cleared."""
        mask = 1 << (SCR_WIDTH - 1 - (x & (SCR_WIDTH - 1)))
        y &= SCR_HEIGHT - 1
        oldVal = self._rows[y] & mask
        if (bit & 0x1):
            self._rows[y] ^= mask
        return oldVal != 0 and (self._rows[y] & mask) == 0

    def drawByte(self, byte, x, y):
        collision = False
        for i in range(8):
            bit = (byte >> (7 - i)) & 0x1
            collision |= self.setPixel(bit, x + i, y)
        return collision

    def drawSprite(self, sprite, x, y):
        """Draw sprite rows starting at (x, y), wrapping on both axes.

        Returns True if any pixel of the sprite erased a lit pixel.
        """
        collision = False
        y &= SCR_HEIGHT - 1
        for byte in sprite:
            collision |= self.drawByte(byte, x, y)
            y = (y + 1) & (SCR_HEIGHT - 1)
        return collision

    def getPixel(self, x, y):
        return (self._rows[y & (SCR_HEIGHT - 1)] >> (SCR_WIDTH - 1 - (x & (SCR_WIDTH - 1)))) & 0x1

    def rows(self):
        return tuple(self._rows)

    def setRow(self, y, value):
        self._rows[y & (SCR_HEIGHT - 1)] = value & ROW_MASK

    def getPixels(self):
        return [(row >> (SCR_WIDTH - 1 - x)) & 0x1 for row in self._rows for x in range(SCR_WIDTH)]
