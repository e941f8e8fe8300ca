MEM_SIZE = 1024 * 4
ADDR_MASK = MEM_SIZE - 1

FONT_OFFSET = 0
FONT_CHAR_SIZE = 5
PROGRAM_OFFSET = 0x200
PROGRAM_SIZE = MEM_SIZE - PROGRAM_OFFSET

FONT = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0, # 0
    0x20, 0x60, 0x20, 0x20, 0x70, # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0, # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0, # 3
    0x90, 0x90, 0xF0, 0x10, 0x10, # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0, # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0, # 6
    0xF0, 0x10, 0x20, 0x40, 0x40, # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0, # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0, # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90, # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0, # B
    0xF0, 0x80, 0x80, 0x80, 0xF0, # C
    0xE0, 0x90, 0x90, 0x90, 0xE0, # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0, # E
    0xF0, 0x80, 0xF0, 0x80, 0x80, # F
])

class RomTooLargeError(ValueError):
    def __init__(self, size):
        super().__init__("ROM is %d bytes, at most %d fit at 0x%0.3X" % (size, PROGRAM_SIZE, PROGRAM_OFFSET))
        self.size = size

class Memory():
    def __init__(self, program=b""):
        if (len(program) > PROGRAM_SIZE):
            raise RomTooLargeError(len(program))
        self._memory = bytearray(MEM_SIZE)
        self._memory[FONT_OFFSET:FONT_OFFSET + len(FONT)] = FONT
        self._memory[PROGRAM_OFFSET:PROGRAM_OFFSET + len(program)] = program

    def getOpcode(self, PC):
        return (self._memory[PC & ADDR_MASK] << 8) | self._memory[(PC + 1) & ADDR_MASK]

    def readByte(self, addr):
        return self._memory[addr & ADDR_MASK]

    def readBytes(self, addr, count):
        return bytes(self._memory[(addr + i) & ADDR_MASK] for i in range(count))

    def writeByte(self, addr, value):
        self._memory[addr & ADDR_MASK] = value & 0xFF

    @staticmethod
    def fontAddress(digit):
        return FONT_OFFSET + FONT_CHAR_SIZE * digit
