import random
from typing import NamedTuple

from instructions import InvalidOpcodeError, decode
from memory import Memory, PROGRAM_OFFSET, ADDR_MASK
from display import Display
from keypad import Keypad

REG_COUNT = 16
VF = 0xF
STACK_SIZE = 16
I_BOUND = 0xFFF

class MachineError(Exception):
    pass

class InvalidInstructionError(MachineError):
    def __init__(self, cause):
        super().__init__(str(cause))
        self.opcode = cause.opcode
        self.PC = cause.PC

class StackOverflowError(MachineError):
    def __init__(self, PC):
        super().__init__("Call stack overflow at 0x%0.3X" % PC)
        self.PC = PC

class StackUnderflowError(MachineError):
    def __init__(self, PC):
        super().__init__("Return with empty call stack at 0x%0.3X" % PC)
        self.PC = PC

class Running(NamedTuple):
    pass

class WaitingForKey(NamedTuple):
    register: int

RUNNING = Running()

class CPU():
    def __init__(self, memory: Memory, display: Display, keypad: Keypad, rand=None):
        self._memory = memory
        self._display = display
        self._keypad = keypad
        self._random = rand if rand is not None else random.Random()

        self._V = [0] * REG_COUNT
        self._I = 0
        self._PC = PROGRAM_OFFSET

        self._STACK = [0] * STACK_SIZE
        self._SP = 0

        self._DT = 0
        self._ST = 0

        self._state = RUNNING

        self._executionCounter = 0

        # indexed by Op
        self._execute = (
            CPU._cls,
            CPU._ret,
            CPU._jp,
            CPU._call,
            CPU._seByte,
            CPU._sneByte,
            CPU._seReg,
            CPU._ldByte,
            CPU._addByte,
            CPU._ldReg,
            CPU._or,
            CPU._and,
            CPU._xor,
            CPU._addReg,
            CPU._sub,
            CPU._shr,
            CPU._subn,
            CPU._shl,
            CPU._sneReg,
            CPU._ldI,
            CPU._jpV0,
            CPU._rnd,
            CPU._drw,
            CPU._skp,
            CPU._sknp,
            CPU._ldVxDT,
            CPU._ldVxK,
            CPU._ldDTVx,
            CPU._ldSTVx,
            CPU._addIVx,
            CPU._ldFVx,
            CPU._ldBVx,
            CPU._ldIVx,
            CPU._ldVxI,
        )

    def examine(self):
        return {
            "PC": self._PC,
            "I": self._I,
            "SP": self._SP,
            "DT": self._DT,
            "ST": self._ST,
            "KEYS": self._keypad.mask(),
            "WAIT": self._state.register if isinstance(self._state, WaitingForKey) else None,
            "V": {i : value for i, value in enumerate(self._V)},
            "STACK": {i : value for i, value in enumerate(self._STACK[:self._SP])},
        }

    def setV(self, index, value):
        self._V[index & 0xF] = value & 0xFF

    def setI(self, value):
        self._I = value & 0xFFFF

    def setPC(self, value):
        self._PC = value & ADDR_MASK

    def PC(self):
        return self._PC

    def V(self, index):
        return self._V[index]

    def I(self):
        return self._I

    def SP(self):
        return self._SP

    def state(self):
        return self._state

    def executed(self):
        return self._executionCounter

    def decrementDelay(self):
        if (self._DT > 0):
            self._DT -= 1

    def decrementSound(self):
        if (self._ST > 0):
            self._ST -= 1

    def delay(self):
        return self._DT

    def sound(self):
        return self._ST

    def keyPressed(self, keyCode):
        self._keypad.press(keyCode)
        if (isinstance(self._state, WaitingForKey)):
            self._V[self._state.register] = keyCode
            self._state = RUNNING
            self._PC = (self._PC + 2) & ADDR_MASK

    def keyReleased(self, keyCode):
        self._keypad.release(keyCode)

    def step(self):
        if (isinstance(self._state, WaitingForKey)):
            return
        try:
            instr = decode(self._memory.getOpcode(self._PC), self._PC)
        except InvalidOpcodeError as e:
            raise InvalidInstructionError(e) from e
        if (self._execute[instr.op](self, instr)):
            self._PC = (self._PC + 2) & ADDR_MASK
        self._executionCounter += 1

    # Handlers return True when the PC should advance past the instruction.

    def _cls(self, instr):
        self._display.clear()
        return True

    def _ret(self, instr):
        if (self._SP == 0):
            raise StackUnderflowError(self._PC)
        self._SP -= 1
        self._PC = self._STACK[self._SP]
        return True

    def _jp(self, instr):
        self._PC = instr.nnn
        return False

    def _call(self, instr):
        if (self._SP == STACK_SIZE):
            raise StackOverflowError(self._PC)
        self._STACK[self._SP] = self._PC
        self._SP += 1
        self._PC = instr.nnn
        return False

    def _skipIf(self, condition):
        if (condition):
            self._PC = (self._PC + 2) & ADDR_MASK
        return True

    def _seByte(self, instr):
        return self._skipIf(self._V[instr.x] == instr.kk)

    def _sneByte(self, instr):
        return self._skipIf(self._V[instr.x] != instr.kk)

    def _seReg(self, instr):
        return self._skipIf(self._V[instr.x] == self._V[instr.y])

    def _sneReg(self, instr):
        return self._skipIf(self._V[instr.x] != self._V[instr.y])

    def _ldByte(self, instr):
        self._V[instr.x] = instr.kk
        return True

    def _addByte(self, instr):
        self._V[instr.x] = (self._V[instr.x] + instr.kk) & 0xFF
        return True

    def _ldReg(self, instr):
        self._V[instr.x] = self._V[instr.y]
        return True

    def _or(self, instr):
        self._V[instr.x] |= self._V[instr.y]
        return True

    def _and(self, instr):
        self._V[instr.x] &= self._V[instr.y]
        return True

    def _xor(self, instr):
        self._V[instr.x] ^= self._V[instr.y]
        return True

    # VF is written before the result so that x == 0xF keeps the result.

    def _addReg(self, instr):
        res = self._V[instr.x] + self._V[instr.y]
        self._V[VF] = 1 if res > 0xFF else 0
        self._V[instr.x] = res & 0xFF
        return True

    def _sub(self, instr):
        res = self._V[instr.x] - self._V[instr.y]
        self._V[VF] = 0 if res < 0 else 1
        self._V[instr.x] = res & 0xFF
        return True

    def _subn(self, instr):
        res = self._V[instr.y] - self._V[instr.x]
        self._V[VF] = 0 if res < 0 else 1
        self._V[instr.x] = res & 0xFF
        return True

    def _shr(self, instr):
        vy = self._V[instr.y]
        self._V[VF] = vy & 0x01
        self._V[instr.x] = vy >> 1
        return True

    def _shl(self, instr):
        vy = self._V[instr.y]
        self._V[VF] = (vy & 0x80) >> 7
        self._V[instr.x] = (vy << 1) & 0xFF
        return True

    def _ldI(self, instr):
        self._I = instr.nnn
        return True

    def _jpV0(self, instr):
        self._PC = (instr.nnn + self._V[0]) & ADDR_MASK
        return False

    def _rnd(self, instr):
        self._V[instr.x] = self._random.randint(0, 0xFF) & instr.kk
        return True

    def _drw(self, instr):
        sprite = self._memory.readBytes(self._I, instr.n)
        collision = self._display.drawSprite(sprite, self._V[instr.x], self._V[instr.y])
        self._V[VF] = 1 if collision else 0
        return True

    def _skp(self, instr):
        return self._skipIf(self._keypad.isPressed(self._V[instr.x]))

    def _sknp(self, instr):
        return self._skipIf(not self._keypad.isPressed(self._V[instr.x]))

    def _ldVxDT(self, instr):
        self._V[instr.x] = self._DT
        return True

    def _ldVxK(self, instr):
        # resolved by keyPressed
        self._state = WaitingForKey(instr.x)
        return False

    def _ldDTVx(self, instr):
        self._DT = self._V[instr.x]
        return True

    def _ldSTVx(self, instr):
        self._ST = self._V[instr.x]
        return True

    def _addIVx(self, instr):
        res = self._I + self._V[instr.x]
        self._V[VF] = 1 if res > I_BOUND else 0
        self._I = res & 0xFFFF
        return True

    def _ldFVx(self, instr):
        self._I = self._memory.fontAddress(self._V[instr.x])
        return True

    def _ldBVx(self, instr):
        vx = self._V[instr.x]
        self._memory.writeByte(self._I, vx // 100)
        self._memory.writeByte(self._I + 1, (vx // 10) % 10)
        self._memory.writeByte(self._I + 2, vx % 10)
        return True

    def _ldIVx(self, instr):
        for i in range(instr.x + 1):
            self._memory.writeByte(self._I + i, self._V[i])
        self._I = (self._I + instr.x + 1) & 0xFFFF
        return True

    def _ldVxI(self, instr):
        for i in range(instr.x + 1):
            self._V[i] = self._memory.readByte(self._I + i)
        self._I = (self._I + instr.x + 1) & 0xFFFF
        return True
