from enum import IntEnum
from typing import NamedTuple

class Op(IntEnum):
    CLS = 0
    RET = 1
    JP = 2
    CALL = 3
    SE_BYTE = 4
    SNE_BYTE = 5
    SE_REG = 6
    LD_BYTE = 7
    ADD_BYTE = 8
    LD_REG = 9
    OR = 10
    AND = 11
    XOR = 12
    ADD_REG = 13
    SUB = 14
    SHR = 15
    SUBN = 16
    SHL = 17
    SNE_REG = 18
    LD_I = 19
    JP_V0 = 20
    RND = 21
    DRW = 22
    SKP = 23
    SKNP = 24
    LD_VX_DT = 25
    LD_VX_K = 26
    LD_DT_VX = 27
    LD_ST_VX = 28
    ADD_I_VX = 29
    LD_F_VX = 30
    LD_B_VX = 31
    LD_I_VX = 32
    LD_VX_I = 33

class InvalidOpcodeError(Exception):
    def __init__(self, opcode, PC=None):
        if (PC is None):
            super().__init__("No such opcode: 0x%0.4X" % opcode)
        else:
            super().__init__("No such opcode: 0x%0.4X at 0x%0.3X" % (opcode, PC))
        self.opcode = opcode
        self.PC = PC

class Instruction(NamedTuple):
    op: Op
    opcode: int

    @property
    def x(self):
        return (self.opcode >> 8) & 0xF

    @property
    def y(self):
        return (self.opcode >> 4) & 0xF

    @property
    def n(self):
        return self.opcode & 0xF

    @property
    def kk(self):
        return self.opcode & 0xFF

    @property
    def nnn(self):
        return self.opcode & 0xFFF

# Sub-tables keyed by the bits that select the instruction inside a family.
_FAMILY_0x0 = {
    0xE0: Op.CLS,
    0xEE: Op.RET,
}

_FAMILY_0x8 = {
    0x0: Op.LD_REG,
    0x1: Op.OR,
    0x2: Op.AND,
    0x3: Op.XOR,
    0x4: Op.ADD_REG,
    0x5: Op.SUB,
    0x6: Op.SHR,
    0x7: Op.SUBN,
    0xE: Op.SHL,
}

_FAMILY_0xE = {
    0x9E: Op.SKP,
    0xA1: Op.SKNP,
}

_FAMILY_0xF = {
    0x07: Op.LD_VX_DT,
    0x0A: Op.LD_VX_K,
    0x15: Op.LD_DT_VX,
    0x18: Op.LD_ST_VX,
    0x1E: Op.ADD_I_VX,
    0x29: Op.LD_F_VX,
    0x33: Op.LD_B_VX,
    0x55: Op.LD_I_VX,
    0x65: Op.LD_VX_I,
}

def _lowByte(table):
    return lambda opcode: table.get(opcode & 0xFF)

def _lowNibble(table):
    return lambda opcode: table.get(opcode & 0xF)

def _always(op):
    return lambda opcode: op

_families = (
    _lowByte(_FAMILY_0x0),
    _always(Op.JP),
    _always(Op.CALL),
    _always(Op.SE_BYTE),
    _always(Op.SNE_BYTE),
    _always(Op.SE_REG),
    _always(Op.LD_BYTE),
    _always(Op.ADD_BYTE),
    _lowNibble(_FAMILY_0x8),
    _always(Op.SNE_REG),
    _always(Op.LD_I),
    _always(Op.JP_V0),
    _always(Op.RND),
    _always(Op.DRW),
    _lowByte(_FAMILY_0xE),
    _lowByte(_FAMILY_0xF),
)

def decode(opcode, PC=None):
    op = _families[(opcode >> 12) & 0xF](opcode)
    if (op is None):
        raise InvalidOpcodeError(opcode, PC)
    return Instruction(op, opcode & 0xFFFF)
