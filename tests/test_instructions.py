"""Tests for opcode decoding."""

import pytest

from instructions import Op, Instruction, InvalidOpcodeError, decode


@pytest.mark.parametrize("opcode, op", [
    (0x00E0, Op.CLS),
    (0x00EE, Op.RET),
    (0x1ABC, Op.JP),
    (0x2ABC, Op.CALL),
    (0x3A12, Op.SE_BYTE),
    (0x4A12, Op.SNE_BYTE),
    (0x5AB0, Op.SE_REG),
    (0x6A12, Op.LD_BYTE),
    (0x7A12, Op.ADD_BYTE),
    (0x8AB0, Op.LD_REG),
    (0x8AB1, Op.OR),
    (0x8AB2, Op.AND),
    (0x8AB3, Op.XOR),
    (0x8AB4, Op.ADD_REG),
    (0x8AB5, Op.SUB),
    (0x8AB6, Op.SHR),
    (0x8AB7, Op.SUBN),
    (0x8ABE, Op.SHL),
    (0x9AB0, Op.SNE_REG),
    (0xAABC, Op.LD_I),
    (0xBABC, Op.JP_V0),
    (0xCA12, Op.RND),
    (0xDAB5, Op.DRW),
    (0xEA9E, Op.SKP),
    (0xEAA1, Op.SKNP),
    (0xFA07, Op.LD_VX_DT),
    (0xFA0A, Op.LD_VX_K),
    (0xFA15, Op.LD_DT_VX),
    (0xFA18, Op.LD_ST_VX),
    (0xFA1E, Op.ADD_I_VX),
    (0xFA29, Op.LD_F_VX),
    (0xFA33, Op.LD_B_VX),
    (0xFA55, Op.LD_I_VX),
    (0xFA65, Op.LD_VX_I),
])
def test_decode_families(opcode, op):
    assert decode(opcode).op == op


def test_operand_fields():
    instr = decode(0xDAB5)
    assert instr == Instruction(Op.DRW, 0xDAB5)
    assert instr.x == 0xA
    assert instr.y == 0xB
    assert instr.n == 0x5
    assert instr.kk == 0xB5
    assert instr.nnn == 0xAB5


@pytest.mark.parametrize("opcode", [
    0x0000, 0x0123, 0x00E1, 0x8008, 0x800F, 0xE000, 0xE09F, 0xF000, 0xF0FF, 0xF056,
])
def test_unknown_opcodes(opcode):
    with pytest.raises(InvalidOpcodeError) as excinfo:
        decode(opcode, 0x2F0)
    assert excinfo.value.opcode == opcode
    assert excinfo.value.PC == 0x2F0
    assert "0x%0.4X" % opcode in str(excinfo.value)


def test_register_compare_ignores_low_nibble():
    assert decode(0x5121).op == Op.SE_REG
    assert decode(0x912F).op == Op.SNE_REG
