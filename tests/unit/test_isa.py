import pytest
from src.toy16.isa import spec, SPEC, mnemonic_for, arg_width, REG, WREG, NUM

EXPECTED = ["NOP", "HALT", "ADD", "SUB", "AND", "OR", "XOR", "NOT",
            "SET", "IST", "JMP", "JIP", "LOD", "STO", "SHL", "SHR"]

def test_opcodes_in_order():
    assert len(SPEC) == 16
    for opcode, name in enumerate(EXPECTED):
        assert spec(name).opcode == opcode
        assert mnemonic_for(opcode) == name

def test_argument_kinds():
    assert spec("nop").args == ()
    assert spec("ADD").args == (REG, REG, WREG)
    assert spec("Not").args == (REG, WREG)
    assert spec("ist").args == (NUM, WREG)
    assert spec("JMP").args == (REG,)
    assert spec("JIP").args == (REG, REG)
    assert spec("STO").args == (REG, REG)

def test_unknown_mnemonic():
    with pytest.raises(KeyError):
        spec("MOV")
    assert mnemonic_for(16) is None

def test_widths_fit_in_twelve_bits():
    assert arg_width(REG) == arg_width(WREG) == 4
    assert arg_width(NUM) == 8
    for d in SPEC.values():
        assert sum(arg_width(k) for k in d.args) <= 12

def test_table_is_read_only():
    with pytest.raises(TypeError):
        SPEC["MOV"] = spec("SET")
