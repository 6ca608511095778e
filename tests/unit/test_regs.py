import pytest
from src.toy16.regs import REGISTERS, ZERO, STATUS, reg_num, is_reg, is_writable

def test_register_order():
    assert len(REGISTERS) == 16
    assert REGISTERS[0] == "r0" and REGISTERS[13] == "r13"
    assert REGISTERS[ZERO] == "zero" and REGISTERS[STATUS] == "status"
    assert reg_num("r7") == 7

def test_names_are_case_sensitive():
    assert is_reg("zero")
    assert not is_reg("R1")
    with pytest.raises(ValueError):
        reg_num("r14")

def test_writability():
    assert is_writable("r13")
    assert not is_writable("zero")
    assert not is_writable("status")
    assert not is_writable("foo")
