import pytest
from src.toy16.encoding import pack, decode, patch_imm
from src.toy16.lexer import tokenize
from src.toy16.parser import parse

def _words(src):
    return parse(tokenize(src), src).words

def test_pack_pads_to_sixteen_bits():
    assert pack(2, [(0, 4), (1, 4), (2, 4)]) == 0x2012
    assert pack(10, [(3, 4)]) == 0xA300
    assert pack(1, []) == 0x1000
    assert pack(9, [(255, 8), (0, 4)]) == 0x9FF0

def test_pack_rejects_too_many_bits():
    with pytest.raises(ValueError):
        pack(9, [(1, 8), (1, 8)])

def test_decode_fields_and_imm():
    d = decode(0x9FF3)
    assert (d.opcode, d.arg1, d.arg2, d.arg3) == (9, 15, 15, 3)
    assert d.imm == 255

def test_patch_imm_keeps_other_fields():
    assert patch_imm(0x9003, 7, 4) == 0x9073
    assert patch_imm(0x9FF3, 0, 4) == 0x9003

@pytest.mark.parametrize("src, word", [
    ("NOP", 0x0000),
    ("HALT", 0x1000),
    ("ADD r0 r1 r2", 0x2012),
    ("sub r13 zero r1", 0x3DE1),
    ("NOT status r0", 0x7F00),
    ("SET r1 r0", 0x8100),
    ("IST 255 r0", 0x9FF0),
    ("ist 5 r13", 0x905D),
    ("JMP r3", 0xA300),
    ("JIP r1 r2", 0xB120),
    ("LOD r1 r3", 0xC130),
    ("STO r1 r2", 0xD120),
    ("SHR r4 r5 r6", 0xF456),
])
def test_instruction_words(src, word):
    assert _words(src) == [word]
