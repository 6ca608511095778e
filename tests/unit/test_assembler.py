import pytest
from src.toy16.assembler import assemble_text, MAX_INSTRUCTIONS
from src.toy16.diagnostics import ParseError, LexError

def test_empty_program():
    assert assemble_text("") == []
    assert assemble_text("// nothing\n/* here */") == []

def test_max_program_size():
    assert MAX_INSTRUCTIONS == 255
    assert len(assemble_text("NOP\n" * 255)) == 255

def test_too_many_instructions():
    src = "NOP\n" * 256
    with pytest.raises(ParseError) as exc:
        assemble_text(src)
    d = exc.value.diagnostic
    assert "there are 256 instructions" in d.message
    assert (d.start, d.end) == (len(src), len(src))
    assert d.line == 257
    assert d.render().splitlines()[-3:] == ["", "^", "At line 257"]

def test_label_loop_program():
    assert assemble_text("loop: NOP\nIST loop r0\nJMP r0") == [0x0000, 0x9000, 0xA000]

def test_ist_range():
    assert assemble_text("IST 255 r0") == [0x9FF0]
    with pytest.raises(ParseError, match="8-bit"):
        assemble_text("IST 256 r0")

def test_zero_never_writable():
    for src in ("ADD r0 r1 zero", "NOT r0 zero", "SET r0 zero", "IST 1 zero",
                "LOD r0 zero", "SHL r0 r1 zero"):
        with pytest.raises(ParseError, match="not a writable register"):
            assemble_text(src)

def test_first_error_wins():
    # unknown mnemonic in pass 1 beats the undefined label of pass 2
    with pytest.raises(ParseError) as exc:
        assemble_text("IST nowhere r0\nBAD")
    assert exc.value.diagnostic.message == "Expected a valid instruction"
    # a lexing error beats everything
    with pytest.raises(LexError):
        assemble_text("FOO r0 #")

def test_undefined_label_beats_capacity():
    src = "IST nowhere r0\n" + "NOP\n" * 300
    with pytest.raises(ParseError, match="label does not exist"):
        assemble_text(src)
