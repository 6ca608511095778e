from src.toy16.diagnostics import render_excerpt, parse_error, Diagnostic, ParseError

def test_single_line_caret():
    src = "NOP\nADD r0 r1 status\n"
    start = src.index("status")
    out = render_excerpt(src, start, start + 6, "not writable")
    assert out == (
        "Failed to parse code: not writable.\n"
        "ADD r0 r1 status\n"
        "          ^^^^^^\n"
        "At line 2"
    )

def test_multi_line_span():
    out = render_excerpt("ab\ncd", 1, 4, "m")
    assert out.splitlines() == [
        "Failed to parse code: m.",
        "ab",
        " ^",
        "cd",
        "^",
        "At lines 1-2",
    ]

def test_zero_width_span_still_gets_a_caret():
    out = render_excerpt("NOP", 3, 3, "x")
    assert out.splitlines()[1:] == ["NOP", "   ^", "At line 1"]

def test_empty_source():
    out = render_excerpt("", 0, 0, "x")
    assert out.endswith("At line 1")

def test_error_carries_structured_diagnostic():
    src = "NOP\n\nFOO r0\n"
    err = parse_error(src, 5, 8, "Expected a valid instruction")
    assert isinstance(err, ParseError)
    d = err.diagnostic
    assert isinstance(d, Diagnostic)
    assert (d.kind, d.start, d.end, d.source) == ("parse", 5, 8, src)
    assert d.line == 3 and d.end_line == 3
    assert str(err) == str(d) == d.render()
    assert "FOO r0\n^^^" in d.render()
