"""Public API: options, results and error reports."""

import pytest

from bflang import CompileOptions, compile_file, compile_string
from bflang.errors import BFLangSyntaxError, MemoryExhaustedError
from bflang.instructions import Comment


def test_compile_result():
    result = compile_string("var $a; $a = 2; print $a;")
    assert result.ok
    assert result.bf_code == ">++<[-]>[-<+>]<."
    assert result.listing.splitlines()[0] == "# $a = 2"


def test_comments_option():
    result = compile_string("var $a; $a = 2;", options=CompileOptions(comments=False))
    assert not any(isinstance(i, Comment) for i in result.instructions)


def test_diagnostics_are_inline_and_listed():
    result = compile_string("print $ghost;")
    assert not result.ok
    assert result.bf_code == "Compiler Error: $ghost is not defined, $ghost"
    assert result.diagnostics[0].startswith("Compiler Error: $ghost is not defined")
    assert "Hint:" in result.diagnostics[0]


def test_syntax_error_report():
    with pytest.raises(BFLangSyntaxError) as info:
        compile_string("var $a;\nvar $b\nprint $a;")
    err = info.value
    assert err.line == 3
    assert "semicolon" in err.message
    assert "Hint:" in err.message
    assert ">    3 | print $a;" in err.context


def test_custom_tape_size():
    with pytest.raises(MemoryExhaustedError):
        compile_string("var $a, $b, $c;", options=CompileOptions(tape_size=2))


def test_compile_file(tmp_path):
    path = tmp_path / "prog.bfl"
    path.write_text("var $c; $c = 'x'; print $c;", encoding="utf-8")
    result = compile_file(path)
    assert result.ok
    assert result.bf_code.endswith(".")
