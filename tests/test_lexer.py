"""Scanner tests: token kinds, lexemes, termination and error tokens."""

from bflang.lexer import Token, TokenKind, lex


def kinds(source):
    return [t.kind for t in lex(source)]


def texts(source):
    return [t.text for t in lex(source)]


def test_var_list():
    assert kinds("var $a, $b;") == [
        TokenKind.VAR, TokenKind.IDENT, TokenKind.IDENT, TokenKind.SEMICOLON, TokenKind.EOF,
    ]
    assert texts("var $a, $b;") == ['var', '$a', '$b', ';', '']


def test_assignment_with_operators():
    toks = list(lex("+$a, -$b = 5;"))
    assert [t.kind for t in toks] == [
        TokenKind.IDENT, TokenKind.IDENT, TokenKind.EQUALS, TokenKind.NUMBER,
        TokenKind.SEMICOLON, TokenKind.EOF,
    ]
    assert toks[0].text == '+$a'
    assert toks[1].text == '-$b'
    assert toks[3].text == '5'


def test_char_literal():
    toks = list(lex("$a = 'x';"))
    assert toks[2].kind is TokenKind.CHAR
    assert toks[2].text == 'x'
    assert toks[-1].kind is TokenKind.EOF


def test_rhs_identifier_with_floor():
    toks = list(lex("$a = _$b;"))
    assert toks[2].kind is TokenKind.IDENT
    assert toks[2].text == '_$b'


def test_comments_are_skipped():
    source = "# leading comment\nprint $a; # trailing comment"
    assert kinds(source) == [TokenKind.PRINT, TokenKind.IDENT, TokenKind.SEMICOLON, TokenKind.EOF]


def test_control_statement():
    assert kinds("while _$x { }") == [
        TokenKind.WHILE, TokenKind.IDENT, TokenKind.OPEN_BRACE, TokenKind.CLOSE_BRACE, TokenKind.EOF,
    ]
    assert kinds("if -$x {}") == [
        TokenKind.IF, TokenKind.IDENT, TokenKind.OPEN_BRACE, TokenKind.CLOSE_BRACE, TokenKind.EOF,
    ]


def test_function_definition_and_call():
    assert kinds("def $f($a, $b) { }") == [
        TokenKind.DEF, TokenKind.IDENT, TokenKind.OPEN_PAREN, TokenKind.IDENT, TokenKind.IDENT,
        TokenKind.CLOSE_PAREN, TokenKind.OPEN_BRACE, TokenKind.CLOSE_BRACE, TokenKind.EOF,
    ]
    assert kinds("$f($a);") == [
        TokenKind.IDENT, TokenKind.OPEN_PAREN, TokenKind.IDENT, TokenKind.CLOSE_PAREN,
        TokenKind.SEMICOLON, TokenKind.EOF,
    ]


def test_read_statement():
    assert kinds("read $a;") == [TokenKind.READ, TokenKind.IDENT, TokenKind.SEMICOLON, TokenKind.EOF]


def test_well_formed_sources_end_in_one_eof():
    sources = [
        "",
        "   \n\t",
        "var $a;",
        "var $a, $b; $a, +$b = 'q'; while -$a { print $a, $b; }",
        "def $f($x) { var $y; } $f($y); # done",
        "if _$x { read $x; }",
    ]
    for source in sources:
        toks = list(lex(source))
        assert toks[-1].kind is TokenKind.EOF
        assert sum(1 for t in toks if t.kind is TokenKind.EOF) == 1
        assert not any(t.kind is TokenKind.ERROR for t in toks)


def test_missing_semicolon_is_a_single_error():
    toks = list(lex("var $a"))
    assert [t.kind for t in toks] == [TokenKind.VAR, TokenKind.IDENT, TokenKind.ERROR]
    assert 'semicolon' in toks[-1].text


def test_unknown_keyword():
    toks = list(lex("foo $a;"))
    assert len(toks) == 1
    assert toks[0].kind is TokenKind.ERROR
    assert 'Unknown keyword (foo)' in toks[0].text


def test_unexpected_character_stops_scanning():
    toks = list(lex("var $a;\n@ var $b;"))
    assert toks[-1].kind is TokenKind.ERROR
    assert 'Unexpected character at statement start: @' in toks[-1].text
    assert not any(t.kind is TokenKind.EOF for t in toks)


def test_dangling_comma():
    toks = list(lex("var $a, ;"))
    assert toks[-1].kind is TokenKind.ERROR


def test_missing_sigil():
    toks = list(lex("var a;"))
    assert toks[-1].kind is TokenKind.ERROR


def test_unterminated_char_literal():
    toks = list(lex("$a = '"))
    assert toks[-1].kind is TokenKind.ERROR
    assert 'Unterminated character literal' in toks[-1].text


def test_missing_closing_quote():
    toks = list(lex("$a = 'xy';"))
    assert toks[-1].kind is TokenKind.ERROR
    assert 'closing quote' in toks[-1].text


def test_lex_is_lazy():
    tokens = lex("var $a; @@@")
    first = next(tokens)
    assert first.kind is TokenKind.VAR
    rest = list(tokens)
    assert rest[-1].kind is TokenKind.ERROR


def test_line_numbers_are_derived_from_offset():
    toks = list(lex("var $a;\n\nprint $a;"))
    assert toks[0].line == 1
    printed = [t for t in toks if t.kind is TokenKind.PRINT][0]
    assert printed.line == 3


def test_keyword_family():
    assert TokenKind.VAR.is_keyword
    assert TokenKind.READ.is_keyword
    assert not TokenKind.IDENT.is_keyword
    assert not TokenKind.EOF.is_keyword


def test_token_rendering():
    assert str(Token(TokenKind.NUMBER, '5', 0)) == 'D(5)'
    assert str(Token(TokenKind.IDENT, '$a', 0)) == 'I($a)'
    assert str(Token(TokenKind.CHAR, 'x', 0)) == 'C(x)'
    assert str(Token(TokenKind.VAR, 'var', 0)) == '<var>'
    assert str(Token(TokenKind.EOF, '', 0)) == 'EOF'
    assert str(Token(TokenKind.SEMICOLON, ';', 0)) == ';'


def test_operator_prefixes_rejected_where_names_are_bare():
    cases = {
        "var +$a;": [TokenKind.VAR],
        "_$a = 1;": [],
        "def +$f() {}": [TokenKind.DEF],
        "$f(+$a);": [TokenKind.IDENT, TokenKind.OPEN_PAREN],
    }
    for source, prefix in cases.items():
        toks = list(lex(source))
        assert [t.kind for t in toks] == prefix + [TokenKind.ERROR], source
        assert sum(t.kind is TokenKind.ERROR for t in toks) == 1, source


def test_floor_at_statement_start():
    toks = list(lex("_$a = 1;"))
    assert 'Unexpected character at statement start: _' in toks[0].text


def test_empty_char_literal():
    toks = list(lex("$a = '';"))
    assert [t.kind for t in toks] == [TokenKind.IDENT, TokenKind.EQUALS, TokenKind.ERROR]
    assert 'Empty character literal' in toks[-1].text
