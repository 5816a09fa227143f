from __future__ import annotations

import enum

from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Deque, Iterator, Optional


class TokenKind(enum.Enum):
    ERROR = 'error'
    EOF = 'eof'

    OPEN_PAREN = '('
    CLOSE_PAREN = ')'
    OPEN_BRACE = '{'
    CLOSE_BRACE = '}'
    SEMICOLON = ';'

    NUMBER = 'number'
    CHAR = 'char'

    EQUALS = '='
    IDENT = 'ident'

    DEF = 'def'
    WHILE = 'while'
    IF = 'if'
    PRINT = 'print'
    READ = 'read'
    VAR = 'var'

    @property
    def is_keyword(self) -> bool:
        return self in _KEYWORD_KINDS


_KEYWORD_KINDS = frozenset({
    TokenKind.DEF,
    TokenKind.WHILE,
    TokenKind.IF,
    TokenKind.PRINT,
    TokenKind.READ,
    TokenKind.VAR,
})


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    offset: int
    source: str = field(default='', repr=False, compare=False)

    @property
    def line(self) -> int:
        return self.source.count('\n', 0, self.offset) + 1

    def __str__(self) -> str:
        if self.kind is TokenKind.EOF:
            return 'EOF'
        if self.kind is TokenKind.ERROR:
            return f"Err: {self.text}"
        if self.kind.is_keyword:
            return f"<{self.text}>"
        if self.kind is TokenKind.NUMBER:
            return f"D({self.text})"
        if self.kind is TokenKind.IDENT:
            return f"I({self.text})"
        if self.kind is TokenKind.CHAR:
            return f"C({self.text})"
        return self.text


LETTERS = 'abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ'
DIGITS = '0123456789'
NAME_CHARS = LETTERS + DIGITS + '_'
WHITESPACE = ' \t\r\n'

# Operator glyphs accepted in front of an identifier, per position.
TARGET_PREFIXES = '+-'
SUBJECT_PREFIXES = '+-_'

State = Callable[[], Optional['State']]


class Lexer:
    """
    Finite-state scanner.

    Each state is a method that consumes some input, queues zero or more
    tokens and returns the next state. Scanning stops when a state returns
    None, which happens right after an EOF or an ERROR token is queued.
    """

    def __init__(self, source: str):
        self.source = source
        self.start = 0  # start of the pending lexeme
        self.pos = 0
        self._pending: Deque[Token] = deque()

    def tokens(self) -> Iterator[Token]:
        state: Optional[State] = self._lex_statement
        while state is not None:
            state = state()
            while self._pending:
                yield self._pending.popleft()

    # ===== Input primitives =====

    def _next(self) -> str:
        if self.pos >= len(self.source):
            # Keep pos past the end so _backup() stays symmetric.
            self.pos += 1
            return ''
        ch = self.source[self.pos]
        self.pos += 1
        return ch

    def _backup(self) -> None:
        self.pos -= 1

    def _peek(self) -> str:
        ch = self._next()
        self._backup()
        return ch

    def _accept(self, valid: str) -> bool:
        ch = self._next()
        if ch and ch in valid:
            return True
        self._backup()
        return False

    def _accept_run(self, valid: str) -> int:
        count = 0
        while self._accept(valid):
            count += 1
        return count

    def _ignore(self) -> None:
        self.start = self.pos

    def _skip_whitespace(self) -> None:
        self._accept_run(WHITESPACE)
        self._ignore()

    def _current(self) -> str:
        return self.source[self.start:min(self.pos, len(self.source))]

    def _emit(self, kind: TokenKind) -> None:
        self._pending.append(Token(kind, self._current(), self.start, self.source))
        self.start = self.pos

    def _error(self, message: str) -> None:
        offset = min(self.pos, len(self.source))
        text = f"Message: {message}\nToken: {self._current()}"
        self._pending.append(Token(TokenKind.ERROR, text, offset, self.source))
        return None

    # ===== Shared helpers =====

    def _grab_identifier(self, prefixes: str) -> bool:
        self._skip_whitespace()
        if prefixes:
            self._accept(prefixes)
        if not self._accept('$') or not self._accept(LETTERS):
            return False
        self._accept_run(NAME_CHARS)
        self._emit(TokenKind.IDENT)
        return True

    def _grab_identifier_list(self, prefixes: str) -> Optional[int]:
        """Grab `$a, $b, ...`; None means a comma was not followed by an identifier."""
        count = 0
        while True:
            if not self._grab_identifier(prefixes):
                return count if count == 0 else None
            count += 1

            self._skip_whitespace()
            if self._next() != ',':
                self._backup()
                return count

    # ===== States =====

    def _lex_statement(self) -> Optional[State]:
        self._skip_whitespace()

        ch = self._next()
        if ch == '':
            self._backup()
            self._emit(TokenKind.EOF)
            return None
        if ch == '}':
            self._emit(TokenKind.CLOSE_BRACE)
            return self._lex_statement
        if ch == '#':
            return self._lex_comment
        if ch in '$+-':
            self._backup()
            return self._lex_identifier
        if ch in LETTERS:
            self._backup()
            return self._lex_keyword
        return self._error(f"Unexpected character at statement start: {ch}")

    def _lex_comment(self) -> Optional[State]:
        while True:
            ch = self._next()
            if ch == '\n':
                break
            if ch == '':
                self._backup()
                break
        self._ignore()
        return self._lex_statement

    def _lex_end_statement(self) -> Optional[State]:
        self._skip_whitespace()
        if not self._accept(';'):
            return self._error("Expected end statement. Are you missing a semicolon?")
        self._emit(TokenKind.SEMICOLON)
        return self._lex_statement

    def _lex_keyword(self) -> Optional[State]:
        self._accept_run(LETTERS)
        word = self._current()
        if word == 'if':
            self._emit(TokenKind.IF)
            return self._lex_control_statement
        if word == 'while':
            self._emit(TokenKind.WHILE)
            return self._lex_control_statement
        if word == 'def':
            self._emit(TokenKind.DEF)
            return self._lex_function_definition
        if word == 'print':
            self._emit(TokenKind.PRINT)
            return self._lex_io_list
        if word == 'read':
            self._emit(TokenKind.READ)
            return self._lex_io_list
        if word == 'var':
            self._emit(TokenKind.VAR)
            return self._lex_var_list
        return self._error(f"Unknown keyword ({word})")

    def _lex_var_list(self) -> Optional[State]:
        if not self._grab_identifier_list(''):
            return self._error("Expected comma separated arguments list")
        return self._lex_end_statement

    def _lex_io_list(self) -> Optional[State]:
        # print/read take operators so the code generator can reject them by name.
        if not self._grab_identifier_list(SUBJECT_PREFIXES):
            return self._error("Expected comma separated arguments list")
        return self._lex_end_statement

    def _lex_function_definition(self) -> Optional[State]:
        if not self._grab_identifier(''):
            return self._error("Expected an identifier")

        self._skip_whitespace()
        if self._next() != '(':
            return self._error("Expected open bracket")
        self._emit(TokenKind.OPEN_PAREN)

        if self._grab_identifier_list('') is None:
            return self._error("Expected an identifier")

        self._skip_whitespace()
        if self._next() != ')':
            return self._error("Expected close bracket")
        self._emit(TokenKind.CLOSE_PAREN)

        self._skip_whitespace()
        if self._next() != '{':
            return self._error("Expected opening brace")
        self._emit(TokenKind.OPEN_BRACE)
        return self._lex_statement

    def _lex_control_statement(self) -> Optional[State]:
        if not self._grab_identifier(SUBJECT_PREFIXES):
            return self._error("Expected an identifier")

        self._skip_whitespace()
        if self._next() != '{':
            return self._error("Expected open brace")
        self._emit(TokenKind.OPEN_BRACE)
        return self._lex_statement

    def _lex_rhs(self) -> Optional[State]:
        self._skip_whitespace()
        if self._accept_run(DIGITS) > 0:
            self._emit(TokenKind.NUMBER)
            return self._lex_end_statement

        if self._accept("'"):
            self._ignore()
            ch = self._next()
            if ch == '':
                return self._error("Unterminated character literal")
            if ch == "'":
                return self._error("Empty character literal")
            self._emit(TokenKind.CHAR)
            if self._next() != "'":
                return self._error("Expected closing quote")
            self._ignore()
            return self._lex_end_statement

        if self._grab_identifier(SUBJECT_PREFIXES):
            return self._lex_end_statement
        return self._error("Expected identifier or literal")

    def _lex_identifier(self) -> Optional[State]:
        bare_first = self._peek() == '$'
        grabbed = self._grab_identifier_list(TARGET_PREFIXES)
        if not grabbed:
            return self._error("Expected an identifier")

        self._skip_whitespace()
        ch = self._next()
        if ch == '=':
            self._emit(TokenKind.EQUALS)
            return self._lex_rhs

        if ch == '(' and bare_first and grabbed == 1:
            self._emit(TokenKind.OPEN_PAREN)
            if self._grab_identifier_list('') is None:
                return self._error("Expected an identifier")
            self._skip_whitespace()
            if self._next() != ')':
                return self._error("Expected close paren")
            self._emit(TokenKind.CLOSE_PAREN)
            return self._lex_end_statement

        return self._error("Unexpected character after identifier list")


def lex(source: str) -> Iterator[Token]:
    """Scan `source` lazily. The sequence ends in exactly one EOF or ERROR token."""
    return Lexer(source).tokens()
