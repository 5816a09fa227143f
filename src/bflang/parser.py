from __future__ import annotations

from typing import Iterable, Iterator, List, NamedTuple, Optional, Tuple

from .lexer import Token, TokenKind
from .nodes import (
    Assignment,
    Expr,
    FuncCall,
    FuncDec,
    Ident,
    IdentOp,
    IfStmt,
    Lit,
    PrintStmt,
    ReadStmt,
    Stmt,
    StmtCollection,
    SyntaxErrorNode,
    VarDef,
    WhileStmt,
)


class ParseResult(NamedTuple):
    statements: Optional[StmtCollection]
    error: Optional[SyntaxErrorNode]

    @property
    def ok(self) -> bool:
        return self.error is None


class _ParseFailure(Exception):
    def __init__(self, node: SyntaxErrorNode):
        super().__init__(str(node))
        self.node = node


BUFFER_SIZE = 3


class Parser:
    """
    Recursive-descent parser over a token iterator.

    Lookahead uses a small pushback buffer: `_next()` shifts a fresh token in
    (or replays a backed-up one), `_backup()` un-reads the last token. Up to
    BUFFER_SIZE - 1 consecutive backups are allowed.

    Any grammar violation aborts the whole parse; `parse()` turns it into the
    error half of a ParseResult and no partial tree escapes.
    """

    def __init__(self, tokens: Iterable[Token]):
        self._tokens: Iterator[Token] = iter(tokens)
        self._buf: List[Optional[Token]] = [None] * BUFFER_SIZE
        self._back = 0
        self._last: Optional[Token] = None

    def parse(self) -> ParseResult:
        try:
            stmts = self._parse_statements(TokenKind.EOF)
        except _ParseFailure as failure:
            return ParseResult(None, failure.node)
        return ParseResult(stmts, None)

    # ===== Token buffer =====

    def _pull(self) -> Token:
        tok = next(self._tokens, None)
        if tok is None:
            # The scanner always ends with EOF or ERROR; a bare end means a truncated stream.
            offset = self._last.offset if self._last is not None else 0
            source = self._last.source if self._last is not None else ''
            tok = Token(TokenKind.EOF, '', offset, source)
            self._fail(tok, "Unexpected end of token stream")
        self._last = tok
        return tok

    def _next(self) -> Token:
        if self._back == 0:
            self._buf[2] = self._buf[1]
            self._buf[1] = self._buf[0]
            self._buf[0] = self._pull()
        else:
            self._back -= 1
        return self._buf[self._back]

    def _backup(self) -> None:
        self._back += 1
        if self._back >= BUFFER_SIZE:
            raise RuntimeError("Backup exceeded buffer size")

    def _peek(self) -> Token:
        tok = self._next()
        self._backup()
        return tok

    # ===== Errors =====

    def _fail(self, tok: Token, message: str) -> None:
        raise _ParseFailure(SyntaxErrorNode(token=tok, message=message))

    def _unexpected(self, tok: Token) -> None:
        if tok.kind is TokenKind.ERROR:
            self._fail(tok, tok.text)
        self._fail(tok, f"Unexpected token {tok}")

    def _accept(self, kind: TokenKind) -> Token:
        tok = self._next()
        if tok.kind is not kind:
            self._unexpected(tok)
        return tok

    # ===== Grammar =====

    def _parse_statements(self, end: TokenKind) -> StmtCollection:
        stmts: StmtCollection = []
        while self._peek().kind is not end:
            stmts.append(Stmt(self._parse_statement()))
        self._accept(end)
        return stmts

    def _parse_statement(self) -> Expr:
        tok = self._next()
        if tok.kind is TokenKind.VAR:
            return VarDef(names=self._parse_ident_list(TokenKind.SEMICOLON))
        if tok.kind is TokenKind.PRINT:
            return PrintStmt(names=self._parse_ident_list(TokenKind.SEMICOLON))
        if tok.kind is TokenKind.READ:
            return ReadStmt(names=self._parse_ident_list(TokenKind.SEMICOLON))
        if tok.kind is TokenKind.DEF:
            return self._parse_func_def()
        if tok.kind is TokenKind.IF:
            subject, body = self._parse_control()
            return IfStmt(subject=subject, body=body)
        if tok.kind is TokenKind.WHILE:
            subject, body = self._parse_control()
            return WhileStmt(subject=subject, body=body)
        if tok.kind is TokenKind.IDENT:
            return self._parse_call_or_assignment()
        self._unexpected(tok)

    def _parse_call_or_assignment(self) -> Expr:
        # The leading identifier was consumed by _parse_statement; look one past it.
        following = self._peek()
        self._backup()

        if following.kind is TokenKind.OPEN_PAREN:
            return self._parse_func_call()
        if following.kind in (TokenKind.IDENT, TokenKind.EQUALS):
            return self._parse_assignment()
        self._unexpected(following)

    def _parse_func_call(self) -> FuncCall:
        name = self._parse_ident()
        self._accept(TokenKind.OPEN_PAREN)
        args = self._parse_ident_list(TokenKind.CLOSE_PAREN)
        self._accept(TokenKind.SEMICOLON)
        return FuncCall(name=name, args=args)

    def _parse_assignment(self) -> Assignment:
        lhs = self._parse_ident_list(TokenKind.EQUALS)
        rhs = self._parse_rhs()
        self._accept(TokenKind.SEMICOLON)
        return Assignment(lhs=lhs, rhs=rhs)

    def _parse_rhs(self):
        tok = self._next()
        if tok.kind is TokenKind.NUMBER:
            return Lit(value=int(tok.text))
        if tok.kind is TokenKind.CHAR:
            return Lit(value=ord(tok.text[0]))
        if tok.kind is TokenKind.IDENT:
            ident = Ident.from_token_text(tok.text)
            if ident.op not in (IdentOp.NONE, IdentOp.FLOOR):
                self._fail(tok, f"Operator {ident.op.value!r} is not allowed on the right-hand side")
            return ident
        self._unexpected(tok)

    def _parse_control(self) -> Tuple[Ident, Tuple[Stmt, ...]]:
        subject = self._parse_ident()
        self._accept(TokenKind.OPEN_BRACE)
        body = self._parse_statements(TokenKind.CLOSE_BRACE)
        return subject, tuple(body)

    def _parse_func_def(self) -> FuncDec:
        name = self._parse_ident()
        self._accept(TokenKind.OPEN_PAREN)
        args = self._parse_ident_list(TokenKind.CLOSE_PAREN)
        self._accept(TokenKind.OPEN_BRACE)
        body = self._parse_statements(TokenKind.CLOSE_BRACE)
        return FuncDec(name=name, args=args, body=tuple(body))

    def _parse_ident_list(self, end: TokenKind) -> Tuple[Ident, ...]:
        idents: List[Ident] = []
        tok = self._next()
        while tok.kind is not end:
            if tok.kind is not TokenKind.IDENT:
                self._unexpected(tok)
            idents.append(Ident.from_token_text(tok.text))
            tok = self._next()
        return tuple(idents)

    def _parse_ident(self) -> Ident:
        return Ident.from_token_text(self._accept(TokenKind.IDENT).text)


def parse(tokens: Iterable[Token]) -> ParseResult:
    """Parse a token sequence into statements, or into exactly one syntax error."""
    return Parser(tokens).parse()
