from __future__ import annotations

import enum

from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

from .errors import make_syntax_error, BFLangSyntaxError
from .lexer import Token


class IdentOp(enum.Enum):
    NONE = ''
    ADD = '+'
    SUB = '-'
    FLOOR = '_'

    @classmethod
    def from_prefix(cls, text: str) -> 'IdentOp':
        if text and text[0] in '+-_':
            return cls(text[0])
        return cls.NONE


class Expr:
    """Base class of every AST node."""


def _join(idents: Sequence['Ident']) -> str:
    return ', '.join(str(i) for i in idents)


@dataclass(frozen=True)
class Ident(Expr):
    op: IdentOp
    name: str

    @classmethod
    def from_token_text(cls, text: str) -> 'Ident':
        op = IdentOp.from_prefix(text)
        return cls(op=op, name=text.lstrip('+-_'))

    def __str__(self) -> str:
        return self.op.value + self.name


@dataclass(frozen=True)
class Lit(Expr):
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Assignment(Expr):
    lhs: Tuple[Ident, ...]
    rhs: Union[Lit, Ident]

    def __str__(self) -> str:
        return f"{_join(self.lhs)} = {self.rhs}"


@dataclass(frozen=True)
class VarDef(Expr):
    names: Tuple[Ident, ...]

    def __str__(self) -> str:
        return f"var {_join(self.names)}"


@dataclass(frozen=True)
class PrintStmt(Expr):
    names: Tuple[Ident, ...]

    def __str__(self) -> str:
        return f"print {_join(self.names)}"


@dataclass(frozen=True)
class ReadStmt(Expr):
    names: Tuple[Ident, ...]

    def __str__(self) -> str:
        return f"read {_join(self.names)}"


@dataclass(frozen=True)
class IfStmt(Expr):
    subject: Ident
    body: Tuple['Stmt', ...]

    def __str__(self) -> str:
        return f"if {self.subject} {{ {render(self.body)} }}"


@dataclass(frozen=True)
class WhileStmt(Expr):
    subject: Ident
    body: Tuple['Stmt', ...]

    def __str__(self) -> str:
        return f"while {self.subject} {{ {render(self.body)} }}"


@dataclass(frozen=True)
class FuncDec(Expr):
    name: Ident
    args: Tuple[Ident, ...]
    body: Tuple['Stmt', ...]

    def __str__(self) -> str:
        return f"def {self.name}({_join(self.args)}) {{ {render(self.body)} }}"


@dataclass(frozen=True)
class FuncCall(Expr):
    name: Ident
    args: Tuple[Ident, ...]

    def __str__(self) -> str:
        return f"{self.name}({_join(self.args)})"


@dataclass(frozen=True)
class SyntaxErrorNode(Expr):
    token: Token
    message: str

    @property
    def line(self) -> int:
        return self.token.line

    def __str__(self) -> str:
        return f"Syntax Error at {self.line}. {self.message}"

    def report(self) -> BFLangSyntaxError:
        """Build the user-facing exception, with source context when the token carries it."""
        return make_syntax_error(message=self.message, source=self.token.source, line=self.line)


@dataclass(frozen=True)
class Stmt:
    expr: Expr

    def __str__(self) -> str:
        return f"{self.expr};"


StmtCollection = List[Stmt]


def render(stmts: Sequence[Stmt]) -> str:
    """Mnemonic rendering of a statement collection; deterministic for a fixed tree."""
    return ''.join(str(s) for s in stmts)
