from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


def _build_context(lines: List[str], line_no_1: int, *, context: int = 2) -> str:
    idx = max(1, line_no_1)
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
    return "\n".join(out)


def _hint_for(message: str, *, kind: str) -> Optional[str]:
    msg = message.lower()
    if kind == 'syntax':
        if 'semicolon' in msg:
            return 'Every statement ends with ";". Blocks ("while $x { ... }") do not.'
        if 'unknown keyword' in msg:
            return 'Keywords are: var, print, read, if, while, def.'
        if 'expected an identifier' in msg or 'statement start' in msg:
            return 'Variables are written with a "$" sigil, e.g. $count. Operators go before it: +$a, -$a, _$a.'
        if 'closing quote' in msg or 'character literal' in msg:
            return "Character literals hold exactly one character: 'a'."
        if 'unexpected token' in msg:
            return 'Check for a missing ";" or an unbalanced "{" / "}".'
        return None
    if kind == 'compile':
        if 'is not defined' in msg:
            return 'Declare the variable first (var $name;) and check spelling.'
        if 'redefine' in msg:
            return 'A name can only be declared once per block. Inner blocks may shadow it.'
        return None
    return None


@dataclass
class BFLangError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class BFLangSyntaxError(BFLangError):
    line: int
    context: str


@dataclass
class MemoryExhaustedError(BFLangError):
    """Every tape cell is occupied; the target machine has no heap to fall back on."""
    size: int


@dataclass
class AlreadyDefinedError(BFLangError):
    name: str


@dataclass
class LoopBalanceError(BFLangError):
    pass


@dataclass
class BFLangRuntimeError(BFLangError):
    pass


def make_syntax_error(*, message: str, source: str, line: int) -> BFLangSyntaxError:
    lines = source.split('\n')
    ctx = _build_context(lines, line)
    hint = _hint_for(message, kind='syntax')
    hint_block = f"\nHint: {hint}" if hint else ""
    return BFLangSyntaxError(
        message=f"SyntaxError: {message} (line {line})\n{ctx}{hint_block}",
        line=line,
        context=ctx,
    )


def compile_hint(message: str) -> Optional[str]:
    return _hint_for(message, kind='compile')
