from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

# Characters the tape machine executes; anything else is a comment to it.
BF_OPS = set("+-<>[],.")
PLACEHOLDER = '~'


class Instruction:
    """One emitted instruction: a mnemonic for tracing and a Brainfuck fragment."""

    def mnemonic(self) -> str:
        raise NotImplementedError

    def to_bf(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.mnemonic()


@dataclass(frozen=True)
class MoveBy(Instruction):
    delta: int  # net >/<

    def mnemonic(self) -> str:
        return f"MOV {self.delta:+d}"

    def to_bf(self) -> str:
        return (">" * self.delta) if self.delta > 0 else ("<" * (-self.delta))


@dataclass(frozen=True)
class AddBy(Instruction):
    n: int  # net +/- on current cell

    def mnemonic(self) -> str:
        return f"ADD {self.n}"

    def to_bf(self) -> str:
        return ("+" * self.n) if self.n > 0 else ("-" * (-self.n))


@dataclass(frozen=True)
class LoopOpen(Instruction):
    def mnemonic(self) -> str:
        return "SLOOP"

    def to_bf(self) -> str:
        return "["


@dataclass(frozen=True)
class LoopClose(Instruction):
    def mnemonic(self) -> str:
        return "ELOOP"

    def to_bf(self) -> str:
        return "]"


@dataclass(frozen=True)
class Print(Instruction):
    def mnemonic(self) -> str:
        return "PRINT"

    def to_bf(self) -> str:
        return "."


@dataclass(frozen=True)
class Read(Instruction):
    def mnemonic(self) -> str:
        return "READ"

    def to_bf(self) -> str:
        return ","


@dataclass(frozen=True)
class Comment(Instruction):
    text: str

    def mnemonic(self) -> str:
        return f"# {self.text}"

    def to_bf(self) -> str:
        return ""


@dataclass(frozen=True)
class ErrorMarker(Instruction):
    node: object
    reason: str

    def mnemonic(self) -> str:
        return f"Compiler Error: {self.reason}, {self.node}"

    def to_bf(self) -> str:
        # Same text as the mnemonic, never empty.
        return self.mnemonic()


def sanitize(text: str) -> str:
    return ''.join(PLACEHOLDER if ch in BF_OPS else ch for ch in text)


def render_bf(instructions: Iterable[Instruction]) -> str:
    return ''.join(i.to_bf() for i in instructions)


def render_mnemonics(instructions: Iterable[Instruction]) -> str:
    return '\n'.join(i.mnemonic() for i in instructions)
