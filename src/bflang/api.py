from __future__ import annotations

import logging

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from .assembler import Assembler
from .compiler import compile_program
from .errors import compile_hint
from .instructions import ErrorMarker, Instruction, render_bf, render_mnemonics
from .lexer import lex
from .memory import TAPE_CELLS
from .parser import parse
from .pipeline import stream_compile


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompileOptions:
    tape_size: int = TAPE_CELLS
    comments: bool = True
    threaded: bool = False
    queue_size: int = 64


@dataclass(frozen=True)
class CompileResult:
    bf_code: str
    instructions: Tuple[Instruction, ...]
    diagnostics: Tuple[str, ...]

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    @property
    def listing(self) -> str:
        return render_mnemonics(self.instructions)


def _diagnostic_text(marker: ErrorMarker) -> str:
    hint = compile_hint(marker.reason)
    return marker.mnemonic() if hint is None else f"{marker.mnemonic()}\nHint: {hint}"


def compile_string(source: str, *, options: Optional[CompileOptions] = None) -> CompileResult:
    """
    Compile source text to Brainfuck.

    Raises BFLangSyntaxError for lexical and syntax errors and
    MemoryExhaustedError when the program needs more cells than the tape has.
    Semantic errors do not raise: they appear inline in `bf_code` and are
    listed in `diagnostics`.
    """
    opts = options or CompileOptions()

    if opts.threaded:
        instructions: List[Instruction] = list(stream_compile(
            source, queue_size=opts.queue_size, tape_size=opts.tape_size, comments=opts.comments,
        ))
    else:
        result = parse(lex(source))
        if result.error is not None:
            raise result.error.report()
        assembler = Assembler(comments=opts.comments)
        compile_program(assembler, result.statements, tape_size=opts.tape_size)
        assembler.finish()
        instructions = assembler.instructions

    diagnostics = tuple(_diagnostic_text(i) for i in instructions if isinstance(i, ErrorMarker))
    logger.debug("compiled %d instructions with %d diagnostic(s)", len(instructions), len(diagnostics))
    return CompileResult(
        bf_code=render_bf(instructions),
        instructions=tuple(instructions),
        diagnostics=diagnostics,
    )


def compile_file(path: str | Path, *, options: Optional[CompileOptions] = None, encoding: str = "utf-8") -> CompileResult:
    p = Path(path)
    return compile_string(p.read_text(encoding=encoding), options=options)
