from __future__ import annotations

import logging

from typing import Iterable, Optional

from .assembler import Assembler
from .memory import TAPE_CELLS
from .nodes import (
    Assignment,
    FuncCall,
    FuncDec,
    Ident,
    IfStmt,
    PrintStmt,
    ReadStmt,
    Stmt,
    SyntaxErrorNode,
    VarDef,
    WhileStmt,
)
from .ops_control import ControlFlowMixin
from .ops_io import IOOpsMixin
from .ops_memory import MemoryOpsMixin
from .ops_vars import VarsOpsMixin
from .state import CompilerState


logger = logging.getLogger(__name__)


class BFLangCompiler(VarsOpsMixin, ControlFlowMixin, IOOpsMixin, MemoryOpsMixin):
    """
    Code generator.

    Walks a parsed statement collection and drives an Assembler.

    Memory Layout:
    - Every variable and temporary owns one tape cell, lowest free index first
    - Leaving a block forgets its names but keeps their cells
    - Temporaries are released once they are back to zero

    Error Handling:
    - Semantic errors (undefined or redefined names, bad operators, functions)
      become ErrorMarker instructions at the point they are found, and
      compilation carries on with the next statement
    - Running out of tape raises MemoryExhaustedError and ends everything
    """

    def __init__(self, assembler: Assembler, *, tape_size: int = TAPE_CELLS):
        self.asm = assembler
        self.state = CompilerState(tape_size=tape_size)

    # ===== Main Compilation Pipeline =====

    def compile(self, stmts: Iterable[Stmt]) -> None:
        """
        Generate code for every statement, in order.

        Does not call `finish()` on the assembler or close its sink; that is
        left to the caller so several compilers can share one output stream.
        """
        stmts = list(stmts)
        logger.debug("compiling %d top-level statements", len(stmts))
        self._compile_statements(stmts)
        logger.debug("done: %d cells in use, %d error(s)", self.state.memory.used, self.asm.error_count)

    def _compile_statements(self, stmts: Iterable[Stmt]) -> None:
        for stmt in stmts:
            self._compile_statement(stmt)

    def _compile_statement(self, stmt: Stmt) -> None:
        expr = stmt.expr

        if isinstance(expr, VarDef):
            self._compile_var_def(expr)
        elif isinstance(expr, Assignment):
            self._compile_assignment(expr)
        elif isinstance(expr, PrintStmt):
            self._compile_print(expr)
        elif isinstance(expr, ReadStmt):
            self._compile_read(expr)
        elif isinstance(expr, WhileStmt):
            self._compile_while(expr)
        elif isinstance(expr, IfStmt):
            self._compile_if(expr)
        elif isinstance(expr, FuncDec):
            self._compile_func_dec(expr)
        elif isinstance(expr, FuncCall):
            self._compile_func_call(expr)
        elif isinstance(expr, SyntaxErrorNode):
            self.asm.err(expr, str(expr))
        elif isinstance(expr, Stmt):
            self._compile_statement(expr)
        else:
            self.asm.err(expr, f"{type(expr).__name__} is not compilable")

    # ===== Name Resolution =====

    def _resolve(self, ident: Ident) -> Optional[int]:
        """Cell of `ident`, or None after reporting it as undefined."""
        cell = self.state.lookup(ident.name)
        if cell is None:
            self.asm.err(ident, f"{ident.name} is not defined")
        return cell


def compile_program(assembler: Assembler, stmts: Iterable[Stmt], *, tape_size: int = TAPE_CELLS) -> None:
    """Drive code generation for `stmts` against `assembler`; the sink is left open."""
    BFLangCompiler(assembler, tape_size=tape_size).compile(stmts)
