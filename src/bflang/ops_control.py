from __future__ import annotations

from typing import Optional

from .nodes import FuncCall, FuncDec, Ident, IdentOp, IfStmt, WhileStmt


class ControlFlowMixin:
    def _apply_subject_op(self, subject: Ident, cell: int) -> None:
        if subject.op is IdentOp.ADD:
            self.asm.add(cell, 1)
        elif subject.op in (IdentOp.SUB, IdentOp.FLOOR):
            self.asm.add(cell, -1)

    def _compile_block(self, body) -> None:
        self.state.enter_scope()
        try:
            self._compile_statements(body)
        finally:
            self.state.exit_scope()

    def _compile_while(self, stmt: WhileStmt) -> None:
        """
        while $x { body }

        BF Code Pattern: x[ body op ]
        where op is `+` for +$x, `-` for -$x and _$x, nothing for $x.

        An undefined subject is reported and the body is still compiled, keyed
        on a zero temporary so it can never run.
        """
        cell: Optional[int] = self._resolve(stmt.subject)
        guard = None
        if cell is None:
            guard = self._allocate_temp()

        self.asm.open_loop(guard if cell is None else cell)
        self._compile_block(stmt.body)
        if cell is not None:
            self._apply_subject_op(stmt.subject, cell)
        self.asm.close_loop()

        if guard is not None:
            self._free_temp(guard)

    def _compile_if(self, stmt: IfStmt) -> None:
        """
        if $x { body }

        BF Code Pattern (flag f and scratch s start at zero):
        1. Copy x into f:   x[- f+ s+ x] s[- x+ s]
        2. Run once:        f[ f[-] body op f]

        The subject keeps its value; its operator is applied inside the taken
        branch, the same way `while` applies it per iteration.
        """
        cell = self._resolve(stmt.subject)
        flag = self._allocate_temp()
        if cell is not None:
            scratch = self._allocate_temp()
            self._copy_cell(cell, flag, scratch)
            self._free_temp(scratch)

        self.asm.open_loop(flag)
        self._generate_clear(flag)
        self._compile_block(stmt.body)
        if cell is not None:
            self._apply_subject_op(stmt.subject, cell)
        self.asm.close_loop()

        self._free_temp(flag)

    def _compile_func_dec(self, stmt: FuncDec) -> None:
        self.asm.err(stmt, "Functions are not implemented... yet")

    def _compile_func_call(self, stmt: FuncCall) -> None:
        self.asm.err(stmt, "Functions are not implemented... yet")
