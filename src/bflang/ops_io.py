from __future__ import annotations

from .nodes import IdentOp, PrintStmt, ReadStmt


class IOOpsMixin:
    def _compile_print(self, stmt: PrintStmt) -> None:
        for ident in stmt.names:
            if ident.op is not IdentOp.NONE:
                self.asm.err(ident, "Unexpected operator in print statement")

            cell = self._resolve(ident)
            if cell is not None:
                self.asm.print(cell)

    def _compile_read(self, stmt: ReadStmt) -> None:
        for ident in stmt.names:
            if ident.op is not IdentOp.NONE:
                self.asm.err(ident, "Unexpected operator in read statement")

            cell = self._resolve(ident)
            if cell is not None:
                self.asm.read(cell)
