from __future__ import annotations

import logging

from typing import List, Optional, Tuple

from .errors import AlreadyDefinedError
from .nodes import Assignment, Ident, IdentOp, Lit, VarDef


logger = logging.getLogger(__name__)


class VarsOpsMixin:
    def _compile_var_def(self, stmt: VarDef) -> None:
        for ident in stmt.names:
            try:
                cell = self.state.define(ident.name)
            except AlreadyDefinedError:
                self.asm.err(ident, "Cannot redefine variable within the same scope")
                continue
            logger.debug("allocated cell %d for %s", cell, ident.name)

    def _resolve_targets(self, idents) -> List[Tuple[int, Ident]]:
        # Ascending cell order keeps the pre-zero sweep moving in one direction.
        resolved = []
        for ident in idents:
            cell = self._resolve(ident)
            if cell is not None:
                resolved.append((cell, ident))
        resolved.sort(key=lambda pair: pair[0])
        return resolved

    def _compile_assignment(self, stmt: Assignment) -> None:
        """
        lhs... = rhs by destructive transfer.

        BF Code Pattern (one plain target t, rhs r):
        1. Zero t:              t[-]
        2. Drain r into t:      r[- t+ r]

        `+$t` skips step 1, `-$t` skips it and receives `-` instead of `+`.
        A literal rhs is first built in a temporary cell, which is released
        once drained.
        """
        self.asm.comment(str(stmt))

        rhs: Optional[int]
        temp = False
        if isinstance(stmt.rhs, Lit):
            rhs = self._allocate_temp()
            temp = True
            self.asm.add(rhs, stmt.rhs.value)
        else:
            rhs = self._resolve(stmt.rhs)

        lhs = self._resolve_targets(stmt.lhs)

        if rhs is None:
            # Already reported by _resolve; nothing sensible to transfer.
            return

        for cell, ident in lhs:
            if ident.op is IdentOp.NONE:
                self._generate_clear(cell)

        targets = []
        for cell, ident in lhs:
            if ident.op in (IdentOp.NONE, IdentOp.ADD):
                targets.append((cell, 1))
            elif ident.op is IdentOp.SUB:
                targets.append((cell, -1))
            else:
                self.asm.err(ident, "Invalid operator")
        self._transfer(rhs, targets)

        if temp:
            self._free_temp(rhs)
