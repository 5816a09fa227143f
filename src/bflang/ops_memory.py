from __future__ import annotations

from typing import Iterable, Tuple


class MemoryOpsMixin:
    def _allocate_temp(self) -> int:
        # Fresh cells are always zero: nothing is freed before being drained.
        return self.state.define(None)

    def _free_temp(self, cell: int) -> None:
        self.state.release(cell)

    def _generate_clear(self, cell: int) -> None:
        # [-]
        self.asm.open_loop(cell)
        self.asm.add(cell, -1)
        self.asm.close_loop()

    def _transfer(self, src: int, targets: Iterable[Tuple[int, int]]) -> None:
        # Drain src to zero; each (cell, step) target receives step per unit.
        self.asm.open_loop(src)
        self.asm.add(src, -1)
        for cell, step in targets:
            self.asm.add(cell, step)
        self.asm.close_loop()

    def _copy_cell(self, src: int, dest: int, temp: int) -> None:
        # dest += src, preserving src; temp must start at zero and ends at zero.
        self._transfer(src, [(dest, 1), (temp, 1)])
        self._transfer(temp, [(src, 1)])
