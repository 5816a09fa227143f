from __future__ import annotations

from typing import List, Tuple

from .errors import MemoryExhaustedError


TAPE_CELLS = 100


class Memory:
    """
    Occupancy map of the target tape.

    Allocation is a lowest-free-index scan. The `near` hint is part of the
    interface for a future proximity-aware allocator and is currently unused.
    Running out of cells raises MemoryExhaustedError, which nothing in the
    compiler catches.
    """

    def __init__(self, size: int = TAPE_CELLS):
        if size <= 0:
            raise ValueError(f"Tape size must be positive, got {size}")
        self._cells: List[bool] = [False] * size

    def __len__(self) -> int:
        return len(self._cells)

    @property
    def used(self) -> int:
        return sum(self._cells)

    def allocate(self, near: int = -1) -> int:
        for i, occupied in enumerate(self._cells):
            if not occupied:
                self._cells[i] = True
                return i
        raise MemoryExhaustedError(message="Memory is full!", size=len(self._cells))

    def free(self, cell: int) -> None:
        self._cells[cell] = False

    def is_occupied(self, cell: int) -> bool:
        return self._cells[cell]

    def occupancy(self) -> Tuple[bool, ...]:
        return tuple(self._cells)
