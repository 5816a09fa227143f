from __future__ import annotations

from typing import Callable, List, Optional

from .errors import LoopBalanceError
from .instructions import (
    AddBy,
    Comment,
    ErrorMarker,
    Instruction,
    LoopClose,
    LoopOpen,
    MoveBy,
    Print,
    Read,
    sanitize,
)


class Assembler:
    """
    Backend assembler.

    Turns cell-addressed operations into tape instructions. It tracks where
    the head is, so callers always name the cell they mean and movement is
    only emitted when the head actually has to travel. It also remembers the
    cell of every open loop, so `close_loop()` returns to it without being
    told.

    Instructions go to `emit`, any callable sink (a list's append, a queue's
    put). Without one they collect in `self.instructions`. The assembler never
    closes its sink.
    """

    def __init__(self, emit: Optional[Callable[[Instruction], None]] = None, *, comments: bool = True):
        self.instructions: List[Instruction] = []
        self._emit = emit if emit is not None else self.instructions.append
        self.comments = comments
        self.position = 0  # cell under the head
        self.loop_stack: List[int] = []
        self.error_count = 0

    def move(self, to: int) -> None:
        if to == self.position:
            return
        self._emit(MoveBy(to - self.position))
        self.position = to

    def add(self, cell: int, n: int) -> None:
        self.move(cell)
        self._emit(AddBy(n))

    def open_loop(self, cell: int) -> None:
        self.move(cell)
        self.loop_stack.append(cell)
        self._emit(LoopOpen())

    def close_loop(self) -> None:
        if not self.loop_stack:
            raise LoopBalanceError(message="close_loop() without a matching open_loop()")
        self.move(self.loop_stack[-1])
        self._emit(LoopClose())
        self.loop_stack.pop()

    def print(self, cell: int) -> None:
        self.move(cell)
        self._emit(Print())

    def read(self, cell: int) -> None:
        self.move(cell)
        self._emit(Read())

    def comment(self, text: str) -> None:
        if self.comments:
            self._emit(Comment(sanitize(text)))

    def err(self, node: object, message: str) -> None:
        self.error_count += 1
        self._emit(ErrorMarker(node=node, reason=message))

    def finish(self) -> None:
        """Check the program ended with every loop closed."""
        if self.loop_stack:
            raise LoopBalanceError(message=f"{len(self.loop_stack)} loop(s) left open at cells {self.loop_stack}")
