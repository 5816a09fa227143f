from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .errors import AlreadyDefinedError
from .memory import Memory, TAPE_CELLS
from .scope import Scope


@dataclass
class CompilerState:
    """Scope chain plus tape occupancy: everything needed to resolve names to cells.

    Leaving a scope drops its names but keeps their cells occupied; cells
    come back only through `release()`.
    """
    tape_size: int = TAPE_CELLS
    memory: Memory = field(init=False)
    scope: Scope = field(init=False)

    def __post_init__(self) -> None:
        self.reset()

    def reset(self, *, tape_size: Optional[int] = None) -> None:
        if tape_size is not None:
            self.tape_size = tape_size
        self.memory = Memory(self.tape_size)
        self.scope = Scope()

    def enter_scope(self) -> None:
        self.scope = self.scope.enter()

    def exit_scope(self) -> None:
        parent = self.scope.exit()
        if parent is None:
            raise RuntimeError("Cannot exit the global scope")
        self.scope = parent

    def define(self, name: Optional[str], near: int = -1) -> int:
        # Check before allocating so a redefinition leaves memory untouched.
        if name is not None and self.scope.get_local(name) is not None:
            raise AlreadyDefinedError(message=f"{name} is already defined", name=name)
        cell = self.memory.allocate(near)
        self.scope.define(name, cell)
        return cell

    def lookup(self, name: str) -> Optional[int]:
        binding = self.scope.get(name)
        return None if binding is None else binding.cell

    def release(self, cell: int) -> None:
        """Drop the innermost unnamed binding of `cell` and free it."""
        for binding in reversed(self.scope.bindings):
            if binding.name is None and binding.cell == cell:
                self.scope.undefine(binding)
                break
        else:
            raise ValueError(f"Compiler Error: cell {cell} is not a temporary of the current scope.")
        self.memory.free(cell)
