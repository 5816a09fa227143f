from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .errors import AlreadyDefinedError


@dataclass(frozen=True)
class Binding:
    name: Optional[str]
    cell: int


class Scope:
    """One frame of the lexical scope chain.

    A frame only looks at its parent for lookups; it never owns it.
    Unnamed bindings hold compiler temporaries and are never found by name.
    """

    def __init__(self, parent: Optional['Scope'] = None):
        self.parent = parent
        self.bindings: List[Binding] = []

    def define(self, name: Optional[str], cell: int) -> Binding:
        if name is not None and self.get_local(name) is not None:
            raise AlreadyDefinedError(message=f"{name} is already defined", name=name)
        binding = Binding(name, cell)
        self.bindings.append(binding)
        return binding

    def get_local(self, name: str) -> Optional[Binding]:
        for binding in self.bindings:
            if binding.name is not None and binding.name == name:
                return binding
        return None

    def get(self, name: str) -> Optional[Binding]:
        sc: Optional[Scope] = self
        while sc is not None:
            binding = sc.get_local(name)
            if binding is not None:
                return binding
            sc = sc.parent
        return None

    def undefine(self, binding: Binding) -> None:
        try:
            self.bindings.remove(binding)
        except ValueError:
            raise KeyError(f"{binding} does not exist at this scope") from None

    def enter(self) -> 'Scope':
        return Scope(self)

    def exit(self) -> Optional['Scope']:
        return self.parent
