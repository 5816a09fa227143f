from __future__ import annotations

from typing import Dict, List, Optional

import numpy as np

from .errors import BFLangRuntimeError
from .instructions import BF_OPS


DEFAULT_MEMORY = 30000
DEFAULT_MAX_STEPS = 10_000_000


class TapeRunner:
    """Brainfuck runner over a wrapping uint8 tape."""

    def __init__(self, memory_size: int = DEFAULT_MEMORY):
        self.memory_size = memory_size
        self.reset()

    def reset(self):
        self.memory = np.zeros(self.memory_size, dtype=np.uint8)
        self.pointer = 0
        self.pc = 0
        self.input_buffer: List[str] = []
        self.output_buffer: List[str] = []
        self.bracket_map: Dict[int, int] = {}
        self.program = ""
        self.step_count = 0

    def load(self, program_text: str, input_data: str = "") -> None:
        self.reset()
        # Filter out non-Brainfuck characters
        self.program = "".join(ch for ch in program_text if ch in BF_OPS)
        self.input_buffer = list(input_data)
        self._preprocess_brackets()

    def _preprocess_brackets(self):
        stack = []
        for i, char in enumerate(self.program):
            if char == '[':
                stack.append(i)
            elif char == ']':
                if not stack:
                    raise BFLangRuntimeError(message=f"Unmatched ']' at {i}")
                start = stack.pop()
                self.bracket_map[start] = i
                self.bracket_map[i] = start
        if stack:
            raise BFLangRuntimeError(message=f"Unmatched '[' at {stack[-1]}")

    @property
    def finished(self) -> bool:
        return self.pc >= len(self.program)

    @property
    def output(self) -> str:
        return "".join(self.output_buffer)

    def step(self) -> bool:
        """Execute one instruction. Returns False once the program has ended."""
        if self.finished:
            return False

        command = self.program[self.pc]
        self.step_count += 1

        if command == '>':
            self.pointer = (self.pointer + 1) % self.memory_size
        elif command == '<':
            self.pointer = (self.pointer - 1) % self.memory_size
        elif command == '+':
            self.memory[self.pointer] = np.uint8((int(self.memory[self.pointer]) + 1) % 256)
        elif command == '-':
            self.memory[self.pointer] = np.uint8((int(self.memory[self.pointer]) - 1) % 256)
        elif command == '.':
            self.output_buffer.append(chr(self.memory[self.pointer]))
        elif command == ',':
            # End of input reads as 0
            value = ord(self.input_buffer.pop(0)) if self.input_buffer else 0
            self.memory[self.pointer] = np.uint8(value % 256)
        elif command == '[':
            if self.memory[self.pointer] == 0:
                self.pc = self.bracket_map[self.pc]
        elif command == ']':
            if self.memory[self.pointer] != 0:
                self.pc = self.bracket_map[self.pc]

        self.pc += 1
        return not self.finished

    def run(self, max_steps: Optional[int] = DEFAULT_MAX_STEPS) -> str:
        while self.step():
            if max_steps is not None and self.step_count >= max_steps:
                raise BFLangRuntimeError(message=f"Step limit exceeded ({max_steps})")
        return self.output


def run_bf(code: str, input_data: str = "", *, memory_size: int = DEFAULT_MEMORY,
           max_steps: Optional[int] = DEFAULT_MAX_STEPS) -> TapeRunner:
    """Load and run `code`; returns the runner so callers can inspect memory and output."""
    runner = TapeRunner(memory_size)
    runner.load(code, input_data)
    runner.run(max_steps)
    return runner
