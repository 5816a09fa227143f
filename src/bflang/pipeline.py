from __future__ import annotations

import logging
import queue
import threading

from typing import Callable, Iterator, Optional

from .assembler import Assembler
from .compiler import compile_program
from .instructions import Instruction
from .lexer import lex
from .memory import TAPE_CELLS
from .parser import parse


logger = logging.getLogger(__name__)

_DONE = object()


class Stage(threading.Thread):
    """
    One pipeline stage: a producer running on its own thread, feeding a
    bounded queue in order.

    Iterating the stage yields what the producer put, until it returns. An
    exception raised by the producer is re-raised in the consumer once the
    items emitted before it have been consumed.
    """

    def __init__(self, name: str, produce: Callable[[Callable[[object], None]], None], maxsize: int = 0):
        super().__init__(name=name, daemon=True)
        self.queue: queue.Queue = queue.Queue(maxsize)
        self._produce = produce
        self.error: Optional[BaseException] = None
        self._exhausted = False

    def run(self) -> None:
        try:
            self._produce(self.queue.put)
        except Exception as exc:
            self.error = exc
        finally:
            self.queue.put(_DONE)

    def __iter__(self):
        for item in iter(self.queue.get, _DONE):
            yield item
        self._exhausted = True
        self.join()
        if self.error is not None:
            raise self.error

    def drain(self, reraise: bool = True) -> None:
        """Consume and drop whatever is left so the producer can finish.

        Re-raises the producer's exception unless iteration already did, or
        `reraise` is False.
        """
        if self._exhausted:
            self.join()
            return
        for _ in iter(self.queue.get, _DONE):
            pass
        self._exhausted = True
        self.join()
        if reraise and self.error is not None:
            raise self.error


def stream_compile(source: str, *, queue_size: int = 64, tape_size: int = TAPE_CELLS,
                   comments: bool = True) -> Iterator[Instruction]:
    """
    Compile `source` as a chain of concurrent stages.

    scanner thread -> token queue -> parser -> codegen thread -> instruction queue -> caller

    Nothing runs until the first item is requested. A syntax error stops the
    chain before code generation starts and is raised as BFLangSyntaxError.
    Running out of tape is raised from the generator after the instructions
    emitted before it.
    """
    def scan(put):
        for tok in lex(source):
            put(tok)

    scanner = Stage('bflang-scan', scan, queue_size)
    scanner.start()
    try:
        result = parse(iter(scanner))
    finally:
        scanner.drain()

    if result.error is not None:
        logger.debug("pipeline stopped by syntax error: %s", result.error)
        raise result.error.report()

    def generate(put):
        assembler = Assembler(put, comments=comments)
        compile_program(assembler, result.statements, tape_size=tape_size)
        assembler.finish()

    codegen = Stage('bflang-codegen', generate, queue_size)
    codegen.start()
    try:
        yield from codegen
    finally:
        # Only reached unexhausted when the consumer stopped early.
        codegen.drain(reraise=False)
