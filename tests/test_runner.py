"""Tape runner behaviour used by the execution tests."""

import pytest

from bflang.errors import BFLangRuntimeError
from bflang.runner import TapeRunner, run_bf


def test_runs_simple_program():
    assert run_bf("+++[>++<-]>.").output == "\x06"


def test_cells_wrap():
    runner = run_bf("-")
    assert int(runner.memory[0]) == 255


def test_pointer_wraps():
    runner = run_bf("<+", memory_size=10)
    assert runner.pointer == 9
    assert int(runner.memory[9]) == 1


def test_end_of_input_reads_zero():
    runner = run_bf(",>,", input_data="a")
    assert int(runner.memory[0]) == ord("a")
    assert int(runner.memory[1]) == 0


def test_non_bf_characters_are_ignored():
    assert run_bf("hello + world .").output == "\x01"


def test_unmatched_brackets():
    with pytest.raises(BFLangRuntimeError):
        run_bf("[")
    with pytest.raises(BFLangRuntimeError):
        run_bf("]")


def test_step_limit():
    with pytest.raises(BFLangRuntimeError):
        run_bf("+[]", max_steps=100)


def test_step_by_step():
    runner = TapeRunner(4)
    runner.load("+>+")
    assert runner.step()
    assert runner.step()
    assert not runner.step()
    assert runner.finished
    assert [int(v) for v in runner.memory] == [1, 1, 0, 0]
