"""Threaded pipeline: same output as the synchronous path, errors surface in the consumer."""

import pytest

from bflang import CompileOptions, compile_string
from bflang.errors import BFLangSyntaxError, MemoryExhaustedError
from bflang.pipeline import Stage, stream_compile


SOURCE = """
var $a, $b, $n;
$n = 5;
while -$n {
    $a, +$b = 'A';
    print $a, $b;
}
print $missing;
"""


def test_stream_matches_synchronous_compile():
    streamed = list(stream_compile(SOURCE))
    assert tuple(streamed) == compile_string(SOURCE).instructions


def test_threaded_option():
    threaded = compile_string(SOURCE, options=CompileOptions(threaded=True, queue_size=2))
    assert threaded.bf_code == compile_string(SOURCE).bf_code
    assert len(threaded.diagnostics) == 1


def test_tiny_queue_still_preserves_order():
    assert list(stream_compile(SOURCE, queue_size=1)) == list(stream_compile(SOURCE))


def test_syntax_error_stops_pipeline():
    with pytest.raises(BFLangSyntaxError) as info:
        list(stream_compile("var $a;\n$a = ;"))
    assert info.value.line == 2


def test_syntax_error_before_end_of_long_input():
    source = "var $a;\n$a = +$a;\n" + "var $b;\n" * 500
    with pytest.raises(BFLangSyntaxError):
        list(stream_compile(source, queue_size=1))


def test_memory_exhaustion_propagates():
    names = ", ".join(f"$v{i}" for i in range(101))
    with pytest.raises(MemoryExhaustedError):
        list(stream_compile(f"var {names};"))


def test_abandoned_stream_does_not_hang():
    source = "var $a;\n" + "$a = 1;\n" * 200
    gen = stream_compile(source, queue_size=1)
    next(gen)
    gen.close()


def test_stage_reraises_producer_error():
    def produce(put):
        put(1)
        put(2)
        raise ValueError("boom")

    stage = Stage('test', produce, 1)
    stage.start()
    seen = []
    with pytest.raises(ValueError):
        for item in stage:
            seen.append(item)
    assert seen == [1, 2]


def test_stage_drain_reraises_producer_error():
    def produce(put):
        put(1)
        put(2)
        raise ValueError("boom")

    stage = Stage('test', produce, 1)
    stage.start()
    assert next(iter(stage)) == 1
    with pytest.raises(ValueError):
        stage.drain()


def test_stage_drain_can_drop_producer_error():
    def produce(put):
        put(1)
        raise ValueError("boom")

    stage = Stage('test', produce, 1)
    stage.start()
    stage.drain(reraise=False)
    assert isinstance(stage.error, ValueError)
    assert not stage.is_alive()


def test_abandoned_stream_does_not_raise_late_errors():
    # The codegen stage runs out of tape after the consumer has stopped.
    source = "var $a;\n" + "$a = 1;\n" * 50 + "var $b, $c, $d;"
    gen = stream_compile(source, queue_size=1, tape_size=3)
    next(gen)
    gen.close()
