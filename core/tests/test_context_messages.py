import io
import logging

import pytest

from testctx import MessageWriter, TestContext, TestMethodInfo
from testctx.runtime.messages import MessageBuffer, SinkState
from testctx.testkit.dummies import DUMMY_METHOD, ClosingSink


def _context(sink=None) -> TestContext:
    return TestContext(DUMMY_METHOD, sink if sink is not None else MessageWriter(), {})


def test_write_line_appends_in_order():
    context = _context()

    context.write_line("a")
    context.write_line("b")

    assert context.messages == "a\nb\n"


def test_clear_messages_empties_buffer():
    context = _context()
    context.write_line("a")

    context.clear_messages()

    assert context.messages == ""
    context.write_line("b")
    assert context.messages == "b\n"


def test_messages_snapshot_does_not_mutate():
    context = _context()
    context.write_line("a")

    assert context.messages == context.messages == "a\n"


def test_write_line_formats_arguments():
    context = _context()

    context.write_line("{} + {} = {total}", 1, 2, total=3)

    assert context.messages == "1 + 2 = 3\n"


def test_write_line_without_arguments_keeps_braces():
    context = _context()

    context.write_line("{not a field}")

    assert context.messages == "{not a field}\n"


def test_write_line_escapes_nul():
    context = _context()

    context.write_line("x\0y")
    context.write_line("{}", "a\0b")

    assert context.messages == "x\\0y\na\\0b\n"


def test_write_line_none_writes_empty_line():
    context = _context()

    context.write_line(None)

    assert context.messages == "\n"


def test_write_after_close_is_a_no_op():
    writer = MessageWriter()
    context = _context(writer)
    context.write_line("before")

    writer.close()
    context.write_line("after")
    context.write_line("{}", "again")

    assert context.messages == "before\n"


def test_clear_after_close_empties_captured_text():
    writer = MessageWriter()
    context = _context(writer)
    context.write_line("before")
    writer.close()

    context.clear_messages()

    assert context.messages == ""
    assert writer.getvalue() == "before\n"


def test_plain_string_io_close_is_tolerated():
    sink = io.StringIO()
    buffer = MessageBuffer(sink)
    buffer.write_line("early")

    sink.close()
    buffer.write_line("late")

    assert buffer.state is SinkState.CLOSED
    assert buffer.messages == "early\n"


def test_reading_closed_plain_string_io_keeps_written_lines():
    sink = io.StringIO()
    buffer = MessageBuffer(sink)
    buffer.write_line("one")
    buffer.clear()
    buffer.write_line("two")

    sink.close()

    assert buffer.messages == "two\n"
    buffer.clear()
    assert buffer.messages == ""


def test_buffer_over_already_closed_plain_string_io_reads_empty():
    sink = io.StringIO("stale")
    sink.close()

    buffer = MessageBuffer(sink)

    assert buffer.state is SinkState.CLOSED
    assert buffer.messages == ""


def test_close_racing_a_write_flips_state_once(caplog):
    sink = ClosingSink(close_on_write=2)
    buffer = MessageBuffer(sink)

    with caplog.at_level(logging.DEBUG, logger="testctx.messages"):
        buffer.write_line("first")
        buffer.write_line("second")
        buffer.write_line("third")

    assert buffer.state is SinkState.CLOSED
    assert buffer.messages == "first\n"
    assert [r.getMessage() for r in caplog.records].count(
        "Message sink closed; further writes are ignored"
    ) == 1


def test_closed_state_is_sticky():
    sink = ClosingSink()
    buffer = MessageBuffer(sink)
    sink.close()
    buffer.write_line("x")

    sink._closed = False
    buffer.write_line("y")

    assert buffer.state is SinkState.CLOSED
    assert buffer.messages == ""


def test_value_error_from_open_sink_propagates():
    class BrokenSink(ClosingSink):
        def write(self, text: str) -> int:
            raise ValueError("bad text")

    buffer = MessageBuffer(BrokenSink())

    with pytest.raises(ValueError, match="bad text"):
        buffer.write_line("x")
    assert buffer.state is SinkState.OPEN


def test_buffer_over_closed_sink_starts_closed():
    sink = ClosingSink()
    sink.close()

    assert MessageBuffer(sink).state is SinkState.CLOSED


def test_message_writer_keeps_value_after_close():
    writer = MessageWriter()
    writer.write("kept\n")
    writer.close()
    writer.close()

    assert writer.closed
    assert writer.getvalue() == "kept\n"


def test_separate_contexts_do_not_share_messages():
    first = _context()
    second = TestContext(TestMethodInfo("pkg.Other", "other"), MessageWriter(), {})

    first.write_line("one")

    assert second.messages == ""
