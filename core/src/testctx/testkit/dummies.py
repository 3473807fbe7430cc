from __future__ import annotations

from testctx.contracts import InconclusiveError, TestMethodInfo
from testctx.runtime.context import TestContext

DUMMY_METHOD = TestMethodInfo(full_class_name="dummies.DummyTests", name="dummy_test")


def passing_test(context: TestContext) -> None:
    context.write_line("running {}", context.test_name)


def failing_test(context: TestContext) -> None:
    context.write_line("about to fail")
    raise AssertionError("expected a data row")


def erroring_test(context: TestContext) -> None:
    raise RuntimeError("boom")


def inconclusive_test(context: TestContext) -> None:
    raise InconclusiveError("not enough data")


def timing_out_test(context: TestContext) -> None:
    raise TimeoutError("took too long")


class ClosingSink:
    """
    Sink whose close() can be triggered mid-write, to mimic a runner tearing
    down I/O while a late write is still running.
    """

    def __init__(self, *, close_on_write: int | None = None) -> None:
        self._lines: list[str] = []
        self._closed = False
        self._writes = 0
        self._close_on_write = close_on_write

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        self._closed = True

    def write(self, text: str) -> int:
        self._writes += 1
        if self._close_on_write is not None and self._writes >= self._close_on_write:
            self._closed = True
        if self._closed:
            raise ValueError("I/O operation on closed sink")
        self._lines.append(text)
        return len(text)

    def getvalue(self) -> str:
        return "".join(self._lines)

    def seek(self, offset: int, whence: int = 0) -> int:
        return 0

    def truncate(self, size: int | None = None) -> int:
        self._lines.clear()
        return 0
