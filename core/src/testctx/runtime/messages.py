from __future__ import annotations

import io
import logging
from enum import Enum
from typing import Any, Protocol, runtime_checkable

logger = logging.getLogger("testctx.messages")

_NUL = "\0"
_NUL_ESCAPE = "\\0"


@runtime_checkable
class TextSink(Protocol):
    """In-memory text writer the runner hands to a context."""

    @property
    def closed(self) -> bool: ...

    def write(self, text: str) -> int: ...

    def getvalue(self) -> str: ...

    def seek(self, offset: int, whence: int = 0) -> int: ...

    def truncate(self, size: int | None = None) -> int: ...


class SinkState(Enum):
    OPEN = "open"
    CLOSED = "closed"


class MessageWriter(io.StringIO):
    """
    Default sink for test messages.

    Unlike a plain StringIO the text written so far stays readable after
    close(), so the runner can collect it after teardown.
    """

    def __init__(self) -> None:
        super().__init__()
        self._final_value: str | None = None

    def close(self) -> None:
        if not self.closed:
            self._final_value = super().getvalue()
        super().close()

    def getvalue(self) -> str:
        if self.closed:
            return self._final_value or ""
        return super().getvalue()


class MessageBuffer:
    """
    Append-only message log over a TextSink.

    Once the sink is closed the buffer moves to CLOSED for good: writes become
    no-ops and reads and clears work on the text captured at that point, since
    a closed sink may no longer be readable.
    """

    def __init__(self, sink: TextSink) -> None:
        self._sink = sink
        self._state = SinkState.OPEN
        self._written: list[str] = []
        self._snapshot = ""
        if sink.closed:
            self._transition_to_closed()
        else:
            self._written.append(sink.getvalue())

    @property
    def state(self) -> SinkState:
        return self._state

    @property
    def messages(self) -> str:
        if self._observe_state() is SinkState.CLOSED:
            return self._snapshot
        return self._sink.getvalue()

    def write_line(self, message: str | None, *args: Any, **kwargs: Any) -> None:
        if self._observe_state() is SinkState.CLOSED:
            return

        text = "" if message is None else message
        if args or kwargs:
            text = text.format(*args, **kwargs)
        line = text.replace(_NUL, _NUL_ESCAPE) + "\n"

        try:
            self._sink.write(line)
        except ValueError:
            # The sink was closed between the state check and the write.
            if not self._sink.closed:
                raise
            self._transition_to_closed()
            return
        self._written.append(line)

    def clear(self) -> None:
        if self._observe_state() is SinkState.CLOSED:
            self._snapshot = ""
            return
        self._written.clear()
        self._sink.seek(0)
        self._sink.truncate(0)

    def _observe_state(self) -> SinkState:
        if self._state is SinkState.OPEN and self._sink.closed:
            self._transition_to_closed()
        return self._state

    def _transition_to_closed(self) -> None:
        if self._state is SinkState.CLOSED:
            return
        self._state = SinkState.CLOSED
        try:
            self._snapshot = self._sink.getvalue()
        except ValueError:
            # Plain StringIO drops its buffer on close; keep what went through us.
            self._snapshot = "".join(self._written)
        self._written.clear()
        logger.debug("Message sink closed; further writes are ignored")
