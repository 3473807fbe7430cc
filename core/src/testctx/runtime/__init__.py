"""Runtime pieces behind a test context."""

from testctx.runtime.context import TestContext
from testctx.runtime.directories import build_run_directories, resolve_run_root
from testctx.runtime.messages import MessageBuffer, MessageWriter, SinkState, TextSink
from testctx.runtime.properties import PropertyStore
from testctx.runtime.result_files import ResultFileTracker

__all__ = [
    "TestContext",
    "MessageBuffer",
    "MessageWriter",
    "SinkState",
    "TextSink",
    "PropertyStore",
    "ResultFileTracker",
    "build_run_directories",
    "resolve_run_root",
]
