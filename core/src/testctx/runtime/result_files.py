from __future__ import annotations

import os

from testctx.contracts.errors import InvalidArgumentError


class ResultFileTracker:
    """Ordered list of result files, handed out once and then reset."""

    def __init__(self) -> None:
        self._paths: list[str] = []

    def add(self, path: str | os.PathLike[str]) -> None:
        if path is None or not os.fspath(path):
            raise InvalidArgumentError("Result file path cannot be None or empty")
        self._paths.append(os.path.abspath(os.fspath(path)))

    def drain(self) -> list[str] | None:
        """
        Return every recorded path and start over with an empty list.

        Returns None, not an empty list, when nothing was recorded.
        """
        if not self._paths:
            return None
        drained, self._paths = self._paths, []
        return drained
