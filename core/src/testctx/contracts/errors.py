from __future__ import annotations


class InvalidArgumentError(ValueError):
    pass


class DuplicatePropertyError(KeyError):
    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Property '{self.name}' already exists"


class UnsupportedOperationError(NotImplementedError):
    pass


class InconclusiveError(Exception):
    """Raised by a test body when it cannot reach a verdict."""
