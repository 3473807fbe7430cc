from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from types import ModuleType
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class TestMethod(Protocol):
    """
    Identity of the test method currently executing.

    The context reads it once, at construction.
    """

    @property
    def full_class_name(self) -> str: ...

    @property
    def name(self) -> str: ...


@dataclass(frozen=True, slots=True)
class TestMethodInfo:
    __test__ = False

    full_class_name: str
    name: str

    @classmethod
    def from_callable(cls, func: Callable[..., Any]) -> TestMethodInfo:
        """Derive the descriptor from a function, bound method or callable object."""
        owner = getattr(func, "__self__", None)
        if owner is not None and not isinstance(owner, ModuleType):
            owner_type = owner if isinstance(owner, type) else type(owner)
            return cls(full_class_name=_qualified(owner_type), name=func.__name__)

        name = getattr(func, "__name__", None)
        if name is None:
            # Callable instance: the class is the owner, __call__ the method.
            return cls(full_class_name=_qualified(type(func)), name="__call__")

        module = getattr(func, "__module__", None) or "__main__"
        qualname = getattr(func, "__qualname__", name)
        enclosing = [part for part in qualname.split(".")[:-1] if part != "<locals>"]
        return cls(full_class_name=".".join([module, *enclosing]), name=name)


def _qualified(owner_type: type) -> str:
    qualname = owner_type.__qualname__.replace(".<locals>", "")
    return f"{owner_type.__module__}.{qualname}"
