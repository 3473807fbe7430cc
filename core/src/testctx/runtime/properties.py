from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from testctx.contracts.errors import DuplicatePropertyError, InvalidArgumentError
from testctx.contracts.properties import ContextProperty


class PropertyStore:
    """
    Case-sensitive mapping of property name to value.

    Seeded from a copy of the caller's mapping; later changes to that mapping
    are not seen here.
    """

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = {}
        for key, value in (initial or {}).items():
            if not isinstance(key, str):
                raise InvalidArgumentError(
                    f"Property names must be strings, got {type(key).__name__}"
                )
            self._values[str(key)] = value

    @property
    def view(self) -> Mapping[str, Any]:
        """Read-only live view of all properties."""
        return MappingProxyType(self._values)

    def get(self, name: str) -> tuple[Any, bool]:
        """Return (value, found); a missing key yields (None, False)."""
        if name in self._values:
            return self._values[name], True
        return None, False

    def get_string(self, name: str) -> str | None:
        value = self._values.get(name)
        return value if isinstance(value, str) else None

    def get_well_known(self, key: ContextProperty) -> Any:
        value = self._values.get(key)
        return value if isinstance(value, key.value_kind) else None

    def add(self, name: str, value: Any) -> None:
        if not name:
            raise InvalidArgumentError("Property name cannot be None or empty")
        if not isinstance(name, str):
            raise InvalidArgumentError(
                f"Property names must be strings, got {type(name).__name__}"
            )
        if name in self._values:
            raise DuplicatePropertyError(name)
        self._values[str(name)] = value

    def set(self, name: str, value: Any) -> None:
        """Overwrite a property. Reserved for the context's own seeding."""
        self._values[str(name)] = value
