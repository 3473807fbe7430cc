from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from testctx.contracts import TestCallable, TestMethodInfo, TestNotFoundError, TestRegistry


@dataclass
class DictTestRegistry(TestRegistry):
    tests: dict[str, TestCallable]

    @classmethod
    def from_callables(cls, tests: Iterable[TestCallable]) -> DictTestRegistry:
        """Key each test by its qualified `<class>.<name>`; duplicates are rejected."""
        keyed: dict[str, TestCallable] = {}
        for test in tests:
            info = TestMethodInfo.from_callable(test)
            key = f"{info.full_class_name}.{info.name}"
            if key in keyed:
                raise ValueError(f"Test '{key}' is registered twice")
            keyed[key] = test
        return cls(tests=keyed)

    def get(self, test_key: str) -> TestCallable:
        try:
            return self.tests[test_key]
        except KeyError as e:
            known = ", ".join(sorted(self.tests)) or "none"
            raise TestNotFoundError(f"{test_key} (registered: {known})") from e

    def list(self) -> Iterable[TestMethodInfo]:
        return [TestMethodInfo.from_callable(test) for test in self.tests.values()]
