from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from testctx.contracts.properties import RESERVED_PROPERTY_NAMES


class RunConfigMeta(BaseModel):
    model_config = ConfigDict(extra="forbid")

    run_id: str | None = Field(default=None, min_length=1)
    tags: dict[str, str] = Field(default_factory=dict)
    notes: str | None = None


class DirectoriesConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    run_root: str | None = None


class TestEntryConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    key: str = Field(min_length=1)
    # Present only for data-driven tests; each row is handed to one iteration.
    rows: list[dict[str, Any]] | None = None


class RunConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    run: RunConfigMeta = Field(default_factory=RunConfigMeta)
    directories: DirectoriesConfig = Field(default_factory=DirectoriesConfig)
    properties: dict[str, Any] = Field(default_factory=dict)
    tests: list[TestEntryConfig] = Field(min_length=1)

    @field_validator("properties", mode="before")
    @classmethod
    def _coerce_properties_dict(cls, value: Any) -> dict[str, Any]:
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ValueError("properties must be a mapping")
        reserved = sorted(set(map(str, value)) & RESERVED_PROPERTY_NAMES)
        if reserved:
            raise ValueError(f"properties may not set reserved keys {reserved}")
        return value

    @field_validator("tests", mode="before")
    @classmethod
    def _coerce_test_entries(cls, value: Any) -> Any:
        # Bare strings are shorthand for {"key": ...}.
        if isinstance(value, list):
            return [{"key": item} if isinstance(item, str) else item for item in value]
        return value
