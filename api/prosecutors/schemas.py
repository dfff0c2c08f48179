"""
Pydantic schemas for prosecutor writes.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ProsecutorCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    age: int = Field(..., ge=18, le=130)
    specialization: str | None = Field(default=None, max_length=100)


class ProsecutorUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    prosecutor_id: int = Field(..., gt=0)
    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    age: int | None = Field(default=None, ge=18, le=130)
    specialization: str | None = Field(default=None, max_length=100)

    @model_validator(mode="after")
    def _has_changes(self) -> "ProsecutorUpdate":
        if not self.changes():
            raise ValueError("At least one column besides prosecutor_id must be provided.")
        return self

    def changes(self) -> dict[str, Any]:
        # Null values are treated as "leave unchanged".
        return self.model_dump(exclude={"prosecutor_id"}, exclude_none=True)
