"""
Pydantic schemas for offender writes.
"""

from __future__ import annotations

from datetime import date, time

from pydantic import BaseModel, ConfigDict, Field


class OffenderCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    age: int = Field(..., ge=0, le=130)
    marital_status: str | None = Field(default=None, max_length=50)
    arrest_date: date | None = None
    arrest_time: time | None = None
    defendant_id: int = Field(..., gt=0)
    case_id: int | None = Field(default=None, gt=0)
