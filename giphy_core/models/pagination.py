"""Pagination window returned alongside list responses"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Pagination(BaseModel):
    """Total/returned/offset triple describing a partial result window."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    total_count: int = Field(default=0, ge=0)
    count: int = Field(default=0, ge=0)
    offset: int = Field(default=0, ge=0)

    @classmethod
    def empty(cls) -> "Pagination":
        return cls()
