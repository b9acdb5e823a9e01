"""Search term suggestion"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class TermSuggestion(BaseModel):
    """A suggested search term; the wire key is ``name``."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    term: str = Field(alias="name", min_length=1)
