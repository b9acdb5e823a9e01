"""Category tree node"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from giphy_core.models.media import Media


class Category(BaseModel):
    """
    A browsable category.

    ``encoded_path`` is the opaque token embedded in sub-category and
    category-content paths. A top category's path is its ``name_encoded``;
    a sub-category's path is ``<parent path>/<name_encoded>``.
    """

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    name_encoded: str = Field(min_length=1)
    encoded_path: str = ""
    gif: Optional[Media] = None
    subcategories: list["Category"] = Field(default_factory=list)

    @model_validator(mode="after")
    def resolve_paths(self) -> "Category":
        if not self.encoded_path:
            self.encoded_path = self.name_encoded
        self.subcategories = [sub.rebased(self.encoded_path) for sub in self.subcategories]
        return self

    def rebased(self, parent_path: str | None) -> "Category":
        """Return a copy whose path (and its children's) hangs under ``parent_path``."""
        path = f"{parent_path}/{self.name_encoded}" if parent_path else self.name_encoded
        return self.model_copy(
            update={
                "encoded_path": path,
                "subcategories": [sub.rebased(path) for sub in self.subcategories],
            }
        )
