"""Media item returned by search, trending, translate, random and get"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Rendition(BaseModel):
    """One rendered variant of a media item (original, fixed_height, ...)."""

    model_config = ConfigDict(extra="ignore")

    url: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    size: Optional[int] = None
    mp4: Optional[str] = None
    webp: Optional[str] = None

    @field_validator("width", "height", "size", mode="before")
    @classmethod
    def blank_as_none(cls, value: object) -> object:
        # The API sends numbers as strings and occasionally as ""
        if isinstance(value, str) and not value.strip():
            return None
        return value


class User(BaseModel):
    """Uploader profile attached to a media item."""

    model_config = ConfigDict(extra="ignore")

    username: str = ""
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    profile_url: Optional[str] = None
    is_verified: bool = False


class Media(BaseModel):
    """A GIF, sticker or text item."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)
    type: str = "gif"
    slug: Optional[str] = None
    url: Optional[str] = None
    title: str = ""
    rating: Optional[str] = None
    source: Optional[str] = None
    embed_url: Optional[str] = None
    username: str = ""
    is_sticker: bool = False
    import_datetime: Optional[str] = None
    trending_datetime: Optional[str] = None
    images: dict[str, Rendition] = Field(default_factory=dict)
    user: Optional[User] = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    def rendition(self, name: str = "original") -> Rendition | None:
        return self.images.get(name)
