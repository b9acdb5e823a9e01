"""Pure mapping from a logical operation to a wire-level request descriptor.

Each operation kind is a frozen dataclass that carries its own parameters
and defaults. ``build`` turns one into a ``RequestDescriptor`` without any
I/O, so identical inputs always produce identical descriptors.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Union
from urllib.parse import quote, urlencode

from giphy_core.models import Category, LanguageType, MediaType, RatingType

DEFAULT_MEDIA = MediaType.GIF
DEFAULT_OFFSET = 0
DEFAULT_LIMIT = 25
DEFAULT_RATING = RatingType.R
DEFAULT_LANGUAGE = LanguageType.ENGLISH
DEFAULT_CATEGORY_SORT = "giphy"

API_KEY_PARAM = "api_key"

CategoryRef = Union[Category, str]


def _normalize_enum(instance: object, name: str, enum_type: type) -> None:
    value = getattr(instance, name)
    if not isinstance(value, enum_type):
        try:
            value = enum_type(value)
        except ValueError:
            # Accept member names too, e.g. "gif" or "sticker"
            member = enum_type.__members__.get(str(value).upper().replace("-", ""))
            if member is None:
                raise ValueError(f"Unsupported {name}: {value!r}") from None
            value = member
        object.__setattr__(instance, name, value)


def _check_window(offset: int, limit: int) -> None:
    if offset < 0:
        raise ValueError(f"offset must be >= 0, got {offset}")
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")


def category_path(root: CategoryRef) -> str:
    """Opaque path token for a category object or a raw token string."""
    path = root.encoded_path if isinstance(root, Category) else str(root)
    path = path.strip("/")
    if not path:
        raise ValueError("category path must not be empty")
    return path


@dataclass(frozen=True)
class Search:
    query: str
    media: MediaType = DEFAULT_MEDIA
    offset: int = DEFAULT_OFFSET
    limit: int = DEFAULT_LIMIT
    rating: RatingType = DEFAULT_RATING
    lang: LanguageType = DEFAULT_LANGUAGE

    def __post_init__(self) -> None:
        _normalize_enum(self, "media", MediaType)
        _normalize_enum(self, "rating", RatingType)
        _normalize_enum(self, "lang", LanguageType)
        _check_window(self.offset, self.limit)


@dataclass(frozen=True)
class Trending:
    media: MediaType = DEFAULT_MEDIA
    offset: int = DEFAULT_OFFSET
    limit: int = DEFAULT_LIMIT
    rating: RatingType = DEFAULT_RATING

    def __post_init__(self) -> None:
        _normalize_enum(self, "media", MediaType)
        _normalize_enum(self, "rating", RatingType)
        _check_window(self.offset, self.limit)


@dataclass(frozen=True)
class Translate:
    term: str
    media: MediaType = DEFAULT_MEDIA
    rating: RatingType = DEFAULT_RATING
    lang: LanguageType = DEFAULT_LANGUAGE

    def __post_init__(self) -> None:
        _normalize_enum(self, "media", MediaType)
        _normalize_enum(self, "rating", RatingType)
        _normalize_enum(self, "lang", LanguageType)


@dataclass(frozen=True)
class Random:
    query: str
    media: MediaType = DEFAULT_MEDIA
    rating: RatingType = DEFAULT_RATING

    def __post_init__(self) -> None:
        _normalize_enum(self, "media", MediaType)
        _normalize_enum(self, "rating", RatingType)


@dataclass(frozen=True)
class Get:
    id: str
    media: MediaType = DEFAULT_MEDIA

    def __post_init__(self) -> None:
        _normalize_enum(self, "media", MediaType)
        if not str(self.id).strip():
            raise ValueError("id must not be empty")


@dataclass(frozen=True)
class GetAll:
    ids: tuple[str, ...] = ()
    media: MediaType = DEFAULT_MEDIA

    def __post_init__(self) -> None:
        _normalize_enum(self, "media", MediaType)
        if isinstance(self.ids, (str, bytes)):
            raise ValueError("ids must be a sequence of ids, not a single string")
        object.__setattr__(self, "ids", tuple(str(item) for item in self.ids))


@dataclass(frozen=True)
class TermSuggestions:
    term: str


@dataclass(frozen=True)
class Categories:
    media: MediaType = DEFAULT_MEDIA
    offset: int = DEFAULT_OFFSET
    limit: int = DEFAULT_LIMIT
    sort: str = DEFAULT_CATEGORY_SORT

    def __post_init__(self) -> None:
        _normalize_enum(self, "media", MediaType)
        _check_window(self.offset, self.limit)


@dataclass(frozen=True)
class SubCategories:
    path: str
    media: MediaType = DEFAULT_MEDIA
    offset: int = DEFAULT_OFFSET
    limit: int = DEFAULT_LIMIT
    sort: str = DEFAULT_CATEGORY_SORT

    def __post_init__(self) -> None:
        _normalize_enum(self, "media", MediaType)
        object.__setattr__(self, "path", category_path(self.path))
        _check_window(self.offset, self.limit)


@dataclass(frozen=True)
class CategoryContent:
    path: str
    media: MediaType = DEFAULT_MEDIA
    offset: int = DEFAULT_OFFSET
    limit: int = DEFAULT_LIMIT
    rating: RatingType = DEFAULT_RATING
    lang: LanguageType = DEFAULT_LANGUAGE

    def __post_init__(self) -> None:
        _normalize_enum(self, "media", MediaType)
        _normalize_enum(self, "rating", RatingType)
        _normalize_enum(self, "lang", LanguageType)
        object.__setattr__(self, "path", category_path(self.path))
        _check_window(self.offset, self.limit)


OperationKind = Union[
    Search,
    Trending,
    Translate,
    Random,
    Get,
    GetAll,
    TermSuggestions,
    Categories,
    SubCategories,
    CategoryContent,
]


@dataclass(frozen=True)
class RequestDescriptor:
    """Fully resolved request, ready to hand to the transport."""

    method: str
    path: str
    query: tuple[tuple[str, str], ...] = ()
    api_key: str = field(default="", repr=False)

    @property
    def query_params(self) -> tuple[tuple[str, str], ...]:
        return self.query + ((API_KEY_PARAM, self.api_key),)

    @property
    def query_string(self) -> str:
        # quote (not quote_plus) so spaces go out as %20; commas stay literal for ids
        return urlencode(self.query_params, quote_via=quote, safe=",")

    def url(self, base_url: str) -> str:
        return f"{base_url.rstrip('/')}{self.path}?{self.query_string}"


def _segment(value: str) -> str:
    return quote(value, safe="")


def _build_search(op: Search) -> tuple[str, list[tuple[str, str]]]:
    return f"/{op.media.value}/search", [
        ("q", op.query),
        ("offset", str(op.offset)),
        ("limit", str(op.limit)),
        ("rating", op.rating.value),
        ("lang", op.lang.value),
    ]


def _build_trending(op: Trending) -> tuple[str, list[tuple[str, str]]]:
    return f"/{op.media.value}/trending", [
        ("offset", str(op.offset)),
        ("limit", str(op.limit)),
        ("rating", op.rating.value),
    ]


def _build_translate(op: Translate) -> tuple[str, list[tuple[str, str]]]:
    return f"/{op.media.value}/translate", [
        ("s", op.term),
        ("rating", op.rating.value),
        ("lang", op.lang.value),
    ]


def _build_random(op: Random) -> tuple[str, list[tuple[str, str]]]:
    return f"/{op.media.value}/random", [
        ("tag", op.query),
        ("rating", op.rating.value),
    ]


def _build_get(op: Get) -> tuple[str, list[tuple[str, str]]]:
    return f"/{op.media.value}/{_segment(op.id)}", []


def _build_get_all(op: GetAll) -> tuple[str, list[tuple[str, str]]]:
    return f"/{op.media.value}", [("ids", ",".join(op.ids))]


def _build_term_suggestions(op: TermSuggestions) -> tuple[str, list[tuple[str, str]]]:
    return f"/terms/{_segment(op.term)}", []


def _build_categories(op: Categories) -> tuple[str, list[tuple[str, str]]]:
    return f"/{op.media.value}/categories", [
        ("offset", str(op.offset)),
        ("limit", str(op.limit)),
        ("sort", op.sort),
    ]


def _build_sub_categories(op: SubCategories) -> tuple[str, list[tuple[str, str]]]:
    return f"/{op.media.value}/categories/{quote(op.path, safe='/')}", [
        ("offset", str(op.offset)),
        ("limit", str(op.limit)),
        ("sort", op.sort),
    ]


def _build_category_content(op: CategoryContent) -> tuple[str, list[tuple[str, str]]]:
    return f"/{op.media.value}/categories/{quote(op.path, safe='/')}", [
        ("offset", str(op.offset)),
        ("limit", str(op.limit)),
        ("rating", op.rating.value),
        ("lang", op.lang.value),
    ]


_BUILDERS: dict[type, Callable[..., tuple[str, list[tuple[str, str]]]]] = {
    Search: _build_search,
    Trending: _build_trending,
    Translate: _build_translate,
    Random: _build_random,
    Get: _build_get,
    GetAll: _build_get_all,
    TermSuggestions: _build_term_suggestions,
    Categories: _build_categories,
    SubCategories: _build_sub_categories,
    CategoryContent: _build_category_content,
}


def build(operation: OperationKind, api_key: str) -> RequestDescriptor:
    """Map an operation to its request descriptor. Pure; performs no I/O."""
    builder = _BUILDERS.get(type(operation))
    if builder is None:
        raise TypeError(f"Unsupported operation: {type(operation).__name__}")
    path, query = builder(operation)
    return RequestDescriptor(method="GET", path=path, query=tuple(query), api_key=api_key)


def categories_operation(
    root: CategoryRef | None = None,
    *,
    media: MediaType = DEFAULT_MEDIA,
    offset: int = DEFAULT_OFFSET,
    limit: int = DEFAULT_LIMIT,
    sort: str = DEFAULT_CATEGORY_SORT,
) -> Categories | SubCategories:
    """Top categories when ``root`` is None, otherwise the sub-categories of ``root``."""
    if root is None:
        return Categories(media=media, offset=offset, limit=limit, sort=sort)
    return SubCategories(path=category_path(root), media=media, offset=offset, limit=limit, sort=sort)
