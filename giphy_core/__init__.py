"""Async client for the Giphy search API."""

from giphy_core.client import (
    DecodeError,
    GiphyClient,
    GiphyError,
    HTTPStatusError,
    ListResult,
    Operation,
    OperationState,
    TransportError,
)
from giphy_core.models import (
    Category,
    LanguageType,
    Media,
    MediaType,
    Pagination,
    RatingType,
    TermSuggestion,
)

__version__ = "1.0.0"

__all__ = [
    "GiphyClient",
    "Operation",
    "OperationState",
    "ListResult",
    "GiphyError",
    "TransportError",
    "HTTPStatusError",
    "DecodeError",
    "Category",
    "Media",
    "MediaType",
    "Pagination",
    "RatingType",
    "LanguageType",
    "TermSuggestion",
]
