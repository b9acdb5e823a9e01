"""Domain models"""

from giphy_core.models.category import Category
from giphy_core.models.enums import LanguageType, MediaType, RatingType
from giphy_core.models.media import Media, Rendition, User
from giphy_core.models.pagination import Pagination
from giphy_core.models.term_suggestion import TermSuggestion

GiphyObject = Media | Category | TermSuggestion

__all__ = [
    "Category",
    "GiphyObject",
    "LanguageType",
    "Media",
    "MediaType",
    "Pagination",
    "RatingType",
    "Rendition",
    "TermSuggestion",
    "User",
]
