"""Wire-level enumerations accepted by the Giphy API"""

from __future__ import annotations

from enum import Enum


class MediaType(str, Enum):
    """Media family; the value is the path segment used on the wire."""

    GIF = "gifs"
    STICKER = "stickers"
    TEXT = "text"


class RatingType(str, Enum):
    """Content rating filter."""

    Y = "y"
    G = "g"
    PG = "pg"
    PG13 = "pg-13"
    R = "r"


class LanguageType(str, Enum):
    """Language codes understood by search, translate and category content."""

    ENGLISH = "en"
    SPANISH = "es"
    PORTUGUESE = "pt"
    INDONESIAN = "id"
    FRENCH = "fr"
    ARABIC = "ar"
    TURKISH = "tr"
    THAI = "th"
    VIETNAMESE = "vi"
    GERMAN = "de"
    ITALIAN = "it"
    JAPANESE = "ja"
    CHINESE_SIMPLIFIED = "zh-CN"
    CHINESE_TRADITIONAL = "zh-TW"
    RUSSIAN = "ru"
    KOREAN = "ko"
    POLISH = "pl"
    DUTCH = "nl"
    ROMANIAN = "ro"
    HUNGARIAN = "hu"
    SWEDISH = "sv"
    CZECH = "cs"
    HINDI = "hi"
    BENGALI = "bn"
    DANISH = "da"
    FARSI = "fa"
    FILIPINO = "tl"
    FINNISH = "fi"
    HEBREW = "he"
    MALAY = "ms"
    NORWEGIAN = "no"
    UKRAINIAN = "uk"
