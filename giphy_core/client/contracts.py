"""Typed contracts shared by the router, decoder and dispatcher."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar

from giphy_core.client.errors import GiphyError
from giphy_core.models import Category, Media, Pagination, TermSuggestion


T = TypeVar("T")


class ResponseShape(str, Enum):
    """Decode pattern a response body must match."""

    SINGLE_OBJECT = "single_object"
    OBJECT_LIST = "object_list"
    CATEGORY_LIST = "category_list"
    SUGGESTION_LIST = "suggestion_list"


class OperationState(str, Enum):
    """Lifecycle of one asynchronous call."""

    CREATED = "created"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL_STATES


_TERMINAL_STATES = frozenset({OperationState.COMPLETED, OperationState.CANCELLED, OperationState.FAILED})


@dataclass(slots=True)
class ListResult(Generic[T]):
    """Decoded items together with the window they were taken from."""

    data: list[T]
    pagination: Pagination = field(default_factory=Pagination.empty)

    def __len__(self) -> int:
        return len(self.data)


MediaListResult = ListResult[Media]
CategoryListResult = ListResult[Category]
TermSuggestionList = list[TermSuggestion]

CompletionHandler = Callable[[Optional[Any], Optional[GiphyError]], None]
