"""Public entry point: one method per Giphy endpoint."""

from __future__ import annotations

from typing import Optional, Sequence

import httpx

from giphy_core.client import router
from giphy_core.client.contracts import CompletionHandler, ResponseShape
from giphy_core.client.dispatcher import Dispatcher, Operation
from giphy_core.client.router import (
    DEFAULT_CATEGORY_SORT,
    DEFAULT_LANGUAGE,
    DEFAULT_LIMIT,
    DEFAULT_MEDIA,
    DEFAULT_OFFSET,
    DEFAULT_RATING,
    CategoryRef,
)
from giphy_core.config.settings import settings
from giphy_core.models import Category, LanguageType, MediaType, RatingType


class GiphyClient:
    """
    Async Giphy API client.

    Every endpoint method returns an ``Operation`` immediately. Await it for
    the result, pass ``on_complete`` to be called back with
    ``(result, error)``, or call ``cancel()`` to drop the result silently.

    Usage:
        async with GiphyClient(api_key="...") as client:
            results = await client.search("cats", limit=10)
            for media in results.data:
                print(media.id, media.title)
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        dispatcher: Optional[Dispatcher] = None,
    ) -> None:
        resolved_key = api_key or settings.GIPHY_API_KEY
        if not resolved_key:
            raise ValueError("A Giphy API key is required (pass api_key or set GIPHY_API_KEY)")
        self._api_key = resolved_key
        self._dispatcher = dispatcher or Dispatcher(
            base_url=base_url,
            timeout_seconds=timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> "GiphyClient":
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.aclose()

    @property
    def api_key(self) -> str:
        return self._api_key

    async def aclose(self) -> None:
        """Cancel in-flight operations and release the HTTP connection pool."""
        await self._dispatcher.aclose()

    # Search / trending

    def search(
        self,
        query: str,
        *,
        media: MediaType = DEFAULT_MEDIA,
        offset: int = DEFAULT_OFFSET,
        limit: int = DEFAULT_LIMIT,
        rating: RatingType = DEFAULT_RATING,
        lang: LanguageType = DEFAULT_LANGUAGE,
        on_complete: Optional[CompletionHandler] = None,
    ) -> Operation:
        """Search for media matching ``query``. Result: ``ListResult[Media]``."""
        operation = router.Search(query, media=media, offset=offset, limit=limit, rating=rating, lang=lang)
        return self._execute(operation, ResponseShape.OBJECT_LIST, on_complete)

    def trending(
        self,
        media: MediaType = DEFAULT_MEDIA,
        *,
        offset: int = DEFAULT_OFFSET,
        limit: int = DEFAULT_LIMIT,
        rating: RatingType = DEFAULT_RATING,
        on_complete: Optional[CompletionHandler] = None,
    ) -> Operation:
        """Currently trending media. Result: ``ListResult[Media]``."""
        operation = router.Trending(media=media, offset=offset, limit=limit, rating=rating)
        return self._execute(operation, ResponseShape.OBJECT_LIST, on_complete)

    # Single results

    def translate(
        self,
        term: str,
        *,
        media: MediaType = DEFAULT_MEDIA,
        rating: RatingType = DEFAULT_RATING,
        lang: LanguageType = DEFAULT_LANGUAGE,
        on_complete: Optional[CompletionHandler] = None,
    ) -> Operation:
        """Translate a word or phrase into a single media item. Result: ``Media``."""
        operation = router.Translate(term, media=media, rating=rating, lang=lang)
        return self._execute(operation, ResponseShape.SINGLE_OBJECT, on_complete)

    def random(
        self,
        query: str,
        *,
        media: MediaType = DEFAULT_MEDIA,
        rating: RatingType = DEFAULT_RATING,
        on_complete: Optional[CompletionHandler] = None,
    ) -> Operation:
        """A random media item tagged with ``query``. Result: ``Media``."""
        operation = router.Random(query, media=media, rating=rating)
        return self._execute(operation, ResponseShape.SINGLE_OBJECT, on_complete)

    def get_by_id(
        self,
        media_id: str,
        *,
        media: MediaType = DEFAULT_MEDIA,
        on_complete: Optional[CompletionHandler] = None,
    ) -> Operation:
        """Fetch one media item by id. Result: ``Media``."""
        operation = router.Get(media_id, media=media)
        return self._execute(operation, ResponseShape.SINGLE_OBJECT, on_complete)

    def get_by_ids(
        self,
        media_ids: Sequence[str],
        *,
        media: MediaType = DEFAULT_MEDIA,
        on_complete: Optional[CompletionHandler] = None,
    ) -> Operation:
        """Fetch several media items by id. Result: ``ListResult[Media]``."""
        operation = router.GetAll(media_ids, media=media)
        return self._execute(operation, ResponseShape.OBJECT_LIST, on_complete)

    # Terms

    def term_suggestions(
        self,
        term: str,
        *,
        on_complete: Optional[CompletionHandler] = None,
    ) -> Operation:
        """Search terms related to ``term``. Result: ``list[TermSuggestion]``."""
        operation = router.TermSuggestions(term)
        return self._execute(operation, ResponseShape.SUGGESTION_LIST, on_complete)

    # Categories

    def trending_categories(
        self,
        root: Optional[CategoryRef] = None,
        *,
        media: MediaType = DEFAULT_MEDIA,
        offset: int = DEFAULT_OFFSET,
        limit: int = DEFAULT_LIMIT,
        sort: str = DEFAULT_CATEGORY_SORT,
        on_complete: Optional[CompletionHandler] = None,
    ) -> Operation:
        """
        Browse categories. Result: ``ListResult[Category]``.

        Without ``root`` the top categories are listed; with ``root`` its
        sub-categories are listed and their ``encoded_path`` hangs under it.
        """
        operation = router.categories_operation(root, media=media, offset=offset, limit=limit, sort=sort)
        return self._execute(
            operation,
            ResponseShape.CATEGORY_LIST,
            on_complete,
            root=_as_category(root),
        )

    def sub_categories(
        self,
        root: CategoryRef,
        *,
        media: MediaType = DEFAULT_MEDIA,
        offset: int = DEFAULT_OFFSET,
        limit: int = DEFAULT_LIMIT,
        sort: str = DEFAULT_CATEGORY_SORT,
        on_complete: Optional[CompletionHandler] = None,
    ) -> Operation:
        """Sub-categories of ``root``. Result: ``ListResult[Category]``."""
        if root is None:
            raise ValueError("sub_categories requires a root category")
        return self.trending_categories(
            root, media=media, offset=offset, limit=limit, sort=sort, on_complete=on_complete
        )

    def category_content(
        self,
        root: CategoryRef,
        *,
        media: MediaType = DEFAULT_MEDIA,
        offset: int = DEFAULT_OFFSET,
        limit: int = DEFAULT_LIMIT,
        rating: RatingType = DEFAULT_RATING,
        lang: LanguageType = DEFAULT_LANGUAGE,
        on_complete: Optional[CompletionHandler] = None,
    ) -> Operation:
        """Media filed under a sub-category. Result: ``ListResult[Media]``."""
        operation = router.CategoryContent(
            router.category_path(root), media=media, offset=offset, limit=limit, rating=rating, lang=lang
        )
        return self._execute(operation, ResponseShape.OBJECT_LIST, on_complete)

    def _execute(
        self,
        operation: router.OperationKind,
        shape: ResponseShape,
        on_complete: Optional[CompletionHandler],
        *,
        root: Optional[Category] = None,
    ) -> Operation:
        descriptor = router.build(operation, self._api_key)
        return self._dispatcher.execute(descriptor, shape, on_complete, root=root)


def _as_category(root: Optional[CategoryRef]) -> Optional[Category]:
    """Root for the decoder, with the same normalized path the router sent."""
    if root is None:
        return None
    path = router.category_path(root)
    if isinstance(root, Category):
        return root.model_copy(update={"encoded_path": path})
    token = path.rsplit("/", 1)[-1]
    return Category(name=token, name_encoded=token, encoded_path=path)
