from __future__ import annotations

import asyncio
from typing import Any, Callable

import httpx
import pytest

from giphy_core.client import GiphyClient, HTTPStatusError, ListResult
from giphy_core.config.settings import settings
from giphy_core.models import Category, Media, MediaType, Pagination, TermSuggestion

API_KEY = "client-key"
OK_META = {"status": 200, "msg": "OK"}


def _media(media_id: str, title: str = "") -> dict[str, Any]:
    return {"id": media_id, "type": "gif", "title": title or media_id}


def _recording_transport(
    respond: Callable[[httpx.Request], httpx.Response],
) -> tuple[httpx.MockTransport, list[httpx.Request]]:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return respond(request)

    return httpx.MockTransport(handler), requests


@pytest.mark.asyncio
async def test_search_returns_items_and_pagination() -> None:
    pagination = {"total_count": 100, "count": 2, "offset": 0}
    transport, requests = _recording_transport(
        lambda _: httpx.Response(
            200,
            json={"data": [_media("a"), _media("b")], "pagination": pagination, "meta": OK_META},
        )
    )
    client = GiphyClient(api_key=API_KEY, transport=transport)

    result = await client.search("cats", media=MediaType.GIF, offset=0, limit=2)
    await client.aclose()

    assert isinstance(result, ListResult)
    assert [item.id for item in result.data] == ["a", "b"]
    assert all(isinstance(item, Media) for item in result.data)
    assert result.pagination == Pagination(**pagination)
    assert result.pagination.count <= 2
    assert result.pagination.count == len(result.data)

    request = requests[0]
    assert request.method == "GET"
    assert request.url.path == "/v1/gifs/search"
    assert request.url.params["q"] == "cats"
    assert request.url.params["limit"] == "2"
    assert request.url.params["api_key"] == API_KEY


@pytest.mark.asyncio
async def test_search_query_round_trips_through_reflecting_transport() -> None:
    query = "cats & dogs = 100% café ☕"

    def reflect(request: httpx.Request) -> httpx.Response:
        echoed = request.url.params["q"]
        return httpx.Response(200, json={"data": [_media("echo", title=echoed)], "meta": OK_META})

    transport, _ = _recording_transport(reflect)
    client = GiphyClient(api_key=API_KEY, transport=transport)

    result = await client.search(query)
    await client.aclose()

    assert result.data[0].title == query


@pytest.mark.asyncio
async def test_search_reports_through_completion_handler() -> None:
    transport, _ = _recording_transport(
        lambda _: httpx.Response(200, json={"data": [_media("a")], "meta": OK_META})
    )
    client = GiphyClient(api_key=API_KEY, transport=transport)
    delivered: list[tuple[Any, Any]] = []
    finished = asyncio.Event()

    def on_complete(result: Any, error: Any) -> None:
        delivered.append((result, error))
        finished.set()

    operation = client.search("cats", on_complete=on_complete)
    await finished.wait()
    await client.aclose()

    assert operation.done()
    assert len(delivered) == 1
    result, error = delivered[0]
    assert error is None
    assert result.data[0].id == "a"


@pytest.mark.asyncio
async def test_trending_translate_and_random_hit_expected_endpoints() -> None:
    def respond(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/trending"):
            return httpx.Response(200, json={"data": [_media("t1")], "meta": OK_META})
        return httpx.Response(200, json={"data": _media("single"), "meta": OK_META})

    transport, requests = _recording_transport(respond)
    client = GiphyClient(api_key=API_KEY, transport=transport)

    trending = await client.trending(limit=1, rating="g")
    translated = await client.translate("good morning", media=MediaType.STICKER)
    random_pick = await client.random("cats")
    await client.aclose()

    assert trending.data[0].id == "t1"
    assert isinstance(translated, Media)
    assert random_pick.id == "single"
    assert [request.url.path for request in requests] == [
        "/v1/gifs/trending",
        "/v1/stickers/translate",
        "/v1/gifs/random",
    ]
    assert requests[1].url.params["s"] == "good morning"
    assert requests[2].url.params["tag"] == "cats"


@pytest.mark.asyncio
async def test_get_by_id_and_ids() -> None:
    def respond(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/v1/gifs":
            ids = request.url.params["ids"].split(",")
            return httpx.Response(
                200,
                json={
                    "data": [_media(item) for item in ids],
                    "pagination": {"total_count": len(ids), "count": len(ids), "offset": 0},
                    "meta": OK_META,
                },
            )
        return httpx.Response(200, json={"data": _media("feqkVgjJpYtjy"), "meta": OK_META})

    transport, requests = _recording_transport(respond)
    client = GiphyClient(api_key=API_KEY, transport=transport)

    single = await client.get_by_id("feqkVgjJpYtjy")
    many = await client.get_by_ids(["x1", "x2"])
    await client.aclose()

    assert requests[0].url.path == "/v1/gifs/feqkVgjJpYtjy"
    assert single.id == "feqkVgjJpYtjy"
    assert [item.id for item in many.data] == ["x1", "x2"]
    assert many.pagination.count == 2


@pytest.mark.asyncio
async def test_get_by_ids_with_empty_list() -> None:
    transport, requests = _recording_transport(
        lambda _: httpx.Response(200, json={"data": [], "meta": OK_META})
    )
    client = GiphyClient(api_key=API_KEY, transport=transport)

    result = await client.get_by_ids([])
    await client.aclose()

    assert requests[0].url.params["ids"] == ""
    assert result.data == []
    assert result.pagination == Pagination(total_count=0, count=0, offset=0)


@pytest.mark.asyncio
async def test_term_suggestions_returns_terms() -> None:
    transport, requests = _recording_transport(
        lambda _: httpx.Response(200, json={"data": [{"name": "funny cats"}, {"name": "funny dogs"}], "meta": OK_META})
    )
    client = GiphyClient(api_key=API_KEY, transport=transport)

    suggestions = await client.term_suggestions("funny")
    await client.aclose()

    assert requests[0].url.path == "/v1/terms/funny"
    assert suggestions == [TermSuggestion(term="funny cats"), TermSuggestion(term="funny dogs")]


@pytest.mark.asyncio
async def test_category_browsing_chains_paths() -> None:
    def respond(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path == "/v1/gifs/categories":
            data = [{"name": "Animals", "name_encoded": "animals", "gif": _media("cover")}]
        elif path == "/v1/gifs/categories/animals" and "sort" in request.url.params:
            data = [{"name": "Cats", "name_encoded": "cats"}]
        else:
            data = [_media("cat1"), _media("cat2")]
        return httpx.Response(
            200,
            json={"data": data, "pagination": {"total_count": len(data), "count": len(data), "offset": 0}, "meta": OK_META},
        )

    transport, requests = _recording_transport(respond)
    client = GiphyClient(api_key=API_KEY, transport=transport)

    top = await client.trending_categories()
    animals = top.data[0]
    children = await client.trending_categories(animals)
    cats = children.data[0]
    content = await client.category_content(cats, limit=2)
    await client.aclose()

    assert isinstance(animals, Category)
    assert animals.encoded_path == "animals"
    assert cats.encoded_path == "animals/cats"
    assert [item.id for item in content.data] == ["cat1", "cat2"]
    assert [request.url.path for request in requests] == [
        "/v1/gifs/categories",
        "/v1/gifs/categories/animals",
        "/v1/gifs/categories/animals/cats",
    ]
    assert requests[0].url.params["sort"] == "giphy"
    assert requests[2].url.params["rating"] == "r"
    assert "sort" not in requests[2].url.params


@pytest.mark.asyncio
async def test_sub_categories_accepts_raw_path_token() -> None:
    transport, requests = _recording_transport(
        lambda _: httpx.Response(200, json={"data": [{"name": "Dogs", "name_encoded": "dogs"}], "meta": OK_META})
    )
    client = GiphyClient(api_key=API_KEY, transport=transport)

    result = await client.sub_categories("animals")
    await client.aclose()

    assert requests[0].url.path == "/v1/gifs/categories/animals"
    assert result.data[0].encoded_path == "animals/dogs"


@pytest.mark.asyncio
async def test_failed_call_leaves_client_usable() -> None:
    responses = [
        httpx.Response(500, json={"meta": {"status": 500, "msg": "Internal error"}}),
        httpx.Response(200, json={"data": [_media("ok")], "meta": OK_META}),
    ]
    transport, _ = _recording_transport(lambda _: responses.pop(0))
    client = GiphyClient(api_key=API_KEY, transport=transport)

    with pytest.raises(HTTPStatusError):
        await client.trending()
    recovered = await client.trending()
    await client.aclose()

    assert recovered.data[0].id == "ok"


@pytest.mark.asyncio
async def test_async_context_manager_closes_client() -> None:
    transport, _ = _recording_transport(lambda _: httpx.Response(200, json={"data": _media("a"), "meta": OK_META}))

    async with GiphyClient(api_key=API_KEY, transport=transport) as client:
        result = await client.random("cats")

    assert result.id == "a"


def test_missing_api_key_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "GIPHY_API_KEY", None)

    with pytest.raises(ValueError):
        GiphyClient()


def test_api_key_falls_back_to_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "GIPHY_API_KEY", "from-env")

    client = GiphyClient(transport=httpx.MockTransport(lambda _: httpx.Response(200)))

    assert client.api_key == "from-env"


def test_invalid_arguments_fail_synchronously() -> None:
    client = GiphyClient(api_key=API_KEY, transport=httpx.MockTransport(lambda _: httpx.Response(200)))

    with pytest.raises(ValueError):
        client.search("cats", limit=-1)
    with pytest.raises(ValueError):
        client.get_by_ids("abc")


@pytest.mark.asyncio
async def test_sub_categories_of_root_with_trailing_slash_chain_cleanly() -> None:
    transport, requests = _recording_transport(
        lambda _: httpx.Response(200, json={"data": [{"name": "Cats", "name_encoded": "cats"}], "meta": OK_META})
    )
    client = GiphyClient(api_key=API_KEY, transport=transport)
    animals = Category(name="Animals", name_encoded="animals", encoded_path="animals/")

    result = await client.sub_categories(animals)
    await client.aclose()

    assert requests[0].url.path == "/v1/gifs/categories/animals"
    assert result.data[0].encoded_path == "animals/cats"
