"""Decode Giphy response bodies into typed results."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from giphy_core.client.contracts import ListResult, ResponseShape
from giphy_core.client.errors import DecodeError, HTTPStatusError
from giphy_core.models import Category, Media, Pagination, TermSuggestion
from giphy_core.utils.logger import sanitize_log_extra

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_SUCCESS_RANGE = range(200, 300)


def parse_body(body: bytes | str) -> dict[str, Any]:
    """Parse raw bytes into the top-level JSON object."""
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DecodeError(f"Response body is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise DecodeError("Response body must be a JSON object", field="<root>")
    return payload


def service_error(payload: Optional[dict[str, Any]], status_code: int) -> Optional[HTTPStatusError]:
    """
    Return the error the service reported, if any.

    ``meta.status`` outside 2xx wins over a successful transport status. For
    a failing transport status the service message is attached when present.
    """
    meta = payload.get("meta") if isinstance(payload, dict) else None
    meta_status = _as_int(meta.get("status")) if isinstance(meta, dict) else None
    message = _service_message(payload)

    if status_code >= 400:
        return HTTPStatusError(meta_status if meta_status is not None and meta_status >= 400 else status_code, message)
    if meta_status is not None and meta_status not in _SUCCESS_RANGE:
        return HTTPStatusError(meta_status, message)
    return None


def decode(payload: dict[str, Any], shape: ResponseShape, *, root: Optional[Category] = None) -> Any:
    """
    Decode ``payload`` for ``shape``.

    Returns a ``Media`` for SINGLE_OBJECT, a ``ListResult`` for OBJECT_LIST and
    CATEGORY_LIST, and a list of ``TermSuggestion`` for SUGGESTION_LIST.
    """
    if "data" not in payload:
        raise DecodeError("Response is missing 'data'", shape=shape.value, field="data")
    data = payload["data"]

    if shape is ResponseShape.SINGLE_OBJECT:
        if not isinstance(data, dict):
            raise DecodeError("Expected 'data' to be an object", shape=shape.value, field="data")
        return _build(Media, data, shape, "data")

    if not isinstance(data, list):
        raise DecodeError("Expected 'data' to be an array", shape=shape.value, field="data")

    if shape is ResponseShape.SUGGESTION_LIST:
        return _build_all(TermSuggestion, data, shape)

    if shape is ResponseShape.OBJECT_LIST:
        items: list[Any] = _build_all(Media, data, shape)
    elif shape is ResponseShape.CATEGORY_LIST:
        parent_path = root.encoded_path if root is not None else None
        items = [category.rebased(parent_path) for category in _build_all(Category, data, shape)]
    else:
        raise DecodeError(f"Unsupported response shape: {shape!r}")

    return ListResult(data=items, pagination=_pagination(payload, len(items), shape))


def _build(model: type[ModelT], raw: Any, shape: ResponseShape, location: str) -> ModelT:
    try:
        return model.model_validate(raw)
    except ValidationError as exc:
        first = exc.errors()[0] if exc.errors() else {}
        loc = ".".join(str(part) for part in first.get("loc", ()))
        field = f"{location}.{loc}" if loc else location
        raise DecodeError(
            f"Invalid {model.__name__} at '{field}': {first.get('msg', 'validation failed')}",
            shape=shape.value,
            field=field,
        ) from exc


def _build_all(model: type[ModelT], raw_items: list[Any], shape: ResponseShape) -> list[ModelT]:
    return [_build(model, raw, shape, f"data[{index}]") for index, raw in enumerate(raw_items)]


def _pagination(payload: dict[str, Any], item_count: int, shape: ResponseShape) -> Pagination:
    raw = payload.get("pagination")
    if raw is None:
        return Pagination.empty()
    if not isinstance(raw, dict):
        raise DecodeError("Expected 'pagination' to be an object", shape=shape.value, field="pagination")
    try:
        pagination = Pagination.model_validate(raw)
    except ValidationError as exc:
        raise DecodeError(f"Invalid pagination: {exc}", shape=shape.value, field="pagination") from exc
    if pagination.count == item_count:
        return pagination

    # Array length is authoritative
    logger.warning(
        "Pagination count disagrees with item count",
        extra=sanitize_log_extra(shape=shape.value, pagination_count=pagination.count, item_count=item_count),
    )
    return pagination.model_copy(update={"count": item_count})


def _service_message(payload: Optional[dict[str, Any]]) -> Optional[str]:
    if not isinstance(payload, dict):
        return None
    meta = payload.get("meta")
    if isinstance(meta, dict):
        for key in ("msg", "error_code"):
            value = meta.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    message = payload.get("message")
    if isinstance(message, str) and message.strip():
        return message.strip()
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
