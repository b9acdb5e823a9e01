"""Request routing, dispatch and decoding for the Giphy API."""

from giphy_core.client.client import GiphyClient
from giphy_core.client.contracts import (
    CategoryListResult,
    CompletionHandler,
    ListResult,
    MediaListResult,
    OperationState,
    ResponseShape,
)
from giphy_core.client.dispatcher import Dispatcher, Operation
from giphy_core.client.errors import DecodeError, GiphyError, HTTPStatusError, TransportError
from giphy_core.client.router import RequestDescriptor, build

__all__ = [
    "GiphyClient",
    "Dispatcher",
    "Operation",
    "OperationState",
    "ResponseShape",
    "ListResult",
    "MediaListResult",
    "CategoryListResult",
    "CompletionHandler",
    "RequestDescriptor",
    "build",
    "GiphyError",
    "TransportError",
    "HTTPStatusError",
    "DecodeError",
]
