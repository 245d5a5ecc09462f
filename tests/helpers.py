r"""Shared test helpers to build HTTP responses and transports.

The responses are real ``httpx.Response`` objects bound to a request,
so they behave exactly like the responses returned by the transport.
"""

from __future__ import annotations

__all__ = [
    "GET_NOT_FOUND_DOCUMENT",
    "INDEX_NOT_FOUND_DOCUMENT",
    "TEST_HOST",
    "create_response",
    "create_rest_client",
]

from typing import TYPE_CHECKING, Any

import httpx

from hirest.config import TransportConfig
from hirest.transport import RestClient

if TYPE_CHECKING:
    from collections.abc import Callable

TEST_HOST = "http://localhost:9200"

# Body of a 404 returned by get when the document does not exist
GET_NOT_FOUND_DOCUMENT = {"_index": "index", "_type": "_doc", "_id": "1", "found": False}

# Body of a 404 returned by get when the index does not exist
INDEX_NOT_FOUND_DOCUMENT = {
    "error": {
        "type": "index_not_found_exception",
        "reason": "no such index",
        "index": "index",
    },
    "status": 404,
}


def create_response(
    status_code: int,
    *,
    method: str = "GET",
    endpoint: str = "/",
    json: Any = None,
    content: bytes | None = None,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """Create an httpx.Response bound to a request on the test host.

    Args:
        status_code: The HTTP status code.
        method: The HTTP method of the originating request.
        endpoint: The path of the originating request.
        json: Optional JSON body. Sets the JSON content type.
        content: Optional raw body. Ignored if ``json`` is provided.
        headers: Optional response headers.

    Returns:
        The response.
    """
    request = httpx.Request(method, f"{TEST_HOST}{endpoint}")
    if json is not None:
        return httpx.Response(status_code, json=json, headers=headers, request=request)
    return httpx.Response(status_code, content=content, headers=headers, request=request)


def create_rest_client(
    handler: Callable[[httpx.Request], httpx.Response], **config: Any
) -> RestClient:
    """Create a RestClient whose sync and async clients call ``handler``.

    Args:
        handler: The function answering every request.
        **config: Optional TransportConfig parameters.

    Returns:
        The RestClient.
    """
    transport = httpx.MockTransport(handler)
    return RestClient(
        config=TransportConfig(host=TEST_HOST, **config),
        client=httpx.Client(transport=transport),
        async_client=httpx.AsyncClient(transport=transport),
    )
