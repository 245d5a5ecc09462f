r"""hirest - High-level REST client translating typed requests and
responses.

This package converts typed domain requests into HTTP requests, executes
them synchronously or asynchronously through an httpx-based transport,
and converts the HTTP outcome into a typed domain response or a single
``StatusError`` type.

Key Features:
    - Request validation before anything is sent
    - Per-call ignore set of status codes that are first parsed as
      normal responses (e.g. a 404 "document not found")
    - Content-type driven body decoding with a safe fallback when an
      error body cannot be parsed
    - Synchronous calls and listener-based asynchronous calls on asyncio

Example:
    ```pycon
    >>> from hirest import GetRequest, HighLevelClient, RestClient
    >>> from hirest.config import TransportConfig
    >>> with RestClient(config=TransportConfig(host="http://localhost:9200")) as transport:  # doctest: +SKIP
    ...     client = HighLevelClient(transport)
    ...     client.ping()
    ...     response = client.get(GetRequest("index", "1"))
    ...     client.exists(GetRequest("index", "2"))
    ...

    ```
"""

from __future__ import annotations

__all__ = [
    "ActionListener",
    "ActionRequest",
    "ActionRequestValidationError",
    "EntityError",
    "GetRequest",
    "GetResponse",
    "HighLevelClient",
    "MainRequest",
    "ParsingError",
    "ResponseError",
    "ResponseParseError",
    "RestClient",
    "StatusError",
    "TransportConfig",
    "WireRequest",
    "__version__",
]

from importlib.metadata import PackageNotFoundError, version

from hirest.actions import ActionRequest, GetRequest, GetResponse, MainRequest
from hirest.client import HighLevelClient
from hirest.config import TransportConfig
from hirest.exceptions import (
    ActionRequestValidationError,
    EntityError,
    ParsingError,
    ResponseError,
    ResponseParseError,
    StatusError,
)
from hirest.listener import ActionListener
from hirest.request_converters import WireRequest
from hirest.transport import RestClient

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
