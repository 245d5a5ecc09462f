r"""Converters from domain requests to ``WireRequest``.

Each converter maps one domain request to the method, endpoint, query
parameters and body of the HTTP request that implements it.
"""

from __future__ import annotations

__all__ = ["WireRequest", "build_endpoint", "exists", "get", "ping"]

from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from urllib.parse import quote

from hirest.actions import MATCH_ANY, VersionType

if TYPE_CHECKING:
    from collections.abc import Mapping

    from hirest.actions import GetRequest, MainRequest
    from hirest.core.entity import Entity


@dataclass(frozen=True)
class WireRequest:
    r"""The transport-level representation of a request.

    Attributes:
        method: The HTTP method.
        endpoint: The absolute path of the request.
        params: The query parameters.
        entity: The request body, if any.
        headers: Extra request headers.
    """

    method: str
    endpoint: str
    params: Mapping[str, str] = field(default_factory=dict)
    entity: Entity | None = None
    headers: Mapping[str, str] = field(default_factory=dict)


def build_endpoint(*parts: str | None) -> str:
    r"""Join the non-empty parts into a url-encoded absolute path.

    Args:
        *parts: The path segments. ``None`` and empty parts are skipped.

    Returns:
        The endpoint.

    Example:
        ```pycon
        >>> from hirest.request_converters import build_endpoint
        >>> build_endpoint("index", "_doc", "id/1")
        '/index/_doc/id%2F1'
        >>> build_endpoint("index", None, "")
        '/index'

        ```
    """
    return "/" + "/".join(quote(part, safe="") for part in parts if part)


def ping(request: MainRequest) -> WireRequest:  # noqa: ARG001
    return WireRequest("HEAD", "/")


def get(request: GetRequest) -> WireRequest:
    r"""Build the request that retrieves a document by id.

    Args:
        request: The get request.

    Returns:
        The ``GET /{index}/{type}/{id}`` request.

    Example:
        ```pycon
        >>> from hirest.actions import GetRequest
        >>> from hirest.request_converters import get
        >>> wire = get(GetRequest("index", "1", routing="user1", realtime=False))
        >>> wire.method, wire.endpoint
        ('GET', '/index/_doc/1')
        >>> dict(wire.params)
        {'routing': 'user1', 'realtime': 'false'}

        ```
    """
    endpoint = build_endpoint(request.index, request.type, request.id)
    return WireRequest("GET", endpoint, _get_params(request))


def exists(request: GetRequest) -> WireRequest:
    r"""Build the request that checks whether a document exists.

    Args:
        request: The get request.

    Returns:
        The ``HEAD /{index}/{type}/{id}`` request.
    """
    endpoint = build_endpoint(request.index, request.type, request.id)
    return WireRequest("HEAD", endpoint, _get_params(request))


def _get_params(request: GetRequest) -> dict[str, str]:
    params: dict[str, str] = {}
    if request.routing:
        params["routing"] = request.routing
    if request.parent:
        params["parent"] = request.parent
    if request.preference:
        params["preference"] = request.preference
    if not request.realtime:
        params["realtime"] = "false"
    if request.refresh:
        params["refresh"] = "true"
    if request.stored_fields:
        params["stored_fields"] = ",".join(request.stored_fields)
    if request.version != MATCH_ANY:
        params["version"] = str(request.version)
    if request.version_type is not VersionType.INTERNAL:
        params["version_type"] = request.version_type.value
    context = request.fetch_source_context
    if context is not None:
        if not context.fetch_source:
            params["_source"] = "false"
        if context.includes:
            params["_source_includes"] = ",".join(context.includes)
        if context.excludes:
            params["_source_excludes"] = ",".join(context.excludes)
    return params
