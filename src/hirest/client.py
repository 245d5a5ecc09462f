r"""High-level REST client.

``HighLevelClient`` wraps a ``RestClient`` transport. It converts domain
requests into wire requests and wire responses back into domain
responses. Failures are translated into a single ``StatusError`` type.

Each call takes an ignore set of HTTP status codes. A failed response
whose status is in that set is first converted as a normal response. The
failure is only translated into an error if that conversion fails. This
covers endpoints like get, where a 404 can be either a valid "not found"
document or an error whose body has a different shape.
"""

from __future__ import annotations

__all__ = ["HighLevelClient", "wrap_response_listener"]

import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from hirest import request_converters
from hirest.actions import GetResponse, MainRequest
from hirest.config import DEFAULT_IGNORE_STATUS_CODES
from hirest.core.converters import convert_exists_response
from hirest.core.entity import Entity, parse_entity
from hirest.core.errors import parse_response_exception
from hirest.exceptions import ResponseError, ResponseParseError

if TYPE_CHECKING:
    import asyncio
    from collections.abc import Callable, Collection, Mapping

    import httpx

    from hirest.actions import ActionRequest, GetRequest
    from hirest.core.entity import XContentParser
    from hirest.listener import ActionListener
    from hirest.request_converters import WireRequest
    from hirest.transport import RestClient

    RequestT = TypeVar("RequestT", bound=ActionRequest)

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)

# A 404 on get can be a valid "document not found" response
GET_IGNORE_STATUS_CODES = frozenset({404})


class HighLevelClient:
    r"""High-level client that builds requests and reads responses.

    The transport is built and closed by the caller.

    Args:
        client: The low-level transport.

    Example:
        ```pycon
        >>> from hirest import GetRequest, HighLevelClient, RestClient
        >>> with RestClient() as transport:  # doctest: +SKIP
        ...     client = HighLevelClient(transport)
        ...     response = client.get(GetRequest("index", "1"))
        ...

        ```
    """

    def __init__(self, client: RestClient) -> None:
        if client is None:
            msg = "client must not be None"
            raise TypeError(msg)
        self._client = client

    @property
    def low_level_client(self) -> RestClient:
        return self._client

    def ping(self, headers: Mapping[str, str] | None = None) -> bool:
        r"""Return ``True`` if the server answers the ping with 200.

        Args:
            headers: Optional request headers.
        """
        return self.perform_request(
            MainRequest(),
            request_converters.ping,
            convert_exists_response,
            DEFAULT_IGNORE_STATUS_CODES,
            headers=headers,
        )

    def get(self, get_request: GetRequest, headers: Mapping[str, str] | None = None) -> GetResponse:
        r"""Retrieve a document by id.

        A 404 response with a "not found" document is returned as a
        ``GetResponse`` whose ``found`` is ``False``.

        Args:
            get_request: The get request.
            headers: Optional request headers.

        Returns:
            The get response.

        Raises:
            ActionRequestValidationError: If the request is invalid.
            StatusError: If the server returned an error.
        """
        return self.perform_request_and_parse_entity(
            get_request,
            request_converters.get,
            GetResponse.from_xcontent,
            GET_IGNORE_STATUS_CODES,
            headers=headers,
        )

    def get_async(
        self,
        get_request: GetRequest,
        listener: ActionListener[GetResponse],
        headers: Mapping[str, str] | None = None,
    ) -> asyncio.Task[None] | None:
        r"""Asynchronously retrieve a document by id."""
        return self.perform_request_async_and_parse_entity(
            get_request,
            request_converters.get,
            GetResponse.from_xcontent,
            listener,
            GET_IGNORE_STATUS_CODES,
            headers=headers,
        )

    def exists(self, get_request: GetRequest, headers: Mapping[str, str] | None = None) -> bool:
        r"""Return ``True`` if the document exists, ``False`` otherwise."""
        return self.perform_request(
            get_request,
            request_converters.exists,
            convert_exists_response,
            DEFAULT_IGNORE_STATUS_CODES,
            headers=headers,
        )

    def exists_async(
        self,
        get_request: GetRequest,
        listener: ActionListener[bool],
        headers: Mapping[str, str] | None = None,
    ) -> asyncio.Task[None] | None:
        r"""Asynchronously check whether a document exists."""
        return self.perform_request_async(
            get_request,
            request_converters.exists,
            convert_exists_response,
            listener,
            DEFAULT_IGNORE_STATUS_CODES,
            headers=headers,
        )

    def perform_request_and_parse_entity(
        self,
        request: RequestT,
        request_converter: Callable[[RequestT], WireRequest],
        entity_parser: Callable[[XContentParser], T],
        ignores: Collection[int],
        headers: Mapping[str, str] | None = None,
    ) -> T:
        return self.perform_request(
            request,
            request_converter,
            lambda response: parse_entity(Entity.from_response(response), entity_parser),
            ignores,
            headers=headers,
        )

    def perform_request(
        self,
        request: RequestT,
        request_converter: Callable[[RequestT], WireRequest],
        response_converter: Callable[[httpx.Response], T],
        ignores: Collection[int],
        headers: Mapping[str, str] | None = None,
    ) -> T:
        r"""Validate, send and convert one request synchronously.

        Args:
            request: The domain request.
            request_converter: Converts the domain request into a wire
                request.
            response_converter: Converts the HTTP response into the domain
                response. May raise on a malformed body.
            ignores: Status codes whose failed responses are first
                converted as normal responses.
            headers: Optional request headers.

        Returns:
            The domain response.

        Raises:
            ActionRequestValidationError: If the request is invalid. The
                transport is not called.
            StatusError: If the server returned an unsuccessful response
                that could not be converted.
            ResponseParseError: If a successful response could not be
                converted.
        """
        validation_error = request.validate()
        if validation_error is not None:
            raise validation_error
        wire = request_converter(request)
        try:
            response = self._client.perform_request(
                wire.method, wire.endpoint, wire.params, wire.entity, _merge_headers(wire, headers)
            )
        except ResponseError as exc:
            if exc.status_code in ignores:
                logger.debug(f"Converting ignored status {exc.status_code} as a response")
                try:
                    return response_converter(exc.response)
                except Exception as inner:  # noqa: BLE001
                    logger.debug(
                        f"Ignored status {exc.status_code} is not a valid response: {inner}"
                    )
            raise parse_response_exception(exc)
        try:
            return response_converter(response)
        except Exception as exc:
            raise ResponseParseError(response) from exc

    def perform_request_async_and_parse_entity(
        self,
        request: RequestT,
        request_converter: Callable[[RequestT], WireRequest],
        entity_parser: Callable[[XContentParser], T],
        listener: ActionListener[T],
        ignores: Collection[int],
        headers: Mapping[str, str] | None = None,
    ) -> asyncio.Task[None] | None:
        return self.perform_request_async(
            request,
            request_converter,
            lambda response: parse_entity(Entity.from_response(response), entity_parser),
            listener,
            ignores,
            headers=headers,
        )

    def perform_request_async(
        self,
        request: RequestT,
        request_converter: Callable[[RequestT], WireRequest],
        response_converter: Callable[[httpx.Response], T],
        listener: ActionListener[T],
        ignores: Collection[int],
        headers: Mapping[str, str] | None = None,
    ) -> asyncio.Task[None] | None:
        r"""Validate and send one request without waiting for it.

        ``listener`` is notified exactly once. A validation failure is
        reported to ``listener.on_failure`` before returning, and the
        transport is not called.

        Args:
            request: The domain request.
            request_converter: Converts the domain request into a wire
                request.
            response_converter: Converts the HTTP response into the domain
                response. May raise on a malformed body.
            listener: The handler notified with the outcome.
            ignores: Status codes whose failed responses are first
                converted as normal responses.
            headers: Optional request headers.

        Returns:
            The task running the request, or ``None`` if the request was
            rejected by validation.
        """
        validation_error = request.validate()
        if validation_error is not None:
            listener.on_failure(validation_error)
            return None
        wire = request_converter(request)
        response_listener = wrap_response_listener(response_converter, listener, ignores)
        return self._client.perform_request_async(
            wire.method,
            wire.endpoint,
            wire.params,
            wire.entity,
            response_listener,
            _merge_headers(wire, headers),
        )


class _WrappedResponseListener(Generic[T]):
    r"""Convert transport notifications into listener notifications."""

    def __init__(
        self,
        response_converter: Callable[[httpx.Response], T],
        listener: ActionListener[T],
        ignores: Collection[int],
    ) -> None:
        self._response_converter = response_converter
        self._listener = listener
        self._ignores = ignores

    def on_success(self, response: httpx.Response) -> None:
        try:
            value = self._response_converter(response)
        except Exception as exc:  # noqa: BLE001
            error = ResponseParseError(response)
            error.__cause__ = exc
            self._listener.on_failure(error)
            return
        self._listener.on_response(value)

    def on_failure(self, exception: Exception) -> None:
        if not isinstance(exception, ResponseError):
            self._listener.on_failure(exception)
            return
        if exception.status_code in self._ignores:
            logger.debug(f"Converting ignored status {exception.status_code} as a response")
            try:
                value = self._response_converter(exception.response)
            except Exception as inner:  # noqa: BLE001
                # A 404 may be a valid "not found" response or an error with
                # a different body, so the failure is parsed as an error
                logger.debug(
                    f"Ignored status {exception.status_code} is not a valid response: {inner}"
                )
            else:
                self._listener.on_response(value)
                return
        self._listener.on_failure(parse_response_exception(exception))


def wrap_response_listener(
    response_converter: Callable[[httpx.Response], T],
    listener: ActionListener[T],
    ignores: Collection[int],
) -> _WrappedResponseListener[T]:
    r"""Wrap an ``ActionListener`` into a transport ``ResponseListener``.

    The returned listener applies ``response_converter`` to successful
    responses, and applies the ignore set and the error translation to
    failures.

    Args:
        response_converter: Converts the HTTP response into the domain
            response.
        listener: The handler notified with the outcome.
        ignores: Status codes whose failed responses are first converted
            as normal responses.

    Returns:
        The response listener to hand to the transport.
    """
    return _WrappedResponseListener(response_converter, listener, ignores)


def _merge_headers(wire: WireRequest, headers: Mapping[str, str] | None) -> dict[str, Any] | None:
    if not wire.headers and not headers:
        return None
    return {**wire.headers, **(headers or {})}
