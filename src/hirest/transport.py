r"""Low-level REST transport built on httpx.

``RestClient`` sends one request per call and returns the raw
``httpx.Response``. Responses with an unsuccessful status code are
raised as ``ResponseError``, which carries the captured response. The
asynchronous variant schedules the request on the running event loop and
notifies a ``ResponseListener`` when it completes.
"""

from __future__ import annotations

__all__ = ["RestClient", "is_successful_response"]

import asyncio
import logging
from typing import TYPE_CHECKING

import httpx

from hirest.config import TransportConfig
from hirest.exceptions import ResponseError

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType
    from typing import Self

    from hirest.core.entity import Entity
    from hirest.listener import ResponseListener

logger: logging.Logger = logging.getLogger(__name__)


def is_successful_response(method: str, status_code: int) -> bool:
    r"""Return ``True`` if the status code is not an error for this
    method.

    A 404 on a HEAD request is a valid answer to an existence check, so
    it is not treated as an error.

    Args:
        method: The HTTP method.
        status_code: The HTTP status code.

    Returns:
        ``True`` if the response is successful.

    Example:
        ```pycon
        >>> from hirest.transport import is_successful_response
        >>> is_successful_response("GET", 200)
        True
        >>> is_successful_response("GET", 404)
        False
        >>> is_successful_response("HEAD", 404)
        True

        ```
    """
    return status_code < 300 or (method.upper() == "HEAD" and status_code == 404)


class RestClient:
    r"""Synchronous and asynchronous transport to a REST server.

    The httpx clients passed to the constructor are managed by the
    caller. Clients created by ``RestClient`` are closed by ``close`` /
    ``aclose`` or when leaving the context manager.

    Args:
        config: Optional TransportConfig instance. If ``None``, a default
            TransportConfig is used.
        client: Optional httpx.Client used for synchronous requests.
        async_client: Optional httpx.AsyncClient used for asynchronous
            requests.

    Example:
        ```pycon
        >>> from hirest.config import TransportConfig
        >>> from hirest.transport import RestClient
        >>> with RestClient(config=TransportConfig(host="http://localhost:9200")) as client:  # doctest: +SKIP
        ...     response = client.perform_request("GET", "/")
        ...

        ```
    """

    def __init__(
        self,
        *,
        config: TransportConfig | None = None,
        client: httpx.Client | None = None,
        async_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config: TransportConfig = config or TransportConfig()
        self._owns_client = client is None
        self._owns_async_client = async_client is None
        self._client: httpx.Client = client or httpx.Client(timeout=self._config.timeout)
        self._async_client: httpx.AsyncClient = async_client or httpx.AsyncClient(
            timeout=self._config.timeout
        )
        # Keep a reference to running tasks so they are not garbage collected
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def config(self) -> TransportConfig:
        return self._config

    def perform_request(
        self,
        method: str,
        endpoint: str,
        params: Mapping[str, str] | None = None,
        entity: Entity | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        r"""Send a request and wait for its response.

        Args:
            method: The HTTP method.
            endpoint: The absolute path of the request.
            params: The query parameters.
            entity: The request body.
            headers: Request headers, merged over the default headers.

        Returns:
            The successful HTTP response.

        Raises:
            ResponseError: If the response has an unsuccessful status code.
            httpx.RequestError: If the request could not be sent.
        """
        request = self._build_request(self._client, method, endpoint, params, entity, headers)
        logger.debug(f"Sending {request.method} request to {request.url}")
        response = self._client.send(request)
        return self._check_response(response)

    def perform_request_async(
        self,
        method: str,
        endpoint: str,
        params: Mapping[str, str] | None,
        entity: Entity | None,
        response_listener: ResponseListener,
        headers: Mapping[str, str] | None = None,
    ) -> asyncio.Task[None]:
        r"""Send a request without waiting for its response.

        Must be called from a running event loop. The request is
        scheduled as a task and ``response_listener`` is notified exactly
        once when it completes: ``on_success`` with the response, or
        ``on_failure`` with a ``ResponseError`` or the error raised while
        sending the request. An exception raised by the listener itself is
        not reported again: it is set on the returned task, so the caller
        should await the task or check its result.

        Args:
            method: The HTTP method.
            endpoint: The absolute path of the request.
            params: The query parameters.
            entity: The request body.
            response_listener: The handler notified on completion.
            headers: Request headers, merged over the default headers.

        Returns:
            The task running the request.
        """
        request = self._build_request(self._async_client, method, endpoint, params, entity, headers)
        logger.debug(f"Scheduling {request.method} request to {request.url}")
        loop = asyncio.get_running_loop()
        task = loop.create_task(self._send_async(request, response_listener))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _send_async(
        self, request: httpx.Request, response_listener: ResponseListener
    ) -> None:
        try:
            response = await self._async_client.send(request)
            response = self._check_response(response)
        except Exception as exc:  # noqa: BLE001
            response_listener.on_failure(exc)
            return
        response_listener.on_success(response)

    def _build_request(
        self,
        client: httpx.Client | httpx.AsyncClient,
        method: str,
        endpoint: str,
        params: Mapping[str, str] | None,
        entity: Entity | None,
        headers: Mapping[str, str] | None,
    ) -> httpx.Request:
        request_headers = dict(self._config.default_headers)
        if entity is not None and entity.content_type is not None:
            request_headers["Content-Type"] = entity.content_type
        request_headers.update(headers or {})
        return client.build_request(
            method,
            f"{self._config.host}{endpoint}",
            params=dict(params) if params else None,
            content=entity.content if entity is not None else None,
            headers=request_headers,
        )

    @staticmethod
    def _check_response(response: httpx.Response) -> httpx.Response:
        request = response.request
        logger.debug(
            f"{request.method} request to {request.url} returned status {response.status_code}"
        )
        if is_successful_response(request.method, response.status_code):
            return response
        raise ResponseError(response)

    def close(self) -> None:
        r"""Close the synchronous client if it was created here."""
        if self._owns_client:
            self._client.close()

    async def aclose(self) -> None:
        r"""Close every client created here."""
        self.close()
        if self._owns_async_client:
            await self._async_client.aclose()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()
