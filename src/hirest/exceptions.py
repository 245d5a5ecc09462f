r"""Define the exceptions raised by the high-level REST client.

The hierarchy separates the failures a caller can observe:

- ``ResponseError``: the transport received a response with an
  unsuccessful status code. It carries the captured response.
- ``StatusError``: the terminal, HTTP-level error surfaced to callers. It
  is only produced by translating a ``ResponseError``.
- ``ResponseParseError``: a successful response whose body could not be
  converted.
- ``EntityError``: the response body is missing or declares a missing or
  unsupported content type.
- ``ParsingError``: a structured document does not have the expected shape.
"""

from __future__ import annotations

__all__ = [
    "ActionRequestValidationError",
    "EntityError",
    "ParsingError",
    "ResponseError",
    "ResponseParseError",
    "StatusError",
]

from http import HTTPStatus
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import httpx


def _resolve_status(status_code: int | None) -> HTTPStatus | None:
    if status_code is None:
        return None
    try:
        return HTTPStatus(status_code)
    except ValueError:
        return None


class ResponseError(Exception):
    r"""Raised by the transport when a response has an unsuccessful
    status code.

    Args:
        response: The captured HTTP response.
        message: Optional error message. If ``None``, a message is built
            from the request line, the status line, and the body.

    Example:
        ```pycon
        >>> import httpx
        >>> from hirest.exceptions import ResponseError
        >>> request = httpx.Request("GET", "http://localhost:9200/index/_doc/1")
        >>> response = httpx.Response(404, request=request)
        >>> error = ResponseError(response)
        >>> error.status_code
        404
        >>> error.method
        'GET'

        ```
    """

    def __init__(self, response: httpx.Response, message: str | None = None) -> None:
        self.response = response
        self.status_code: int = response.status_code
        request = response.request
        self.method: str = request.method
        self.url: str = str(request.url)
        super().__init__(message or self._build_message(response))

    @staticmethod
    def _build_message(response: httpx.Response) -> str:
        request = response.request
        url = request.url
        host = f"{url.scheme}://{url.netloc.decode('ascii')}"
        uri = url.raw_path.decode("ascii")
        message = (
            f"method [{request.method}], host [{host}], URI [{uri}], "
            f"status line [{response.status_code} {response.reason_phrase}]"
        )
        if response.content:
            message += f"\n{response.text}"
        return message


class StatusError(Exception):
    r"""The terminal error type surfaced to callers of the client.

    A ``StatusError`` always carries a status code. When it was decoded
    from an error document returned by the server, it also carries the
    error type, the reason, and any extra metadata of that document.
    Secondary exceptions (the original ``ResponseError`` or a body
    parsing failure) are kept in ``suppressed``.

    Args:
        message: The error message.
        status_code: The HTTP status code of the failed response.
        error_type: The error type reported by the server, if any.
        reason: The reason reported by the server, if any.
        metadata: Other fields of the server error document.

    Example:
        ```pycon
        >>> from hirest.exceptions import StatusError
        >>> error = StatusError("Unable to parse response body", 500)
        >>> error.status
        <HTTPStatus.INTERNAL_SERVER_ERROR: 500>
        >>> error.suppressed
        []

        ```
    """

    def __init__(
        self,
        message: str,
        status_code: int | None,
        *,
        error_type: str | None = None,
        reason: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_type = error_type
        self.reason = reason
        self.metadata: dict[str, Any] = metadata or {}
        self.suppressed: list[BaseException] = []

    @property
    def status(self) -> HTTPStatus | None:
        r"""The resolved HTTP status, or ``None`` for unknown codes."""
        return _resolve_status(self.status_code)

    def add_suppressed(self, exc: BaseException) -> None:
        r"""Attach a secondary exception to this error.

        Args:
            exc: The exception to attach.
        """
        self.suppressed.append(exc)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(status_code={self.status_code}, "
            f"message={self.message!r})"
        )


class ResponseParseError(OSError):
    r"""Raised when the body of a response could not be converted.

    This is an I/O-class error, distinct from ``StatusError``: the server
    responded successfully, but the response could not be read.

    Args:
        response: The response that could not be converted.
    """

    def __init__(self, response: httpx.Response) -> None:
        self.response = response
        super().__init__(f"Unable to parse response body for {response!r}")


class EntityError(RuntimeError):
    r"""Raised when a response body cannot be handed to a decoder."""


class ParsingError(ValueError):
    r"""Raised when a structured document does not have the expected
    shape."""


class ActionRequestValidationError(ValueError):
    r"""Raised when a request fails local validation.

    Validation messages are accumulated and numbered in the error message.

    Example:
        ```pycon
        >>> from hirest.exceptions import ActionRequestValidationError
        >>> error = ActionRequestValidationError()
        >>> error.add_validation_error("index is missing")
        >>> error.add_validation_error("id is missing")
        >>> str(error)
        'Validation Failed: 1: index is missing;2: id is missing;'

        ```
    """

    def __init__(self) -> None:
        super().__init__()
        self.validation_errors: list[str] = []

    def add_validation_error(self, message: str) -> None:
        self.validation_errors.append(message)

    def __str__(self) -> str:
        errors = "".join(
            f"{index}: {message};" for index, message in enumerate(self.validation_errors, start=1)
        )
        return f"Validation Failed: {errors}"
