r"""Translation of wire-level failures into ``StatusError``.

This module decodes the error documents returned by the server and
converts a ``ResponseError`` raised by the transport into the single
error type surfaced to callers.
"""

from __future__ import annotations

__all__ = ["error_from_document", "error_from_xcontent", "parse_response_exception"]

import logging
from typing import TYPE_CHECKING, Any

from hirest.core.entity import Entity, parse_entity
from hirest.exceptions import ParsingError, StatusError

if TYPE_CHECKING:
    from hirest.core.entity import XContentParser
    from hirest.exceptions import ResponseError

logger: logging.Logger = logging.getLogger(__name__)

# Keys of an error object that are not kept as metadata
_KNOWN_ERROR_KEYS = frozenset({"type", "reason", "caused_by"})


def _build_message(error_type: str, reason: str | None) -> str:
    return f"Remote exception [type={error_type}, reason={reason}]"


def _failure_from_document(failure: Any, status_code: int | None) -> StatusError:
    if isinstance(failure, str):
        return StatusError(
            _build_message("exception", failure),
            status_code,
            error_type="exception",
            reason=failure,
        )
    if not isinstance(failure, dict):
        msg = f"Expected [error] to be an object or a string, got {type(failure).__name__}"
        raise ParsingError(msg)
    error_type = failure.get("type")
    if not isinstance(error_type, str):
        msg = "Failed to parse remote exception: missing [type]"
        raise ParsingError(msg)
    reason = failure.get("reason")
    error = StatusError(
        _build_message(error_type, reason),
        status_code,
        error_type=error_type,
        reason=reason,
        metadata={k: v for k, v in failure.items() if k not in _KNOWN_ERROR_KEYS},
    )
    caused_by = failure.get("caused_by")
    if caused_by is not None:
        error.__cause__ = _failure_from_document(caused_by, status_code)
    return error


def error_from_document(document: Any) -> StatusError:
    r"""Decode an error document into a ``StatusError``.

    The expected document is ``{"error": <object | string>, "status": <int>}``.
    An error object carries a ``type``, a ``reason``, and optionally a
    nested ``caused_by`` object which is decoded into the cause chain.

    Args:
        document: The decoded response body.

    Returns:
        The decoded error.

    Raises:
        ParsingError: If the document is not a valid error document.

    Example:
        ```pycon
        >>> from hirest.core.errors import error_from_document
        >>> error = error_from_document(
        ...     {"error": {"type": "index_not_found_exception", "reason": "no such index"}, "status": 404}
        ... )
        >>> error.message
        'Remote exception [type=index_not_found_exception, reason=no such index]'
        >>> error.status_code
        404

        ```
    """
    if not isinstance(document, dict):
        msg = f"Expected an error object, got {type(document).__name__}"
        raise ParsingError(msg)
    if "error" not in document:
        msg = "Failed to parse status exception: no exception was found"
        raise ParsingError(msg)
    status_code = document.get("status")
    if status_code is not None and (
        not isinstance(status_code, int) or isinstance(status_code, bool)
    ):
        msg = f"Expected [status] to be an integer, got {status_code!r}"
        raise ParsingError(msg)
    return _failure_from_document(document["error"], status_code)


def error_from_xcontent(parser: XContentParser) -> StatusError:
    r"""Decode an error document from an open parser.

    Args:
        parser: The parser opened over the response body.

    Returns:
        The decoded error.
    """
    return error_from_document(parser.map())


def parse_response_exception(response_exception: ResponseError) -> StatusError:
    r"""Convert a ``ResponseError`` into a ``StatusError``.

    If a response body was returned, it is first parsed as an error
    document; the original ``ResponseError`` is then attached as a
    suppressed exception. A document without ``status`` takes the status
    code of the response. If no body was returned, or anything goes wrong
    while parsing it, a ``StatusError`` built from the status code is
    returned instead with the ``ResponseError`` as its cause, and the
    parsing failure (if any) is attached as a suppressed exception.

    This function never raises.

    Args:
        response_exception: The failure raised by the transport.

    Returns:
        The translated error.

    Example:
        ```pycon
        >>> import httpx
        >>> from hirest.core.errors import parse_response_exception
        >>> from hirest.exceptions import ResponseError
        >>> request = httpx.Request("GET", "http://localhost:9200/")
        >>> error = parse_response_exception(ResponseError(httpx.Response(503, request=request)))
        >>> error.status_code
        503

        ```
    """
    response = response_exception.response
    status_code = response.status_code
    entity = Entity.from_response(response)
    if entity is None:
        error = StatusError(str(response_exception), status_code)
        error.__cause__ = response_exception
        return error
    try:
        error = parse_entity(entity, error_from_xcontent)
    except Exception as exc:  # noqa: BLE001
        logger.debug(f"Unable to parse error body of response with status {status_code}: {exc}")
        error = StatusError("Unable to parse response body", status_code)
        error.__cause__ = response_exception
        error.add_suppressed(exc)
        return error
    if error.status_code is None:
        error.status_code = status_code
    error.add_suppressed(response_exception)
    return error
