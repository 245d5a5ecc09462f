r"""Response body access and content-type driven decoding.

This module contains the ``Entity`` view of a request or response body,
the set of supported content types, and ``parse_entity`` which hands an
entity to a decode function through a scoped parser.
"""

from __future__ import annotations

__all__ = ["Entity", "XContentParser", "XContentType", "parse_entity"]

import enum
import io
import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar

from hirest.exceptions import EntityError, ParsingError

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType
    from typing import Self

    import httpx

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Entity:
    """A request or response body with its declared content type.

    Attributes:
        content: The raw body bytes.
        content_type: The value of the ``Content-Type`` header, if any.
    """

    content: bytes
    content_type: str | None = None

    @classmethod
    def from_response(cls, response: httpx.Response) -> Entity | None:
        """Return the body of a response, or ``None`` if it has none.

        Args:
            response: The HTTP response.

        Returns:
            The response entity, or ``None`` for an empty body.

        Example:
            ```pycon
            >>> import httpx
            >>> from hirest.core.entity import Entity
            >>> response = httpx.Response(
            ...     200, content=b"{}", headers={"Content-Type": "application/json"}
            ... )
            >>> Entity.from_response(response)
            Entity(content=b'{}', content_type='application/json')
            >>> Entity.from_response(httpx.Response(200)) is None
            True

            ```
        """
        if not response.content:
            return None
        return cls(content=response.content, content_type=response.headers.get("content-type"))

    @classmethod
    def from_json(cls, document: Any) -> Entity:
        """Create a JSON entity from a document."""
        return cls(
            content=json.dumps(document).encode("utf-8"),
            content_type=XContentType.JSON.media_type,
        )


class XContentParser:
    r"""A parsing context over the byte stream of an entity.

    The parser owns the stream and must be closed after use; it is a
    context manager so ``with`` guarantees the release on every exit
    path.

    Args:
        stream: The binary stream to decode.
    """

    def __init__(self, stream: io.BufferedIOBase | io.BytesIO) -> None:
        self._stream = stream

    @property
    def closed(self) -> bool:
        return self._stream.closed

    def map(self) -> Any:
        r"""Decode the whole stream as one document.

        Returns:
            The decoded document.

        Raises:
            ParsingError: If the stream does not hold a valid document.
        """
        try:
            return json.load(self._stream)
        except (ValueError, UnicodeDecodeError) as exc:
            msg = f"Failed to parse document: {exc}"
            raise ParsingError(msg) from exc

    def close(self) -> None:
        self._stream.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()


class XContentType(enum.Enum):
    r"""The structured content types the client can decode."""

    JSON = ("application/json", "json")

    def __init__(self, media_type: str, short_name: str) -> None:
        self.media_type = media_type
        self.short_name = short_name

    @classmethod
    def from_media_type_or_format(cls, value: str | None) -> XContentType | None:
        r"""Resolve a content type from a media type or a format name.

        Media-type parameters (e.g. ``charset``) are ignored and the
        comparison is case-insensitive.

        Args:
            value: A media type (``"application/json; charset=UTF-8"``)
                or a short format name (``"json"``).

        Returns:
            The matching content type, or ``None`` if it is not supported.

        Example:
            ```pycon
            >>> from hirest.core.entity import XContentType
            >>> XContentType.from_media_type_or_format("application/json; charset=UTF-8")
            <XContentType.JSON: ('application/json', 'json')>
            >>> XContentType.from_media_type_or_format("json")
            <XContentType.JSON: ('application/json', 'json')>
            >>> XContentType.from_media_type_or_format("text/plain") is None
            True

            ```
        """
        if value is None:
            return None
        media_type = value.split(";", 1)[0].strip().lower()
        for xcontent_type in cls:
            if media_type in (xcontent_type.media_type, xcontent_type.short_name):
                return xcontent_type
        return None

    def create_parser(self, content: bytes) -> XContentParser:
        return XContentParser(io.BytesIO(content))


def parse_entity(entity: Entity | None, entity_parser: Callable[[XContentParser], T]) -> T:
    r"""Decode an entity with a content-type aware decode function.

    Args:
        entity: The entity to decode.
        entity_parser: The function applied to the parser opened over
            the entity content.

    Returns:
        The value returned by ``entity_parser``.

    Raises:
        EntityError: If the entity is missing, declares no content type,
            or declares an unsupported content type.

    Example:
        ```pycon
        >>> from hirest.core.entity import Entity, parse_entity
        >>> entity = Entity(b'{"_id": "1"}', "application/json")
        >>> parse_entity(entity, lambda parser: parser.map())
        {'_id': '1'}

        ```
    """
    if entity is None:
        msg = "Response body expected but not returned"
        raise EntityError(msg)
    if entity.content_type is None:
        msg = "Server didn't return the [Content-Type] header, unable to parse response body"
        raise EntityError(msg)
    xcontent_type = XContentType.from_media_type_or_format(entity.content_type)
    if xcontent_type is None:
        msg = f"Unsupported Content-Type: {entity.content_type}"
        raise EntityError(msg)
    logger.debug(f"Parsing {len(entity.content)} bytes of {xcontent_type.media_type}")
    with xcontent_type.create_parser(entity.content) as parser:
        return entity_parser(parser)
