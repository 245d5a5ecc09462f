r"""Domain requests and responses handled by the high-level client.

A domain request exposes a ``validate`` method; a request that returns a
validation error is never sent to the server.
"""

from __future__ import annotations

__all__ = [
    "MATCH_ANY",
    "ActionRequest",
    "FetchSourceContext",
    "GetRequest",
    "GetResponse",
    "MainRequest",
    "VersionType",
]

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from hirest.exceptions import ActionRequestValidationError, ParsingError

if TYPE_CHECKING:
    from hirest.core.entity import XContentParser

# Version value meaning "do not check the version"
MATCH_ANY = -3


def add_validation_error(
    message: str, error: ActionRequestValidationError | None
) -> ActionRequestValidationError:
    r"""Add a message to a validation error, creating it if needed.

    Args:
        message: The validation message.
        error: The error to extend, or ``None``.

    Returns:
        The extended (or newly created) validation error.
    """
    if error is None:
        error = ActionRequestValidationError()
    error.add_validation_error(message)
    return error


class ActionRequest:
    r"""Base class of the domain requests."""

    def validate(self) -> ActionRequestValidationError | None:
        r"""Validate the request locally.

        Returns:
            ``None`` if the request is valid, otherwise the validation
            error that must prevent the request from being sent.
        """
        return None


class MainRequest(ActionRequest):
    r"""Request for the main endpoint of the server (used by ``ping``)."""


class VersionType(enum.Enum):
    INTERNAL = "internal"
    EXTERNAL = "external"
    EXTERNAL_GTE = "external_gte"
    FORCE = "force"

    def validate_version(self, version: int) -> bool:
        r"""Return ``True`` if ``version`` is allowed for this version
        type."""
        if self is VersionType.INTERNAL:
            return version == MATCH_ANY or version >= 0
        return version >= 0


@dataclass
class FetchSourceContext:
    r"""Control which parts of the document ``_source`` are returned.

    Args:
        fetch_source: Whether to return the ``_source`` at all.
        includes: Source fields to include.
        excludes: Source fields to exclude.
    """

    fetch_source: bool = True
    includes: tuple[str, ...] = ()
    excludes: tuple[str, ...] = ()


@dataclass
class GetRequest(ActionRequest):
    r"""Request to retrieve a document by id.

    Args:
        index: The index of the document.
        id: The id of the document.
        type: The mapping type of the document.
        routing: The routing value used to find the shard.
        parent: The parent id, used for routing.
        preference: The shard copies preference.
        realtime: Whether to fetch the latest version of the document.
        refresh: Whether to refresh the shard before the operation.
        stored_fields: The stored fields to return.
        version: The expected version, or ``MATCH_ANY``.
        version_type: How ``version`` is compared.
        fetch_source_context: Which parts of ``_source`` to return.

    Example:
        ```pycon
        >>> from hirest.actions import GetRequest
        >>> GetRequest("index", "1").validate() is None
        True
        >>> str(GetRequest(None, None).validate())
        'Validation Failed: 1: index is missing;2: id is missing;'

        ```
    """

    index: str | None
    id: str | None
    type: str | None = "_doc"
    routing: str | None = None
    parent: str | None = None
    preference: str | None = None
    realtime: bool = True
    refresh: bool = False
    stored_fields: tuple[str, ...] | None = None
    version: int = MATCH_ANY
    version_type: VersionType = VersionType.INTERNAL
    fetch_source_context: FetchSourceContext | None = None

    def validate(self) -> ActionRequestValidationError | None:
        error = None
        if not self.index:
            error = add_validation_error("index is missing", error)
        if not self.type:
            error = add_validation_error("type is missing", error)
        if not self.id:
            error = add_validation_error("id is missing", error)
        if not self.version_type.validate_version(self.version):
            error = add_validation_error(
                f"illegal version value [{self.version}] for version type "
                f"[{self.version_type.name}]",
                error,
            )
        return error


@dataclass
class GetResponse:
    r"""The result of retrieving a document by id.

    Args:
        index: The index of the document.
        type: The mapping type of the document.
        id: The id of the document.
        version: The version of the document, or -1 if not found.
        found: Whether the document exists.
        source: The document ``_source``, if returned.
        fields: The stored fields, if requested.
    """

    index: str | None
    type: str | None
    id: str | None
    version: int = -1
    found: bool = False
    source: dict[str, Any] | None = None
    fields: dict[str, Any] = field(default_factory=dict)

    @property
    def exists(self) -> bool:
        return self.found

    @classmethod
    def from_document(cls, document: Any) -> GetResponse:
        r"""Build a response from a decoded get document.

        Args:
            document: The decoded response body.

        Returns:
            The get response.

        Raises:
            ParsingError: If the document does not identify a document
                by index, type, or id.

        Example:
            ```pycon
            >>> from hirest.actions import GetResponse
            >>> response = GetResponse.from_document(
            ...     {"_index": "index", "_type": "_doc", "_id": "1", "found": False}
            ... )
            >>> response.found
            False
            >>> GetResponse.from_document({"error": "boom", "status": 404})  # doctest: +SKIP
            Traceback (most recent call last):
            ...
            hirest.exceptions.ParsingError: Missing required fields [_index,_type,_id]

            ```
        """
        if not isinstance(document, dict):
            msg = f"Expected a get document, got {type(document).__name__}"
            raise ParsingError(msg)
        index = document.get("_index")
        type_ = document.get("_type")
        id_ = document.get("_id")
        # A valid get response always identifies the document it refers to
        if index is None and type_ is None and id_ is None:
            msg = "Missing required fields [_index,_type,_id]"
            raise ParsingError(msg)
        return cls(
            index=index,
            type=type_,
            id=id_,
            version=document.get("_version", -1),
            found=bool(document.get("found", False)),
            source=document.get("_source"),
            fields=document.get("fields") or {},
        )

    @classmethod
    def from_xcontent(cls, parser: XContentParser) -> GetResponse:
        return cls.from_document(parser.map())
