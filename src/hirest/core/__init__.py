r"""Core translation logic shared by the sync and async dispatchers.

This package contains the entity parser, the error translator, the
response converters that need no body, and the parameter validation
helpers.
"""

from __future__ import annotations

__all__ = [
    "Entity",
    "XContentParser",
    "XContentType",
    "convert_exists_response",
    "error_from_document",
    "error_from_xcontent",
    "parse_entity",
    "parse_response_exception",
    "validate_host",
    "validate_timeout",
]

from hirest.core.converters import convert_exists_response
from hirest.core.entity import Entity, XContentParser, XContentType, parse_entity
from hirest.core.errors import error_from_document, error_from_xcontent, parse_response_exception
from hirest.core.validation import validate_host, validate_timeout
