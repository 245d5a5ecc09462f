r"""Parameter validation utilities for the REST transport.

This module provides validation functions for the transport
configuration to ensure it meets the required constraints before an
httpx client is created from it.
"""

from __future__ import annotations

__all__ = ["validate_host", "validate_timeout"]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx


def validate_timeout(timeout: float | httpx.Timeout) -> None:
    """Validate timeout parameter.

    Args:
        timeout: Maximum seconds to wait for server responses.
            Must be > 0 if provided as a numeric value.

    Raises:
        ValueError: If timeout is a numeric value <= 0.

    Example:
        ```pycon
        >>> from hirest.core.validation import validate_timeout
        >>> validate_timeout(10.0)
        >>> validate_timeout(30)
        >>> validate_timeout(0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: timeout must be > 0, got 0

        ```
    """
    if isinstance(timeout, (int, float)) and timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ValueError(msg)


def validate_host(host: str) -> None:
    """Validate the host the transport sends requests to.

    Args:
        host: The base URL of the remote server, including the scheme
            (e.g. ``"http://localhost:9200"``).

    Raises:
        ValueError: If host is empty or does not use the http(s) scheme.

    Example:
        ```pycon
        >>> from hirest.core.validation import validate_host
        >>> validate_host("http://localhost:9200")
        >>> validate_host("localhost:9200")  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: host must start with http:// or https://, got 'localhost:9200'

        ```
    """
    if not host:
        msg = "host must be a non-empty string"
        raise ValueError(msg)
    if not host.startswith(("http://", "https://")):
        msg = f"host must start with http:// or https://, got {host!r}"
        raise ValueError(msg)
