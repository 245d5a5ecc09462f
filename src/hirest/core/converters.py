r"""Response converters that do not need to decode the body."""

from __future__ import annotations

__all__ = ["convert_exists_response"]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx


def convert_exists_response(response: httpx.Response) -> bool:
    r"""Return ``True`` if the response has the status code 200.

    Args:
        response: The HTTP response.

    Returns:
        ``True`` for a 200 response, otherwise ``False``.

    Example:
        ```pycon
        >>> import httpx
        >>> from hirest.core.converters import convert_exists_response
        >>> convert_exists_response(httpx.Response(200))
        True
        >>> convert_exists_response(httpx.Response(404))
        False

        ```
    """
    return response.status_code == 200
