r"""Configuration defaults and dataclass for the REST transport.

This module provides configuration constants and a dataclass-based
configuration object for ``RestClient``.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_HOST",
    "DEFAULT_IGNORE_STATUS_CODES",
    "DEFAULT_TIMEOUT",
    "TransportConfig",
]

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from hirest.core.validation import validate_host, validate_timeout

if TYPE_CHECKING:
    import httpx

# Default base URL of the remote server
DEFAULT_HOST = "http://localhost:9200"

# Default timeout in seconds for HTTP requests
DEFAULT_TIMEOUT = 10.0

# By default, every unsuccessful status code is translated into an error
DEFAULT_IGNORE_STATUS_CODES: frozenset[int] = frozenset()


@dataclass
class TransportConfig:
    """Configuration for the ``RestClient`` transport.

    Args:
        host: Base URL of the remote server, including the scheme.
        timeout: Maximum seconds to wait for the server response.
            Must be > 0 if numeric.
        default_headers: Headers sent with every request. Per-request
            headers take precedence over these.

    Example:
        ```pycon
        >>> from hirest.config import TransportConfig
        >>> config = TransportConfig()
        >>> config.host
        'http://localhost:9200'
        >>> config.merge(timeout=30.0).timeout
        30.0
        >>> config.timeout  # Original unchanged
        10.0

        ```
    """

    host: str = DEFAULT_HOST
    timeout: float | httpx.Timeout = DEFAULT_TIMEOUT
    default_headers: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            ValueError: If any parameter fails validation.
        """
        validate_host(self.host)
        validate_timeout(self.timeout)
        # Requests are built by appending an absolute endpoint
        self.host = self.host.rstrip("/")

    def merge(self, **overrides: Any) -> TransportConfig:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new TransportConfig instance with overrides applied.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)
