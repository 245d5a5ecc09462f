r"""Completion handlers for asynchronous requests.

An asynchronous request delivers exactly one outcome, either a value or
an exception, to the handler supplied by the caller:

- ``ActionListener``: receives the converted domain response or the
  domain error.
- ``ResponseListener``: receives the raw HTTP response or the transport
  failure. The transport notifies it.

Example:
    ```pycon
    >>> from hirest.listener import ActionListener
    >>> listener = ActionListener.wrap(
    ...     on_response=lambda value: print(f"found: {value}"),
    ...     on_failure=lambda exc: print(f"failed: {exc}"),
    ... )
    >>> listener.on_response(True)
    found: True

    ```
"""

from __future__ import annotations

__all__ = ["ActionListener", "ResponseListener"]

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, Protocol, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

T = TypeVar("T")


class ResponseListener(Protocol):
    r"""Handler notified by the transport when an asynchronous request
    completes."""

    def on_success(self, response: httpx.Response) -> None:
        r"""Called with the response of a successful request."""

    def on_failure(self, exception: Exception) -> None:
        r"""Called with the failure of the request."""


class ActionListener(ABC, Generic[T]):
    r"""Handler notified with the outcome of an asynchronous request.

    Subclass it and implement both methods, or build one from two
    callables with ``ActionListener.wrap``.
    """

    @abstractmethod
    def on_response(self, response: T) -> None:
        r"""Called with the converted domain response."""

    @abstractmethod
    def on_failure(self, exception: Exception) -> None:
        r"""Called with the failure of the request."""

    @staticmethod
    def wrap(
        on_response: Callable[[T], None], on_failure: Callable[[Exception], None]
    ) -> ActionListener[T]:
        r"""Create a listener from two callables.

        Args:
            on_response: Called with the domain response.
            on_failure: Called with the failure.

        Returns:
            The listener.
        """
        return _CallableActionListener(on_response, on_failure)


@dataclass
class _CallableActionListener(ActionListener[T]):
    response_callback: Callable[[T], None]
    failure_callback: Callable[[Exception], None]

    def on_response(self, response: T) -> None:
        self.response_callback(response)

    def on_failure(self, exception: Exception) -> None:
        self.failure_callback(exception)
