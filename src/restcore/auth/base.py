r"""Abstract base class for authentication strategies."""

from __future__ import annotations

__all__ = ["AuthenticationStrategy", "NoAuthentication"]

from abc import ABC
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import httpx

    from restcore.config import ClientConfig


class AuthenticationStrategy(ABC):  # noqa: B024
    """Base class for authentication strategies.

    A strategy is built from the client configuration for every request
    and injects credentials at up to three points of the request. The
    dispatcher calls the hooks in a fixed order: ``update_params``
    first, then ``update_url`` once the query string is built, and
    finally ``update_headers``. Each hook is a no-op by default, so a
    strategy only overrides the hooks it needs.

    Args:
        config: The client configuration holding the credentials.
    """

    def __init__(self, config: ClientConfig) -> None:
        self._config = config

    @property
    def config(self) -> ClientConfig:
        return self._config

    def update_params(self, params: dict[str, Any]) -> None:
        """Inject credentials into the request parameters.

        Args:
            params: The request parameters, updated in place.
        """

    def update_url(self, url: httpx.URL) -> httpx.URL:
        """Inject credentials into the request URL.

        Args:
            url: The request URL, including its query string.

        Returns:
            The URL to use for the request.
        """
        return url

    def update_headers(self, headers: dict[str, str]) -> None:
        """Inject credentials into the request headers.

        Args:
            headers: The request headers, updated in place.
        """


class NoAuthentication(AuthenticationStrategy):
    """Strategy for endpoints that do not require credentials."""
