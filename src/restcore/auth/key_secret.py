r"""Authentication with the API key and secret sent as request
parameters."""

from __future__ import annotations

__all__ = ["KeySecretParams"]

from typing import TYPE_CHECKING, Any

from restcore.auth.base import AuthenticationStrategy

if TYPE_CHECKING:
    from restcore.config import ClientConfig


class KeySecretParams(AuthenticationStrategy):
    """Add ``api_key`` and ``api_secret`` to the request parameters.

    The parameters end up in the query string or in the request body,
    depending on the HTTP method.

    Args:
        config: The client configuration. ``api_key`` and ``api_secret``
            must be set.

    Raises:
        ValueError: If the key or the secret is missing.

    Example:
        ```pycon
        >>> from restcore.auth import KeySecretParams
        >>> from restcore.config import ClientConfig
        >>> params = {"page_size": 10}
        >>> KeySecretParams(ClientConfig(api_key="key", api_secret="secret")).update_params(params)
        >>> params
        {'page_size': 10, 'api_key': 'key', 'api_secret': 'secret'}

        ```
    """

    def __init__(self, config: ClientConfig) -> None:
        super().__init__(config)
        if not config.api_key or not config.api_secret:
            msg = "api_key and api_secret are required for key/secret authentication"
            raise ValueError(msg)

    def update_params(self, params: dict[str, Any]) -> None:
        params["api_key"] = self.config.api_key
        params["api_secret"] = self.config.api_secret
