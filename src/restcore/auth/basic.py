r"""HTTP Basic authentication with the API key and secret."""

from __future__ import annotations

__all__ = ["BasicAuth"]

import base64
from typing import TYPE_CHECKING

from restcore.auth.base import AuthenticationStrategy

if TYPE_CHECKING:
    from restcore.config import ClientConfig


class BasicAuth(AuthenticationStrategy):
    """Send the API key and secret in an ``Authorization: Basic``
    header.

    Args:
        config: The client configuration. ``api_key`` and ``api_secret``
            must be set.

    Raises:
        ValueError: If the key or the secret is missing.
    """

    def __init__(self, config: ClientConfig) -> None:
        super().__init__(config)
        if not config.api_key or not config.api_secret:
            msg = "api_key and api_secret are required for basic authentication"
            raise ValueError(msg)

    def update_headers(self, headers: dict[str, str]) -> None:
        credentials = f"{self.config.api_key}:{self.config.api_secret}".encode()
        headers["Authorization"] = "Basic " + base64.b64encode(credentials).decode("ascii")
