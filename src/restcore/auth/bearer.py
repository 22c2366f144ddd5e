r"""Bearer token authentication."""

from __future__ import annotations

__all__ = ["BearerToken"]

from typing import TYPE_CHECKING

from restcore.auth.base import AuthenticationStrategy

if TYPE_CHECKING:
    from restcore.config import ClientConfig


class BearerToken(AuthenticationStrategy):
    """Send the configured token in an ``Authorization: Bearer``
    header.

    Args:
        config: The client configuration. ``token`` must be set.

    Raises:
        ValueError: If no token is configured.
    """

    def __init__(self, config: ClientConfig) -> None:
        super().__init__(config)
        if not config.token:
            msg = "token is required for bearer token authentication"
            raise ValueError(msg)

    def update_headers(self, headers: dict[str, str]) -> None:
        headers["Authorization"] = f"Bearer {self.config.token}"
