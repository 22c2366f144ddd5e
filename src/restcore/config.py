r"""Configuration objects shared by the dispatcher and resource
wrappers.

``ClientConfig`` is the process-wide configuration (credentials, hosts,
application identity). ``NamespaceSettings`` carries the per-resource
choices (host, authentication, body encoding, static headers) that a
resource wrapper selects once at the class level.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_API_HOST",
    "DEFAULT_REST_HOST",
    "DEFAULT_TIMEOUT",
    "ClientConfig",
    "Host",
    "NamespaceSettings",
]

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from restcore.auth import KeySecretParams
from restcore.body import FormData
from restcore.validation import validate_host, validate_timeout

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from restcore.auth import AuthenticationStrategy
    from restcore.body import RequestBodyEncoder

DEFAULT_API_HOST = "api.nexmo.com"
DEFAULT_REST_HOST = "rest.nexmo.com"

# Default timeout in seconds for HTTP requests
DEFAULT_TIMEOUT = 10.0


class Host(str, Enum):
    """Selects which configured hostname a resource talks to."""

    API = "api"
    REST = "rest"


@dataclass(frozen=True)
class ClientConfig:
    """Process-wide configuration of the API client.

    Args:
        api_key: The account API key.
        api_secret: The account API secret.
        token: A bearer token (for example a JWT) for token-based
            authentication.
        app_name: Optional name of the calling application, added to
            the User-Agent header together with ``app_version``.
        app_version: Optional version of the calling application.
        api_host: The hostname of the main API.
        rest_host: The hostname of the alternate REST API.
        timeout: Maximum seconds to wait for the server. Must be > 0.

    Example:
        ```pycon
        >>> from restcore.config import ClientConfig, Host
        >>> config = ClientConfig(api_key="key", api_secret="secret")
        >>> config.host_for(Host.REST)
        'rest.nexmo.com'
        >>> config.merge(timeout=30.0).timeout
        30.0
        >>> config.timeout  # Original unchanged
        10.0

        ```
    """

    api_key: str | None = None
    api_secret: str | None = field(default=None, repr=False)
    token: str | None = field(default=None, repr=False)
    app_name: str | None = None
    app_version: str | None = None
    api_host: str = DEFAULT_API_HOST
    rest_host: str = DEFAULT_REST_HOST
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        validate_host("api_host", self.api_host)
        validate_host("rest_host", self.rest_host)
        validate_timeout(self.timeout)

    def host_for(self, host: Host) -> str:
        """Return the hostname configured for ``host``."""
        return self.rest_host if host is Host.REST else self.api_host

    def merge(self, **overrides: Any) -> ClientConfig:
        """Create a new config with the non-None ``overrides`` applied."""
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)


@dataclass(frozen=True)
class NamespaceSettings:
    """Immutable per-resource request settings.

    Args:
        host: Which configured hostname the resource uses.
        authentication: Factory building a fresh authentication strategy
            from the client configuration for every request. Usually an
            ``AuthenticationStrategy`` subclass.
        request_body: The encoder used for body-carrying methods.
        request_headers: Static headers sent with every request. They
            are applied before authentication headers.
        collection_key: The field holding the collection of paginated
            responses. If ``None``, it is detected from the payload.
    """

    host: Host = Host.API
    authentication: Callable[[ClientConfig], AuthenticationStrategy] = KeySecretParams
    request_body: RequestBodyEncoder = field(default_factory=FormData)
    request_headers: Mapping[str, str] = field(default_factory=dict)
    collection_key: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "request_headers", MappingProxyType(dict(self.request_headers)))
