r"""restcore - Request/response engine for REST API client SDKs.

This package provides the generic layer shared by the resource wrappers
of a REST API client: it builds and signs HTTP requests, walks
multi-page result sets, and converts raw HTTP responses into typed
entities or errors. Built on top of the httpx library, it is
synchronous and sends one request at a time.

Key Features:
    - Pluggable authentication strategies (key/secret params, Basic, bearer token)
    - Form-encoded or JSON request bodies for body-carrying methods
    - Automatic pagination for offset-style and page-style endpoints
    - Dynamically shaped entities decoded from JSON payloads
    - Streaming mode writing raw response bodies to a sink
    - Structured logging of requests and responses

Example:
    ```pycon
    >>> from restcore import ClientConfig
    >>> from restcore.resources import Legs
    >>> with Legs(ClientConfig(token="token")) as legs:  # doctest: +SKIP
    ...     response = legs.list()
    ...     for leg in response:
    ...         print(leg.uuid)
    ...

    ```
"""

from __future__ import annotations

__all__ = [
    "ApiError",
    "ClientConfig",
    "DecodeError",
    "Entity",
    "Host",
    "HttpMethod",
    "Namespace",
    "NamespaceSettings",
    "RequestDispatcher",
    "Response",
    "RestCoreError",
    "TransportError",
    "__version__",
]

from importlib.metadata import PackageNotFoundError, version

from restcore.config import ClientConfig, Host, NamespaceSettings
from restcore.dispatcher import RequestDispatcher
from restcore.entity import Entity
from restcore.exceptions import ApiError, DecodeError, RestCoreError, TransportError
from restcore.method import HttpMethod
from restcore.namespace import Namespace
from restcore.response import Response

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
