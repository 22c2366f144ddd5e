r"""HTTP methods supported by the request dispatcher."""

from __future__ import annotations

__all__ = ["HttpMethod"]

from enum import Enum


class HttpMethod(str, Enum):
    """HTTP verb used to build a request.

    The ``has_body`` capability decides whether the request parameters
    are sent in the query string or encoded into the request body.

    Example:
        ```pycon
        >>> from restcore.method import HttpMethod
        >>> HttpMethod.GET.has_body
        False
        >>> HttpMethod.POST.has_body
        True

        ```
    """

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    @property
    def has_body(self) -> bool:
        """Indicate if the method carries the parameters in the body."""
        return self in _BODY_METHODS


_BODY_METHODS = frozenset({HttpMethod.POST, HttpMethod.PUT, HttpMethod.PATCH})
