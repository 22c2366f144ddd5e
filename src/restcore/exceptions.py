r"""Exceptions raised when a request or its response cannot be
processed.

Transport failures (connection refused, timeouts, TLS errors) are not
wrapped: they surface as ``httpx.TransportError``, re-exported here as
``TransportError``.
"""

from __future__ import annotations

__all__ = [
    "ApiError",
    "AuthenticationError",
    "ClientError",
    "CollectionResolutionError",
    "DecodeError",
    "RestCoreError",
    "ServerError",
    "TransportError",
    "parse_error",
]

from typing import TYPE_CHECKING, Any

from httpx import TransportError

from restcore.entity import Entity

if TYPE_CHECKING:
    import httpx

# Fields checked, in order, to build a readable message from an error payload
ERROR_MESSAGE_FIELDS = ("title", "error_title", "message", "detail")


class RestCoreError(Exception):
    """Base class for the errors raised by ``restcore``."""


class ApiError(RestCoreError):
    """Raised when the server answers with a non-success status code.

    Args:
        message: A human-readable description of the error.
        status_code: The HTTP status code of the response.
        body: The parsed error payload. It is an ``Entity`` if the body
            is a JSON object, the raw text otherwise, or ``None`` if the
            body is empty.
        response: The HTTP response that triggered the error.

    Example:
        ```pycon
        >>> from restcore.exceptions import ApiError
        >>> error = ApiError("Not Found", status_code=404)
        >>> error.status_code
        404

        ```
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        body: Entity | str | None = None,
        response: httpx.Response | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.response = response


class AuthenticationError(ApiError):
    """Raised when the server rejects the request credentials (401)."""


class ClientError(ApiError):
    """Raised for 4xx responses other than 401."""


class ServerError(ApiError):
    """Raised for 5xx responses."""


class DecodeError(RestCoreError, ValueError):
    """Raised when a success response declared as JSON cannot be
    decoded.

    Args:
        message: A human-readable description of the error.
        response: The HTTP response whose body failed to decode.
    """

    def __init__(self, message: str, *, response: httpx.Response | None = None) -> None:
        super().__init__(message)
        self.response = response


class CollectionResolutionError(RestCoreError):
    """Raised when the collection of a paginated payload cannot be
    found or merged."""


def parse_error(response: httpx.Response) -> ApiError:
    """Build the error matching a non-success HTTP response.

    The body is parsed as JSON when possible so that structured error
    payloads are available on the error; otherwise the raw text is kept.

    Args:
        response: The non-success HTTP response. Its body must have
            been read.

    Returns:
        The ``ApiError`` subclass matching the status code.

    Example:
        ```pycon
        >>> import httpx
        >>> from restcore.exceptions import parse_error
        >>> error = parse_error(httpx.Response(401, json={"title": "Unauthorized"}))
        >>> type(error).__name__, str(error), error.body.title
        ('AuthenticationError', '401 Unauthorized', 'Unauthorized')

        ```
    """
    status_code = response.status_code
    body = _parse_error_body(response.text)
    if status_code == 401:
        error_class: type[ApiError] = AuthenticationError
    elif 400 <= status_code < 500:
        error_class = ClientError
    elif 500 <= status_code < 600:
        error_class = ServerError
    else:
        error_class = ApiError
    return error_class(
        _error_message(status_code, body), status_code=status_code, body=body, response=response
    )


def _parse_error_body(text: str) -> Entity | str | None:
    if not text:
        return None
    try:
        return Entity.from_json(text)
    except (ValueError, TypeError):
        return text


def _error_message(status_code: int, body: Any) -> str:
    if isinstance(body, Entity):
        for field in ERROR_MESSAGE_FIELDS:
            value = body.get(field)
            if isinstance(value, str) and value:
                return f"{status_code} {value}"
    return f"HTTP request failed with status {status_code}"
