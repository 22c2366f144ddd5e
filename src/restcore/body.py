r"""Request body encoders for body-carrying HTTP methods."""

from __future__ import annotations

__all__ = ["FormData", "JsonBody", "RequestBodyEncoder"]

import json
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from collections.abc import Mapping


class RequestBodyEncoder(ABC):
    """Abstract base class for request body encoders.

    An encoder serializes the request parameters into the request body
    and declares the matching ``Content-Type`` header.
    """

    @abstractmethod
    def encode(self, headers: dict[str, str], params: Mapping[str, Any]) -> bytes:
        """Serialize the parameters into a request body.

        Args:
            headers: The request headers, updated in place with the
                ``Content-Type`` of the body.
            params: The request parameters.

        Returns:
            The encoded request body.
        """


class FormData(RequestBodyEncoder):
    """Encode the parameters as ``application/x-www-form-urlencoded``.

    The parameters are encoded the way ``httpx`` encodes a query string,
    so a mapping gives the same pairs in a body as in a URL: sequence
    values are sent as repeated keys, booleans as ``true``/``false`` and
    ``None`` as an empty value.

    Example:
        ```pycon
        >>> from restcore.body import FormData
        >>> headers = {}
        >>> FormData().encode(headers, {"to": "447700900000", "tags": ["a", "b"]})
        b'to=447700900000&tags=a&tags=b'
        >>> headers
        {'Content-Type': 'application/x-www-form-urlencoded'}

        ```
    """

    def encode(self, headers: dict[str, str], params: Mapping[str, Any]) -> bytes:
        headers["Content-Type"] = "application/x-www-form-urlencoded"
        return str(httpx.QueryParams(params)).encode("ascii")


class JsonBody(RequestBodyEncoder):
    """Encode the parameters as a JSON object."""

    def encode(self, headers: dict[str, str], params: Mapping[str, Any]) -> bytes:
        headers["Content-Type"] = "application/json"
        return json.dumps(dict(params)).encode("utf-8")
