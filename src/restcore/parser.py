r"""Convert raw HTTP responses into responses with typed entities."""

from __future__ import annotations

__all__ = ["JSON_MEDIA_TYPE", "ResponseParser", "is_json", "is_success"]

import logging
from typing import TYPE_CHECKING

from restcore.entity import Entity
from restcore.exceptions import DecodeError, parse_error
from restcore.response import Response

if TYPE_CHECKING:
    import httpx

logger: logging.Logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"


def is_success(response: httpx.Response) -> bool:
    """Indicate if the response has a 2xx status code."""
    return 200 <= response.status_code < 300


def is_json(response: httpx.Response) -> bool:
    """Indicate if the response declares a JSON body.

    Example:
        ```pycon
        >>> import httpx
        >>> from restcore.parser import is_json
        >>> is_json(httpx.Response(200, headers={"Content-Type": "application/json; charset=utf-8"}))
        True
        >>> is_json(httpx.Response(200, text="ok"))
        False

        ```
    """
    content_type = response.headers.get("Content-Type", "")
    return content_type.split(";")[0].strip().lower() == JSON_MEDIA_TYPE


class ResponseParser:
    """Parse HTTP responses into ``Response`` objects or errors.

    Example:
        ```pycon
        >>> import httpx
        >>> from restcore.parser import ResponseParser
        >>> response = ResponseParser().parse(httpx.Response(200, json={"page": 1}))
        >>> response.entity.page
        1
        >>> ResponseParser().parse(httpx.Response(204)).entity is None
        True

        ```
    """

    def parse(
        self, http_response: httpx.Response, response_class: type[Response] = Response
    ) -> Response:
        """Parse an HTTP response.

        Args:
            http_response: The HTTP response. Its body must have been
                read.
            response_class: The ``Response`` subclass to build.

        Returns:
            The parsed response. Its entity is ``None`` for 204 responses,
            empty bodies and non-JSON bodies.

        Raises:
            ApiError: If the status code is not 2xx.
            DecodeError: If a JSON success body cannot be decoded.
        """
        if not is_success(http_response):
            raise parse_error(http_response)
        if http_response.status_code == 204 or not is_json(http_response):
            return response_class.from_http_response(None, http_response)
        return response_class.from_http_response(self.decode(http_response), http_response)

    def decode(self, http_response: httpx.Response) -> Entity | None:
        """Decode the JSON body of a response into an entity.

        Args:
            http_response: The HTTP response with a JSON body.

        Returns:
            The decoded entity, or ``None`` if the body is empty.

        Raises:
            DecodeError: If the body is not a JSON object.
        """
        content = http_response.content
        if not content.strip():
            return None
        try:
            return Entity.from_json(content)
        except (ValueError, TypeError) as exc:
            logger.debug(f"Failed to decode JSON body of {http_response.status_code} response")
            msg = f"invalid JSON body in {http_response.status_code} response: {exc}"
            raise DecodeError(msg, response=http_response) from exc
