r"""Response returned to the callers of the dispatcher."""

from __future__ import annotations

__all__ = ["Response"]

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx

from restcore.collection import collection_container, known_collection_key

if TYPE_CHECKING:
    from collections.abc import Iterator

    from restcore.entity import Entity


@dataclass
class Response:
    """Parsed HTTP response.

    The response owns its entity: the parser does not keep any reference
    to it once the response is built.

    Args:
        entity: The decoded payload, or ``None`` for responses without
            content or with a non-JSON body.
        status_code: The HTTP status code.
        headers: The HTTP response headers.
        http_response: The underlying ``httpx`` response, if any.
        collection_key: The collection field used to merge the pages of
            the response, if it was paginated.
    """

    entity: Entity | None
    status_code: int
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    http_response: httpx.Response | None = field(default=None, repr=False, compare=False)
    collection_key: str | None = field(default=None, compare=False)

    @classmethod
    def from_http_response(cls, entity: Entity | None, http_response: httpx.Response) -> Response:
        return cls(
            entity=entity,
            status_code=http_response.status_code,
            headers=http_response.headers,
            http_response=http_response,
        )

    def __iter__(self) -> Iterator[Any]:
        """Iterate over the items of the response collection.

        The collection is the list held under ``collection_key``, or
        under a known collection name when the response was not
        paginated. Nothing is yielded for responses without entity or
        without such a list, such as single-resource payloads.
        """
        if not self.entity:
            return iter(())
        container = collection_container(self.entity)
        key = self.collection_key or known_collection_key(container)
        items = container.get(key) if key is not None else None
        if not isinstance(items, list):
            return iter(())
        return iter(items)
