r"""Automatic pagination over multi-page result sets.

Two server conventions are supported, and a given endpoint uses only
one of them:

- offset style: ``record_index``, ``page_size`` and ``count`` fields,
  the next page is requested with the ``record_index`` parameter;
- page style: ``page`` and ``total_pages`` fields, the next page is
  requested with the ``page`` parameter.

A payload exposing neither convention is treated as exhaustive.
"""

from __future__ import annotations

__all__ = ["PaginationEngine", "PaginationState", "PaginationStyle"]

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from restcore.collection import CollectionResolver
from restcore.method import HttpMethod
from restcore.response import Response
from restcore.utils import correlation_scope

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    import httpx

    from restcore.dispatcher import RequestDispatcher

logger: logging.Logger = logging.getLogger(__name__)


class PaginationStyle(str, Enum):
    """Pagination convention exposed by a payload."""

    OFFSET = "offset"
    PAGE = "page"
    NONE = "none"


@dataclass(frozen=True)
class PaginationState:
    """Pagination cursor read from one page of results.

    Args:
        style: The pagination convention of the page.
        record_index: The offset of the first record of the page
            (offset style).
        page_size: The number of records per page (offset style).
        count: The total number of records (offset style).
        page: The index of the page, starting at 1 (page style).
        total_pages: The total number of pages (page style).

    Example:
        ```pycon
        >>> from restcore.pagination import PaginationState
        >>> state = PaginationState.from_payload({"record_index": 0, "page_size": 10, "count": 25})
        >>> state.remaining
        15
        >>> state.next_params({"order": "asc"})
        {'order': 'asc', 'record_index': 10}
        >>> PaginationState.from_payload({"page": 2, "total_pages": 2}).remaining
        0

        ```
    """

    style: PaginationStyle = PaginationStyle.NONE
    record_index: int = 0
    page_size: int = 0
    count: int = 0
    page: int = 1
    total_pages: int = 0

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any] | None) -> PaginationState:
        """Read the pagination cursor of a decoded page.

        Args:
            payload: The decoded page, or ``None`` if the page has no
                JSON body.

        Returns:
            The pagination state. Page style takes precedence when both
            conventions are present.
        """
        if not payload:
            return cls()
        if "total_pages" in payload:
            return cls(
                style=PaginationStyle.PAGE,
                page=_as_int(payload.get("page"), default=1),
                total_pages=_as_int(payload["total_pages"]),
            )
        if "count" in payload:
            return cls(
                style=PaginationStyle.OFFSET,
                record_index=_as_int(payload.get("record_index")),
                page_size=_as_int(payload.get("page_size")),
                count=_as_int(payload["count"]),
            )
        return cls()

    @property
    def next_record_index(self) -> int:
        if self.record_index == 0:
            return self.page_size
        return self.record_index + self.page_size

    @property
    def remaining(self) -> int:
        """The number of pages (page style) or records (offset style)
        left after this page. The value can be negative once the last
        page has been fetched."""
        if self.style is PaginationStyle.PAGE:
            return self.total_pages - self.page
        if self.style is PaginationStyle.OFFSET:
            if self.page_size <= 0:
                logger.warning(
                    f"Cannot advance offset pagination with page_size={self.page_size}"
                )
                return 0
            return self.count - self.next_record_index
        return 0

    def next_params(self, params: Mapping[str, Any]) -> dict[str, Any]:
        """Return a copy of ``params`` requesting the next page."""
        next_params = dict(params)
        if self.style is PaginationStyle.OFFSET:
            next_params["record_index"] = self.next_record_index
        elif self.style is PaginationStyle.PAGE:
            next_params["page"] = self.page + 1
        return next_params


class PaginationEngine:
    """Fetch all the pages of a paginated endpoint.

    Pages are fetched sequentially since each page's cursor depends on
    the previous page. Any error while fetching a page aborts the whole
    operation and the pages already fetched are discarded. The log records
    of all the pages share one correlation identifier.

    Args:
        dispatcher: The dispatcher used to build and send requests.
    """

    def __init__(self, dispatcher: RequestDispatcher) -> None:
        self._dispatcher = dispatcher

    def fetch_all(
        self,
        path: str,
        params: Mapping[str, Any] | None,
        request: httpx.Request,
        *,
        collection_key: str | None = None,
        response_class: type[Response] = Response,
    ) -> Response:
        """Fetch every page and merge their collections.

        Args:
            path: The API route of the endpoint.
            params: The parameters of the first request, before signing.
            request: The first request, already built and signed.
            collection_key: The field holding the collection. If
                ``None``, it is detected from the first page.
            response_class: The ``Response`` subclass to build.

        Returns:
            The response of the first page, whose collection holds the
            items of all the pages in fetch order.

        Raises:
            ApiError: If any page has a non-success status code.
            DecodeError: If any page has an invalid JSON body.
            CollectionResolutionError: If the collections cannot be
                merged.
        """
        parser = self._dispatcher.parser
        resolver = CollectionResolver(collection_key)
        with correlation_scope():
            response = parser.parse(self._dispatcher.execute(request), response_class)
            state = PaginationState.from_payload(response.entity)
            page_params = dict(params or {})
            pages = 1
            while state.remaining > 0:
                page_params = state.next_params(page_params)
                next_request = self._dispatcher.build_request(path, page_params, HttpMethod.GET)
                page = parser.parse(self._dispatcher.execute(next_request), response_class)
                state = PaginationState.from_payload(page.entity)
                if response.entity is not None and page.entity is not None:
                    resolver.merge(response.entity, page.entity)
                pages += 1
            logger.debug(f"Fetched {pages} page(s) from {path}")
        response.collection_key = resolver.key
        return response

    def stream_all(
        self,
        path: str,
        params: Mapping[str, Any] | None,
        request: httpx.Request,
        sink: Callable[[bytes], Any],
    ) -> None:
        """Stream the body of every page to ``sink``.

        The pages are neither merged nor decoded into entities; only the
        pagination cursor is read from each body.

        Args:
            path: The API route of the endpoint.
            params: The parameters of the first request, before signing.
            request: The first request, already built and signed.
            sink: Called with each chunk of each page body.

        Raises:
            ApiError: If any page has a non-success status code.
        """
        with correlation_scope():
            body = self._dispatcher.execute_streaming(request, sink, keep_body=True)
            state = PaginationState.from_payload(_cursor_payload(body))
            page_params = dict(params or {})
            while state.remaining > 0:
                page_params = state.next_params(page_params)
                next_request = self._dispatcher.build_request(path, page_params, HttpMethod.GET)
                body = self._dispatcher.execute_streaming(next_request, sink, keep_body=True)
                state = PaginationState.from_payload(_cursor_payload(body))


def _as_int(value: Any, default: int = 0) -> int:
    if value is None:
        return default
    return int(value)


def _cursor_payload(body: bytes) -> dict[str, Any] | None:
    r"""Read the cursor fields of a streamed page body.

    Bodies that are not JSON objects carry no cursor.
    """
    try:
        payload = json.loads(body)
    except ValueError:
        return None
    return payload if isinstance(payload, dict) else None
