r"""Shared test helpers for the dispatcher and pagination tests.

This module contains a scripted ``httpx`` transport that replays
prepared responses and records the requests it receives.
"""

from __future__ import annotations

__all__ = [
    "API_URL",
    "ScriptedTransport",
    "create_dispatcher",
    "offset_page",
    "page_style_page",
]

from typing import TYPE_CHECKING, Any

import httpx

from restcore.config import ClientConfig, NamespaceSettings
from restcore.dispatcher import RequestDispatcher

if TYPE_CHECKING:
    from collections.abc import Iterable

API_URL = "https://api.nexmo.com"


class ScriptedTransport(httpx.MockTransport):
    """Mock transport returning prepared responses in order.

    Args:
        responses: The responses to return, one per request. An
            exception instance is raised instead of being returned.
    """

    def __init__(self, responses: Iterable[httpx.Response | Exception]) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            msg = f"unexpected request: {request.method} {request.url}"
            raise AssertionError(msg)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def create_dispatcher(
    responses: Iterable[httpx.Response | Exception],
    *,
    config: ClientConfig | None = None,
    settings: NamespaceSettings | None = None,
) -> tuple[RequestDispatcher, ScriptedTransport]:
    """Create a dispatcher whose client replays ``responses``."""
    transport = ScriptedTransport(responses)
    dispatcher = RequestDispatcher(
        config or ClientConfig(api_key="key", api_secret="secret"),
        settings,
        client=httpx.Client(transport=transport),
    )
    return dispatcher, transport


def offset_page(
    record_index: int, page_size: int, count: int, items: list[Any], key: str = "legs"
) -> httpx.Response:
    """Create a JSON response for an offset-style page."""
    return httpx.Response(
        200,
        json={"record_index": record_index, "page_size": page_size, "count": count, key: items},
    )


def page_style_page(page: int, total_pages: int, items: list[Any]) -> httpx.Response:
    """Create a JSON response for a page-style page with an
    ``_embedded`` collection."""
    return httpx.Response(
        200,
        json={"page": page, "total_pages": total_pages, "_embedded": {"conversations": items}},
    )
