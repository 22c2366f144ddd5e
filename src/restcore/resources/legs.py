r"""Conversation legs resource."""

from __future__ import annotations

__all__ = ["Legs"]

from typing import TYPE_CHECKING, Any

from restcore.auth import BearerToken
from restcore.config import NamespaceSettings
from restcore.method import HttpMethod
from restcore.namespace import Namespace

if TYPE_CHECKING:
    from collections.abc import Callable

    from restcore.response import Response


class Legs(Namespace):
    """Legs of the voice conversations.

    A leg is the connection of one participant to a conversation.
    """

    settings = NamespaceSettings(authentication=BearerToken, collection_key="legs")

    def list(self, *, auto_advance: bool = True, **params: Any) -> Response:
        """List the legs.

        Args:
            auto_advance: If ``True``, fetch every page and merge the
                legs into one response.
            **params: Filter and paging parameters (e.g. ``page_size``).

        Returns:
            The response holding the legs under ``_embedded.legs``.
        """
        return self._request("/beta/legs", params=params, auto_advance=auto_advance)

    def stream(self, sink: Callable[[bytes], Any], *, auto_advance: bool = True, **params: Any) -> None:
        """Stream the raw JSON pages of the legs list to ``sink``."""
        self._stream("/beta/legs", sink, params=params, auto_advance=auto_advance)

    def delete(self, leg_id: str) -> Response:
        return self._request(f"/beta/legs/{leg_id}", method=HttpMethod.DELETE)
