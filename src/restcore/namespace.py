r"""Base class of the thin resource wrappers."""

from __future__ import annotations

__all__ = ["Namespace"]

from typing import TYPE_CHECKING, Any, ClassVar

from restcore.config import NamespaceSettings
from restcore.dispatcher import RequestDispatcher
from restcore.method import HttpMethod
from restcore.response import Response

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from types import TracebackType
    from typing import Self

    import httpx

    from restcore.config import ClientConfig


class Namespace:
    r"""Base class of the API resource wrappers.

    Subclasses select their host, authentication and static headers by
    assigning an immutable ``NamespaceSettings`` to the ``settings``
    class attribute, and expose one method per endpoint built on
    ``_request`` or ``_stream``.

    Args:
        config: The client configuration.
        client: Optional ``httpx.Client`` shared with other resources.
            If ``None``, the resource creates its own client.

    Example:
        ```pycon
        >>> from restcore.auth import BearerToken
        >>> from restcore.config import NamespaceSettings
        >>> from restcore.namespace import Namespace
        >>> class Users(Namespace):
        ...     settings = NamespaceSettings(authentication=BearerToken, collection_key="users")
        ...     def list(self):
        ...         return self._request("/v0.3/users", auto_advance=True)
        ...

        ```
    """

    settings: ClassVar[NamespaceSettings] = NamespaceSettings()

    def __init__(self, config: ClientConfig, *, client: httpx.Client | None = None) -> None:
        self._config = config
        self._dispatcher = RequestDispatcher(config, self.settings, client=client)

    @property
    def config(self) -> ClientConfig:
        return self._config

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        self._dispatcher.close()

    def _request(
        self,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        method: HttpMethod = HttpMethod.GET,
        auto_advance: bool = False,
        response_class: type[Response] = Response,
    ) -> Response:
        return self._dispatcher.send(
            path,
            params=params,
            method=method,
            auto_advance=auto_advance,
            response_class=response_class,
        )

    def _stream(
        self,
        path: str,
        sink: Callable[[bytes], Any],
        *,
        params: Mapping[str, Any] | None = None,
        method: HttpMethod = HttpMethod.GET,
        auto_advance: bool = False,
    ) -> None:
        self._dispatcher.stream(
            path, sink, params=params, method=method, auto_advance=auto_advance
        )
