r"""Build, sign and send HTTP requests to the API.

The ``RequestDispatcher`` is the single entry point used by resource
wrappers. It supports two response-handling modes selected up front:

- ``send`` parses the response (or every page of it when
  ``auto_advance`` is set) into a ``Response``;
- ``stream`` writes the raw body to a caller-supplied sink and returns
  nothing.

Transport failures raised by ``httpx`` are propagated unchanged.
"""

from __future__ import annotations

__all__ = ["RequestDispatcher"]

import logging
from typing import TYPE_CHECKING, Any

import httpx

from restcore.config import NamespaceSettings
from restcore.exceptions import parse_error
from restcore.method import HttpMethod
from restcore.pagination import PaginationEngine
from restcore.parser import ResponseParser, is_success
from restcore.response import Response
from restcore.user_agent import user_agent
from restcore.utils import log_structured, redact_headers

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from types import TracebackType
    from typing import Self

    from restcore.config import ClientConfig

logger: logging.Logger = logging.getLogger(__name__)

# Query parameters whose values are masked in log records
SENSITIVE_PARAMS = ("api_secret", "sig")


class RequestDispatcher:
    r"""Send signed requests to one API host.

    The dispatcher holds one ``httpx.Client`` for its whole lifetime and
    reuses it for every request. It is meant to be used from a single
    thread; use one dispatcher per thread for concurrent requests.

    Args:
        config: The client configuration.
        settings: The request settings of the resource (host,
            authentication, body encoding, static headers). If ``None``,
            the default settings are used.
        client: Optional ``httpx.Client`` to send requests with. If
            ``None``, a client is created and closed by ``close``.
        parser: Optional response parser.

    Example:
        ```pycon
        >>> from restcore.auth import BearerToken
        >>> from restcore.config import ClientConfig, NamespaceSettings
        >>> from restcore.dispatcher import RequestDispatcher
        >>> config = ClientConfig(token="token")
        >>> with RequestDispatcher(
        ...     config, NamespaceSettings(authentication=BearerToken)
        ... ) as dispatcher:  # doctest: +SKIP
        ...     response = dispatcher.send("/beta/legs", auto_advance=True)
        ...

        ```
    """

    def __init__(
        self,
        config: ClientConfig,
        settings: NamespaceSettings | None = None,
        *,
        client: httpx.Client | None = None,
        parser: ResponseParser | None = None,
    ) -> None:
        self._config = config
        self._settings = settings or NamespaceSettings()
        self._host = config.host_for(self._settings.host)
        self._client: httpx.Client = client or httpx.Client(timeout=config.timeout)
        self._close_client = client is None
        self._parser = parser or ResponseParser()
        self._pagination = PaginationEngine(self)

    @property
    def host(self) -> str:
        return self._host

    @property
    def parser(self) -> ResponseParser:
        return self._parser

    @property
    def settings(self) -> NamespaceSettings:
        return self._settings

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
        """Close the underlying ``httpx.Client`` if the dispatcher
        created it."""
        if self._close_client:
            self._client.close()
            self._close_client = False

    def build_request(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        method: HttpMethod | str = HttpMethod.GET,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Request:
        """Build a signed request.

        The authentication strategy is created fresh for the request and
        applied in order: to the parameters, then to the URL once the
        query string is set, then to the headers. The User-Agent, the
        static resource headers and the per-call headers are set before
        the authentication headers, so the strategy may override them.
        For body-carrying methods the parameters are encoded into the
        body last.

        Args:
            path: The API route, without query string.
            params: The request parameters. The mapping is not modified.
            method: The HTTP method.
            headers: Additional headers for this request.

        Returns:
            The request, ready to be sent.
        """
        method = HttpMethod(method)
        params = dict(params or {})
        authentication = self._settings.authentication(self._config)
        authentication.update_params(params)

        url = httpx.URL(f"https://{self._host}{path}")
        if not method.has_body and params:
            url = url.copy_merge_params(params)
        url = authentication.update_url(url)

        request_headers = {"User-Agent": user_agent(self._config.app_name, self._config.app_version)}
        request_headers.update(self._settings.request_headers)
        request_headers.update(headers or {})
        authentication.update_headers(request_headers)

        content = None
        if method.has_body:
            content = self._settings.request_body.encode(request_headers, params)
        return self._client.build_request(
            method.value, url, headers=request_headers, content=content
        )

    def execute(self, request: httpx.Request) -> httpx.Response:
        """Send a request and read the whole response body.

        Args:
            request: The request to send.

        Returns:
            The HTTP response, whatever its status code.

        Raises:
            httpx.TransportError: If the request cannot be sent.
        """
        self._log_request(request)
        http_response = self._client.send(request)
        self._log_response(http_response, body=http_response.text)
        return http_response

    def execute_streaming(
        self,
        request: httpx.Request,
        sink: Callable[[bytes], Any],
        *,
        keep_body: bool = False,
    ) -> bytes:
        """Send a request and stream the response body to ``sink``.

        Args:
            request: The request to send.
            sink: Called with each chunk of the response body.
            keep_body: If ``True``, the streamed body is also returned.

        Returns:
            The streamed body if ``keep_body`` is set, empty bytes
            otherwise.

        Raises:
            ApiError: If the status code is not 2xx. Nothing is streamed
                to ``sink`` in this case.
            httpx.TransportError: If the request cannot be sent.
        """
        self._log_request(request)
        http_response = self._client.send(request, stream=True)
        try:
            self._log_response(http_response)
            if not is_success(http_response):
                http_response.read()
                raise parse_error(http_response)
            body = bytearray()
            for chunk in http_response.iter_bytes():
                sink(chunk)
                if keep_body:
                    body.extend(chunk)
        finally:
            http_response.close()
        return bytes(body)

    def send(
        self,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        method: HttpMethod | str = HttpMethod.GET,
        headers: Mapping[str, str] | None = None,
        auto_advance: bool = False,
        collection_key: str | None = None,
        response_class: type[Response] = Response,
    ) -> Response:
        """Send a request and parse its response.

        Args:
            path: The API route, without query string.
            params: The request parameters. The mapping is not modified.
            method: The HTTP method.
            headers: Additional headers for this request.
            auto_advance: If ``True``, fetch every page of the result
                and merge their collections into one response.
            collection_key: The field holding the collection of the
                pages. If ``None``, the resource setting is used, and
                the field is detected from the payload if it is unset.
            response_class: The ``Response`` subclass to build.

        Returns:
            The parsed response.

        Raises:
            ApiError: If the status code is not 2xx.
            DecodeError: If a JSON success body cannot be decoded.
            httpx.TransportError: If a request cannot be sent.
        """
        request = self.build_request(path, params, method, headers)
        if auto_advance:
            return self._pagination.fetch_all(
                path,
                params,
                request,
                collection_key=collection_key or self._settings.collection_key,
                response_class=response_class,
            )
        return self._parser.parse(self.execute(request), response_class)

    def stream(
        self,
        path: str,
        sink: Callable[[bytes], Any],
        *,
        params: Mapping[str, Any] | None = None,
        method: HttpMethod | str = HttpMethod.GET,
        headers: Mapping[str, str] | None = None,
        auto_advance: bool = False,
    ) -> None:
        """Send a request and stream the raw response body to ``sink``.

        No entity is decoded and no collection is merged. With
        ``auto_advance``, the body of every page is streamed in order.

        Args:
            path: The API route, without query string.
            sink: Called with each chunk of the response body.
            params: The request parameters. The mapping is not modified.
            method: The HTTP method.
            headers: Additional headers for this request.
            auto_advance: If ``True``, stream every page of the result.

        Raises:
            ApiError: If the status code is not 2xx.
            httpx.TransportError: If a request cannot be sent.
        """
        request = self.build_request(path, params, method, headers)
        if auto_advance:
            self._pagination.stream_all(path, params, request, sink)
        else:
            self.execute_streaming(request, sink)

    def _log_request(self, request: httpx.Request) -> None:
        log_structured(
            logger,
            logging.INFO,
            "Sending request",
            http_method=request.method,
            url=str(_loggable_url(request.url)),
        )
        log_structured(
            logger, logging.DEBUG, "Request headers", headers=redact_headers(request.headers)
        )

    def _log_response(self, http_response: httpx.Response, body: str | None = None) -> None:
        log_structured(
            logger,
            logging.INFO,
            "Received response",
            status_code=http_response.status_code,
            host=self._host,
        )
        if body:
            log_structured(logger, logging.DEBUG, "Response body", body=body)


def _loggable_url(url: httpx.URL) -> httpx.URL:
    for key in SENSITIVE_PARAMS:
        if key in url.params:
            url = url.copy_with(params=url.params.set(key, "[REDACTED]"))
    return url
