from __future__ import annotations

import httpx
import pytest

from restcore.entity import Entity
from restcore.exceptions import (
    ApiError,
    AuthenticationError,
    ClientError,
    DecodeError,
    RestCoreError,
    ServerError,
    TransportError,
    parse_error,
)

#################################
#     Tests for parse_error     #
#################################


@pytest.mark.parametrize(
    ("status_code", "error_class"),
    [
        (401, AuthenticationError),
        (400, ClientError),
        (404, ClientError),
        (422, ClientError),
        (500, ServerError),
        (503, ServerError),
        (302, ApiError),
    ],
)
def test_parse_error_class(status_code: int, error_class: type[ApiError]) -> None:
    error = parse_error(httpx.Response(status_code))
    assert type(error) is error_class
    assert error.status_code == status_code


def test_parse_error_json_body() -> None:
    response = httpx.Response(
        404, json={"type": "https://example.com/errors#not-found", "title": "Not Found"}
    )
    error = parse_error(response)
    assert str(error) == "404 Not Found"
    assert isinstance(error.body, Entity)
    assert error.body.type == "https://example.com/errors#not-found"
    assert error.response is response


def test_parse_error_message_falls_back_to_other_fields() -> None:
    error = parse_error(httpx.Response(400, json={"error_title": "Bad number"}))
    assert str(error) == "400 Bad number"


def test_parse_error_text_body() -> None:
    error = parse_error(httpx.Response(502, text="<html>Bad Gateway</html>"))
    assert error.body == "<html>Bad Gateway</html>"
    assert str(error) == "HTTP request failed with status 502"


def test_parse_error_empty_body() -> None:
    error = parse_error(httpx.Response(500))
    assert error.body is None


def test_parse_error_json_array_body_is_kept_as_text() -> None:
    error = parse_error(httpx.Response(400, text='["a"]'))
    assert error.body == '["a"]'


############################
#     Tests for errors     #
############################


def test_errors_share_base_class() -> None:
    assert issubclass(ApiError, RestCoreError)
    assert issubclass(DecodeError, RestCoreError)
    assert issubclass(DecodeError, ValueError)


def test_transport_error_is_httpx_error() -> None:
    assert TransportError is httpx.TransportError
