from __future__ import annotations

import json

import httpx
import pytest

from restcore.entity import Entity
from restcore.exceptions import ApiError, ClientError, DecodeError, ServerError
from restcore.parser import ResponseParser, is_json, is_success
from restcore.response import Response

JSON_HEADERS = {"Content-Type": "application/json"}


@pytest.fixture
def parser() -> ResponseParser:
    return ResponseParser()


###################################
#     Tests for ResponseParser    #
###################################


def test_parse_json_success(parser: ResponseParser) -> None:
    http_response = httpx.Response(200, json={"uuid": "abc", "_embedded": {"legs": []}})
    response = parser.parse(http_response)
    assert isinstance(response.entity, Entity)
    assert response.entity.uuid == "abc"
    assert response.status_code == 200
    assert response.headers["Content-Type"] == "application/json"
    assert response.http_response is http_response


def test_parse_json_with_charset(parser: ResponseParser) -> None:
    http_response = httpx.Response(
        201, content=b'{"id": 1}', headers={"Content-Type": "application/json; charset=utf-8"}
    )
    assert parser.parse(http_response).entity == {"id": 1}


def test_parse_no_content(parser: ResponseParser) -> None:
    response = parser.parse(httpx.Response(204, headers=JSON_HEADERS))
    assert response.entity is None
    assert response.status_code == 204


def test_parse_no_content_does_not_decode(parser: ResponseParser) -> None:
    response = parser.parse(httpx.Response(204, content=b"{invalid", headers=JSON_HEADERS))
    assert response.entity is None


def test_parse_non_json_success(parser: ResponseParser) -> None:
    response = parser.parse(httpx.Response(200, content=b"audio", headers={"Content-Type": "audio/mpeg"}))
    assert response.entity is None
    assert response.status_code == 200


def test_parse_json_empty_body(parser: ResponseParser) -> None:
    response = parser.parse(httpx.Response(200, content=b"", headers=JSON_HEADERS))
    assert response.entity is None


def test_parse_json_malformed_body(parser: ResponseParser) -> None:
    http_response = httpx.Response(200, content=b'{"uuid": ', headers=JSON_HEADERS)
    with pytest.raises(DecodeError, match=r"invalid JSON body in 200 response") as exc_info:
        parser.parse(http_response)
    assert exc_info.value.response is http_response
    assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)


def test_parse_json_array_body(parser: ResponseParser) -> None:
    with pytest.raises(DecodeError, match=r"expected a JSON object"):
        parser.parse(httpx.Response(200, content=b"[1, 2]", headers=JSON_HEADERS))


def test_parse_client_error(parser: ResponseParser) -> None:
    with pytest.raises(ClientError, match=r"404 Not Found") as exc_info:
        parser.parse(httpx.Response(404, json={"title": "Not Found"}))
    assert exc_info.value.status_code == 404
    assert exc_info.value.body.title == "Not Found"


def test_parse_server_error(parser: ResponseParser) -> None:
    with pytest.raises(ServerError):
        parser.parse(httpx.Response(500, text="oops"))


def test_parse_redirect_is_error(parser: ResponseParser) -> None:
    with pytest.raises(ApiError):
        parser.parse(httpx.Response(301, headers={"Location": "https://example.com"}))


def test_parse_response_class(parser: ResponseParser) -> None:
    class LegsResponse(Response):
        pass

    response = parser.parse(httpx.Response(200, json={"legs": []}), LegsResponse)
    assert isinstance(response, LegsResponse)


#################################
#     Tests for predicates      #
#################################


@pytest.mark.parametrize(("status_code", "expected"), [(200, True), (299, True), (199, False), (300, False), (404, False)])
def test_is_success(status_code: int, expected: bool) -> None:
    assert is_success(httpx.Response(status_code)) is expected


def test_is_json_case_insensitive() -> None:
    assert is_json(httpx.Response(200, headers={"Content-Type": "Application/JSON"}))


def test_is_json_missing_content_type() -> None:
    assert not is_json(httpx.Response(200))


##############################
#     Tests for Response     #
##############################


def test_response_iterates_embedded_collection(parser: ResponseParser) -> None:
    response = parser.parse(httpx.Response(200, json={"page": 1, "_embedded": {"legs": [{"uuid": "a"}, {"uuid": "b"}]}}))
    assert [leg.uuid for leg in response] == ["a", "b"]


def test_response_iterates_top_level_collection(parser: ResponseParser) -> None:
    response = parser.parse(httpx.Response(200, json={"count": 2, "data": [1, 2]}))
    assert list(response) == [1, 2]


def test_response_without_entity_iterates_nothing() -> None:
    assert list(Response(entity=None, status_code=204)) == []


@pytest.mark.parametrize(
    "payload",
    [
        {"uuid": "abc", "status": "done"},
        {"id": 42, "name": "demo"},
        {"legs": "not-a-list"},
    ],
)
def test_response_single_resource_iterates_nothing(
    parser: ResponseParser, payload: dict, caplog: pytest.LogCaptureFixture
) -> None:
    response = parser.parse(httpx.Response(200, json=payload))
    assert list(response) == []
    assert not caplog.records


def test_response_iterates_declared_collection_key() -> None:
    response = Response(
        entity=Entity({"uuid": "abc", "entries": [1, 2]}),
        status_code=200,
        collection_key="entries",
    )
    assert list(response) == [1, 2]
