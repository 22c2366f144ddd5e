from __future__ import annotations

import pytest

from restcore.method import HttpMethod

################################
#     Tests for HttpMethod     #
################################


@pytest.mark.parametrize("method", [HttpMethod.POST, HttpMethod.PUT, HttpMethod.PATCH])
def test_http_method_has_body(method: HttpMethod) -> None:
    assert method.has_body


@pytest.mark.parametrize("method", [HttpMethod.GET, HttpMethod.DELETE])
def test_http_method_has_no_body(method: HttpMethod) -> None:
    assert not method.has_body


def test_http_method_from_string() -> None:
    assert HttpMethod("DELETE") is HttpMethod.DELETE
