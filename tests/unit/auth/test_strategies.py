from __future__ import annotations

import base64

import httpx
import pytest

from restcore.auth import (
    AuthenticationStrategy,
    BasicAuth,
    BearerToken,
    KeySecretParams,
    NoAuthentication,
)
from restcore.config import ClientConfig

#############################################
#     Tests for AuthenticationStrategy      #
#############################################


def test_no_authentication_hooks_are_noops(config: ClientConfig) -> None:
    strategy = NoAuthentication(config)
    params = {"a": 1}
    headers = {"Accept": "*/*"}
    url = httpx.URL("https://api.nexmo.com/v1?a=1")
    strategy.update_params(params)
    strategy.update_headers(headers)
    assert strategy.update_url(url) is url
    assert params == {"a": 1}
    assert headers == {"Accept": "*/*"}
    assert strategy.config is config


def test_authentication_strategy_is_subclassable(config: ClientConfig) -> None:
    class SignedUrl(AuthenticationStrategy):
        def update_url(self, url: httpx.URL) -> httpx.URL:
            return url.copy_add_param("sig", "abc")

    url = SignedUrl(config).update_url(httpx.URL("https://api.nexmo.com/v1"))
    assert url.params["sig"] == "abc"


#####################################
#     Tests for KeySecretParams     #
#####################################


def test_key_secret_params_update_params(config: ClientConfig) -> None:
    params = {"page_size": 10}
    KeySecretParams(config).update_params(params)
    assert params == {"page_size": 10, "api_key": "key", "api_secret": "secret"}


def test_key_secret_params_headers_untouched(config: ClientConfig) -> None:
    headers: dict[str, str] = {}
    KeySecretParams(config).update_headers(headers)
    assert headers == {}


@pytest.mark.parametrize(
    "config", [ClientConfig(api_key="key"), ClientConfig(api_secret="secret"), ClientConfig()]
)
def test_key_secret_params_missing_credentials(config: ClientConfig) -> None:
    with pytest.raises(ValueError, match=r"api_key and api_secret are required"):
        KeySecretParams(config)


###############################
#     Tests for BasicAuth     #
###############################


def test_basic_auth_update_headers(config: ClientConfig) -> None:
    headers: dict[str, str] = {}
    BasicAuth(config).update_headers(headers)
    assert headers == {"Authorization": "Basic " + base64.b64encode(b"key:secret").decode()}


def test_basic_auth_missing_credentials() -> None:
    with pytest.raises(ValueError, match=r"basic authentication"):
        BasicAuth(ClientConfig(api_key="key"))


#################################
#     Tests for BearerToken     #
#################################


def test_bearer_token_update_headers(config: ClientConfig) -> None:
    headers = {"Authorization": "overridden"}
    BearerToken(config).update_headers(headers)
    assert headers == {"Authorization": "Bearer token"}


def test_bearer_token_params_untouched(config: ClientConfig) -> None:
    params: dict[str, str] = {}
    BearerToken(config).update_params(params)
    assert params == {}


def test_bearer_token_missing_token() -> None:
    with pytest.raises(ValueError, match=r"token is required"):
        BearerToken(ClientConfig())
