r"""Authentication strategies injecting credentials into requests.

This package provides the ``AuthenticationStrategy`` contract and the
strategies used by the API resources: key/secret parameters, HTTP Basic
authentication and bearer tokens.
"""

from __future__ import annotations

__all__ = [
    "AuthenticationStrategy",
    "BasicAuth",
    "BearerToken",
    "KeySecretParams",
    "NoAuthentication",
]

from restcore.auth.base import AuthenticationStrategy, NoAuthentication
from restcore.auth.basic import BasicAuth
from restcore.auth.bearer import BearerToken
from restcore.auth.key_secret import KeySecretParams
