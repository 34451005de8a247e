"""
Tests for service account token issuance
"""
from unittest.mock import MagicMock

import pytest
import requests
from google.auth import jwt

from services.calendar_sync.auth import (
    ASSERTION_LIFETIME_SECONDS,
    JWT_BEARER_GRANT_TYPE,
    build_assertion,
    get_access_token,
)
from services.common.errors import AuthError

CREDENTIALS = {
    "client_email": "bins@example-project.iam.gserviceaccount.com",
    "private_key": "unused with a stub signer",
}
SCOPES = ["https://www.googleapis.com/auth/calendar"]


class StubSigner:
    key_id = "stub-key"

    def __init__(self):
        self.signed = []

    def sign(self, message):
        self.signed.append(message)
        return b"stub-signature"


def _token_response(ok=True, status_code=200, reason="OK", payload=None):
    response = MagicMock()
    response.ok = ok
    response.status_code = status_code
    response.reason = reason
    response.json.return_value = payload if payload is not None else {"access_token": "ya29.token"}
    return response


def test_build_assertion_claims():
    signer = StubSigner()
    assertion = build_assertion(CREDENTIALS["client_email"], SCOPES, signer, now=1_700_000_000)

    header = jwt.decode_header(assertion)
    payload = jwt.decode(assertion, verify=False)
    assert header["alg"] == "RS256"
    assert header["kid"] == "stub-key"
    assert payload == {
        "iss": CREDENTIALS["client_email"],
        "scope": "https://www.googleapis.com/auth/calendar",
        "aud": "https://oauth2.googleapis.com/token",
        "iat": 1_700_000_000,
        "exp": 1_700_000_000 + ASSERTION_LIFETIME_SECONDS,
    }
    assert len(signer.signed) == 1


def test_build_assertion_joins_scopes():
    assertion = build_assertion("a@b.c", ["scope-one", "scope-two"], StubSigner(), now=0)
    payload = jwt.decode(assertion, verify=False)
    assert payload["scope"] == "scope-one scope-two"


def test_get_access_token_posts_jwt_bearer_grant():
    session = MagicMock()
    session.post.return_value = _token_response()

    token = get_access_token(CREDENTIALS, SCOPES, signer=StubSigner(), session=session)

    assert token == "ya29.token"
    args, kwargs = session.post.call_args
    assert args[0] == "https://oauth2.googleapis.com/token"
    assert kwargs["data"]["grant_type"] == JWT_BEARER_GRANT_TYPE
    payload = jwt.decode(kwargs["data"]["assertion"], verify=False)
    assert payload["iss"] == CREDENTIALS["client_email"]


def test_get_access_token_non_ok_raises_auth_error():
    session = MagicMock()
    session.post.return_value = _token_response(ok=False, status_code=400, reason="Bad Request")

    with pytest.raises(AuthError) as exc_info:
        get_access_token(CREDENTIALS, SCOPES, signer=StubSigner(), session=session)

    assert exc_info.value.status_code == 400
    assert "Bad Request" in str(exc_info.value)


def test_get_access_token_missing_token_raises_auth_error():
    session = MagicMock()
    session.post.return_value = _token_response(payload={"token_type": "Bearer"})

    with pytest.raises(AuthError):
        get_access_token(CREDENTIALS, SCOPES, signer=StubSigner(), session=session)


def test_get_access_token_transport_error_raises_auth_error():
    session = MagicMock()
    session.post.side_effect = requests.ConnectionError("connection refused")

    with pytest.raises(AuthError, match="connection refused"):
        get_access_token(CREDENTIALS, SCOPES, signer=StubSigner(), session=session)


def test_get_access_token_invalid_private_key():
    session = MagicMock()

    with pytest.raises(AuthError, match="Invalid service account private key"):
        get_access_token(CREDENTIALS, SCOPES, session=session)

    session.post.assert_not_called()
