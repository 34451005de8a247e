"""
Service account token issuance.

Builds a signed JWT assertion for the service account and exchanges it at
Google's OAuth2 token endpoint (JWT-bearer grant). The resulting bearer token
is only used for the current run.
"""

import logging
import time

import requests
from google.auth import crypt, jwt

import config
from services.common.errors import AuthError

logger = logging.getLogger(__name__)

JWT_BEARER_GRANT_TYPE = "urn:ietf:params:oauth:grant-type:jwt-bearer"
ASSERTION_LIFETIME_SECONDS = 3600


def build_assertion(client_email: str, scopes: list[str], signer, now: int | None = None) -> str:
    """
    Signed JWT for the token endpoint. `signer` is anything with `sign(bytes) -> bytes`
    and a `key_id` attribute (google.auth.crypt.Signer interface).
    """
    issued_at = int(time.time() if now is None else now)
    payload = {
        "iss": client_email,
        "scope": " ".join(scopes),
        "aud": config.GOOGLE_TOKEN_URI,
        "iat": issued_at,
        "exp": issued_at + ASSERTION_LIFETIME_SECONDS,
    }
    return jwt.encode(signer, payload).decode("utf-8")


def get_access_token(credentials: dict, scopes: list[str], signer=None, session=None) -> str:
    """
    Exchange a signed assertion for an access token.

    Args:
        credentials: {"client_email": ..., "private_key": ...}
        scopes: OAuth scopes to request
        signer: optional signer; defaults to RSA-SHA256 with credentials["private_key"]
        session: optional requests.Session (or anything with a compatible `post`)

    Raises:
        AuthError: bad key, transport failure or a non-OK token response
    """
    if signer is None:
        try:
            signer = crypt.RSASigner.from_string(credentials["private_key"])
        except (KeyError, ValueError) as e:
            raise AuthError(f"Invalid service account private key: {e}") from e

    assertion = build_assertion(credentials["client_email"], scopes, signer)
    http = session or requests

    logger.debug("Requesting access token for %s", credentials["client_email"])
    try:
        response = http.post(
            config.GOOGLE_TOKEN_URI,
            data={"grant_type": JWT_BEARER_GRANT_TYPE, "assertion": assertion},
            timeout=30,
        )
    except requests.RequestException as e:
        raise AuthError(f"Failed to get access token: {e}") from e

    if not response.ok:
        raise AuthError(
            f"Failed to get access token: {response.status_code} {response.reason}",
            status_code=response.status_code,
        )

    token = response.json().get("access_token")
    if not token:
        raise AuthError("Failed to get access token: response had no access_token")
    return token
