"""Authenticated request construction."""

from typing import Any

from buzzy_sdk.models.credential import Credential, RequestDescriptor

REQUEST_METHOD = "POST"
CONTENT_TYPE = "application/json"
AUTH_TOKEN_HEADER = "X-Auth-Token"
USER_ID_HEADER = "X-User-Id"
LOGIN_PATH = "/api/login"


def _join(base_url: str, path: str) -> str:
    return f"{base_url.rstrip('/')}{path}"


def build_request(
    credential: Credential,
    base_url: str,
    path: str,
    payload: Any,
) -> RequestDescriptor:
    """Build a request carrying the caller's identity.

    The payload is passed through untouched; validating its contents is the
    server's job.

    Args:
        credential: Credential obtained from ``login``.
        base_url: Base address of the Buzzy instance.
        path: Endpoint path, e.g. ``/api/insertmicroapprow``.
        payload: JSON-serializable request body.

    Returns:
        A RequestDescriptor ready for the transport.
    """
    return RequestDescriptor(
        method=REQUEST_METHOD,
        url=_join(base_url, path),
        headers={
            AUTH_TOKEN_HEADER: credential.auth_token,
            USER_ID_HEADER: credential.user_id,
            "Content-Type": CONTENT_TYPE,
        },
        json_body=payload,
    )


def build_login_request(base_url: str, email: str, password: str) -> RequestDescriptor:
    """Build the login request, the only one sent without identity headers."""
    return RequestDescriptor(
        method=REQUEST_METHOD,
        url=_join(base_url, LOGIN_PATH),
        headers={"Content-Type": CONTENT_TYPE},
        json_body={"email": email, "password": password},
    )
