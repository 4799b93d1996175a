"""Request authentication and CORS headers."""

from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass
from uuid import UUID

from ledgerdesk.tokens import TokenError, decode_jwt

_BEARER_PREFIX = "Bearer "

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "*",
    "Access-Control-Allow-Credentials": "true",
}


@dataclass(frozen=True)
class AuthenticatedUser:
    """The user a request was made on behalf of."""

    id: UUID
    username: str


class AuthenticationError(Exception):
    """A request carried no usable credentials."""

    status_code = 401

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


def authenticate(authorization: str | None, secret_key: str) -> AuthenticatedUser:
    """Resolve an ``Authorization`` header value into the user it names."""
    if authorization is None or not authorization.startswith(_BEARER_PREFIX):
        raise AuthenticationError("Authorization header missing or malformed")
    token = authorization[len(_BEARER_PREFIX):]
    try:
        claims = decode_jwt(token, secret_key)
        user_id = UUID(claims.subject_id)
    except (TokenError, ValueError) as exc:
        raise AuthenticationError("Invalid token") from exc
    return AuthenticatedUser(id=user_id, username=claims.username)


def add_cors_headers(headers: MutableMapping[str, str]) -> MutableMapping[str, str]:
    """Set the permissive CORS headers on a response's header mapping."""
    for name, value in CORS_HEADERS.items():
        headers[name] = value
    return headers