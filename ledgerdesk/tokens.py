"""Issuing and verifying HS512 signed JSON Web Tokens."""

from __future__ import annotations

import time
from dataclasses import asdict, dataclass

import jwt

_ALGORITHM = "HS512"
_LEEWAY_SECONDS = 60


@dataclass(frozen=True)
class Claims:
    """Claims carried by an access token."""

    subject_id: str
    username: str
    exp: int


@dataclass(frozen=True)
class SignInToken:
    """The token handed to a user after signing in."""

    token: str


class TokenError(Exception):
    """A token could not be issued or verified."""

    message = "Token error"

    def __str__(self) -> str:
        return self.message


class TokenConfigError(TokenError):
    message = "Jwt Env Load Error"


class TokenEncodeError(TokenError):
    message = "Jwt Encode Error"


class TokenDecodeError(TokenError):
    message = "Jwt Decode Error"


def generate_jwt(user_id, username: str, secret_key: str, expiration: int) -> SignInToken:
    """Sign a token for the user that expires `expiration` seconds from now."""
    if not secret_key or expiration == 0:
        raise TokenConfigError()
    claims = Claims(
        subject_id=str(user_id),
        username=username,
        exp=int(time.time()) + int(expiration),
    )
    try:
        token = jwt.encode(asdict(claims), secret_key, algorithm=_ALGORITHM)
    except Exception as exc:
        raise TokenEncodeError() from exc
    return SignInToken(token=token)


def decode_jwt(token: str, secret_key: str) -> Claims:
    """Verify the token's signature and expiry and return its claims."""
    if not secret_key:
        raise TokenConfigError()
    try:
        payload = jwt.decode(
            token,
            secret_key,
            algorithms=[_ALGORITHM],
            leeway=_LEEWAY_SECONDS,
            options={"require": ["exp"]},
        )
        return Claims(
            subject_id=str(payload["subject_id"]),
            username=str(payload["username"]),
            exp=int(payload["exp"]),
        )
    except (jwt.PyJWTError, KeyError, TypeError, ValueError) as exc:
        raise TokenDecodeError() from exc