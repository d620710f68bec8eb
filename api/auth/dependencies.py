"""
Access guard: resolves the request's bearer token to a user.

Resolution never fails the request by itself. It produces an `AuthContext`,
and the gateway decides what an unauthenticated context means for the
operation being called.
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Header

from . import security, service


@dataclass(frozen=True)
class AuthContext:
    user: dict | None = None
    # Internal reason for logging only; never sent to the client.
    failure: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None


def _extract_bearer_token(authorization: str | None) -> str:
    raw = (authorization or "").strip()
    if not raw:
        raise security.AuthSecurityError("Missing Authorization header.")

    parts = raw.split(" ", 1)
    if len(parts) != 2:
        raise security.AuthSecurityError("Invalid Authorization header format.")

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        raise security.AuthSecurityError("Authorization must be: Bearer <token>.")
    return token


def _pick_token(authorization: str | None, x_jwt: str | None) -> str:
    if (authorization or "").strip():
        return _extract_bearer_token(authorization)
    token = (x_jwt or "").strip()
    if not token:
        raise security.AuthSecurityError("No access token presented.")
    return token


async def get_auth_context(
    authorization: str | None = Header(default=None),
    x_jwt: str | None = Header(default=None),
) -> AuthContext:
    try:
        token = _pick_token(authorization, x_jwt)
        user = await service.get_user_from_access_token(token)
    except security.AuthSecurityError as exc:
        return AuthContext(failure=str(exc))
    return AuthContext(user=user)
