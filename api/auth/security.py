"""
Password hashing and session tokens for accounts.

Session tokens are stateless: a signed JWT whose subject is the user id.
Nothing is stored server-side, so a token is valid exactly as long as its
signature (and, when enabled, its `exp`) checks out and the user still
exists. With expiry disabled the token is a pure function of the user id
and `JWT_SECRET`; rotating the secret is the way to invalidate every token.
"""

from __future__ import annotations

import os
import time
from typing import Any

import bcrypt
import jwt


class AuthSecurityError(RuntimeError):
    pass


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def jwt_secret() -> str:
    # Deployments must set JWT_SECRET; the fallback only suits local runs.
    return os.environ.get("JWT_SECRET", "dev-change-this-secret").strip() or "dev-change-this-secret"


def jwt_algorithm() -> str:
    return os.environ.get("JWT_ALG", "HS256").strip() or "HS256"


def access_token_expire_minutes() -> int:
    # 0 (default) issues non-expiring tokens that depend only on the user id.
    return max(_env_int("ACCESS_TOKEN_EXPIRE_MIN", 0), 0)


def now_epoch_s() -> int:
    return int(time.time())


def hash_password(plain_password: str) -> str:
    """
    bcrypt-hash a password for the users table.

    Input schemas already cap passwords at 72 UTF-8 bytes; anything that
    slips past them is reported as AuthSecurityError, not a bare ValueError.
    """
    password = (plain_password or "").encode("utf-8")
    if not password:
        raise AuthSecurityError("Password is empty.")
    try:
        return bcrypt.hashpw(password, bcrypt.gensalt()).decode("utf-8")
    except ValueError as exc:
        raise AuthSecurityError("Password cannot be hashed.") from exc


def verify_password(plain_password: str, password_hash: str) -> bool:
    """
    Compare a login password with the stored hash. Any malformed input is
    a mismatch ("Wrong password"), never an exception.
    """
    password = (plain_password or "").encode("utf-8")
    hashed = (password_hash or "").encode("utf-8")
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password, hashed)
    except ValueError:
        return False


def build_access_token(*, user_id: int) -> str:
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "type": "access",
    }
    expire_minutes = access_token_expire_minutes()
    if expire_minutes:
        issued_at = now_epoch_s()
        payload["iat"] = issued_at
        payload["exp"] = issued_at + (expire_minutes * 60)
    return jwt.encode(payload, jwt_secret(), algorithm=jwt_algorithm())


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Verify a session token and return its claims.

    Every failure (bad signature, expired, not an access token) raises
    AuthSecurityError; the access guard turns all of them into the same
    anonymous context.
    """
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Access token is empty.")

    try:
        payload = jwt.decode(raw, jwt_secret(), algorithms=[jwt_algorithm()])
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Invalid access token.") from exc

    if str(payload.get("type") or "").strip().lower() != "access":
        raise AuthSecurityError("Token is not an access token.")

    return payload


def user_id_from_claims(payload: dict[str, Any]) -> int:
    subject = str(payload.get("sub") or "").strip()
    if not subject.isdigit():
        raise AuthSecurityError("Invalid access token subject.")
    return int(subject)
