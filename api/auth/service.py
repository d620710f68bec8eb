"""
Account business logic.

Expected failures (duplicate email, unknown user, wrong password) come back
as `Fail(reason)`. Token problems raise `security.AuthSecurityError` and are
handled by the access guard in `auth.dependencies`.
"""

from __future__ import annotations

import logging

from core.result import Fail, Ok, Result

from . import repository, schemas, security

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "There is a user with that email already"
USER_NOT_FOUND_LOGIN = "User not found"
WRONG_PASSWORD = "Wrong password"
USER_NOT_FOUND = "User Not Found"


def _to_public_user(user_row: dict) -> dict:
    return {
        "id": int(user_row["id"]),
        "email": str(user_row["email"]),
        "role": schemas.UserRole(str(user_row["role"])),
    }


async def create_account(payload: schemas.CreateAccountInput) -> Result[dict]:
    existing = await repository.get_user_by_email(payload.email)
    if existing is not None:
        return Fail(EMAIL_TAKEN)

    password_hash = security.hash_password(payload.password)
    try:
        user_row = await repository.create_user(
            email=payload.email,
            password_hash=password_hash,
            role=payload.role.value,
        )
    except repository.EmailTakenError:
        # Lost a race with a concurrent signup.
        return Fail(EMAIL_TAKEN)

    logger.info("account_created user_id=%s role=%s", user_row["id"], user_row["role"])
    return Ok(_to_public_user(user_row))


async def login(payload: schemas.LoginInput) -> Result[str]:
    user_row = await repository.get_user_by_email(payload.email)
    if user_row is None:
        return Fail(USER_NOT_FOUND_LOGIN)

    is_valid = security.verify_password(payload.password, str(user_row.get("password_hash") or ""))
    if not is_valid:
        logger.info("login_rejected user_id=%s", user_row["id"])
        return Fail(WRONG_PASSWORD)

    logger.info("login user_id=%s", user_row["id"])
    return Ok(security.build_access_token(user_id=int(user_row["id"])))


async def see_profile(user_id: int) -> Result[dict]:
    user_row = await repository.get_user_by_id(user_id)
    if user_row is None:
        return Fail(USER_NOT_FOUND)
    return Ok(_to_public_user(user_row))


async def edit_profile(user_id: int, payload: schemas.EditProfileInput) -> Result[dict]:
    if payload.email is not None:
        owner = await repository.get_user_by_email(payload.email)
        if owner is not None and int(owner["id"]) != user_id:
            return Fail(EMAIL_TAKEN)

    password_hash = security.hash_password(payload.password) if payload.password is not None else None
    try:
        user_row = await repository.update_user(
            user_id,
            email=payload.email,
            password_hash=password_hash,
        )
    except repository.EmailTakenError:
        return Fail(EMAIL_TAKEN)
    if user_row is None:
        return Fail(USER_NOT_FOUND)

    logger.info(
        "profile_updated user_id=%s email_changed=%s password_changed=%s",
        user_id,
        payload.email is not None,
        payload.password is not None,
    )
    return Ok(_to_public_user(user_row))


async def me(current_user: dict) -> Result[dict]:
    return Ok(_to_public_user(current_user))


async def get_user_from_access_token(access_token: str) -> dict:
    """
    Resolve a bearer token to its user row.
    Raises `security.AuthSecurityError` for any reason the token is unusable.
    """
    payload = security.decode_access_token(access_token)
    user_id = security.user_id_from_claims(payload)

    user_row = await repository.get_user_by_id(user_id)
    if user_row is None:
        raise security.AuthSecurityError("User not found.")
    return user_row
