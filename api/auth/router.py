"""
Account operations.
"""

from __future__ import annotations

from core.schemas import to_output
from gateway.registry import OperationRegistry

from . import schemas, service

operations = OperationRegistry()


@operations.operation("createAccount", input_model=schemas.CreateAccountInput)
async def create_account(
    payload: schemas.CreateAccountInput,
    _: dict | None,
) -> schemas.CreateAccountOutput:
    result = await service.create_account(payload)
    return to_output(result, schemas.CreateAccountOutput)


@operations.operation("login", input_model=schemas.LoginInput)
async def login(payload: schemas.LoginInput, _: dict | None) -> schemas.LoginOutput:
    result = await service.login(payload)
    return to_output(result, schemas.LoginOutput, "token")


@operations.operation("seeProfile", input_model=schemas.SeeProfileInput, protected=True)
async def see_profile(
    payload: schemas.SeeProfileInput,
    _: dict | None,
) -> schemas.UserProfileOutput:
    result = await service.see_profile(payload.user_id)
    return to_output(result, schemas.UserProfileOutput, "user")


@operations.operation("editProfile", input_model=schemas.EditProfileInput, protected=True)
async def edit_profile(
    payload: schemas.EditProfileInput,
    current_user: dict | None,
) -> schemas.EditProfileOutput:
    result = await service.edit_profile(int(current_user["id"]), payload)
    return to_output(result, schemas.EditProfileOutput, "user")


@operations.operation("me", protected=True)
async def me(_: None, current_user: dict | None) -> schemas.MeOutput:
    result = await service.me(current_user)
    return to_output(result, schemas.MeOutput, "user")
