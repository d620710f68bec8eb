"""
Single operation endpoint.

POST /operations {"operation": "<name>", "input": {...}}

Business results come back as {"data": {"<name>": {ok, error, ...}}}.
Transport-level problems (forbidden, unknown operation, malformed input)
come back as {"data": null, "errors": [{"message": ...}]}.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response, status
from pydantic import ValidationError

from auth import dependencies as auth_dependencies

from . import schemas
from .registry import OperationRegistry

logger = logging.getLogger(__name__)

FORBIDDEN_MESSAGE = "Forbidden resource"

registry = OperationRegistry()
router = APIRouter()


def _errors(*messages: str) -> dict:
    return schemas.OperationResponse(
        data=None,
        errors=[schemas.ErrorItem(message=m) for m in messages],
    ).model_dump()


def _format_validation_error(exc: ValidationError) -> list[str]:
    messages: list[str] = []
    for err in exc.errors():
        path = ".".join(str(part) for part in err.get("loc", ()))
        messages.append(f"{path}: {err.get('msg')}" if path else str(err.get("msg")))
    return messages


@router.post("/operations")
async def run_operation(
    request: schemas.OperationRequest,
    response: Response,
    auth: auth_dependencies.AuthContext = Depends(auth_dependencies.get_auth_context),
) -> dict:
    op = registry.get(request.operation)
    if op is None:
        response.status_code = status.HTTP_400_BAD_REQUEST
        return _errors(f'Unknown operation "{request.operation}"')

    # All auth failures collapse into one message here; the reason is only logged.
    if op.protected and not auth.is_authenticated:
        logger.info("forbidden operation=%s reason=%s", op.name, auth.failure)
        return _errors(FORBIDDEN_MESSAGE)

    payload = None
    if op.input_model is not None:
        try:
            payload = op.input_model.model_validate(request.input or {})
        except ValidationError as exc:
            response.status_code = status.HTTP_400_BAD_REQUEST
            return _errors(*_format_validation_error(exc))

    output = await op.handler(payload, auth.user)
    if not output.ok:
        logger.info("operation_failed operation=%s error=%s", op.name, output.error)
    return {"data": {op.name: output.model_dump(mode="json", by_alias=True)}}


@router.get("/operations")
def list_operations() -> dict:
    operations = [
        schemas.OperationInfo(
            name=op.name,
            protected=op.protected,
            takes_input=op.input_model is not None,
        ).model_dump()
        for op in registry
    ]
    return {"operations": operations, "count": len(operations)}
