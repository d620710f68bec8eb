"""
Gateway request/response models.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class OperationRequest(BaseModel):
    operation: str = Field(..., min_length=1, max_length=100)
    input: dict[str, Any] | None = None


class ErrorItem(BaseModel):
    message: str


class OperationResponse(BaseModel):
    data: dict[str, Any] | None = None
    errors: list[ErrorItem] | None = None


class OperationInfo(BaseModel):
    name: str
    protected: bool
    takes_input: bool
