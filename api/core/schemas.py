"""
Base schemas shared by every operation.

Wire names are camelCase (`podcastId`), Python attributes stay snake_case.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .result import Fail, Result


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CoreOutput(WireModel):
    ok: bool
    error: str | None = None


OutputT = TypeVar("OutputT", bound=CoreOutput)


def to_output(result: Result[Any], output_model: type[OutputT], field: str | None = None) -> OutputT:
    """
    Map a service result onto an envelope model.

    On success the wrapped value goes into `field` (if the envelope carries a
    payload). On failure only `ok`/`error` are set; payload fields keep their
    null defaults.
    """
    if isinstance(result, Fail):
        return output_model(ok=False, error=result.reason)
    if field is None:
        return output_model(ok=True)
    return output_model(ok=True, **{field: result.value})
