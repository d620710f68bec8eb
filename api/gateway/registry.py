"""
Named-operation registry.

Feature packages declare their operations on their own registry and the
app merges them into the gateway one, much like `app.include_router`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from pydantic import BaseModel

from core.schemas import CoreOutput

Handler = Callable[[Any, "dict | None"], Awaitable[CoreOutput]]


@dataclass(frozen=True)
class Operation:
    name: str
    handler: Handler
    input_model: type[BaseModel] | None = None
    protected: bool = False


class OperationRegistry:
    def __init__(self) -> None:
        self._operations: dict[str, Operation] = {}

    def operation(
        self,
        name: str,
        *,
        input_model: type[BaseModel] | None = None,
        protected: bool = False,
    ) -> Callable[[Handler], Handler]:
        """
        Register `handler(payload, current_user)` under `name`.

        `payload` is an `input_model` instance (None when the operation takes
        no input). `current_user` is the authenticated user row; protected
        operations only run when it is set.
        """

        def decorator(handler: Handler) -> Handler:
            self.add(Operation(name=name, handler=handler, input_model=input_model, protected=protected))
            return handler

        return decorator

    def add(self, op: Operation) -> None:
        if op.name in self._operations:
            raise ValueError(f"Operation {op.name!r} is already registered.")
        self._operations[op.name] = op

    def include(self, other: OperationRegistry) -> None:
        for op in other:
            self.add(op)

    def get(self, name: str) -> Operation | None:
        return self._operations.get(name)

    def __iter__(self):
        return iter(list(self._operations.values()))

    def __len__(self) -> int:
        return len(self._operations)
