"""Uniform success/failure envelope returned by every boundary operation."""
from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Literal, Optional

from pydantic import BaseModel, ValidationError

from integrations.griffin.errors import GriffinError
from treasury_observability.metrics import griffin_operations_total

__all__ = ["OperationResult", "run_operation"]

_LOG = logging.getLogger(__name__)

ErrorType = Literal["validation", "api", "response", "transport", "error"]


def _jsonable(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(data, dict):
        return {key: _jsonable(value) for key, value in data.items()}
    if isinstance(data, (list, tuple)):
        return [_jsonable(item) for item in data]
    return data


class OperationResult(BaseModel):
    ok: bool
    data: Any = None
    error: Optional[str] = None
    error_type: Optional[ErrorType] = None
    status_code: Optional[int] = None

    @classmethod
    def success(cls, data: Any) -> "OperationResult":
        return cls(ok=True, data=_jsonable(data))

    @classmethod
    def failure(cls, exc: Exception) -> "OperationResult":
        if isinstance(exc, GriffinError):
            return cls(
                ok=False,
                error=str(exc),
                error_type=exc.error_type,
                status_code=exc.status_code,
            )
        if isinstance(exc, ValidationError):
            return cls(ok=False, error=str(exc), error_type="validation")
        return cls(ok=False, error=str(exc), error_type="error")

    def to_json(self) -> str:
        return self.model_dump_json(indent=2, exclude_none=True)


async def run_operation(name: str, call: Callable[[], Awaitable[Any]]) -> OperationResult:
    """Run *call* and fold its outcome into an :class:`OperationResult`.

    Input models are built inside *call*, so a pydantic ValidationError here
    always means bad caller input; response bodies that fail to parse arrive
    as GriffinResponseError instead. Griffin and input validation failures
    become failure results; anything else is a bug and propagates.
    """
    try:
        data = await call()
    except (GriffinError, ValidationError) as exc:
        _LOG.warning("%s failed: %s", name, exc)
        griffin_operations_total.labels(name, "error").inc()
        return OperationResult.failure(exc)
    griffin_operations_total.labels(name, "ok").inc()
    return OperationResult.success(data)
