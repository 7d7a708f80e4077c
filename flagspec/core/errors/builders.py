"""Error Builders

Constructors for the two error families a Result boundary reports. Each
returns an AppError wrapped in Err; ``None`` metadata entries are dropped.
"""
from typing import Any

from .types import AppError, ErrorCode, ErrorContext, Err


def _err(code: ErrorCode, message: str, origin: str, cause: Exception | None, meta: dict[str, Any]) -> Err[AppError]:
    return Err(AppError(
        code=code,
        message=message,
        context=ErrorContext(origin=origin),
        metadata={k: v for k, v in meta.items() if v is not None},
        cause=cause,
    ))


def validation_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E2000_VALIDATION_GENERIC,
    value: str | None = None,
    validator: str | None = None,
    origin: str = "",
    **metadata,
) -> Err[AppError]:
    """Create error for a value rejected by a validator."""
    return _err(code, message, origin, None, {"value": value, "validator": validator, **metadata})


def spec_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E3000_INVALID_VALIDATOR,
    spec: str | None = None,
    origin: str = "",
    cause: Exception | None = None,
    **metadata,
) -> Err[AppError]:
    """Create error for a validator spec that could not be built."""
    return _err(code, message, origin, cause, {"spec": spec, **metadata})
