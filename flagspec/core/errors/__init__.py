"""Monadic Error Handling System

Result types for callers that prefer values over exceptions.

Key components:
- Result[T, E]: Ok or Err
- AppError: Error value with code, message, context and metadata
- ErrorCode: Error code taxonomy shared by validation and spec errors
- Builder functions: validation_error, spec_error

Usage:
    from flagspec.core.errors import Ok, Err
    from flagspec.validation import try_parse_validators

    match try_parse_validators(["range(1,100)"]):
        case Ok(validators):
            ...
        case Err(error):
            log.error(error.message, code=error.code.name)
"""
from .types import (
    # Core types
    Result,
    Ok,
    Err,
    AppError,
    ErrorCode,
    ErrorContext,
    # Combinators
    collect_results,
)

from .builders import (
    validation_error,
    spec_error,
)

__all__ = [
    "Result",
    "Ok",
    "Err",
    "AppError",
    "ErrorCode",
    "ErrorContext",
    "collect_results",
    "validation_error",
    "spec_error",
]
