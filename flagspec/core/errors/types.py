"""Monadic Error Handling Types

Result/Either types for the non-raising boundary of the library, plus the
error code taxonomy shared by parse-time and validate-time failures.

Inside the library, spec errors are raised (SpecError) and value failures are
returned (ValidationFailure); both convert to AppError when a caller asks for
a Result instead.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Generic, Iterator, NoReturn, TypeVar, Union, final
from uuid import uuid4

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


class ErrorCode(Enum):
    """Hierarchical error code taxonomy.

    E2xxx: Validation failures (a value was rejected by a validator)
    E3xxx: Spec errors (a validator spec could not be built)
    """
    # Validation: generic and combined (E200x)
    E2000_VALIDATION_GENERIC = 2000
    E2001_COMBINED_FAILED = 2001
    E2002_PATTERN_MATCH = 2002

    # Validation: numbers and types
    E2003_VALUE_BETWEEN = 2003
    E2004_VALUE_AT_LEAST = 2004
    E2005_VALUE_AT_MOST = 2005
    E2006_MUST_BE_NUMBER = 2006
    E2007_MUST_BE_INTEGER = 2007
    E2008_MUST_BE_BOOLEAN = 2008

    # Validation: addresses (E201x)
    E2010_INVALID_EMAIL = 2010
    E2011_INVALID_URL = 2011
    E2012_URL_SCHEME_NOT_ALLOWED = 2012
    E2013_URL_MISSING_HOST = 2013

    # Validation: lengths (E202x)
    E2020_MIN_LENGTH = 2020
    E2021_MAX_LENGTH = 2021
    E2022_EXACT_LENGTH = 2022
    E2023_MIN_BYTE_LENGTH = 2023
    E2024_MAX_BYTE_LENGTH = 2024
    E2025_EXACT_BYTE_LENGTH = 2025

    # Validation: choices and formats (E203x)
    E2030_MUST_BE_ONE_OF = 2030
    E2031_VALUE_CANNOT_BE = 2031
    E2032_MUST_BE_ALPHANUMERIC = 2032
    E2033_MUST_BE_IDENTIFIER = 2033
    E2034_MUST_NOT_CONTAIN_WHITESPACE = 2034
    E2035_FILE_EXTENSION = 2035
    E2036_HOSTNAME_TOO_LONG = 2036
    E2037_INVALID_HOSTNAME = 2037
    E2038_INVALID_IP = 2038

    # Validation: user functions (E204x)
    E2040_CUSTOM_FAILED = 2040

    # Spec: syntax and arguments (E300x)
    E3000_INVALID_VALIDATOR = 3000
    E3001_REQUIRES_ARGUMENT = 3001
    E3002_REQUIRES_AT_LEAST_ONE_ARGUMENT = 3002
    E3003_ARGUMENT_MUST_BE_INTEGER = 3003
    E3004_ARGUMENT_MUST_BE_NUMBER = 3004
    E3005_ARGUMENT_CANNOT_BE_NEGATIVE = 3005

    # Spec: resolution (E301x)
    E3010_UNKNOWN_VALIDATOR = 3010
    E3011_RECURSION_DEPTH_EXCEEDED = 3011
    E3012_MUST_USE_PARENTHESES = 3012

    # Spec: patterns (E302x)
    E3020_INVALID_PATTERN = 3020

    @property
    def category(self) -> str:
        """``validation`` or ``spec``."""
        return "validation" if self.value < 3000 else "spec"

    @property
    def key(self) -> str:
        """Dotted message key, e.g. ``validation.min_length``."""
        return f"{self.category}.{self.name.split('_', 1)[1].lower()}"


@dataclass(frozen=True, slots=True)
class ErrorContext:
    """Where and when an error was converted, for log correlation."""
    correlation_id: str = field(default_factory=lambda: str(uuid4())[:8])
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    origin: str = ""  # flag name or API entry point


@dataclass(frozen=True, slots=True)
class AppError:
    """Error value carried by Err.

    Attributes:
        code: Typed code from the taxonomy
        message: Rendered human-readable message
        context: Correlation id, timestamp and origin
        metadata: Offending spec/value and violated parameters
        cause: Underlying exception, usually the SpecError converted
    """
    code: ErrorCode
    message: str
    context: ErrorContext = field(default_factory=ErrorContext)
    metadata: dict[str, Any] = field(default_factory=dict)
    cause: Exception | None = None

    def to_dict(self) -> dict:
        """Serialize for machine-readable output."""
        return {
            "error": {
                "code": self.code.name,
                "code_num": self.code.value,
                "key": self.code.key,
                "message": self.message,
                "category": self.code.category,
                "correlation_id": self.context.correlation_id,
                "timestamp": self.context.timestamp.isoformat(),
                "metadata": self.metadata,
            }
        }

    def __str__(self) -> str:
        return f"[{self.code.name}] {self.message}"


@final
@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success variant of Result."""
    value: T

    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def map(self, f: Callable[[T], U]) -> Ok[U]:
        return Ok(f(self.value))

    def and_then(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Chain an operation that may fail."""
        return f(self.value)

    def match(self, ok: Callable[[T], U], err: Callable[[Any], U]) -> U:
        return ok(self.value)

    def __iter__(self) -> Iterator[T]:
        yield self.value


@final
@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failure variant of Result."""
    error: E

    def is_ok(self) -> bool:
        return False

    def unwrap(self) -> NoReturn:
        raise ValueError(f"Called unwrap on Err: {self.error}")

    def unwrap_or(self, default: T) -> T:
        return default

    def unwrap_err(self) -> E:
        return self.error

    def map(self, f: Callable[[Any], U]) -> Err[E]:
        return self

    def and_then(self, f: Callable[[Any], Result[U, E]]) -> Err[E]:
        return self

    def match(self, ok: Callable[[Any], U], err: Callable[[E], U]) -> U:
        return err(self.error)

    def __iter__(self) -> Iterator:
        return iter(())


Result = Union[Ok[T], Err[E]]


def collect_results(results: list[Result[T, AppError]]) -> Result[list[T], list[AppError]]:
    """Collect Results into one: Ok with every value, or Err with every error.

    Unlike a fail-fast chain this keeps going, so a caller (``flagspec lint``)
    can report every malformed spec at once.
    """
    values: list[T] = []
    errors: list[AppError] = []

    for r in results:
        match r:
            case Ok(v):
                values.append(v)
            case Err(e):
                errors.append(e)

    if errors:
        return Err(errors)
    return Ok(values)
