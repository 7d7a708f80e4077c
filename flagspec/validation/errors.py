"""Validation Error System

Two kinds of failure with different lifecycles:

- ValidationFailure: a value was rejected at validate time. Returned inside a
  ValidationResult, never raised. Carries the offending value and the
  violated bound/pattern as typed parameters.
- SpecError: a validator spec could not be built. Raised at construction
  time and always fatal to the parse call that produced it.

Both render to text only through a MessageCatalog, passed explicitly or taken
from the configured locale.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from flagspec.core.errors import AppError, Err, ErrorCode, spec_error
from .messages import MessageCatalog, default_catalog


@dataclass(frozen=True, slots=True)
class ValidationFailure:
    """Why a single value was rejected.

    Attributes:
        code: Failure kind from the E2xxx range
        value: The offending value
        params: Violated bound/pattern (e.g. ``{"min": 1.0, "max": 100.0}``)
        validator: Name of the validator that produced the failure
        sub_failures: Child failures, only for ``E2001_COMBINED_FAILED``
    """
    code: ErrorCode
    value: str
    params: dict[str, Any] = field(default_factory=dict)
    validator: str = ""
    sub_failures: tuple[ValidationFailure, ...] = ()

    def render(self, catalog: MessageCatalog | None = None) -> str:
        """Render a human-readable message."""
        catalog = catalog or default_catalog()
        params: dict[str, Any] = {"value": self.value, **self.params}
        if self.code is ErrorCode.E2001_COMBINED_FAILED:
            params["reasons"] = " OR ".join(f.render(catalog) for f in self.sub_failures)
        return catalog.format(self.code, params)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for machine-readable output."""
        result = {"code": self.code.name, "key": self.code.key, "validator": self.validator,
            "value": self.value, "message": self.render(), **self.params}
        if self.sub_failures: result["sub_failures"] = [f.to_dict() for f in self.sub_failures]
        return result

    def __str__(self) -> str:
        return self.render()


@dataclass(eq=False)
class SpecError(Exception):
    """A validator spec could not be turned into a Validator.

    ``cause`` links to the underlying SpecError when this error wraps another
    one (``parse_validators`` wraps every failure with the offending spec).
    """
    code: ErrorCode
    params: dict[str, Any] = field(default_factory=dict)
    cause: SpecError | None = None

    def __post_init__(self):
        super().__init__(self.render())

    def render(self, catalog: MessageCatalog | None = None) -> str:
        return (catalog or default_catalog()).format(self.code, self.params)

    @property
    def root(self) -> SpecError:
        """Innermost error of the cause chain."""
        error = self
        while error.cause is not None: error = error.cause
        return error

    def matches(self, code: ErrorCode) -> bool:
        """True if this error or any error in its cause chain has ``code``."""
        error: SpecError | None = self
        while error is not None:
            if error.code is code: return True
            error = error.cause
        return False

    def to_app_error(self, origin: str = "") -> AppError:
        """Convert to AppError for Result boundaries."""
        return self.to_err(origin).unwrap_err()

    def to_err(self, origin: str = "") -> Err[AppError]:
        return spec_error(self.render(), code=self.code, spec=self.params.get("spec"), origin=origin,
            cause=self, root_code=self.root.code.name, **{k: v for k, v in self.params.items() if k != "spec"})

    def __str__(self) -> str:
        return self.render()


def invalid_spec(spec: str, reason: str, cause: SpecError | None = None) -> SpecError:
    return SpecError(ErrorCode.E3000_INVALID_VALIDATOR, {"spec": spec, "reason": reason}, cause)


def requires_argument(validator: str, expected: int) -> SpecError:
    return SpecError(ErrorCode.E3001_REQUIRES_ARGUMENT, {"validator": validator, "expected": expected})


def requires_at_least_one_argument(validator: str) -> SpecError:
    return SpecError(ErrorCode.E3002_REQUIRES_AT_LEAST_ONE_ARGUMENT, {"validator": validator})


def argument_must_be_integer(validator: str) -> SpecError:
    return SpecError(ErrorCode.E3003_ARGUMENT_MUST_BE_INTEGER, {"validator": validator})


def argument_must_be_number(validator: str) -> SpecError:
    return SpecError(ErrorCode.E3004_ARGUMENT_MUST_BE_NUMBER, {"validator": validator})


def argument_cannot_be_negative(validator: str) -> SpecError:
    return SpecError(ErrorCode.E3005_ARGUMENT_CANNOT_BE_NEGATIVE, {"validator": validator})


def unknown_validator(name: str) -> SpecError:
    return SpecError(ErrorCode.E3010_UNKNOWN_VALIDATOR, {"name": name})


def recursion_depth_exceeded(max_depth: int) -> SpecError:
    return SpecError(ErrorCode.E3011_RECURSION_DEPTH_EXCEEDED, {"max_depth": max_depth})


def must_use_parentheses(spec: str) -> SpecError:
    return SpecError(ErrorCode.E3012_MUST_USE_PARENTHESES, {"spec": spec})


def invalid_pattern(pattern: str, reason: str) -> SpecError:
    return SpecError(ErrorCode.E3020_INVALID_PATTERN, {"pattern": pattern, "reason": reason})
