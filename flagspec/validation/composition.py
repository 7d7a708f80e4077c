"""Composite Validators

All/Any/Not over already-built validators. Evaluation is purely functional:
nothing is remembered between calls.

- ALL short-circuits on the first failing child and returns that failure.
- ANY short-circuits on the first passing child; when every child fails, the
  failures are aggregated into one E2001_COMBINED_FAILED.
- Empty composites accept every value.
- Negation fails with its own E2031_VALUE_CANNOT_BE; the child's message is
  not surfaced.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from flagspec.core.errors import ErrorCode
from .errors import ValidationFailure
from .validators import ValidationResult, Validator


class CompositeMode(str, Enum):
    ALL = "all"
    ANY = "any"


@dataclass(frozen=True, slots=True)
class Composite(Validator):
    """Ordered children combined with AND (ALL) or OR (ANY)."""
    mode: CompositeMode
    validators: tuple[Validator, ...] = ()

    @property
    def kind(self) -> str:
        return "composite"

    @property
    def name(self) -> str:
        return f"{self.mode.value}[{','.join(v.name for v in self.validators)}]"

    @property
    def description(self) -> str:
        if self.mode is CompositeMode.ALL: return "All validators must pass"
        return "At least one validator must pass"

    def validate(self, value: str) -> ValidationResult:
        if self.mode is CompositeMode.ALL:
            for validator in self.validators:
                result = validator.validate(value)
                if not result.is_valid: return result
            return ValidationResult.valid()

        failures = []
        for validator in self.validators:
            result = validator.validate(value)
            if result.is_valid: return result
            failures.append(result.failure)
        if not failures: return ValidationResult.valid()
        return ValidationResult.invalid(ValidationFailure(
            ErrorCode.E2001_COMBINED_FAILED, value, validator=self.name, sub_failures=tuple(failures),
        ))

    def __iter__(self):
        return iter(self.validators)


@dataclass(frozen=True, slots=True)
class Negation(Validator):
    """Passes exactly when the wrapped validator fails."""
    validator: Validator

    @property
    def kind(self) -> str:
        return "logic"

    @property
    def name(self) -> str:
        return f"not[{self.validator.name}]"

    @property
    def description(self) -> str:
        return f"Not {self.validator.description}"

    def validate(self, value: str) -> ValidationResult:
        if self.validator.validate(value).is_valid:
            return ValidationResult.invalid(ValidationFailure(ErrorCode.E2031_VALUE_CANNOT_BE, value, validator=self.name))
        return ValidationResult.valid()


def all_of(*validators: Validator) -> Composite:
    """Every validator must pass, checked in order."""
    return Composite(CompositeMode.ALL, tuple(validators))


def one_of(*validators: Validator) -> Composite:
    """At least one validator must pass, checked in order."""
    return Composite(CompositeMode.ANY, tuple(validators))


def negate(validator: Validator) -> Negation:
    return Negation(validator)
