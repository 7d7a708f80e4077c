"""Spec API - from flag definition text to validator chains.

Usage:
    validators = parse_validators(["email", "minlength(5)"])
    result = validate_all(validators, "user@example.com")

    # Or from one comma-separated string
    validators = parse_validator_list("oneof(email,integer),maxlength(64)")

Any malformed spec fails the whole call: there is no partial success.
"""
from __future__ import annotations

from typing import Iterable, Sequence

from flagspec.core.errors import AppError, Ok, Result
from flagspec.core.logging import parser_logger
from .errors import SpecError, invalid_spec
from .registry import build
from .splitter import split_validator_specs
from .validators import ValidationResult, Validator

log = parser_logger()


def parse_validator(spec: str) -> Validator:
    """Parse one spec into a Validator.

    Raises:
        SpecError: the spec is malformed, names an unknown validator, has the
            wrong arguments or nests deeper than the recursion bound
    """
    try:
        validator = build(spec)
    except SpecError as e:
        log.warning("validator_spec_rejected", spec=spec, code=e.root.code.name, reason=e.render())
        raise
    log.debug("validator_spec_parsed", spec=spec, validator=validator.name, kind=validator.kind)
    return validator


def parse_validators(specs: Iterable[str]) -> list[Validator]:
    """Parse several specs; blank entries are skipped.

    Raises:
        SpecError: E3000_INVALID_VALIDATOR naming the offending spec, with the
            underlying SpecError as ``cause``
    """
    validators = []
    for spec in specs:
        if not spec.strip():
            continue
        try:
            validators.append(parse_validator(spec))
        except SpecError as e:
            raise invalid_spec(spec, e.render(), cause=e) from e
    return validators


def try_parse_validators(specs: Iterable[str]) -> Result[list[Validator], AppError]:
    """Non-raising form of parse_validators for Result pipelines."""
    try:
        return Ok(parse_validators(specs))
    except SpecError as e:
        return e.to_err(origin="parse_validators")


def parse_validator_list(text: str) -> list[Validator]:
    """Parse a comma-separated spec list such as ``email,minlength(5)``."""
    return parse_validators(split_validator_specs(text))


def validate_all(validators: Sequence[Validator], value: str) -> ValidationResult:
    """Run a validator chain in order and return the first failure."""
    for validator in validators:
        result = validator.validate(value)
        if not result.is_valid:
            return result
    return ValidationResult.valid()
