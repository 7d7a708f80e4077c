"""flagspec - validator specs for command-line flag values."""
from flagspec.validation import (
    SpecError,
    ValidationFailure,
    ValidationResult,
    Validator,
    parse_validator,
    parse_validator_list,
    parse_validators,
    try_parse_validators,
    validate_all,
)

__version__ = "0.1.0"
