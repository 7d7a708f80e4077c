"""Validator Spec System

Small, human-authored spec strings become trees of composable validators
that check flag values.

Key Features:
- Spec grammar: ``name``, ``name(arg,...)``, nested ``all``/``oneof``/``not``
- Case-insensitive, alias-aware registry with fixed arities
- Compositional validators (All/OneOf/Not, also via ``&``, ``|``, ``~``)
- Typed failures rendered through injectable message catalogs
- Recursion depth guard for nested specs
- Annotated pydantic integration

Usage:
    from flagspec.validation import parse_validators, validate_all

    validators = parse_validators(["oneof(email,integer)", "maxlength(64)"])
    result = validate_all(validators, "42")
    if not result.is_valid:
        print(result.message)
"""

# Validators and results
from .validators import (
    ValidationResult,
    Validator,
    PrimitiveValidator,
    StringLength,
    ByteLength,
    NumericRange,
    IntRange,
    Integer,
    Number,
    Boolean,
    EmailValidator,
    URLValidator,
    AlphaNumeric,
    Identifier,
    NoWhitespace,
    FileExtension,
    Hostname,
    IPAddress,
    OneOfValues,
    Equals,
    Contains,
    HasPrefix,
    HasSuffix,
    RegexPattern,
    CustomValidator,
)

# Combinators
from .composition import (
    Composite,
    CompositeMode,
    Negation,
    all_of,
    one_of,
    negate,
)

# Errors and messages
from .errors import ValidationFailure, SpecError
from .messages import (
    MessageCatalog,
    DEFAULT_CATALOG,
    register_catalog,
    get_catalog,
)

# Grammar
from .splitter import split_arguments, split_validator_specs
from .parser import ArgShape, ValidatorSpec, parse_spec
from .registry import (
    MAX_RECURSION_DEPTH,
    Arity,
    ValidatorEntry,
    lookup,
    list_validators,
    resolve,
    try_resolve,
)

# Spec API
from .specs import (
    parse_validator,
    parse_validators,
    try_parse_validators,
    parse_validator_list,
    validate_all,
)

__all__ = [
    # Validators
    "ValidationResult", "Validator", "PrimitiveValidator",
    "StringLength", "ByteLength", "NumericRange", "IntRange", "Integer", "Number", "Boolean",
    "EmailValidator", "URLValidator", "AlphaNumeric", "Identifier", "NoWhitespace", "FileExtension",
    "Hostname", "IPAddress", "OneOfValues", "Equals", "Contains", "HasPrefix", "HasSuffix",
    "RegexPattern", "CustomValidator",
    # Combinators
    "Composite", "CompositeMode", "Negation", "all_of", "one_of", "negate",
    # Errors and messages
    "ValidationFailure", "SpecError", "MessageCatalog", "DEFAULT_CATALOG", "register_catalog", "get_catalog",
    # Grammar
    "split_arguments", "split_validator_specs", "ArgShape", "ValidatorSpec", "parse_spec",
    "MAX_RECURSION_DEPTH", "Arity", "ValidatorEntry", "lookup", "list_validators",
    "resolve", "try_resolve",
    # Spec API
    "parse_validator", "parse_validators", "try_parse_validators", "parse_validator_list", "validate_all",
]
