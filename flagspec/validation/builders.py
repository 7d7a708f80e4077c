"""Builder API - construct validators directly, bypassing the spec grammar.

Usage:
    from flagspec.validation.builders import all_of, min_length, max_length, regex

    username = all_of(min_length(3), max_length(20), regex(r"^[a-z_]+$", "lowercase and underscores"))
    username("alice_b").is_valid  # True

Only pattern builders can fail (SpecError, E3020_INVALID_PATTERN).
"""
from __future__ import annotations

from typing import Any, Callable, Iterable

from .composition import all_of, negate, one_of
from .validators import (
    AlphaNumeric,
    Boolean,
    ByteLength,
    Contains,
    CustomValidator,
    EmailValidator,
    Equals,
    FileExtension,
    HasPrefix,
    HasSuffix,
    Hostname,
    Identifier,
    Integer,
    IntRange,
    IPAddress,
    NoWhitespace,
    Number,
    NumericRange,
    OneOfValues,
    RegexPattern,
    StringLength,
    URLValidator,
    Validator,
)

__all__ = [
    "all_of", "one_of", "negate",
    "min_length", "max_length", "length", "min_byte_length", "max_byte_length", "byte_length",
    "value_range", "int_range", "min_value", "max_value", "integer", "number", "boolean",
    "email", "url", "alphanumeric", "identifier", "no_whitespace", "file_extension", "hostname", "ip", "port",
    "is_one_of", "is_not_one_of", "equals", "contains", "has_prefix", "has_suffix",
    "regex", "must_match", "must_not_match", "regexes", "custom",
]


# Length
def min_length(n: int) -> Validator: return StringLength(min_length=n)
def max_length(n: int) -> Validator: return StringLength(max_length=n)
def length(n: int) -> Validator: return StringLength(n, n)
def min_byte_length(n: int) -> Validator: return ByteLength(min_length=n)
def max_byte_length(n: int) -> Validator: return ByteLength(max_length=n)
def byte_length(n: int) -> Validator: return ByteLength(n, n)


# Numeric
def value_range(minimum: float, maximum: float) -> Validator: return NumericRange(float(minimum), float(maximum))
def int_range(minimum: int, maximum: int) -> Validator: return IntRange(minimum, maximum)
def min_value(minimum: float) -> Validator: return NumericRange(min_value=float(minimum))
def max_value(maximum: float) -> Validator: return NumericRange(max_value=float(maximum))
def integer() -> Validator: return Integer()
def number() -> Validator: return Number()
def boolean() -> Validator: return Boolean()
def port() -> Validator: return IntRange(1, 65535)


# Format
def email() -> Validator: return EmailValidator()
def url(*schemes: str) -> Validator: return URLValidator(schemes)
def alphanumeric() -> Validator: return AlphaNumeric()
def identifier() -> Validator: return Identifier()
def no_whitespace() -> Validator: return NoWhitespace()
def file_extension(*extensions: str) -> Validator: return FileExtension(extensions)
def hostname() -> Validator: return Hostname()
def ip() -> Validator: return IPAddress()


# Choice and substring
def is_one_of(*allowed: str) -> Validator: return OneOfValues(allowed)
def is_not_one_of(*forbidden: str) -> Validator: return negate(OneOfValues(forbidden))
def equals(expected: str) -> Validator: return Equals(expected)
def contains(substring: str) -> Validator: return Contains(substring)
def has_prefix(prefix: str) -> Validator: return HasPrefix(prefix)
def has_suffix(suffix: str) -> Validator: return HasSuffix(suffix)


# Patterns
def regex(pattern: str, description: str = "") -> Validator:
    """Value must contain a match of ``pattern``; raises SpecError if it does not compile."""
    return RegexPattern(pattern, description)


must_match = regex


def must_not_match(pattern: str, description: str = "") -> Validator:
    return negate(RegexPattern(pattern, description))


def regexes(patterns: Iterable[tuple[str, str]]) -> Validator:
    """Accept a value matching any of several ``(pattern, description)`` pairs."""
    return one_of(*(RegexPattern(pattern, description) for pattern, description in patterns))


def custom(name: str, fn: Callable[[str], Any] | None) -> Validator:
    """Wrap a function that rejects a value by raising ValueError or returning False."""
    return CustomValidator(name, fn)
