"""Compositional Validator System

Every validator checks a single string value and returns a ValidationResult.
Primitive validators combine via the All/Any/Not combinators in
``composition`` or the ``&``, ``|``, ``~`` operators.

Features:
- Frozen dataclass validators, safe for concurrent reuse
- Patterns compiled eagerly at construction
- Typed failures (ErrorCode + parameters), rendered only on demand
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from ipaddress import ip_address
from typing import Any, Callable
from urllib.parse import urlparse
import re
import unicodedata

from flagspec.core.errors import AppError, ErrorCode, Ok, Result, validation_error
from .errors import ValidationFailure, invalid_pattern
from .messages import format_param


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of a single validation call."""
    is_valid: bool
    failure: ValidationFailure | None = None

    @classmethod
    def valid(cls) -> ValidationResult: return _VALID

    @classmethod
    def invalid(cls, failure: ValidationFailure) -> ValidationResult: return cls(is_valid=False, failure=failure)

    @property
    def message(self) -> str | None:
        return self.failure.render() if self.failure else None

    def to_result(self, value: str, origin: str = "") -> Result[str, AppError]:
        """Convert to Result for monadic pipelines."""
        if self.is_valid: return Ok(value)
        failure = self.failure
        return validation_error(failure.render(), code=failure.code, value=failure.value,
            validator=failure.validator, origin=origin, **failure.params)

    def to_dict(self) -> dict[str, Any]:
        if self.is_valid: return {"valid": True}
        return {"valid": False, **self.failure.to_dict()}

    def __bool__(self) -> bool:
        return self.is_valid


_VALID = ValidationResult(is_valid=True)


class Validator(ABC):
    """Base class for all validators.

    Validators are immutable and composable via operators:
    - & (AND): both must pass
    - | (OR): at least one must pass
    - ~ (NOT): negates the validator
    """
    __slots__ = ()

    @abstractmethod
    def validate(self, value: str) -> ValidationResult:
        """Validate a value. Returns ValidationResult."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short name including parameters, e.g. ``range[1,100]``."""

    @property
    @abstractmethod
    def kind(self) -> str:
        """Validator category, e.g. ``range``, ``pattern``, ``composite``."""

    @property
    def description(self) -> str:
        return self.name

    def __call__(self, value: str) -> ValidationResult: return self.validate(value)

    def __and__(self, other: Validator) -> Validator:
        from .composition import all_of  # Avoid circular import
        return all_of(self, other)

    def __or__(self, other: Validator) -> Validator:
        from .composition import one_of  # Avoid circular import
        return one_of(self, other)

    def __invert__(self) -> Validator:
        from .composition import negate  # Avoid circular import
        return negate(self)


class PrimitiveValidator(Validator):
    """Leaf validator closed over fixed parameters."""
    __slots__ = ()

    def _fail(self, code: ErrorCode, value: str, **params) -> ValidationResult:
        return ValidationResult.invalid(ValidationFailure(code, value, params, self.name))


# ============================================================================
# Length Validators
# ============================================================================

@dataclass(frozen=True, slots=True)
class StringLength(PrimitiveValidator):
    """Validate length in characters (code points)."""
    min_length: int | None = None
    max_length: int | None = None

    _unit = ""
    _codes = (ErrorCode.E2020_MIN_LENGTH, ErrorCode.E2021_MAX_LENGTH, ErrorCode.E2022_EXACT_LENGTH)

    def measure(self, value: str) -> int:
        return len(value)

    @property
    def kind(self) -> str:
        return "length"

    @property
    def name(self) -> str:
        prefix = f"{self._unit}-" if self._unit else ""
        if self.min_length is not None and self.min_length == self.max_length:
            return f"{prefix}length[{self.min_length}]"
        parts = []
        if self.min_length is not None: parts.append(f"min-{prefix}length[{self.min_length}]")
        if self.max_length is not None: parts.append(f"max-{prefix}length[{self.max_length}]")
        return ",".join(parts) or f"{prefix}length"

    @property
    def description(self) -> str:
        unit = "bytes" if self._unit else "characters"
        if self.min_length is not None and self.min_length == self.max_length:
            return f"Exactly {self.min_length} {unit}"
        if self.min_length is not None and self.max_length is not None:
            return f"Between {self.min_length} and {self.max_length} {unit}"
        if self.min_length is not None:
            return f"Minimum length {self.min_length} {unit}"
        if self.max_length is not None:
            return f"Maximum length {self.max_length} {unit}"
        return "Any length"

    def validate(self, value: str) -> ValidationResult:
        at_least, at_most, exactly = self._codes
        length = self.measure(value)
        if self.min_length is not None and self.min_length == self.max_length:
            if length != self.min_length:
                return self._fail(exactly, value, length=self.min_length)
            return ValidationResult.valid()
        if self.min_length is not None and length < self.min_length:
            return self._fail(at_least, value, min=self.min_length)
        if self.max_length is not None and length > self.max_length:
            return self._fail(at_most, value, max=self.max_length)
        return ValidationResult.valid()


@dataclass(frozen=True, slots=True)
class ByteLength(StringLength):
    """Validate length of the UTF-8 encoding in bytes."""
    _unit = "byte"
    _codes = (ErrorCode.E2023_MIN_BYTE_LENGTH, ErrorCode.E2024_MAX_BYTE_LENGTH, ErrorCode.E2025_EXACT_BYTE_LENGTH)

    def measure(self, value: str) -> int:
        return len(value.encode("utf-8"))

    @property
    def kind(self) -> str:
        return "byte-length"


# ============================================================================
# Numeric Validators
# ============================================================================

_INTEGER = re.compile(r"[+-]?[0-9]+")
_TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_VALUES = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def parse_integer(value: str) -> int | None:
    """Parse a plain decimal integer with optional sign; None if malformed."""
    return int(value) if _INTEGER.fullmatch(value) else None


def parse_number(value: str) -> float | None:
    """Parse a float literal; None if malformed.

    Surrounding whitespace and digit-group underscores are rejected, which
    ``float()`` alone would accept.
    """
    if not value or value != value.strip() or "_" in value: return None
    try:
        return float(value)
    except ValueError:
        return None


def parse_boolean(value: str) -> bool | None:
    if value in _TRUE_VALUES: return True
    if value in _FALSE_VALUES: return False
    return None


@dataclass(frozen=True, slots=True)
class NumericRange(PrimitiveValidator):
    """Validate a float value against optional inclusive bounds."""
    min_value: float | None = None
    max_value: float | None = None

    @property
    def kind(self) -> str:
        return "range"

    @property
    def name(self) -> str:
        lo, hi = format_param(self.min_value), format_param(self.max_value)
        if self.min_value is not None and self.max_value is not None: return f"range[{lo},{hi}]"
        if self.min_value is not None: return f"min[{lo}]"
        if self.max_value is not None: return f"max[{hi}]"
        return "number"

    @property
    def description(self) -> str:
        lo, hi = format_param(self.min_value), format_param(self.max_value)
        if self.min_value is not None and self.max_value is not None: return f"Number between {lo} and {hi}"
        if self.min_value is not None: return f"Minimum value {lo}"
        if self.max_value is not None: return f"Maximum value {hi}"
        return "Valid floating-point number"

    def validate(self, value: str) -> ValidationResult:
        number = parse_number(value)
        if number is None:
            return self._fail(ErrorCode.E2006_MUST_BE_NUMBER, value)
        lo, hi = self.min_value, self.max_value
        if lo is not None and hi is not None:
            if not lo <= number <= hi:
                return self._fail(ErrorCode.E2003_VALUE_BETWEEN, value, min=lo, max=hi)
        elif lo is not None and not number >= lo:
            return self._fail(ErrorCode.E2004_VALUE_AT_LEAST, value, min=lo)
        elif hi is not None and not number <= hi:
            return self._fail(ErrorCode.E2005_VALUE_AT_MOST, value, max=hi)
        return ValidationResult.valid()


@dataclass(frozen=True, slots=True)
class IntRange(PrimitiveValidator):
    """Validate an integer value against inclusive bounds."""
    min_value: int
    max_value: int

    @property
    def kind(self) -> str:
        return "range"

    @property
    def name(self) -> str:
        return f"int-range[{self.min_value},{self.max_value}]"

    @property
    def description(self) -> str:
        return f"Integer between {self.min_value} and {self.max_value}"

    def validate(self, value: str) -> ValidationResult:
        number = parse_integer(value)
        if number is None:
            return self._fail(ErrorCode.E2007_MUST_BE_INTEGER, value)
        if not self.min_value <= number <= self.max_value:
            return self._fail(ErrorCode.E2003_VALUE_BETWEEN, value, min=self.min_value, max=self.max_value)
        return ValidationResult.valid()


@dataclass(frozen=True, slots=True)
class Integer(PrimitiveValidator):
    kind = "type"
    name = "integer"
    description = "Valid integer"

    def validate(self, value: str) -> ValidationResult:
        if parse_integer(value) is None:
            return self._fail(ErrorCode.E2007_MUST_BE_INTEGER, value)
        return ValidationResult.valid()


@dataclass(frozen=True, slots=True)
class Number(PrimitiveValidator):
    kind = "type"
    name = "float"
    description = "Valid floating-point number"

    def validate(self, value: str) -> ValidationResult:
        if parse_number(value) is None:
            return self._fail(ErrorCode.E2006_MUST_BE_NUMBER, value)
        return ValidationResult.valid()


@dataclass(frozen=True, slots=True)
class Boolean(PrimitiveValidator):
    kind = "type"
    name = "boolean"
    description = "Valid boolean (true/false)"

    def validate(self, value: str) -> ValidationResult:
        if parse_boolean(value) is None:
            return self._fail(ErrorCode.E2008_MUST_BE_BOOLEAN, value)
        return ValidationResult.valid()


# ============================================================================
# Format Validators
# ============================================================================

_EMAIL = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
_HOSTNAME = re.compile(
    r"([a-zA-Z0-9]|[a-zA-Z0-9][a-zA-Z0-9\-]*[a-zA-Z0-9])"
    r"(\.([a-zA-Z0-9]|[a-zA-Z0-9][a-zA-Z0-9\-]*[a-zA-Z0-9]))*"
)
MAX_HOSTNAME_LENGTH = 253


@dataclass(frozen=True, slots=True)
class EmailValidator(PrimitiveValidator):
    kind = "format"
    name = "email"
    description = "Valid email address"

    def validate(self, value: str) -> ValidationResult:
        if not _EMAIL.fullmatch(value):
            return self._fail(ErrorCode.E2010_INVALID_EMAIL, value)
        return ValidationResult.valid()


@dataclass(frozen=True, slots=True)
class URLValidator(PrimitiveValidator):
    """Validate a URL with a host and, when given, an allowed scheme."""
    schemes: tuple[str, ...] = ()

    @property
    def kind(self) -> str:
        return "format"

    @property
    def name(self) -> str:
        return f"url[{','.join(self.schemes)}]" if self.schemes else "url"

    @property
    def description(self) -> str:
        if self.schemes: return f"Valid URL with schemes: {', '.join(self.schemes)}"
        return "Valid URL"

    def validate(self, value: str) -> ValidationResult:
        try:
            parsed = urlparse(value)
        except ValueError as e:
            return self._fail(ErrorCode.E2011_INVALID_URL, value, reason=str(e))
        if self.schemes and parsed.scheme.lower() not in {s.lower() for s in self.schemes}:
            return self._fail(ErrorCode.E2012_URL_SCHEME_NOT_ALLOWED, value, schemes=self.schemes)
        if not parsed.hostname:
            return self._fail(ErrorCode.E2013_URL_MISSING_HOST, value)
        return ValidationResult.valid()


def _is_letter(ch: str) -> bool:
    return unicodedata.category(ch).startswith("L")


def _is_word_char(ch: str) -> bool:
    category = unicodedata.category(ch)
    return category[0] in "LM" or category == "Nd"


@dataclass(frozen=True, slots=True)
class AlphaNumeric(PrimitiveValidator):
    kind = "format"
    name = "alphanumeric"
    description = "Letters and numbers only"

    def validate(self, value: str) -> ValidationResult:
        if not value or not all(_is_word_char(ch) for ch in value):
            return self._fail(ErrorCode.E2032_MUST_BE_ALPHANUMERIC, value)
        return ValidationResult.valid()


@dataclass(frozen=True, slots=True)
class Identifier(PrimitiveValidator):
    kind = "format"
    name = "identifier"
    description = "Valid identifier (starts with letter, contains letters/numbers/underscore)"

    def validate(self, value: str) -> ValidationResult:
        if not value or not _is_letter(value[0]) or not all(ch == "_" or _is_word_char(ch) for ch in value[1:]):
            return self._fail(ErrorCode.E2033_MUST_BE_IDENTIFIER, value)
        return ValidationResult.valid()


@dataclass(frozen=True, slots=True)
class NoWhitespace(PrimitiveValidator):
    kind = "format"
    name = "no-whitespace"
    description = "No whitespace allowed"

    def validate(self, value: str) -> ValidationResult:
        if any(ch.isspace() for ch in value):
            return self._fail(ErrorCode.E2034_MUST_NOT_CONTAIN_WHITESPACE, value)
        return ValidationResult.valid()


@dataclass(frozen=True, slots=True)
class FileExtension(PrimitiveValidator):
    """Validate a case-insensitive file extension; a missing leading dot is added."""
    extensions: tuple[str, ...]
    _normalized: tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        normalized = tuple((ext if ext.startswith(".") else f".{ext}").lower() for ext in self.extensions)
        object.__setattr__(self, "_normalized", normalized)

    @property
    def kind(self) -> str:
        return "format"

    @property
    def name(self) -> str:
        return f"file-ext[{','.join(self.extensions)}]"

    @property
    def description(self) -> str:
        return f"File extension must be one of: {', '.join(self.extensions)}"

    def validate(self, value: str) -> ValidationResult:
        if not value.lower().endswith(self._normalized):
            return self._fail(ErrorCode.E2035_FILE_EXTENSION, value, extensions=self.extensions)
        return ValidationResult.valid()


@dataclass(frozen=True, slots=True)
class Hostname(PrimitiveValidator):
    kind = "format"
    name = "hostname"
    description = "Valid hostname (RFC 1123)"

    def validate(self, value: str) -> ValidationResult:
        if len(value) > MAX_HOSTNAME_LENGTH:
            return self._fail(ErrorCode.E2036_HOSTNAME_TOO_LONG, value, max=MAX_HOSTNAME_LENGTH)
        if not _HOSTNAME.fullmatch(value):
            return self._fail(ErrorCode.E2037_INVALID_HOSTNAME, value)
        return ValidationResult.valid()


@dataclass(frozen=True, slots=True)
class IPAddress(PrimitiveValidator):
    kind = "format"
    name = "ip"
    description = "Valid IP address (v4 or v6)"

    def validate(self, value: str) -> ValidationResult:
        try:
            ip_address(value)
        except ValueError:
            return self._fail(ErrorCode.E2038_INVALID_IP, value)
        return ValidationResult.valid()


# ============================================================================
# Choice and Substring Validators
# ============================================================================

@dataclass(frozen=True, slots=True)
class OneOfValues(PrimitiveValidator):
    """Validate exact membership in a fixed set of strings."""
    allowed: tuple[str, ...]
    _members: frozenset[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_members", frozenset(self.allowed))

    @property
    def kind(self) -> str:
        return "choice"

    @property
    def name(self) -> str:
        return f"is-one-of[{','.join(self.allowed)}]"

    @property
    def description(self) -> str:
        return f"One of: {', '.join(self.allowed)}"

    def validate(self, value: str) -> ValidationResult:
        if value not in self._members:
            return self._fail(ErrorCode.E2030_MUST_BE_ONE_OF, value, allowed=self.allowed)
        return ValidationResult.valid()


@dataclass(frozen=True, slots=True)
class Equals(PrimitiveValidator):
    expected: str

    @property
    def kind(self) -> str:
        return "match"

    @property
    def name(self) -> str:
        return f"equals[{self.expected}]"

    @property
    def description(self) -> str:
        return f"Exactly: {self.expected}"

    def validate(self, value: str) -> ValidationResult:
        if value != self.expected:
            return self._fail(ErrorCode.E2030_MUST_BE_ONE_OF, value, allowed=(self.expected,))
        return ValidationResult.valid()


@dataclass(frozen=True, slots=True)
class Contains(PrimitiveValidator):
    substring: str

    @property
    def kind(self) -> str:
        return "substring"

    @property
    def name(self) -> str:
        return f"contains[{self.substring}]"

    @property
    def description(self) -> str:
        return f"Contains: {self.substring}"

    def validate(self, value: str) -> ValidationResult:
        if self.substring not in value:
            return self._fail(ErrorCode.E2002_PATTERN_MATCH, value, description=f"must contain '{self.substring}'")
        return ValidationResult.valid()


@dataclass(frozen=True, slots=True)
class HasPrefix(PrimitiveValidator):
    prefix: str

    @property
    def kind(self) -> str:
        return "prefix"

    @property
    def name(self) -> str:
        return f"has-prefix[{self.prefix}]"

    @property
    def description(self) -> str:
        return f"Starts with: {self.prefix}"

    def validate(self, value: str) -> ValidationResult:
        if not value.startswith(self.prefix):
            return self._fail(ErrorCode.E2002_PATTERN_MATCH, value, description=f"must start with '{self.prefix}'")
        return ValidationResult.valid()


@dataclass(frozen=True, slots=True)
class HasSuffix(PrimitiveValidator):
    suffix: str

    @property
    def kind(self) -> str:
        return "suffix"

    @property
    def name(self) -> str:
        return f"has-suffix[{self.suffix}]"

    @property
    def description(self) -> str:
        return f"Ends with: {self.suffix}"

    def validate(self, value: str) -> ValidationResult:
        if not value.endswith(self.suffix):
            return self._fail(ErrorCode.E2002_PATTERN_MATCH, value, description=f"must end with '{self.suffix}'")
        return ValidationResult.valid()


# ============================================================================
# Pattern Validators
# ============================================================================

def _strict_end_anchors(pattern: str) -> str:
    """Rewrite ``$`` outside character classes to ``\\Z``.

    Without MULTILINE, ``re``'s ``$`` also matches just before a trailing
    newline; ``\\Z`` matches only at the end of the value.
    """
    out: list[str] = []
    escaped = False
    class_start = -1  # index of the first member of an open character class

    for i, ch in enumerate(pattern):
        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = True
        elif class_start >= 0:
            if ch == "^" and i == class_start:
                class_start += 1
            elif ch == "]" and i > class_start:
                class_start = -1
        elif ch == "[":
            class_start = i + 1
        elif ch == "$":
            out.append(r"\Z")
            continue
        out.append(ch)

    return "".join(out)


@dataclass(frozen=True, slots=True)
class RegexPattern(PrimitiveValidator):
    """Validate that a regex matches somewhere in the value.

    The pattern is compiled at construction; an invalid pattern raises
    SpecError (E3020_INVALID_PATTERN) instead of producing a validator that
    can never pass. Flags are set inline (``(?i)``, ``(?m)``). Outside
    multiline mode ``$`` anchors at the very end, so ``^[0-9]+$`` rejects
    ``"123\\n"``.
    """
    pattern: str
    pattern_description: str = ""
    _compiled: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        try:
            compiled = re.compile(self.pattern)
            if not compiled.flags & re.MULTILINE:
                compiled = re.compile(_strict_end_anchors(self.pattern))
        except re.error as e:
            raise invalid_pattern(self.pattern, str(e)) from e
        object.__setattr__(self, "_compiled", compiled)

    @property
    def kind(self) -> str:
        return "pattern"

    @property
    def name(self) -> str:
        return f"regex[{self.pattern}]"

    @property
    def description(self) -> str:
        return self.pattern_description or self.pattern

    def validate(self, value: str) -> ValidationResult:
        if not self._compiled.search(value):
            return self._fail(ErrorCode.E2002_PATTERN_MATCH, value, description=self.description, pattern=self.pattern)
        return ValidationResult.valid()


# ============================================================================
# Custom Validators
# ============================================================================

@dataclass(frozen=True, slots=True)
class CustomValidator(PrimitiveValidator):
    """Wrap a user function.

    The function receives the value and rejects it by raising ValueError
    (or TypeError) or by returning False. A missing function yields a
    validator that accepts everything.
    """
    label: str
    fn: Callable[[str], Any] | None = None

    @property
    def kind(self) -> str:
        return "custom"

    @property
    def name(self) -> str:
        return self.label if self.fn is not None else f"{self.label}-noop"

    @property
    def description(self) -> str:
        return "Custom validation" if self.fn is not None else "No-op validator"

    def validate(self, value: str) -> ValidationResult:
        if self.fn is None: return ValidationResult.valid()
        try:
            outcome = self.fn(value)
        except (ValueError, TypeError) as e:
            return self._fail(ErrorCode.E2040_CUSTOM_FAILED, value, name=self.label, reason=str(e))
        if outcome is False:
            return self._fail(ErrorCode.E2040_CUSTOM_FAILED, value, name=self.label, reason="rejected")
        return ValidationResult.valid()
