"""Message Catalogs

Failures carry an ErrorCode plus typed parameters; text is produced only when
a failure is rendered through a MessageCatalog. Catalogs are passed
explicitly, so callers (and tests) can inject their own tables. Codes missing
from a catalog fall back to the built-in English templates.

Templates use ``str.format`` named placeholders. Parameters are normalized
before formatting: floats use ``%g`` style (``1``, ``2.5``), sequences are
comma-joined and long offending values are truncated.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from flagspec.core.config import get_settings
from flagspec.core.errors import ErrorCode
from flagspec.core.logging import messages_logger

log = messages_logger()

ENGLISH: Mapping[ErrorCode, str] = {
    # Validation
    ErrorCode.E2000_VALIDATION_GENERIC: "value '{value}' is invalid",
    ErrorCode.E2001_COMBINED_FAILED: "validation failed: {reasons}",
    ErrorCode.E2002_PATTERN_MATCH: "value '{value}' must match pattern: {description}",
    ErrorCode.E2003_VALUE_BETWEEN: "value '{value}' must be between {min} and {max}",
    ErrorCode.E2004_VALUE_AT_LEAST: "value '{value}' must be at least {min}",
    ErrorCode.E2005_VALUE_AT_MOST: "value '{value}' must be at most {max}",
    ErrorCode.E2006_MUST_BE_NUMBER: "value '{value}' must be a number",
    ErrorCode.E2007_MUST_BE_INTEGER: "value '{value}' must be an integer",
    ErrorCode.E2008_MUST_BE_BOOLEAN: "value '{value}' must be a boolean (true/false)",
    ErrorCode.E2010_INVALID_EMAIL: "value '{value}' is not a valid email address",
    ErrorCode.E2011_INVALID_URL: "value '{value}' is not a valid URL: {reason}",
    ErrorCode.E2012_URL_SCHEME_NOT_ALLOWED: "URL scheme must be one of: {schemes}",
    ErrorCode.E2013_URL_MISSING_HOST: "URL '{value}' must have a host",
    ErrorCode.E2020_MIN_LENGTH: "value '{value}' must be at least {min} characters long",
    ErrorCode.E2021_MAX_LENGTH: "value '{value}' must be at most {max} characters long",
    ErrorCode.E2022_EXACT_LENGTH: "value '{value}' must be exactly {length} characters long",
    ErrorCode.E2023_MIN_BYTE_LENGTH: "value '{value}' must be at least {min} bytes long",
    ErrorCode.E2024_MAX_BYTE_LENGTH: "value '{value}' must be at most {max} bytes long",
    ErrorCode.E2025_EXACT_BYTE_LENGTH: "value '{value}' must be exactly {length} bytes long",
    ErrorCode.E2030_MUST_BE_ONE_OF: "value '{value}' must be one of: {allowed}",
    ErrorCode.E2031_VALUE_CANNOT_BE: "value '{value}' is not allowed",
    ErrorCode.E2032_MUST_BE_ALPHANUMERIC: "value '{value}' must contain only letters and numbers",
    ErrorCode.E2033_MUST_BE_IDENTIFIER: "value '{value}' must be a valid identifier",
    ErrorCode.E2034_MUST_NOT_CONTAIN_WHITESPACE: "value '{value}' must not contain whitespace",
    ErrorCode.E2035_FILE_EXTENSION: "file must have one of the extensions: {extensions}",
    ErrorCode.E2036_HOSTNAME_TOO_LONG: "hostname must be at most 253 characters",
    ErrorCode.E2037_INVALID_HOSTNAME: "value '{value}' is not a valid hostname",
    ErrorCode.E2038_INVALID_IP: "value '{value}' must be a valid IP address",
    ErrorCode.E2040_CUSTOM_FAILED: "{name}: {reason}",
    # Specification
    ErrorCode.E3000_INVALID_VALIDATOR: "invalid validator '{spec}': {reason}",
    ErrorCode.E3001_REQUIRES_ARGUMENT: "validator '{validator}' requires {expected} argument(s)",
    ErrorCode.E3002_REQUIRES_AT_LEAST_ONE_ARGUMENT: "validator '{validator}' requires at least one argument",
    ErrorCode.E3003_ARGUMENT_MUST_BE_INTEGER: "argument of validator '{validator}' must be an integer",
    ErrorCode.E3004_ARGUMENT_MUST_BE_NUMBER: "argument of validator '{validator}' must be a number",
    ErrorCode.E3005_ARGUMENT_CANNOT_BE_NEGATIVE: "argument of validator '{validator}' cannot be negative",
    ErrorCode.E3010_UNKNOWN_VALIDATOR: "unknown validator '{name}'",
    ErrorCode.E3011_RECURSION_DEPTH_EXCEEDED: "validator nesting exceeds the maximum depth of {max_depth}",
    ErrorCode.E3012_MUST_USE_PARENTHESES: "validator '{spec}' must use parentheses for arguments, e.g. name(arg1,arg2)",
    ErrorCode.E3020_INVALID_PATTERN: "invalid regex pattern '{pattern}': {reason}",
}


class _Params(dict):
    """Leave unknown placeholders intact instead of raising KeyError."""

    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def format_param(value: Any) -> str:
    """Render a single message parameter."""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float):
        return format(value, "g")
    if isinstance(value, (list, tuple, frozenset, set)):
        return ", ".join(format_param(v) for v in value)
    return str(value)


@dataclass(frozen=True, slots=True)
class MessageCatalog:
    """Immutable table of message templates for one locale."""
    locale: str = "en"
    templates: Mapping[ErrorCode, str] = field(default_factory=dict)
    value_preview_chars: int = 50

    def template_for(self, code: ErrorCode) -> str:
        if code in self.templates:
            return self.templates[code]
        return ENGLISH.get(code, code.key)

    def format(self, code: ErrorCode, params: Mapping[str, Any]) -> str:
        """Render the template for ``code`` with ``params``."""
        rendered = _Params()
        for key, value in params.items():
            text = format_param(value)
            if key == "value" and len(text) > self.value_preview_chars:
                text = text[: self.value_preview_chars] + "..."
            rendered[key] = text
        return self.template_for(code).format_map(rendered)


DEFAULT_CATALOG = MessageCatalog(locale="en", templates=ENGLISH)

_CATALOGS: dict[str, MessageCatalog] = {"en": DEFAULT_CATALOG}


def _normalize(locale: str) -> str:
    return locale.strip().lower().replace("_", "-")


def register_catalog(catalog: MessageCatalog) -> None:
    """Register a catalog so it can be selected by locale."""
    _CATALOGS[_normalize(catalog.locale)] = catalog


def get_catalog(locale: str) -> MessageCatalog:
    """Look up a catalog by locale, falling back to the language and then to English."""
    key = _normalize(locale)
    if key in _CATALOGS:
        return _CATALOGS[key]
    if (lang := key.split("-", 1)[0]) in _CATALOGS:
        return _CATALOGS[lang]
    log.warning("message_catalog_missing", locale=locale, fallback="en")
    return DEFAULT_CATALOG


def default_catalog() -> MessageCatalog:
    """Catalog for the configured locale."""
    return get_catalog(get_settings().LOCALE)
