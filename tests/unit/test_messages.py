"""Unit tests for message catalogs.

Tests cover:
- Parameter formatting
- Injected catalogs and fallback to English templates
- Value truncation and unknown placeholders
- Catalog registry lookup by locale
"""

import logging

import pytest

from flagspec.core.config import Settings
from flagspec.core.errors import ErrorCode
from flagspec.validation import SpecError
from flagspec.validation.builders import email, integer, min_length, one_of, value_range
from flagspec.validation.messages import (
    DEFAULT_CATALOG,
    ENGLISH,
    MessageCatalog,
    default_catalog,
    format_param,
    get_catalog,
    register_catalog,
)
from flagspec.validation.registry import build

FRENCH = MessageCatalog(
    locale="fr",
    templates={
        ErrorCode.E2020_MIN_LENGTH: "la valeur '{value}' doit contenir au moins {min} caractères",
        ErrorCode.E2001_COMBINED_FAILED: "échec de la validation : {reasons}",
        ErrorCode.E3010_UNKNOWN_VALIDATOR: "validateur inconnu '{name}'",
    },
)


@pytest.mark.unit
class TestFormatParam:
    """Test format_param function."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (1.0, "1"),
            (2.5, "2.5"),
            (100.0, "100"),
            (1e21, "1e+21"),
            (3, "3"),
            (True, "true"),
            (("red", "green"), "red, green"),
            (["a"], "a"),
            ("text", "text"),
        ],
    )
    def test_format(self, value, expected):
        assert format_param(value) == expected


@pytest.mark.unit
class TestMessageCatalog:
    """Test rendering through catalogs."""

    def test_every_code_has_english_template(self):
        """Test the built-in table covers the whole taxonomy."""
        assert set(ENGLISH) == set(ErrorCode)

    def test_injected_catalog(self):
        failure = min_length(5)("abc").failure

        assert failure.render(FRENCH) == "la valeur 'abc' doit contenir au moins 5 caractères"

    def test_missing_code_falls_back_to_english(self):
        """Test codes absent from a catalog use the English template."""
        failure = value_range(1, 100)("500").failure

        assert failure.render(FRENCH) == "value '500' must be between 1 and 100"

    def test_combined_failure_renders_children_with_same_catalog(self):
        failure = one_of(min_length(5), integer())("abc").failure

        assert failure.render(FRENCH) == (
            "échec de la validation : la valeur 'abc' doit contenir au moins 5 caractères"
            " OR value 'abc' must be an integer"
        )

    def test_spec_error_renders_with_catalog(self):
        with pytest.raises(SpecError) as exc_info:
            build("bogus")

        assert exc_info.value.render(FRENCH) == "validateur inconnu 'bogus'"
        assert str(exc_info.value) == "unknown validator 'bogus'"

    def test_long_values_are_truncated(self):
        """Test the offending value is cut to the preview length."""
        catalog = MessageCatalog(locale="en", templates=ENGLISH, value_preview_chars=5)

        assert email()("abcdefghij").failure.render(catalog) == (
            "value 'abcde...' is not a valid email address"
        )

    def test_default_preview_length(self):
        message = email()("x" * 60).message

        assert "x" * 50 + "..." in message
        assert "x" * 51 not in message

    def test_unknown_placeholder_is_left_intact(self):
        """Test a template naming a missing parameter does not raise."""
        catalog = MessageCatalog(templates={ErrorCode.E2000_VALIDATION_GENERIC: "{value} ({hint})"})

        assert catalog.format(ErrorCode.E2000_VALIDATION_GENERIC, {"value": "v"}) == "v ({hint})"


@pytest.mark.unit
class TestCatalogRegistry:
    """Test register_catalog and get_catalog."""

    def test_english_is_default(self):
        assert get_catalog("en") is DEFAULT_CATALOG

    def test_registered_catalog_by_region(self, isolated_catalogs):
        """Test a regional locale falls back to its language."""
        register_catalog(FRENCH)

        assert get_catalog("fr") is FRENCH
        assert get_catalog("fr_FR") is FRENCH
        assert get_catalog("FR-ca") is FRENCH

    def test_unknown_locale_falls_back_to_english(self, caplog):
        with caplog.at_level(logging.WARNING, logger="flagspec.messages"):
            assert get_catalog("de") is DEFAULT_CATALOG

        assert "message_catalog_missing" in caplog.text

    def test_default_catalog_follows_settings(self, isolated_catalogs, monkeypatch):
        """Test failures render in the configured locale."""
        register_catalog(FRENCH)
        monkeypatch.setattr(isolated_catalogs, "get_settings", lambda: Settings(LOCALE="fr"))

        assert default_catalog() is FRENCH
        assert min_length(5)("abc").message.startswith("la valeur 'abc'")

    def test_registration_does_not_leak(self):
        assert get_catalog("fr") is DEFAULT_CATALOG
