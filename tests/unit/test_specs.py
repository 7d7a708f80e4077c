"""Unit tests for the spec API.

Tests cover:
- End-to-end parse and validate of representative specs
- Blank specs, spec lists and chains
- Logging of rejected and parsed specs
"""

import logging

import pytest

from flagspec.core.errors import ErrorCode
from flagspec.validation import (
    SpecError,
    parse_validator,
    parse_validator_list,
    parse_validators,
    validate_all,
)


def _check(specs: list[str], value: str):
    return validate_all(parse_validators(specs), value)


@pytest.mark.unit
class TestScenarios:
    """Test parse-then-validate over common specs."""

    def test_email(self):
        assert _check(["email"], "user@example.com").is_valid
        assert not _check(["email"], "not-an-email").is_valid

    def test_range(self):
        """Test the failure cites both bounds."""
        assert _check(["range(1,100)"], "50").is_valid
        result = _check(["range(1,100)"], "500")

        assert not result.is_valid
        assert "1" in result.message and "100" in result.message
        assert result.message == "value '500' must be between 1 and 100"

    def test_one_of(self):
        """Test the failure cites the reason of every alternative."""
        assert _check(["oneof(email,integer)"], "42").is_valid
        result = _check(["oneof(email,integer)"], "nope")

        assert result.failure.code is ErrorCode.E2001_COMBINED_FAILED
        assert "is not a valid email address" in result.message
        assert "must be an integer" in result.message
        assert " OR " in result.message

    def test_all(self):
        validators = parse_validators(["all(minlength(3),maxlength(5))"])

        assert not validate_all(validators, "ab").is_valid
        assert validate_all(validators, "abcd").is_valid
        assert not validate_all(validators, "abcdef").is_valid

    def test_not(self):
        assert _check(["not(integer)"], "abc").is_valid
        assert not _check(["not(integer)"], "123").is_valid

    def test_deeply_mixed_spec(self):
        validator = parse_validator("all(not(isoneof(admin,root)),oneof(email,all(alnum,minlen(3))))")

        assert validator("alice").is_valid
        assert validator("bob@example.com").is_valid
        assert not validator("root").is_valid
        assert not validator("ab").is_valid


@pytest.mark.unit
class TestParseValidators:
    """Test parse_validators and parse_validator_list."""

    def test_blank_specs_are_skipped(self):
        assert [v.name for v in parse_validators(["", "email", "   "])] == ["email"]

    def test_empty_input(self):
        assert parse_validators([]) == []

    def test_one_bad_spec_fails_the_whole_call(self):
        with pytest.raises(SpecError) as exc_info:
            parse_validators(["email", "bogus", "integer"])

        assert exc_info.value.params["spec"] == "bogus"

    def test_parse_validator_raises_unwrapped(self):
        """Test a single spec fails with the underlying error code."""
        with pytest.raises(SpecError) as exc_info:
            parse_validator("range(1)")

        assert exc_info.value.code is ErrorCode.E3001_REQUIRES_ARGUMENT

    def test_parse_validator_list(self):
        validators = parse_validator_list("oneof(email,integer), maxlength(64)")

        assert [v.name for v in validators] == ["any[email,integer]", "max-length[64]"]

    def test_parse_validator_list_with_escaped_comma(self):
        """Test an escaped comma stays inside a regex quantifier."""
        validators = parse_validator_list(r"regex(^a{2\,3}$),nowhitespace")

        assert len(validators) == 2
        assert validators[0]("aaa").is_valid
        assert not validators[0]("a").is_valid

    def test_anchored_specs_reject_trailing_newline(self):
        """Test spec-built patterns anchor ``$`` at the end of the value."""
        plain, braced, forbidden = parse_validators(
            ["regex(^[0-9]+$)", "mustmatch({pattern:^[a-z]+$,desc:lower})", "mustnotmatch(^root$)"]
        )

        assert not plain("123\n").is_valid
        assert not braced("abc\n").is_valid
        assert braced("abc").is_valid
        assert forbidden("root\n").is_valid

    def test_escaped_comma_in_list_argument(self):
        """Test ``\\,`` inside a value list is a literal comma."""
        validator = parse_validator(r"isoneof(a\,b,c)")

        assert validator("a,b").is_valid
        assert validator("c").is_valid
        assert not validator(r"a\,b").is_valid
        assert "\\" not in validator("x").message


@pytest.mark.unit
class TestValidateAll:
    """Test validate_all function."""

    def test_returns_first_failure(self):
        validators = parse_validators(["minlength(3)", "integer"])

        assert validate_all(validators, "a").failure.code is ErrorCode.E2020_MIN_LENGTH
        assert validate_all(validators, "abc").failure.code is ErrorCode.E2007_MUST_BE_INTEGER
        assert validate_all(validators, "123").is_valid

    def test_empty_chain_passes(self):
        assert validate_all([], "anything").is_valid


@pytest.mark.unit
class TestLogging:
    """Test parse events are logged."""

    def test_rejected_spec_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="flagspec.parser"):
            with pytest.raises(SpecError):
                parse_validator("minlength:5")

        assert "validator_spec_rejected" in caplog.text
        assert "E3012_MUST_USE_PARENTHESES" in caplog.text

    def test_parsed_spec_is_logged_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="flagspec.parser"):
            parse_validator("email")

        assert "validator_spec_parsed" in caplog.text

    def test_parsed_spec_is_quiet_at_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="flagspec.parser"):
            parse_validator("email")

        assert "validator_spec_parsed" not in caplog.text
