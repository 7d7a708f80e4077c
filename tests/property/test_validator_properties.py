"""Property-based tests for validator invariants.

Tests critical properties:
- Integer and numeric validators accept exactly the values they can parse
- Length validators agree with len()
- Negation inverts, ALL is a conjunction, ANY is a disjunction
- Validation is deterministic for a shared validator
- Comma-free argument lists split back into their tokens
- Nesting up to the depth bound builds; anything deeper fails with a typed error
"""

from __future__ import annotations

import math
import string

import pytest
from hypothesis import given, seed, settings
from hypothesis import strategies as st

from flagspec.core.errors import ErrorCode
from flagspec.validation import SpecError, parse_validator, split_arguments
from flagspec.validation.builders import (
    all_of,
    boolean,
    email,
    int_range,
    integer,
    is_one_of,
    min_length,
    negate,
    no_whitespace,
    number,
    one_of,
    value_range,
)
from flagspec.validation.registry import MAX_RECURSION_DEPTH
from tests.helpers import nest

pytestmark = pytest.mark.property

# Strategies for generating values
bound_strategy = st.integers(min_value=-10_000, max_value=10_000)
finite_float_strategy = st.floats(allow_nan=False, allow_infinity=False)
token_strategy = st.text(alphabet=string.ascii_letters + string.digits + "._-", min_size=1, max_size=12)
sample_strategy = st.text(max_size=20)
validator_strategy = st.sampled_from(
    [email(), integer(), number(), boolean(), min_length(3), no_whitespace(), is_one_of("a", "b")]
)


@seed(4001)
@settings(max_examples=100, deadline=None)
@given(value=st.integers())
def test_every_integer_literal_is_an_integer(value: int) -> None:
    """
    Property: str(int) always passes integer() and number().
    """
    assert integer()(str(value)).is_valid
    assert number()(str(value)).is_valid


@seed(4002)
@settings(max_examples=100, deadline=None)
@given(value=bound_strategy, lo=bound_strategy, hi=bound_strategy)
def test_int_range_is_inclusive_interval(value: int, lo: int, hi: int) -> None:
    """
    Property: int_range(lo, hi) passes exactly when lo <= value <= hi.
    """
    result = int_range(lo, hi)(str(value))

    assert result.is_valid == (lo <= value <= hi)
    if not result.is_valid:
        assert result.failure.code is ErrorCode.E2003_VALUE_BETWEEN


@seed(4003)
@settings(max_examples=100, deadline=None)
@given(value=finite_float_strategy, lo=finite_float_strategy, hi=finite_float_strategy)
def test_value_range_matches_float_comparison(value: float, lo: float, hi: float) -> None:
    """
    Property: repr(float) round-trips, so range checks agree with float comparison.
    """
    assert value_range(lo, hi)(repr(value)).is_valid == (lo <= value <= hi)


@seed(4004)
@settings(max_examples=100, deadline=None)
@given(value=st.text(max_size=40), minimum=st.integers(min_value=0, max_value=40))
def test_min_length_agrees_with_len(value: str, minimum: int) -> None:
    """
    Property: min_length(n) passes exactly when len(value) >= n.
    """
    assert min_length(minimum)(value).is_valid == (len(value) >= minimum)


@seed(4005)
@settings(max_examples=100, deadline=None)
@given(value=sample_strategy)
def test_no_whitespace_agrees_with_isspace(value: str) -> None:
    """
    Property: no_whitespace() fails exactly when some character is whitespace.
    """
    assert no_whitespace()(value).is_valid == (not any(ch.isspace() for ch in value))


@seed(4006)
@settings(max_examples=100, deadline=None)
@given(allowed=st.lists(token_strategy, min_size=1, max_size=5), data=st.data())
def test_is_one_of_accepts_members(allowed: list[str], data: st.DataObject) -> None:
    """
    Property: every member passes; a value outside the set fails.
    """
    validator = is_one_of(*allowed)

    assert validator(data.draw(st.sampled_from(allowed))).is_valid
    assert not validator("".join(allowed) + "!").is_valid


@seed(4007)
@settings(max_examples=100, deadline=None)
@given(value=st.booleans(), style=st.sampled_from([str, lambda b: str(b).lower(), lambda b: str(b).upper(), lambda b: str(int(b))]))
def test_boolean_accepts_common_spellings(value: bool, style) -> None:
    """
    Property: True/true/TRUE/1 and their false counterparts all pass boolean().
    """
    assert boolean()(style(value)).is_valid


@seed(4008)
@settings(max_examples=100, deadline=None)
@given(
    local=st.text(alphabet=string.ascii_letters + string.digits + "._%+-", min_size=1, max_size=16),
    domain=st.text(alphabet=string.ascii_lowercase + string.digits + "-", min_size=1, max_size=16),
    tld=st.text(alphabet=string.ascii_lowercase, min_size=2, max_size=6),
)
def test_generated_addresses_pass_email(local: str, domain: str, tld: str) -> None:
    """
    Property: local@domain.tld built from allowed characters is a valid email.
    """
    assert email()(f"{local}@{domain}.{tld}").is_valid


@seed(4009)
@settings(max_examples=100, deadline=None)
@given(validator=validator_strategy, value=sample_strategy)
def test_negation_inverts(validator, value: str) -> None:
    """
    Property: negate(v) passes exactly when v fails.
    """
    assert negate(validator)(value).is_valid == (not validator(value).is_valid)


@seed(4010)
@settings(max_examples=100, deadline=None)
@given(validators=st.lists(validator_strategy, max_size=4), value=sample_strategy)
def test_composites_are_conjunction_and_disjunction(validators, value: str) -> None:
    """
    Property: ALL passes iff every child passes; ANY passes iff some child passes.

    Empty composites pass.
    """
    outcomes = [v(value).is_valid for v in validators]

    assert all_of(*validators)(value).is_valid == all(outcomes)
    assert one_of(*validators)(value).is_valid == (any(outcomes) or not validators)


@seed(4011)
@settings(max_examples=100, deadline=None)
@given(validator=validator_strategy, value=sample_strategy)
def test_validation_is_deterministic(validator, value: str) -> None:
    """
    Property: a validator keeps no state between calls.
    """
    assert validator(value) == validator(value)


@seed(4012)
@settings(max_examples=100, deadline=None)
@given(tokens=st.lists(token_strategy, max_size=8))
def test_split_arguments_recovers_tokens(tokens: list[str]) -> None:
    """
    Property: joining comma-free tokens with ", " and splitting gives them back.
    """
    assert split_arguments(", ".join(tokens)) == tokens


@seed(4013)
@settings(max_examples=50, deadline=None)
@given(depth=st.integers(min_value=0, max_value=MAX_RECURSION_DEPTH), wrapper=st.sampled_from(["not", "all", "oneof"]))
def test_nesting_within_bound_builds(depth: int, wrapper: str) -> None:
    """
    Property: up to MAX_RECURSION_DEPTH wrappers always build.
    """
    validator = parse_validator(nest("integer", depth, wrapper))

    expected = depth % 2 == 0 if wrapper == "not" else True
    assert validator("42").is_valid == expected


@seed(4014)
@settings(max_examples=50, deadline=None)
@given(depth=st.integers(min_value=MAX_RECURSION_DEPTH + 1, max_value=200), wrapper=st.sampled_from(["not", "all", "oneof"]))
def test_nesting_past_bound_fails(depth: int, wrapper: str) -> None:
    """
    Property: deeper nesting always fails with RecursionDepthExceeded.
    """
    with pytest.raises(SpecError) as exc_info:
        parse_validator(nest("integer", depth, wrapper))

    assert exc_info.value.code is ErrorCode.E3011_RECURSION_DEPTH_EXCEEDED


@seed(4015)
@settings(max_examples=100, deadline=None)
@given(value=finite_float_strategy)
def test_number_accepts_float_repr(value: float) -> None:
    """
    Property: repr of any finite float passes number().
    """
    assert math.isfinite(value)
    assert number()(repr(value)).is_valid
