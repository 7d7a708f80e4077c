"""Spec Parser

Turns one spec string into a ValidatorSpec ``(name, raw_args, args)``:

- ``name(args)``: call syntax; the first unescaped ``(`` opens the argument
  list and the spec must end with ``)``
- ``name:arg``: legacy colon syntax, always rejected with
  E3012_MUST_USE_PARENTHESES
- ``name``: zero-argument validator

How ``raw_args`` is split into ``args`` depends on the validator (ArgShape);
the registry supplies that policy through ``shape_for``.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable

from .errors import invalid_spec, must_use_parentheses
from .splitter import split_arguments, unescape_list_value


class ArgShape(str, Enum):
    """How a validator's raw argument text becomes arguments."""
    NESTED = "nested"          # all, oneof: comma-separated nested specs
    NESTED_ONE = "nested_one"  # not: exactly one nested spec, taken whole
    SINGLE = "single"          # regex: the whole text is one argument
    LIST = "list"              # everything else: comma-separated values


@dataclass(frozen=True, slots=True)
class ValidatorSpec:
    """Parsed form of one spec. Never retained after the validator is built."""
    name: str
    raw_args: str = ""
    args: tuple[str, ...] = ()


def find_unescaped(text: str, target: str) -> int:
    """Index of the first ``target`` not preceded by an odd run of backslashes, or -1."""
    backslashes = 0
    for index, ch in enumerate(text):
        if ch == target and backslashes % 2 == 0:
            return index
        backslashes = backslashes + 1 if ch == "\\" else 0
    return -1


def split_raw_args(raw_args: str, shape: ArgShape) -> tuple[str, ...]:
    match shape:
        case ArgShape.NESTED:
            return tuple(split_arguments(raw_args))
        case ArgShape.LIST:
            return tuple(unescape_list_value(arg) for arg in split_arguments(raw_args))
        case ArgShape.NESTED_ONE:
            return (raw_args.strip(),) if raw_args.strip() else ()
        case ArgShape.SINGLE:
            return (raw_args,) if raw_args else ()


def parse_spec(spec: str, shape_for: Callable[[str], ArgShape] | None = None) -> ValidatorSpec:
    """Parse one trimmed spec containing no top-level comma.

    Args:
        spec: Spec text, e.g. ``range(1,100)``
        shape_for: Maps a validator name to its ArgShape; LIST when omitted

    Raises:
        SpecError: E3000_INVALID_VALIDATOR (missing name, missing ``)``) or
            E3012_MUST_USE_PARENTHESES (colon syntax)
    """
    spec = spec.strip()
    paren = find_unescaped(spec, "(")

    if paren == -1:
        if find_unescaped(spec, ":") != -1:
            raise must_use_parentheses(spec)
        if not spec:
            raise invalid_spec(spec, "missing validator name")
        return ValidatorSpec(name=spec)

    name = spec[:paren].strip()
    if not name:
        raise invalid_spec(spec, "missing validator name")
    if not spec.endswith(")"):
        raise invalid_spec(spec, "missing closing parenthesis")

    raw_args = spec[paren + 1 : -1]
    shape = shape_for(name) if shape_for else ArgShape.LIST
    return ValidatorSpec(name=name, raw_args=raw_args, args=split_raw_args(raw_args, shape))
