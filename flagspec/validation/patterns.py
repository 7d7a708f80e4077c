"""Pattern arguments for regex, mustmatch and mustnotmatch.

Three forms are accepted:

1. ``^[a-z]+$``: plain pattern, doubling as its description
2. ``pattern:^[a-z]+$,desc:lowercase``: explicit description
3. ``{pattern:^[a-z]+$,desc:lowercase}``: braced form; both keys required.
   Escapes: ``\\,`` ``\\:`` ``\\{`` ``\\}`` ``\\"`` ``\\'`` decode to the
   character, ``\\\\`` to one backslash, any other escape (``\\d``) is kept.
"""
from __future__ import annotations

from dataclasses import dataclass

from .errors import invalid_spec

PATTERN_PREFIX = "pattern:"
DESCRIPTION_SEPARATOR = ",desc:"

_BRACED_ESCAPES = frozenset(",:{}\"'\\")


@dataclass(frozen=True, slots=True)
class PatternValue:
    pattern: str
    description: str


def parse_pattern_argument(arg: str) -> PatternValue:
    """Split a pattern argument into pattern and description."""
    if arg.startswith("{") and arg.endswith("}"):
        return parse_braced_pattern(arg)
    if arg.startswith(PATTERN_PREFIX):
        pattern, sep, description = arg[len(PATTERN_PREFIX):].partition(DESCRIPTION_SEPARATOR)
        return PatternValue(pattern, description if sep else pattern)
    return PatternValue(arg, arg)


def parse_braced_pattern(text: str) -> PatternValue:
    """Parse ``{pattern:...,desc:...}``.

    Raises:
        SpecError: E3000_INVALID_VALIDATOR on malformed pairs or missing keys
    """
    stripped = text.strip()
    if not (stripped.startswith("{") and stripped.endswith("}")) or len(stripped) < 2:
        raise invalid_spec(text, "pattern value must be enclosed in braces")

    pairs: dict[str, str] = {}
    current: list[str] = []
    escaped = False

    # Trailing comma flushes the last pair
    for ch in stripped[1:-1] + ",":
        if escaped:
            current.append(ch if ch in _BRACED_ESCAPES else "\\" + ch)
            escaped = False
            continue
        if ch == "\\":
            escaped = True
            continue
        if ch == ",":
            key, sep, value = "".join(current).strip().partition(":")
            if not sep:
                raise invalid_spec(text, "expected key:value pairs")
            if not key.strip():
                raise invalid_spec(text, "empty key")
            pairs[key.strip()] = value.strip()
            current.clear()
            continue
        current.append(ch)

    for key in ("pattern", "desc"):
        if not pairs.get(key):
            raise invalid_spec(text, f"missing value for '{key}'")
    return PatternValue(pairs["pattern"], pairs["desc"])
