"""Top-level comma splitting for validator specs and their arguments.

Commas inside ``(...)`` or ``{...}`` belong to a nested spec or a braced
pattern and never split. Segments are trimmed and empty segments are
dropped, so blank input yields an empty list.
"""

_OPENERS = {"(": ")", "{": "}"}
_CLOSERS = {")": "(", "}": "{"}

# Escapes decoded by split_validator_specs; anything else keeps its backslash
_SPEC_ESCAPES = {",": ",", ":": ":", "\\": "\\"}


def _append(segments: list[str], current: list[str]) -> None:
    segment = "".join(current).strip()
    if segment:
        segments.append(segment)
    current.clear()


def split_arguments(raw: str) -> list[str]:
    """Split the raw argument text of one spec on top-level commas.

    Backslashes are kept verbatim; ``\\,`` escapes are decoded by the caller
    that owns them (list arguments, braced patterns).

    >>> split_arguments("email, minlength(5) ,all(a,b)")
    ['email', 'minlength(5)', 'all(a,b)']
    """
    segments: list[str] = []
    current: list[str] = []
    depth = {"(": 0, "{": 0}
    escaped = False

    for ch in raw:
        if escaped:
            current.append(ch)
            escaped = False
            continue
        if ch == "\\":
            current.append(ch)
            escaped = True
            continue
        if ch in _OPENERS:
            depth[ch] += 1
        elif ch in _CLOSERS:
            depth[_CLOSERS[ch]] -= 1
        elif ch == "," and not any(depth.values()):
            _append(segments, current)
            continue
        current.append(ch)

    _append(segments, current)
    return segments


def split_validator_specs(text: str) -> list[str]:
    """Split a comma-separated list of specs as written in a flag definition.

    Honors the same nesting as split_arguments and decodes ``\\,``, ``\\:``
    and ``\\\\``; other escapes (``\\d``, ``\\(``) are preserved verbatim so
    regex patterns survive.

    >>> split_validator_specs(r"email,regex(^.{5\\,10}$)")
    ['email', 'regex(^.{5,10}$)']
    """
    segments: list[str] = []
    current: list[str] = []
    depth = {"(": 0, "{": 0}
    escaped = False

    for ch in text:
        if escaped:
            if ch in _SPEC_ESCAPES:
                current.append(_SPEC_ESCAPES[ch])
            else:
                current.append("\\" + ch)
            escaped = False
            continue
        if ch == "\\":
            escaped = True
            continue
        if ch in _OPENERS:
            depth[ch] += 1
        elif ch in _CLOSERS:
            depth[_CLOSERS[ch]] -= 1
        elif ch == "," and not any(depth.values()):
            _append(segments, current)
            continue
        current.append(ch)

    if escaped:
        current.append("\\")
    _append(segments, current)
    return segments


def unescape_list_value(segment: str) -> str:
    r"""Decode ``\,`` and ``\\`` in one list argument; other backslashes stay.

    >>> unescape_list_value(r"a\,b")
    'a,b'
    """
    out: list[str] = []
    escaped = False

    for ch in segment:
        if escaped:
            out.append(ch if ch in ",\\" else "\\" + ch)
            escaped = False
        elif ch == "\\":
            escaped = True
        else:
            out.append(ch)

    if escaped:
        out.append("\\")
    return "".join(out)
