"""Shared test helpers."""


def nest(spec: str, times: int, wrapper: str = "not") -> str:
    """Wrap ``spec`` in ``wrapper(...)`` the given number of times."""
    for _ in range(times):
        spec = f"{wrapper}({spec})"
    return spec
