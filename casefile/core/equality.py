"""Structural equality for assertion checking and mock argument matching."""

from collections.abc import Mapping
from typing import Any


def deep_equal(a: Any, b: Any) -> bool:
    """Compare two values recursively.

    - Identity or ``==`` short-circuits to True.
    - None only equals None.
    - Booleans only equal booleans, so True does not equal 1.
    - Sequences (list/tuple) compare positionally and must have equal length.
    - Mappings compare by key set, then value by value; key order is ignored.
    """
    if a is b:
        return True
    if a is None or b is None:
        return False
    if _is_sequence(a) and _is_sequence(b):
        if len(a) != len(b):
            return False
        return all(deep_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, Mapping) and isinstance(b, Mapping):
        if set(a.keys()) != set(b.keys()):
            return False
        return all(deep_equal(a[key], b[key]) for key in a)
    if isinstance(a, bool) is not isinstance(b, bool):
        return False
    return bool(a == b)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))
