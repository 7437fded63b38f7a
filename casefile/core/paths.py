"""Dot-path property and method access on live object graphs.

A path such as ``user.profile.name`` is resolved one segment at a time.
Each segment is looked up as a mapping key when the current value is a
mapping, and as an attribute otherwise, so plain dicts produced by the
code under test and real objects can be mixed freely.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from .errors import NotCallableError, PathSegmentMissingError

_ABSENT = object()


def get_property(root: Any, path: str) -> Any:
    """Read the value addressed by ``path`` on ``root``."""
    parent, last = _walk_to_parent(root, path)
    value = _lookup(parent, last)
    if value is _ABSENT:
        raise PathSegmentMissingError(last, path)
    return value


def call_method(root: Any, path: str, args: Sequence[Any] = ()) -> Any:
    """Invoke the callable addressed by ``path`` with positional ``args``.

    Exceptions raised by the target propagate unchanged.
    """
    parent, last = _walk_to_parent(root, path)
    member = _lookup(parent, last)
    if member is _ABSENT:
        raise PathSegmentMissingError(last, path)
    if not callable(member):
        raise NotCallableError(last, path)
    return member(*args)


def _walk_to_parent(root: Any, path: str) -> tuple[Any, str]:
    segments = path.split(".")
    current = root
    for segment in segments[:-1]:
        if current is None:
            raise PathSegmentMissingError(segment, path)
        current = _lookup(current, segment)
        if current is _ABSENT or current is None:
            raise PathSegmentMissingError(segment, path)
    if current is None:
        raise PathSegmentMissingError(segments[-1], path)
    return current, segments[-1]


def _lookup(value: Any, segment: str) -> Any:
    if isinstance(value, Mapping):
        return value[segment] if segment in value else _ABSENT
    return getattr(value, segment, _ABSENT)
