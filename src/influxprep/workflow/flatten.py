"""
Flattening of nested payload values into scalar-valued keys.

A payload value is classified as a scalar, an ordered sequence or a keyed
mapping. Composite values are expanded recursively until scalar leaves are
reached, each leaf stored under a path-style key:

- DOTTED:    {"a": {"b": 1}, "c": [5]}  ->  {"x.a.b": 1, "x.c.0": 5}
- BRACKETED: {"a": {"b": 1}, "c": [5]}  ->  {"x.a.b": 1, "x.c[0]": 5}
"""

from collections.abc import Mapping
from typing import Any, Iterator

from influxprep.enums import FlattenStyle, ValueKind


def kind_of(value: Any) -> ValueKind:
    """
    Classify a payload value for flattening.

    Strings and bytes are scalars. ``None`` is a mapping with no members,
    so flattening it inserts nothing.
    """
    if value is None or isinstance(value, Mapping):
        return ValueKind.MAPPING
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    return ValueKind.SCALAR


def _members(value: Any) -> Iterator[tuple[str, Any]]:
    """Yield (member key, member value) for a mapping."""
    if value is None:
        return
    for key, member in value.items():
        yield str(key), member


def insert_value(
    output: dict[str, Any],
    key: str,
    value: Any,
    style: FlattenStyle = FlattenStyle.DOTTED,
) -> dict[str, Any]:
    """
    Insert a value into ``output``, flattening composites.

    Args:
        output: Fields map to insert into (mutated in place)
        key: Key for the value; the path prefix for composite members
        value: Scalar, sequence or mapping
        style: How sequence elements are named

    Returns:
        The ``output`` map, for chaining
    """
    kind = kind_of(value)

    if kind is ValueKind.SEQUENCE:
        for index, element in enumerate(value):
            if style is FlattenStyle.BRACKETED:
                insert_value(output, f"{key}[{index}]", element, style)
            else:
                insert_value(output, f"{key}.{index}", element, style)
    elif kind is ValueKind.MAPPING:
        for member_key, member in _members(value):
            insert_value(output, f"{key}.{member_key}", member, style)
    else:
        output[key] = value

    return output


def flatten(key: str, value: Any, style: FlattenStyle = FlattenStyle.DOTTED) -> dict[str, Any]:
    """Flatten a single value into a new map."""
    return insert_value({}, key, value, style)
