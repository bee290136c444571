"""Case-insensitive lookup of enum values by name."""

from collections.abc import Mapping
from typing import TypeVar

from wbless.strings import capitalize

T = TypeVar("T")


def parse_string_to_enum(text: str, mapping: Mapping[str, T]) -> T:
    """Return the value whose key matches ``text``, ignoring ASCII case.

    Raises ValueError when no key matches.
    """
    folded: dict[str, T] = {}
    for key in sorted(mapping):
        folded.setdefault(capitalize(key), mapping[key])
    try:
        return folded[capitalize(text)]
    except KeyError:
        raise ValueError("Invalid string representation for enum") from None