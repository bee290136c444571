"""Terminal column width of text."""

import unicodedata


def column_width(text: str) -> int:
    """Columns taken by ``text``: two for each wide character, one otherwise."""
    return sum(2 if unicodedata.east_asian_width(c) in ("W", "F") else 1 for c in text)