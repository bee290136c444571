"""Whitespace trimming and ASCII upper-casing helpers."""

WHITESPACE = " \n\r\t\f\v"


def ltrim(s: str) -> str:
    """Return ``s`` without leading whitespace."""
    return s.lstrip(WHITESPACE)


def rtrim(s: str) -> str:
    """Return ``s`` without trailing whitespace."""
    return s.rstrip(WHITESPACE)


def trim(s: str) -> str:
    """Return ``s`` without leading or trailing whitespace."""
    return s.strip(WHITESPACE)


def capitalize(s: str) -> str:
    """Upper-case every ASCII letter of ``s``, leaving other characters alone."""
    return "".join(c.upper() if c.isascii() else c for c in s)