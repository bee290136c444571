"""Lenient JSON parsing for output produced by external scripts."""

import json
from typing import Any


class JsonParseError(ValueError):
    """Raised when a document cannot be parsed as JSON."""


def replace_hex_escapes(text: str) -> str:
    r"""Rewrite ``\x`` escapes, which JSON lacks, as ``\u00``."""
    return text.replace("\\x", "\\u00")


def _strip_comments_and_trailing_commas(text: str) -> str:
    out: list[str] = []
    i, n = 0, len(text)
    while i < n:
        c = text[i]
        if c == '"':
            j = i + 1
            while j < n:
                if text[j] == "\\":
                    j += 2
                    continue
                j += 1
                if text[j - 1] == '"':
                    break
            out.append(text[i:j])
            i = j
        elif text.startswith("//", i):
            end = text.find("\n", i)
            i = n if end < 0 else end
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = n if end < 0 else end + 2
        else:
            if c in "]}":
                k = len(out) - 1
                while k >= 0 and out[k].isspace():
                    k -= 1
                if k >= 0 and out[k] == ",":
                    del out[k]
            out.append(c)
            i += 1
    return "".join(out)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid literal {name}")


def parse_json(text: str) -> Any:
    """Parse the first JSON value in ``text``.

    Comments, trailing commas, ``\\x`` escapes and trailing content are
    tolerated.  Raises JsonParseError on malformed input.
    """
    cleaned = _strip_comments_and_trailing_commas(replace_hex_escapes(text))
    decoder = json.JSONDecoder(parse_constant=_reject_constant)
    start = len(cleaned) - len(cleaned.lstrip())
    try:
        value, _ = decoder.raw_decode(cleaned, start)
    except ValueError as exc:
        raise JsonParseError(f"Error parsing JSON: {exc}") from exc
    return value