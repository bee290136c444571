"""Decoding of tray item icon pixmaps and tooltips."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

_MARKUP_ESCAPES = {"&": "&amp;", "<": "&lt;", ">": "&gt;", "'": "&apos;", '"': "&quot;"}


def _escape_markup(text: str) -> str:
    return "".join(_MARKUP_ESCAPES.get(c, c) for c in text)


@dataclass(frozen=True)
class Pixmap:
    """An image of ``width`` by ``height`` pixels, four bytes each."""

    width: int
    height: int
    data: bytes


@dataclass(frozen=True)
class ToolTip:
    """A tray item tooltip: an icon name and markup text."""

    icon_name: str = ""
    text: str = ""


def argb_to_rgba(data: bytes) -> bytes:
    """Reorder each four-byte ARGB pixel to RGBA."""
    if len(data) % 4:
        raise ValueError("pixel data length must be a multiple of 4")
    source = bytes(data)
    out = bytearray(len(source))
    out[0::4] = source[1::4]
    out[1::4] = source[2::4]
    out[2::4] = source[3::4]
    out[3::4] = source[0::4]
    return bytes(out)


def select_largest_pixmap(pixmaps: Iterable[Sequence[Any]]) -> Pixmap | None:
    """Pick the largest well-formed (width, height, ARGB data) entry.

    Entries with a non-positive size or a data length other than
    ``4 * width * height`` are skipped; on equal areas the first wins.
    The result holds RGBA data, or None when nothing was usable.
    """
    best: tuple[int, int, bytes] | None = None
    best_area = 0
    for width, height, data in pixmaps:
        if width <= 0 or height <= 0 or data is None:
            continue
        area = width * height
        if area <= best_area or len(data) != 4 * area:
            continue
        best, best_area = (width, height, bytes(data)), area
    if best is None:
        return None
    width, height, data = best
    return Pixmap(width, height, argb_to_rgba(data))


def parse_tooltip(value: Sequence[Any]) -> ToolTip:
    """Build a tooltip from (icon name, pixmaps, title, description).

    A non-empty description is escaped and shown under a bold title.
    """
    icon_name = str(value[0])
    title = str(value[2])
    description = str(value[3])
    text = title
    if description:
        text = f"<b>{title}</b>\n{_escape_markup(description)}"
    return ToolTip(icon_name, text)


def scaled_width(width: int, height: int, target_height: float) -> int:
    """Width that keeps the aspect ratio when the height becomes ``target_height``."""
    if height <= 0:
        raise ValueError("height must be positive")
    return int(target_height * width / height)