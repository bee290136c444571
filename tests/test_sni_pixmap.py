import pytest

from wbless.sni_pixmap import (
    Pixmap,
    ToolTip,
    argb_to_rgba,
    parse_tooltip,
    scaled_width,
    select_largest_pixmap,
)


def test_argb_to_rgba_moves_alpha_last():
    assert argb_to_rgba(bytes([255, 10, 20, 30])) == bytes([10, 20, 30, 255])


def test_argb_to_rgba_four_times_is_identity():
    data = bytes(range(32))
    result = data
    for _ in range(4):
        result = argb_to_rgba(result)
    assert result == data
    assert len(argb_to_rgba(data)) == len(data)


def test_argb_to_rgba_rejects_partial_pixels():
    with pytest.raises(ValueError):
        argb_to_rgba(bytes(5))


def test_select_largest_pixmap_picks_biggest_valid():
    small = (1, 1, bytes([1, 2, 3, 4]))
    big = (2, 2, bytes(range(16)))
    broken = (4, 4, bytes(8))
    result = select_largest_pixmap([small, big, broken])
    assert result == Pixmap(2, 2, argb_to_rgba(bytes(range(16))))


def test_select_largest_pixmap_skips_bad_sizes():
    assert select_largest_pixmap([(0, 1, b""), (-1, 2, bytes(8)), (2, 2, bytes(4))]) is None
    assert select_largest_pixmap([]) is None


def test_select_largest_pixmap_keeps_first_on_tie():
    first = (1, 2, bytes([1] * 8))
    second = (2, 1, bytes([2] * 8))
    result = select_largest_pixmap([first, second])
    assert (result.width, result.height) == (1, 2)


def test_parse_tooltip_without_description():
    assert parse_tooltip(("icon", [], "Title", "")) == ToolTip("icon", "Title")


def test_parse_tooltip_with_description_escapes_it():
    tip = parse_tooltip(("icon", [], "Title", "a<b & c"))
    assert tip.icon_name == "icon"
    assert tip.text == "<b>Title</b>\na&lt;b &amp; c"


def test_scaled_width_keeps_ratio():
    assert scaled_width(30, 20, 20) == 30
    assert scaled_width(30, 20, 40) == 2 * scaled_width(30, 20, 20)


def test_scaled_width_rejects_zero_height():
    with pytest.raises(ValueError):
        scaled_width(10, 0, 16)