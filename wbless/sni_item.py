"""State and event handling of a single status notifier tray item."""

import logging
import math
import os
from collections.abc import Mapping, Sequence
from typing import Any

from wbless.icon_manager import icon_manager
from wbless.sni_pixmap import Pixmap, ToolTip, parse_tooltip, select_largest_pixmap

log = logging.getLogger(__name__)

DEFAULT_ICON_SIZE = 16
UPDATE_DEBOUNCE_MS = 10

ACTION_MENU = "menu"
ACTION_CONTEXT_MENU = "ContextMenu"
ACTION_ACTIVATE = "Activate"
ACTION_SECONDARY_ACTIVATE = "SecondaryActivate"

SIGNAL_TO_PROPERTIES: dict[str, frozenset[str]] = {
    "NewTitle": frozenset({"Title"}),
    "NewIcon": frozenset({"IconName", "IconPixmap"}),
    "NewIconThemePath": frozenset({"IconThemePath"}),
    "NewToolTip": frozenset({"ToolTip"}),
    "NewStatus": frozenset({"Status"}),
}


def properties_for_signal(signal_name: str) -> frozenset[str]:
    """Properties that may have changed when ``signal_name`` arrives; empty if unhandled."""
    return SIGNAL_TO_PROPERTIES.get(signal_name, frozenset())


def _as_str(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected a string, got {type(value).__name__}")
    return value


def _as_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"expected a boolean, got {type(value).__name__}")
    return value


def _lround(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _is_uint(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class TrayItem:
    """Properties, visibility and input handling of one tray item."""

    def __init__(self, bus_name: str, object_path: str, config: dict | None = None) -> None:
        config = config or {}
        self.bus_name = bus_name
        self.object_path = object_path

        icon_size = config.get("icon-size")
        self.icon_size = icon_size if _is_uint(icon_size) else DEFAULT_ICON_SIZE
        threshold = config.get("smooth-scrolling-threshold")
        self.scroll_threshold = float(threshold) if _is_number(threshold) else 0.0
        show_passive = config.get("show-passive-items")
        self.show_passive = show_passive if isinstance(show_passive, bool) else False

        self.visible = self.show_passive
        self.classes: set[str] = set()

        self.category = ""
        self.id = ""
        self.title = ""
        self.icon_name = ""
        self.icon_pixmap: Pixmap | None = None
        self.icon_file: str | None = None
        self.overlay_icon_name = ""
        self.attention_icon_name = ""
        self.attention_movie_name = ""
        self.icon_theme_path = ""
        self.icon_search_path: list[str] = []
        self.menu = ""
        self.tooltip = ToolTip()
        self.tooltip_markup = ""
        # Items that do not report ItemIsMenu only support the context menu.
        self.item_is_menu = True

        self._pending: set[str] = set()
        self._distance_x = 0.0
        self._distance_y = 0.0

    @property
    def is_valid(self) -> bool:
        """Whether the item reported both an id and a category."""
        return bool(self.id) and bool(self.category)

    def _label(self) -> str:
        return self.id or self.bus_name

    def _set_custom_icon(self, app_id: str) -> None:
        custom = icon_manager().icon_for_app(app_id)
        if not custom:
            return
        if os.path.exists(custom):
            # A named icon takes priority over a pixmap, so clear the name.
            self.icon_name = ""
            self.icon_file = custom
        else:
            self.icon_name = custom

    def set_property(self, name: str, value: Any) -> bool:
        """Apply one property value; returns False if it was malformed."""
        log.debug("Set tray item property: %s.%s = %r", self._label(), name, value)
        try:
            if name == "Category":
                self.category = _as_str(value)
            elif name == "Id":
                self.id = _as_str(value)
                self._set_custom_icon(self.id)
            elif name == "Title":
                self.title = _as_str(value)
                if not self.tooltip.text:
                    self.tooltip_markup = self.title
            elif name == "Status":
                self.set_status(_as_str(value))
            elif name == "IconName":
                self.icon_name = _as_str(value)
            elif name == "IconPixmap":
                self.icon_pixmap = select_largest_pixmap(value)
            elif name == "OverlayIconName":
                self.overlay_icon_name = _as_str(value)
            elif name == "AttentionIconName":
                self.attention_icon_name = _as_str(value)
            elif name == "AttentionMovieName":
                self.attention_movie_name = _as_str(value)
            elif name == "ToolTip":
                self.tooltip = parse_tooltip(value)
                if self.tooltip.text:
                    self.tooltip_markup = self.tooltip.text
            elif name == "IconThemePath":
                self.icon_theme_path = _as_str(value)
                if self.icon_theme_path:
                    self.icon_search_path = [self.icon_theme_path]
            elif name == "Menu":
                self.menu = _as_str(value)
            elif name == "ItemIsMenu":
                self.item_is_menu = _as_bool(value)
        except (TypeError, ValueError, IndexError, KeyError) as exc:
            log.warning(
                "Failed to set tray item property: %s.%s, value = %r, err = %s",
                self._label(),
                name,
                value,
                exc,
            )
            return False
        return True

    def set_status(self, value: str) -> None:
        """Update visibility and the single style class from a status string."""
        lower = value.lower()
        self.visible = self.show_passive or lower != "passive"
        if lower == "needsattention":
            lower = "needs-attention"
        self.classes = {lower}

    def on_signal(self, signal_name: str) -> bool:
        """Record properties a signal may have changed.

        Returns True when a debounced property fetch should be scheduled,
        that is when nothing was pending before this signal.
        """
        changed = properties_for_signal(signal_name)
        if not changed:
            return False
        schedule = not self._pending
        self._pending.update(changed)
        return schedule

    def take_pending_updates(self) -> frozenset[str]:
        """Return the pending property names and forget them."""
        pending = frozenset(self._pending)
        self._pending.clear()
        return pending

    def apply_updated_properties(self, properties: Mapping[str, Any]) -> list[str]:
        """Apply fetched values of the pending properties; returns the names applied."""
        applied = []
        for name, value in properties.items():
            if name in self._pending and self.set_property(name, value):
                applied.append(name)
        self._pending.clear()
        return applied

    def handle_scroll(
        self, direction: str, delta_x: float = 0.0, delta_y: float = 0.0
    ) -> list[tuple[int, str]]:
        """The Scroll calls to make as (delta, orientation) pairs.

        ``direction`` is ``up``, ``down``, ``left``, ``right`` or
        ``smooth``; smooth deltas accumulate until they pass the threshold.
        """
        dx = dy = 0
        if direction == "up":
            dy = -1
        elif direction == "down":
            dy = 1
        elif direction == "left":
            dx = -1
        elif direction == "right":
            dx = 1
        elif direction == "smooth":
            self._distance_x += delta_x
            self._distance_y += delta_y
            threshold = self.scroll_threshold
            if self._distance_x > threshold:
                dx = _lround(max(self._distance_x, 1.0))
                self._distance_x = 0.0
            elif self._distance_x < -threshold:
                dx = _lround(min(self._distance_x, -1.0))
                self._distance_x = 0.0
            if self._distance_y > threshold:
                dy = _lround(max(self._distance_y, 1.0))
                self._distance_y = 0.0
            elif self._distance_y < -threshold:
                dy = _lround(min(self._distance_y, -1.0))
                self._distance_y = 0.0
        else:
            raise ValueError(f"unknown scroll direction {direction!r}")

        calls = []
        if dx != 0:
            calls.append((dx, "horizontal"))
        if dy != 0:
            calls.append((dy, "vertical"))
        return calls

    def click_action(self, button: int) -> str | None:
        """What a button press does: a menu popup, a method name, or None."""
        if (button == 1 and self.item_is_menu) or button == 3:
            return ACTION_MENU if self.menu else ACTION_CONTEXT_MENU
        if button == 1:
            return ACTION_ACTIVATE
        if button == 2:
            return ACTION_SECONDARY_ACTIVATE
        return None