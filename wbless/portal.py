"""Desktop colour-scheme tracking from the settings portal."""

import logging
from collections.abc import Callable
from enum import IntEnum
from typing import Any, Sequence

log = logging.getLogger(__name__)

PORTAL_BUS_NAME = "org.freedesktop.portal.Desktop"
PORTAL_OBJ_PATH = "/org/freedesktop/portal/desktop"
PORTAL_INTERFACE = "org.freedesktop.portal.Settings"
PORTAL_NAMESPACE = "org.freedesktop.appearance"
PORTAL_KEY = "color-scheme"


class Appearance(IntEnum):
    """The colour scheme preferred by the desktop."""

    UNKNOWN = 0
    DARK = 1
    LIGHT = 2

    def __str__(self) -> str:
        if self is Appearance.LIGHT:
            return "light"
        if self is Appearance.DARK:
            return "dark"
        return "unknown"


def _coerce(value: Any) -> Appearance:
    try:
        return Appearance(int(value))
    except (ValueError, TypeError):
        return Appearance.UNKNOWN


class AppearanceTracker:
    """Holds the current appearance and reports changes to ``on_change``."""

    def __init__(self, on_change: Callable[[Appearance], Any] | None = None) -> None:
        self.mode = Appearance.UNKNOWN
        self._on_change = on_change

    def set_mode(self, value: Any) -> bool:
        """Record a colour-scheme value; returns True if it changed."""
        new_mode = _coerce(value)
        if new_mode == self.mode:
            return False
        log.info("Discovered appearance '%s'", new_mode)
        self.mode = new_mode
        if self._on_change is not None:
            self._on_change(new_mode)
        return True

    def on_signal(self, signal_name: str, parameters: Sequence[Any]) -> bool:
        """Handle a portal signal; returns True if the appearance changed."""
        log.debug("Received signal %s", signal_name)
        if signal_name != "SettingChanged" or len(parameters) != 3:
            return False
        namespace, key, value = parameters
        if namespace != PORTAL_NAMESPACE or key != PORTAL_KEY:
            return False
        return self.set_mode(value)