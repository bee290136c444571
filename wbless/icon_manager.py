"""Custom icons for tray applications, configured by application id."""

import logging
import threading
from typing import Any

log = logging.getLogger(__name__)


class IconManager:
    """Maps application ids to icon names or icon file paths."""

    def __init__(self) -> None:
        self._icons: dict[str, str] = {}

    def set_icons_config(self, config: Any) -> None:
        """Merge string entries of ``config`` into the icon map."""
        if not isinstance(config, dict):
            log.warning("Invalid icon config format.")
            return
        for app_name, icon in config.items():
            if isinstance(icon, str):
                self._icons[str(app_name)] = icon

    def icon_for_app(self, app_name: str) -> str:
        """The configured icon for ``app_name``, or an empty string."""
        return self._icons.get(app_name, "")


_lock = threading.Lock()
_instance: IconManager | None = None


def icon_manager() -> IconManager:
    """The process-wide icon manager."""
    global _instance
    with _lock:
        if _instance is None:
            _instance = IconManager()
        return _instance