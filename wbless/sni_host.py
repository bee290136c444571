"""Status notifier host bookkeeping and the tray that shows its items."""

import logging
import os
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from wbless.icon_manager import icon_manager

log = logging.getLogger(__name__)

DEFAULT_ITEM_PATH = "/StatusNotifierItem"
WATCHER_BUS_NAME = "org.kde.StatusNotifierWatcher"
WATCHER_OBJECT_PATH = "/StatusNotifierWatcher"


def split_service(service: str) -> tuple[str, str]:
    """Split a registered service into bus name and object path."""
    index = service.find("/")
    if index >= 0:
        return service[:index], service[index:]
    return service, DEFAULT_ITEM_PATH


@dataclass(frozen=True)
class TrayItemRef:
    """The address of one tray item."""

    bus_name: str
    object_path: str


class TrayHost:
    """Keeps the list of registered items and reports additions and removals."""

    def __init__(
        self,
        host_id: int,
        pid: int | None = None,
        on_add: Callable[[TrayItemRef], Any] | None = None,
        on_remove: Callable[[TrayItemRef], Any] | None = None,
    ) -> None:
        pid = os.getpid() if pid is None else pid
        self.bus_name = f"org.kde.StatusNotifierHost-{pid}-{host_id}"
        self.object_path = f"/StatusNotifierHost/{host_id}"
        self.items: list[TrayItemRef] = []
        self._on_add = on_add
        self._on_remove = on_remove

    def _find(self, service: str) -> TrayItemRef | None:
        bus_name, object_path = split_service(service)
        return next(
            (
                item
                for item in self.items
                if item.bus_name == bus_name and item.object_path == object_path
            ),
            None,
        )

    def add_registered_item(self, service: str) -> TrayItemRef | None:
        """Add an item unless already known; returns the new item or None."""
        if self._find(service) is not None:
            return None
        item = TrayItemRef(*split_service(service))
        self.items.append(item)
        if self._on_add is not None:
            self._on_add(item)
        return item

    def remove_registered_item(self, service: str) -> bool:
        """Remove an item; returns whether it was known."""
        item = self._find(service)
        if item is None:
            return False
        if self._on_remove is not None:
            self._on_remove(item)
        self.items.remove(item)
        return True

    def clear(self) -> None:
        """Forget every item, as when the watcher disappears."""
        self.items.clear()


class Tray:
    """Arranges the items of its own host and is visible only when non-empty."""

    _host_count = 0
    _count_lock = threading.Lock()

    def __init__(self, config: dict) -> None:
        self.config = config
        spacing = config.get("spacing")
        self.spacing = (
            spacing
            if isinstance(spacing, int) and not isinstance(spacing, bool) and spacing >= 0
            else 0
        )
        self.reverse = config.get("reverse-direction") is True
        self.children: list[TrayItemRef] = []
        with Tray._count_lock:
            host_id = Tray._host_count
            Tray._host_count += 1
        self.host = TrayHost(host_id, None, self.on_add, self.on_remove)
        icons = config.get("icons")
        if isinstance(icons, dict):
            icon_manager().set_icons_config(icons)

    def on_add(self, item: TrayItemRef) -> None:
        """Place a new item at the start, or at the end when reversed."""
        if self.reverse:
            self.children.insert(0, item)
        else:
            self.children.append(item)

    def on_remove(self, item: TrayItemRef) -> None:
        """Take an item out of the tray."""
        if item in self.children:
            self.children.remove(item)

    @property
    def visible(self) -> bool:
        """Whether the tray has anything to show."""
        return bool(self.children)