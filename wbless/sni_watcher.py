"""Registry of status notifier hosts and items, as kept by the watcher service."""

import logging
import re
from dataclasses import dataclass
from enum import Enum

from wbless.signals import SafeSignal

log = logging.getLogger(__name__)

WATCHER_BUS_NAME = "org.kde.StatusNotifierWatcher"
WATCHER_OBJECT_PATH = "/StatusNotifierWatcher"
DEFAULT_HOST_PATH = "/StatusNotifierHost"
DEFAULT_ITEM_PATH = "/StatusNotifierItem"

_MAX_NAME_LENGTH = 255
_ELEMENT = re.compile(r"[A-Za-z0-9_-]+")


def is_valid_bus_name(name: str) -> bool:
    """Whether ``name`` is a valid unique or well-known bus name."""
    if not name or len(name) > _MAX_NAME_LENGTH:
        return False
    unique = name.startswith(":")
    body = name[1:] if unique else name
    elements = body.split(".")
    if len(elements) < 2:
        return False
    for element in elements:
        if not _ELEMENT.fullmatch(element):
            return False
        if not unique and element[0].isdigit():
            return False
    return True


class InvalidBusName(ValueError):
    """Raised when a registration names an invalid bus name."""


class WatchType(Enum):
    """What a watch tracks."""

    HOST = 0
    ITEM = 1


@dataclass(eq=False)
class Watch:
    """One registered host or item."""

    type: WatchType
    service: str
    bus_name: str
    object_path: str

    @property
    def address(self) -> str:
        """Bus name and object path joined, as announced on the bus."""
        return self.bus_name + self.object_path


class StatusNotifierWatcher:
    """Tracks registered hosts and items and announces changes.

    Signals: ``host_registered`` (no arguments), ``item_registered`` and
    ``item_unregistered`` (the item's address).
    """

    def __init__(self) -> None:
        self.hosts: list[Watch] = []
        self.items: list[Watch] = []
        self.is_host_registered = False
        self.host_registered = SafeSignal()
        self.item_registered = SafeSignal()
        self.item_unregistered = SafeSignal()
        self._registered_items: list[str] = []

    @staticmethod
    def _resolve(service: str, sender: str, default_path: str) -> tuple[str, str]:
        if service.startswith("/"):
            bus_name, object_path = sender, service
        else:
            bus_name, object_path = service, default_path
        if not is_valid_bus_name(bus_name):
            raise InvalidBusName(f"D-Bus bus name '{bus_name}' is not valid")
        return bus_name, object_path

    @staticmethod
    def _find(watches: list[Watch], bus_name: str, object_path: str) -> Watch | None:
        return next(
            (w for w in watches if w.bus_name == bus_name and w.object_path == object_path),
            None,
        )

    def register_host(self, service: str, sender: str = "") -> Watch | None:
        """Register a host; returns the new watch, or None if already known."""
        bus_name, object_path = self._resolve(service, sender, DEFAULT_HOST_PATH)
        if self._find(self.hosts, bus_name, object_path) is not None:
            log.warning(
                "Status Notifier Host with bus name '%s' and object path '%s' "
                "is already registered",
                bus_name,
                object_path,
            )
            return None
        watch = Watch(WatchType.HOST, service, bus_name, object_path)
        self.hosts.insert(0, watch)
        if not self.is_host_registered:
            self.is_host_registered = True
            self.host_registered.emit()
        return watch

    def register_item(self, service: str, sender: str = "") -> Watch | None:
        """Register an item; returns the new watch, or None if already known."""
        bus_name, object_path = self._resolve(service, sender, DEFAULT_ITEM_PATH)
        if self._find(self.items, bus_name, object_path) is not None:
            log.warning(
                "Status Notifier Item with bus name '%s' and object path '%s' "
                "is already registered",
                bus_name,
                object_path,
            )
            return None
        watch = Watch(WatchType.ITEM, service, bus_name, object_path)
        self.items.insert(0, watch)
        self._update_registered_items()
        self.item_registered.emit(watch.address)
        return watch

    def name_vanished(self, watch: Watch) -> None:
        """Forget a host or item whose bus name left the bus."""
        if watch.type is WatchType.HOST:
            if watch in self.hosts:
                self.hosts.remove(watch)
            if not self.hosts:
                self.is_host_registered = False
                self.host_registered.emit()
        elif watch.type is WatchType.ITEM:
            if watch in self.items:
                self.items.remove(watch)
            self._update_registered_items()
            self.item_unregistered.emit(watch.address)

    def _update_registered_items(self) -> None:
        self._registered_items = [w.address for w in self.items]

    def registered_items(self) -> list[str]:
        """Addresses of the registered items, most recent first."""
        return list(self._registered_items)