"""Tracking of media streams that touch the camera, microphone or speakers."""

import logging
import re
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any

from wbless.signals import SafeSignal

log = logging.getLogger(__name__)

NODE_INTERFACE_TYPE = "PipeWire:Interface:Node"

KEY_MEDIA_CLASS = "media.class"
KEY_CLIENT_ID = "client.id"
KEY_MEDIA_NAME = "media.name"
KEY_NODE_NAME = "node.name"
KEY_APP_NAME = "application.name"
KEY_APP_ICON_NAME = "application.icon-name"
KEY_PORTAL_APP_ID = "pipewire.access.portal.app_id"
KEY_STREAM_MONITOR = "stream.monitor"

UNKNOWN_APPLICATION = "Unknown Application"
DEFAULT_ICON_NAME = "application-x-executable-symbolic"

_LEADING_UINT = re.compile(r"\s*\+?(\d+)")


class PrivacyNodeType(Enum):
    """What kind of privacy-relevant stream a node is."""

    NONE = 0
    VIDEO_INPUT = 1
    AUDIO_INPUT = 2
    AUDIO_OUTPUT = 3


class NodeState(IntEnum):
    """Run state of a node."""

    ERROR = -1
    CREATING = 0
    SUSPENDED = 1
    IDLE = 2
    RUNNING = 3


_MEDIA_CLASSES = {
    "Stream/Input/Video": PrivacyNodeType.VIDEO_INPUT,
    "Stream/Input/Audio": PrivacyNodeType.AUDIO_INPUT,
    "Stream/Output/Audio": PrivacyNodeType.AUDIO_OUTPUT,
}


def media_type_for_class(media_class: str) -> PrivacyNodeType:
    """The privacy type of a media class, NONE for classes that are not tracked."""
    return _MEDIA_CLASSES.get(media_class, PrivacyNodeType.NONE)


def _parse_uint(text: str) -> int:
    match = _LEADING_UINT.match(text)
    return int(match.group(1)) if match else 0


def _upper_first(text: str) -> str:
    first = text[0]
    return (first.upper() if first.isascii() else first) + text[1:]


@dataclass
class PrivacyNodeInfo:
    """Properties of one tracked stream."""

    id: int
    type: PrivacyNodeType = PrivacyNodeType.NONE
    media_class: str = ""
    client_id: int = 0
    state: NodeState = NodeState.IDLE
    media_name: str = ""
    node_name: str = ""
    application_name: str = ""
    is_monitor: bool = False
    pipewire_access_portal_app_id: str = ""
    application_icon_name: str = ""

    def name(self) -> str:
        """Application or node name with its first letter upper-cased."""
        for candidate in (self.application_name, self.node_name):
            if candidate:
                return _upper_first(candidate)
        return UNKNOWN_APPLICATION

    def icon_name(self, has_icon: Callable[[str], bool]) -> str:
        """The first candidate name for which ``has_icon`` is true."""
        candidates = (
            self.application_icon_name,
            self.pipewire_access_portal_app_id,
            self.application_name,
            self.node_name,
        )
        for candidate in candidates:
            if candidate and has_icon(candidate):
                return candidate
        return DEFAULT_ICON_NAME

    def handle_node_info(self, state: Any, props: Mapping[str, str] | None) -> None:
        """Update from a node info event."""
        try:
            self.state = NodeState(int(state))
        except (ValueError, TypeError):
            self.state = NodeState.ERROR
        for key, value in (props or {}).items():
            if key == KEY_CLIENT_ID:
                self.client_id = _parse_uint(value)
            elif key == KEY_MEDIA_NAME:
                self.media_name = value
            elif key == KEY_NODE_NAME:
                self.node_name = value
            elif key == KEY_APP_NAME:
                self.application_name = value
            elif key == KEY_PORTAL_APP_ID:
                self.pipewire_access_portal_app_id = value
            elif key == KEY_APP_ICON_NAME:
                self.application_icon_name = value
            elif key == KEY_STREAM_MONITOR:
                self.is_monitor = value == "true"


class PrivacyRegistry:
    """Keeps the tracked nodes and signals whenever they change.

    Connect to ``changed`` to be told when a node was updated or removed.
    """

    def __init__(self) -> None:
        self.nodes: dict[int, PrivacyNodeInfo] = {}
        self.lock = threading.Lock()
        self.changed = SafeSignal()

    def handle_global(
        self, node_id: int, interface_type: str, props: Mapping[str, str] | None
    ) -> PrivacyNodeInfo | None:
        """Start tracking a newly announced object if it is a privacy stream."""
        if props is None or interface_type != NODE_INTERFACE_TYPE:
            return None
        media_class = props.get(KEY_MEDIA_CLASS)
        if media_class is None:
            return None
        media_type = media_type_for_class(media_class)
        if media_type is PrivacyNodeType.NONE:
            return None
        info = PrivacyNodeInfo(id=node_id, type=media_type, media_class=media_class)
        with self.lock:
            self.nodes[node_id] = info
        return info

    def handle_node_info(
        self, node_id: int, state: Any, props: Mapping[str, str] | None
    ) -> bool:
        """Apply a node info event to a tracked node; False if it is unknown."""
        with self.lock:
            info = self.nodes.get(node_id)
            if info is None:
                return False
            info.handle_node_info(state, props)
        self.changed.emit()
        return True

    def handle_global_remove(self, node_id: int) -> None:
        """Stop tracking an object that went away."""
        with self.lock:
            self.nodes.pop(node_id, None)
        self.changed.emit()