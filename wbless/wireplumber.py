"""Volume state, label rendering and scroll handling for the default audio node."""

import logging
import math
from enum import Enum
from typing import Any, Mapping

log = logging.getLogger(__name__)

DEFAULT_FORMAT = "{volume}%"
DEFAULT_NODE_TYPE = "Audio/Sink"
UNKNOWN_NODE_NAME = "Unknown node name"
_MAX_UINT32 = 2**32 - 1


class ScrollDirection(Enum):
    """Direction of a scroll event."""

    NONE = 0
    UP = 1
    DOWN = 2
    LEFT = 3
    RIGHT = 4


def is_valid_node_id(node_id: int) -> bool:
    """Whether ``node_id`` can name a real node."""
    return 0 < node_id < _MAX_UINT32


def choose_node_name(properties: Mapping[str, Any]) -> str:
    """The nick of a node, else its description, else a placeholder."""
    nick = properties.get("node.nick")
    if nick is not None:
        return str(nick)
    description = properties.get("node.description")
    if description is not None:
        return str(description)
    return UNKNOWN_NODE_NAME


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _round(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


class VolumeControl:
    """Tracks the default node's volume and turns it into label text.

    After ``render`` the label is in ``text``, the tooltip in ``tooltip``
    (None when tooltips are off) and the style classes in ``classes``.
    """

    def __init__(self, config: dict) -> None:
        self.config = config
        fmt = config.get("format")
        self.format = fmt if isinstance(fmt, str) else DEFAULT_FORMAT
        node_type = config.get("node-type")
        self.node_type = node_type if isinstance(node_type, str) else DEFAULT_NODE_TYPE
        self.node_id = 0
        self.default_node_name: str | None = None
        self.node_name = ""
        self.volume = 0.0
        self.min_step = 0.0
        self.muted = False
        self.text = ""
        self.tooltip: str | None = None
        self.classes: set[str] = set()

    def update_volume(self, volume: float, step: float, muted: bool) -> bool:
        """Record the mixer state of the current node; False if no valid node."""
        if not is_valid_node_id(self.node_id):
            log.error(
                "'%s' is not a valid '%s' node ID. Ignoring volume update.",
                self.node_id,
                self.node_type,
            )
            return False
        self.volume = float(volume)
        self.min_step = float(step)
        self.muted = bool(muted)
        return True

    def on_default_node_changed(self, node_id: int, node_name: str | None) -> bool:
        """Switch to a new default node; True when it actually changed."""
        if not is_valid_node_id(node_id):
            log.warning(
                "'%s' is not a valid node ID. Ignoring '%s' node change.",
                node_id,
                self.node_type,
            )
            return False
        if self.default_node_name == node_name and self.node_id == node_id:
            log.debug("Default node has not changed. Node(name: %s, id: %s)", node_name, node_id)
            return False
        log.debug("Default node changed to -> Node(name: %s, id: %s)", node_name, node_id)
        self.default_node_name = node_name
        self.node_id = node_id
        return True

    def _icon(self, value: int) -> str:
        icons = self.config.get("format-icons")
        if isinstance(icons, str):
            return icons
        if isinstance(icons, list) and icons:
            index = int(value * len(icons) / 100)
            index = min(max(index, 0), len(icons) - 1)
            return str(icons[index])
        return ""

    def _tooltip_enabled(self) -> bool:
        tooltip = self.config.get("tooltip")
        return tooltip if isinstance(tooltip, bool) else True

    def render(self) -> str:
        """Build the label text, tooltip and classes from the current state."""
        fmt = self.format
        if self.muted:
            muted_format = self.config.get("format-muted")
            if isinstance(muted_format, str):
                fmt = muted_format
            self.classes.add("muted")
        else:
            self.classes.discard("muted")

        vol = _round(self.volume * 100.0)
        icon = self._icon(vol)
        self.text = fmt.format(node_name=self.node_name, volume=vol, icon=icon)

        if self._tooltip_enabled():
            tooltip_format = self.config.get("tooltip-format")
            if isinstance(tooltip_format, str) and tooltip_format:
                self.tooltip = tooltip_format.format(
                    node_name=self.node_name, volume=vol, icon=icon
                )
            else:
                self.tooltip = self.node_name
        else:
            self.tooltip = None
        return self.text

    def scroll(self, direction: ScrollDirection) -> float | None:
        """The volume to set after a scroll, or None when nothing should change.

        Returns None as well when custom scroll commands are configured,
        since those take over scroll handling.
        """
        if isinstance(self.config.get("on-scroll-up"), str) or isinstance(
            self.config.get("on-scroll-down"), str
        ):
            return None
        if direction is ScrollDirection.NONE:
            return None

        max_volume = 1.0
        step = 1.0 / 100.0
        scroll_step = self.config.get("scroll-step")
        if _is_number(scroll_step):
            step = scroll_step / 100.0
        configured_max = self.config.get("max-volume")
        if _is_number(configured_max):
            max_volume = configured_max / 100.0
        step = max(step, self.min_step)

        new_volume = self.volume
        if direction is ScrollDirection.UP:
            if self.volume < max_volume:
                new_volume = min(self.volume + step, max_volume)
        elif direction is ScrollDirection.DOWN:
            if self.volume > 0:
                new_volume = max(self.volume - step, 0.0)
        if new_volume != self.volume:
            return new_volume
        return None