"""User name, uptime and avatar information for the user module."""

import os
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from wbless.strings import capitalize

DEFAULT_FORMAT = "{user} {work_H}:{work_M}"
DEFAULT_INTERVAL = 60
DEFAULT_IMAGE_WIDTH = 20
DEFAULT_IMAGE_HEIGHT = 20
LEFT_MOUSE_BUTTON = 1


def _as_uint(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int) and value >= 0:
        return value
    if isinstance(value, float) and value.is_integer() and value >= 0:
        return int(value)
    return None


def uptime_seconds() -> int:
    """Seconds since boot, or 0 when unknown."""
    try:
        with open("/proc/uptime", encoding="ascii") as handle:
            return int(float(handle.read().split()[0]))
    except (OSError, ValueError, IndexError):
        return 0


def format_user_label(fmt: str, user: str, uptime: int, now: datetime) -> str:
    """Fill ``fmt`` with the upper-cased user name and uptime fields."""
    start = now - timedelta(seconds=uptime)
    hours, remainder = divmod(uptime, 3600)
    minutes, seconds = divmod(remainder, 60)
    return fmt.format(
        up_H=start.strftime("%H"),
        up_M=start.strftime("%M"),
        up_d=start.strftime("%d"),
        up_m=start.strftime("%m"),
        up_Y=start.strftime("%Y"),
        work_d=uptime // 86400,
        work_H=f"{hours % 24:02d}",
        work_M=f"{minutes:02d}",
        work_S=f"{seconds:02d}",
        user=capitalize(user),
    )


def default_avatar_path(home: str) -> str:
    """The avatar file looked for in the home directory."""
    return home + "/" + ".face"


@dataclass(frozen=True)
class AvatarSettings:
    """Which image to show and at what size; ``path`` is None when absent."""

    path: str | None
    width: int
    height: int


def avatar_settings(config: dict, home: str) -> AvatarSettings:
    """Work out the avatar image from the configuration."""
    height = _as_uint(config.get("height"))
    width = _as_uint(config.get("width"))
    height = DEFAULT_IMAGE_HEIGHT if height is None else height
    width = DEFAULT_IMAGE_WIDTH if width is None else width

    avatar = config.get("avatar")
    if isinstance(avatar, str) and avatar:
        path = avatar
    else:
        path = default_avatar_path(home)
        height = width
    return AvatarSettings(path if os.path.exists(path) else None, width, height)


def open_path(config: dict, home: str, button: int) -> str | None:
    """The ``file:///`` URI to open for a click, or None if nothing opens."""
    if config.get("open-on-click") is not True or button != LEFT_MOUSE_BUTTON:
        return None
    target = home
    custom = config.get("open-path")
    if isinstance(custom, str) and custom:
        target = custom
    return "file:///" + target