"""Temperature sensor reading and label rendering."""

import math
import os
from dataclasses import dataclass
from typing import Any

DEFAULT_FORMAT = "{temperatureC}°C"
DEFAULT_INTERVAL = 10
THERMAL_ZONE_PATH = "/sys/class/thermal/thermal_zone{}/temp"


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _as_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _candidates(value: Any) -> list[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [item for item in value if isinstance(item, str)]
    return []


def _first_hwmon(directory: str, input_filename: str) -> str | None:
    if not os.path.isdir(directory):
        return None
    with os.scandir(directory) as entries:
        for entry in sorted(entries, key=lambda e: e.name):
            if entry.name.startswith("hwmon"):
                return f"{entry.path}/{input_filename}"
    return None


def resolve_sensor_path(config: dict) -> str:
    """Pick the sensor file named by the configuration.

    Tries ``hwmon-path`` entries, then the first ``hwmon*`` directory in
    ``hwmon-path-abs`` combined with ``input-filename``, then the thermal
    zone (default 0).
    """
    for path in _candidates(config.get("hwmon-path")):
        if os.path.exists(path):
            return path

    input_filename = _as_str(config.get("input-filename"))
    if input_filename is not None:
        for directory in _candidates(config.get("hwmon-path-abs")):
            found = _first_hwmon(directory, input_filename)
            if found is not None:
                return found

    zone = _as_int(config.get("thermal-zone"))
    return THERMAL_ZONE_PATH.format(zone if zone is not None else 0)


def _strtol(text: str) -> int:
    match = __import_re().match(text)
    return int(match.group(0)) if match and match.group(0).lstrip("+-") else 0


def __import_re():
    import re

    return re.compile(r"\s*[+-]?\d*")


def _round(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


@dataclass(frozen=True)
class TemperatureView:
    """What the label shows after an update."""

    text: str | None
    tooltip: str | None
    classes: frozenset[str]
    visible: bool


class Temperature:
    """A temperature module reading one sensor file."""

    def __init__(self, config: dict) -> None:
        self.config = config
        self.format = _as_str(config.get("format"))
        if self.format is None:
            self.format = DEFAULT_FORMAT
        interval = config.get("interval")
        self.interval = (
            interval
            if isinstance(interval, (int, float)) and not isinstance(interval, bool)
            else DEFAULT_INTERVAL
        )
        self.file_path = resolve_sensor_path(config)
        self._classes: set[str] = set()
        try:
            with open(self.file_path, encoding="utf-8"):
                pass
        except OSError as exc:
            raise RuntimeError(f"Can't open {self.file_path}") from exc

    def read_temperature(self) -> float:
        """Return the sensor value in degrees Celsius."""
        try:
            with open(self.file_path, encoding="utf-8", errors="replace") as handle:
                line = handle.readline()
        except OSError as exc:
            raise RuntimeError(f"Can't open {self.file_path}") from exc
        return _strtol(line) / 1000.0

    def _threshold(self, key: str) -> int | None:
        return _as_int(self.config.get(key))

    def is_critical(self, celsius: int) -> bool:
        """Whether ``celsius`` reaches ``critical-threshold``."""
        threshold = self._threshold("critical-threshold")
        return threshold is not None and celsius >= threshold

    def is_warning(self, celsius: int) -> bool:
        """Whether ``celsius`` reaches ``warning-threshold``."""
        threshold = self._threshold("warning-threshold")
        return threshold is not None and celsius >= threshold

    def _icon(self, value: int, max_value: int) -> str:
        icons = self.config.get("format-icons")
        if isinstance(icons, str):
            return icons
        if isinstance(icons, list) and icons:
            top = max_value if max_value else 100
            index = int(value * len(icons) / top) if top else 0
            index = min(max(index, 0), len(icons) - 1)
            return str(icons[index])
        return ""

    def _tooltip_enabled(self) -> bool:
        tooltip = self.config.get("tooltip")
        return tooltip if isinstance(tooltip, bool) else True

    def render(self) -> TemperatureView:
        """Read the sensor and build the label and tooltip."""
        temperature = self.read_temperature()
        celsius = _round(temperature)
        fahrenheit = _round(temperature * 1.8 + 32)
        kelvin = _round(temperature + 273.15)

        fmt = self.format
        if self.is_critical(celsius):
            fmt = _as_str(self.config.get("format-critical")) or fmt
            self._classes.add("critical")
        elif self.is_warning(celsius):
            fmt = _as_str(self.config.get("format-warning")) or fmt
            self._classes.add("warning")
        else:
            self._classes.discard("critical")
            self._classes.discard("warning")

        classes = frozenset(self._classes)
        if not fmt:
            return TemperatureView(None, None, classes, False)

        max_temp = self._threshold("critical-threshold") or 0
        values = {
            "temperatureC": celsius,
            "temperatureF": fahrenheit,
            "temperatureK": kelvin,
        }
        text = fmt.format(icon=self._icon(celsius, max_temp), **values)

        tooltip = None
        if self._tooltip_enabled():
            tooltip_format = _as_str(self.config.get("tooltip-format")) or DEFAULT_FORMAT
            tooltip = tooltip_format.format(**values)
        return TemperatureView(text, tooltip, classes, True)