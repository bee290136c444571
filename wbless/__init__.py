"""Status bar building blocks: labels for sensors and volume, tray bookkeeping, stylesheet watching and process helpers."""

__version__ = "0.13.0"