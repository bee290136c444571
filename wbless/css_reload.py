"""Watching a stylesheet and everything it imports for changes."""

import logging
import os
import re
import threading
from collections.abc import Callable, Iterable

log = logging.getLogger(__name__)

IMPORT_REGEX = re.compile(r"""@import\s+(?:url\()?(?:"|')([^"')]+)(?:"|')\)?;""")

_MAX_ITERATIONS = 100


class CssReloadHelper:
    """Finds a stylesheet's imports and reports when any of them changes.

    ``callback`` is called with no arguments whenever a watched file has
    been modified.  Files are looked up as given first, then inside each
    of ``config_dirs``.
    """

    poll_interval = 1.0

    def __init__(
        self,
        css_file: str,
        callback: Callable[[], object],
        config_dirs: Iterable[str] | None = None,
    ) -> None:
        self._css_file = css_file
        self._callback = callback
        self._config_dirs = list(config_dirs) if config_dirs is not None else []
        self._stop_event: threading.Event | None = None
        self._thread: threading.Thread | None = None

    def get_file_contents(self, filename: str) -> str:
        """Return the text of ``filename``, or an empty string if unreadable."""
        if not filename:
            return ""
        try:
            with open(filename, encoding="utf-8", errors="replace") as handle:
                return handle.read()
        except OSError:
            return ""

    def _find_in_config_dirs(self, filename: str) -> str:
        for directory in self._config_dirs:
            candidate = os.path.join(os.path.expanduser(directory), filename)
            if os.path.exists(candidate):
                return candidate
        return ""

    def find_path(self, filename: str) -> str:
        """Locate ``filename`` and resolve symlinks; empty string if not found."""
        if os.path.exists(filename):
            result = filename
        else:
            result = self._find_in_config_dirs(filename)

        original = result
        while result and os.path.islink(result):
            result = os.readlink(result)
            if result == original:
                break
        return result

    def _parse_file(self, css_file: str, imports: dict[str, bool]) -> None:
        if imports.get(css_file):
            return
        contents = self.get_file_contents(css_file)
        for match in IMPORT_REGEX.finditer(contents):
            import_file = self.find_path(match.group(1))
            if import_file and import_file not in imports:
                imports[import_file] = False
        imports[css_file] = True

    def parse_imports(self, css_file: str) -> list[str]:
        """Return ``css_file`` and every file it imports, transitively."""
        full_path = self.find_path(css_file)
        if not full_path:
            log.error("Failed to find css file: %s", css_file)
            return []

        log.debug("Parsing imports for file: %s", full_path)
        imports: dict[str, bool] = {full_path: False}

        iterations = _MAX_ITERATIONS
        while True:
            previous_size = len(imports)
            for path, parsed in list(imports.items()):
                if not parsed:
                    self._parse_file(path, imports)
            grew = len(imports) > previous_size
            iterations -= 1
            if not grew or iterations < 0:
                break

        result = [path for path, parsed in imports.items() if parsed]
        for path in result:
            log.debug("Adding file to watch list: %s", path)
        return result

    def handle_file_change(self, path: str) -> None:
        """React to a finished change of ``path`` by running the callback."""
        log.debug("Reloading style, file changed: %s", path)
        self._callback()

    @staticmethod
    def _signature(path: str) -> tuple[int, int] | None:
        try:
            stat = os.stat(path)
        except OSError:
            return None
        return stat.st_mtime_ns, stat.st_size

    def _poll(self, snapshot: dict[str, tuple[int, int] | None], stop: threading.Event) -> None:
        while not stop.wait(self.poll_interval):
            for path, old in list(snapshot.items()):
                new = self._signature(path)
                if new != old:
                    snapshot[path] = new
                    self.handle_file_change(path)

    def monitor_changes(self) -> None:
        """Start watching the stylesheet and its imports in the background."""
        self.stop()
        files = self.parse_imports(self._css_file)
        snapshot = {path: self._signature(path) for path in files}
        stop = threading.Event()
        self._stop_event = stop
        self._thread = threading.Thread(target=self._poll, args=(snapshot, stop), daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop watching."""
        if self._stop_event is not None:
            self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()
        self._thread = None
        self._stop_event = None