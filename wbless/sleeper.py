"""A worker thread that runs a function in a loop and can be woken early."""

import threading
import time
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Any

from wbless.signals import prepare_for_sleep


def _seconds(value: float | timedelta) -> float:
    return value.total_seconds() if isinstance(value, timedelta) else float(value)


class SleeperThread:
    """Runs ``func`` repeatedly on a daemon thread until stopped.

    ``func`` usually ends with one of the ``sleep`` methods; ``wake_up``
    cuts the current sleep short and resuming from system suspend wakes it
    too.  Every sleep returns True when woken or stopped, False on timeout.
    """

    def __init__(self, func: Callable[[], Any] | None = None) -> None:
        self._cond = threading.Condition()
        self._do_run = True
        self._signal = False
        self._thread: threading.Thread | None = None
        self._sleep_hook: Callable[[bool], None] | None = None
        if func is not None:
            self.start(func)

    def start(self, func: Callable[[], Any]) -> None:
        """Start the loop running ``func``."""
        if self._thread is not None and self._thread.is_alive():
            raise RuntimeError("thread is already running")
        self._thread = threading.Thread(target=self._run, args=(func,), daemon=True)
        self._thread.start()
        if self._sleep_hook is None:
            self._sleep_hook = self._on_prepare_for_sleep
            prepare_for_sleep().connect(self._sleep_hook)

    def _on_prepare_for_sleep(self, sleeping: bool) -> None:
        if not sleeping:
            self.wake_up()

    def _run(self, func: Callable[[], Any]) -> None:
        while self._do_run:
            self._signal = False
            func()

    def _ready(self) -> bool:
        return self._signal or not self._do_run

    def is_running(self) -> bool:
        """Whether the loop has not been told to stop."""
        return self._do_run

    def sleep(self) -> bool:
        """Sleep until woken or stopped."""
        with self._cond:
            return self._cond.wait_for(self._ready)

    def sleep_for(self, seconds: float | timedelta) -> bool:
        """Sleep for at most ``seconds``."""
        timeout = min(max(_seconds(seconds), 0.0), threading.TIMEOUT_MAX)
        with self._cond:
            return self._cond.wait_for(self._ready, timeout=timeout)

    def sleep_until(self, deadline: float | datetime) -> bool:
        """Sleep until ``deadline``, a datetime or a Unix timestamp."""
        target = deadline.timestamp() if isinstance(deadline, datetime) else float(deadline)
        return self.sleep_for(target - time.time())

    def wake_up(self) -> None:
        """End the current or next sleep."""
        with self._cond:
            self._signal = True
            self._cond.notify_all()

    def stop(self) -> None:
        """Stop the loop once the running call of ``func`` returns."""
        with self._cond:
            self._signal = True
            self._do_run = False
            self._cond.notify_all()

    def join(self, timeout: float | None = None) -> None:
        """Wait for the worker thread to finish."""
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    def close(self) -> None:
        """Disconnect from sleep notifications, stop and join."""
        if self._sleep_hook is not None:
            prepare_for_sleep().disconnect(self._sleep_hook)
            self._sleep_hook = None
        self.stop()
        self.join()

    def __enter__(self) -> "SleeperThread":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()