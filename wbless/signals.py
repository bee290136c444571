"""A thread-aware signal and the process-wide sleep notification."""

import threading
from collections import deque
from collections.abc import Callable
from typing import Any


class SafeSignal:
    """A signal that delivers emissions from other threads on its home thread.

    Emitting on the thread that created the signal calls the connected
    callbacks immediately.  Emitting on any other thread queues the
    arguments and calls ``wakeup`` (if given); the home thread then runs
    ``dispatch`` to deliver them in order.
    """

    def __init__(self, wakeup: Callable[[], Any] | None = None) -> None:
        self._callbacks: list[Callable[..., Any]] = []
        self._queue: deque[tuple] = deque()
        self._lock = threading.Lock()
        self._home = threading.get_ident()
        self._wakeup = wakeup

    def connect(self, callback: Callable[..., Any]) -> Callable[..., Any]:
        """Add a callback; returns it so this can be used as a decorator."""
        self._callbacks.append(callback)
        return callback

    def disconnect(self, callback: Callable[..., Any]) -> None:
        """Remove a callback if it is connected."""
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def _fire(self, args: tuple) -> None:
        for callback in list(self._callbacks):
            callback(*args)

    def emit(self, *args: Any) -> None:
        """Deliver ``args`` now on the home thread, otherwise queue them."""
        if threading.get_ident() == self._home:
            self._fire(args)
            return
        with self._lock:
            self._queue.append(args)
        if self._wakeup is not None:
            self._wakeup()

    def __call__(self, *args: Any) -> None:
        self.emit(*args)

    def dispatch(self) -> int:
        """Deliver every queued emission; returns how many were delivered."""
        count = 0
        while True:
            with self._lock:
                if not self._queue:
                    return count
                args = self._queue.popleft()
            self._fire(args)
            count += 1


class _SleepSignalHolder:
    lock = threading.Lock()
    signal: SafeSignal | None = None


def prepare_for_sleep() -> SafeSignal:
    """The shared signal emitted with True before suspend and False on resume."""
    with _SleepSignalHolder.lock:
        if _SleepSignalHolder.signal is None:
            _SleepSignalHolder.signal = SafeSignal()
        return _SleepSignalHolder.signal