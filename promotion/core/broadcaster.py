import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, List

logger = logging.getLogger(__name__)


class Broadcaster:
    """Fan-out of messages to registered listeners on one background worker.

    A single worker thread keeps delivery in publish order. Listeners are
    snapshotted when a message is broadcast, so a listener registered later
    does not see earlier messages.
    """

    def __init__(self, name: str):
        self.name = name
        self._listeners: List[Callable[[Any], None]] = []
        self._lock = threading.Lock()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=name)

    def register(self, listener: Callable[[Any], None]) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unregister():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unregister

    @property
    def listener_count(self) -> int:
        with self._lock:
            return len(self._listeners)

    def broadcast(self, message: Any):
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            self._executor.submit(self._deliver, listener, message)

    def _deliver(self, listener: Callable[[Any], None], message: Any):
        try:
            listener(message)
        except Exception:
            logger.exception(f"[{self.name}] listener {listener!r} failed")

    def flush(self, timeout: float = 5.0) -> bool:
        """Block until everything queued so far has been delivered."""
        done = threading.Event()
        self._executor.submit(done.set)
        return done.wait(timeout)

    def shutdown(self, wait: bool = True):
        self._executor.shutdown(wait=wait)


draft_broadcaster = Broadcaster("draft-broadcaster")
notification_broadcaster = Broadcaster("notification-broadcaster")
