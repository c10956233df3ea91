"""
Cooperative cancellation for batch runs.

The runner checks the token once before each item, so cancelling never
interrupts an item that is already in flight. The token may be cancelled
from another thread than the one running the batch.
"""

import threading


class CancellationToken:
    def __init__(self):
        self._stop_event = threading.Event()

    def cancel(self) -> None:
        self._stop_event.set()

    @property
    def cancelled(self) -> bool:
        return self._stop_event.is_set()
