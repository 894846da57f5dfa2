"""
Cancellation
============
Cooperative cancellation for blocking host calls made during extraction.

Extractors check the token before each blocking host call and cancel it when
the host reports an interruption (InterruptedError). Instead of unwinding with
an exception they return the "cancelled" status, and the listener stops the
rest of extraction and delivery for that event.
"""
import threading
from typing import Literal

ExtractStatus = Literal["ok", "cancelled"]

OK: ExtractStatus = "ok"
CANCELLED: ExtractStatus = "cancelled"


class CancellationToken:
    """Thread-safe one-way flag shared by the extractors of one listener call."""

    def __init__(self) -> None:
        self._event = threading.Event()
        self.reason = ""

    def cancel(self, reason: str = "") -> None:
        if not self._event.is_set():
            self.reason = reason
            self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()
