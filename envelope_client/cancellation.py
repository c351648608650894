"""Cancellation tokens passed to every blocking operation."""

from __future__ import annotations

import threading
from typing import Optional

from .errors import CancelledError


class CancellationToken:
    """A thread-safe, one-shot cancellation signal.

    Firing the token wakes up anything blocked in ``wait``; firing it twice
    is harmless. A token can be created already cancelled by calling
    ``cancel`` before handing it out.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block up to ``timeout`` seconds; True if the token fired."""
        return self._event.wait(timeout)

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise CancelledError("The operation has been cancelled")
