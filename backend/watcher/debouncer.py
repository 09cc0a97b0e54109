"""
SassWatch Debouncer.

Debounces rapid file system events.
Requires Python 3.11+.
"""

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from utils.logger import LoggerMixin


@dataclass
class PendingChange:
    """A pending file change waiting to be processed."""

    path: Path
    change_type: str  # created, modified
    timestamp: float


class Debouncer(LoggerMixin):
    """
    Debounces rapid file changes.

    Accumulates changes and triggers callback after a delay period
    with no new changes. Editors that write a file several times per
    save then cause a single recompile.
    """

    def __init__(
        self,
        delay_ms: int = 500,
        callback: Callable[[list[tuple[Path, str]]], Any] | None = None,
    ) -> None:
        """
        Initialize the debouncer.

        Args:
            delay_ms: Delay in milliseconds before processing
            callback: Function to call with accumulated changes
        """
        self._delay = delay_ms / 1000.0
        self._callback = callback
        self._pending: dict[Path, PendingChange] = {}
        self._timer: threading.Timer | None = None
        self._lock = threading.Lock()

    def debounce(self, path: Path, change_type: str) -> None:
        """
        Add a file change to the pending queue.

        The callback will be triggered after delay_ms milliseconds
        of no new changes.

        Args:
            path: Path to the changed file
            change_type: Type of change (created, modified)
        """
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

            # A created file that is then modified stays "created"
            previous = self._pending.get(path)
            if previous is not None and previous.change_type == "created":
                change_type = "created"

            self._pending[path] = PendingChange(
                path=path,
                change_type=change_type,
                timestamp=time.time(),
            )

            self._timer = threading.Timer(self._delay, self._process_pending)
            self._timer.daemon = True
            self._timer.start()

    def _take_pending(self) -> list[tuple[Path, str]]:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            changes = [
                (change.path, change.change_type)
                for change in self._pending.values()
            ]
            self._pending.clear()
        return changes

    def _process_pending(self) -> None:
        """Process all pending changes."""
        changes = self._take_pending()
        if not changes:
            return

        self.log.debug("processing_debounced_changes", count=len(changes))

        if self._callback is not None:
            try:
                self._callback(changes)
            except Exception as e:
                self.log.error("debounce_callback_failed", error=str(e))

    def flush(self) -> list[tuple[Path, str]]:
        """
        Immediately process all pending changes.

        Returns:
            List of (path, change_type) tuples that were pending
        """
        changes = self._take_pending()

        if changes and self._callback is not None:
            self._callback(changes)

        return changes

    def clear(self) -> None:
        """Clear all pending changes without processing."""
        self._take_pending()
