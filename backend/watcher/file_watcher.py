"""
SassWatch File Watcher.

Recompiles source files as they are created or modified, using watchdog.
Requires Python 3.11+.
"""

import os
import queue
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from watchdog.observers import Observer
from watchdog.events import (
    DirCreatedEvent,
    DirModifiedEvent,
    DirMovedEvent,
    FileCreatedEvent,
    FileModifiedEvent,
    FileMovedEvent,
    FileSystemEvent,
    FileSystemEventHandler,
)

from builder.persist import CompilePersister
from compiler.base import BuildToolError, CompileError
from utils.config import FailurePolicy, get_settings
from utils.logger import LoggerMixin
from watcher.debouncer import Debouncer


class WatchSubscriptionError(BuildToolError):
    """A source root could not be watched."""

    def __init__(self, path: Path, cause: Exception) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"cannot watch {path}: {cause}")


class WatcherState(str, Enum):
    """Lifecycle of a ChangeWatcher."""

    IDLE = "idle"
    WATCHING = "watching"
    STOPPED = "stopped"


class EventKind(str, Enum):
    """File events that trigger a recompile."""

    CREATED = "created"
    MODIFIED = "modified"


@dataclass(frozen=True)
class WatchEvent:
    """A source file was created or written."""

    kind: EventKind
    path: Path


@dataclass(frozen=True)
class NotificationFailure:
    """The notification side of the watcher reported a problem."""

    message: str
    path: Path | None = None


@dataclass(frozen=True)
class DebouncedBatch:
    """Changes released together by the debouncer."""

    changes: list[tuple[Path, str]] = field(default_factory=list)


_STOP = object()


class SourceEventHandler(FileSystemEventHandler, LoggerMixin):
    """
    Turns watchdog events into watcher messages.

    File creations, modifications and renames onto a compilable source
    are forwarded. Deletions, the old name of a rename and directory
    events are ignored.
    """

    def __init__(
        self,
        on_event: Callable[[WatchEvent], None],
        on_failure: Callable[[NotificationFailure], None],
        accepts: Callable[[str], bool],
    ) -> None:
        """
        Initialize the handler.

        Args:
            on_event: Receives qualifying events
            on_failure: Receives errors raised while handling an event
            accepts: Decides whether a path is a source file
        """
        super().__init__()
        self._on_event = on_event
        self._on_failure = on_failure
        self._accepts = accepts

    def dispatch(self, event: FileSystemEvent) -> None:
        try:
            super().dispatch(event)
        except Exception as e:
            self._on_failure(NotificationFailure(str(e), Path(os.fsdecode(event.src_path))))

    def _forward(self, kind: EventKind, event: FileSystemEvent, path: str | None = None) -> None:
        path = path or os.fsdecode(event.src_path)
        if not self._accepts(path):
            return
        self.log.debug("file_event", kind=kind.value, path=path)
        self._on_event(WatchEvent(kind, Path(path)))

    def on_created(self, event: FileCreatedEvent | DirCreatedEvent) -> None:
        """Handle file creation."""
        if event.is_directory:
            return
        self._forward(EventKind.CREATED, event)

    def on_modified(self, event: FileModifiedEvent | DirModifiedEvent) -> None:
        """Handle file modification."""
        if event.is_directory:
            return
        self._forward(EventKind.MODIFIED, event)

    def on_moved(self, event: FileMovedEvent | DirMovedEvent) -> None:
        """Handle a rename into the watched directory as a creation."""
        if event.is_directory:
            return
        self._forward(EventKind.CREATED, event, os.fsdecode(event.dest_path))


class ChangeWatcher(LoggerMixin):
    """
    Watches the source roots and recompiles changed files.

    Events are queued by watchdog's threads and compiled one at a time
    on the thread that calls run(), so compiles never overlap. Under
    the fail-fast policy the first CompileError stops the watcher and
    propagates out of run().
    """

    POLL_INTERVAL = 1.0

    def __init__(
        self,
        roots: list[Path],
        persister: CompilePersister,
        policy: FailurePolicy | None = None,
        debounce_delay_ms: int | None = None,
    ) -> None:
        """
        Initialize the watcher.

        Args:
            roots: Directories to watch, non-recursively
            persister: Compiles and writes a single source file
            policy: What to do when a compile fails
            debounce_delay_ms: Debounce delay, 0 compiles on every event
        """
        settings = get_settings()

        self._roots = roots
        self._persister = persister
        self._policy = policy or settings.watcher.failure_policy
        delay = (
            settings.watcher.debounce_delay_ms
            if debounce_delay_ms is None
            else debounce_delay_ms
        )

        self._debouncer: Debouncer | None = None
        if delay > 0:
            self._debouncer = Debouncer(delay_ms=delay, callback=self._post_batch)

        self._queue: queue.Queue[Any] = queue.Queue()
        self._handler = SourceEventHandler(
            on_event=self._post_event,
            on_failure=self._queue.put,
            accepts=persister.handles,
        )

        self._observer: Observer | None = None
        self._cancelled = threading.Event()
        self._state = WatcherState.IDLE
        self._watched: list[Path] = []
        self._dead_emitters: set[int] = set()

    @property
    def state(self) -> WatcherState:
        """Get the watcher state."""
        return self._state

    @property
    def watched(self) -> list[Path]:
        """Get the roots that were subscribed."""
        return list(self._watched)

    @property
    def handler(self) -> SourceEventHandler:
        """Get the watchdog event handler."""
        return self._handler

    def start(self) -> None:
        """
        Subscribe to every existing root.

        Raises:
            WatchSubscriptionError: If a root cannot be watched
        """
        if self._state is not WatcherState.IDLE:
            return

        self._observer = Observer()
        self._observer.start()

        for root in self._roots:
            if root.exists() and not root.is_dir():
                self.stop()
                raise WatchSubscriptionError(root, NotADirectoryError("not a directory"))
            if not root.is_dir():
                self.log.info("directory_not_watched", path=str(root))
                continue

            try:
                self._observer.schedule(self._handler, str(root), recursive=False)
            except OSError as e:
                self.stop()
                raise WatchSubscriptionError(root, e) from e

            self._watched.append(root)
            self.log.info("watching_directory", path=str(root))

        self._state = WatcherState.WATCHING

    def stop(self) -> None:
        """Stop watching. Safe to call from any thread."""
        self._cancelled.set()
        self._queue.put(_STOP)

        if self._debouncer is not None:
            self._debouncer.clear()

        if self._observer is not None:
            self._observer.stop()
            if threading.current_thread() is not self._observer:
                self._observer.join(timeout=5.0)
            self._observer = None

        if self._state is not WatcherState.STOPPED:
            self._state = WatcherState.STOPPED
            self.log.info("file_watcher_stopped")

    def run(self) -> None:
        """
        Process events until stop() is called.

        Raises:
            CompileError: On the first failure under the fail-fast policy
            WatchSubscriptionError: If a root cannot be watched
        """
        self.start()
        try:
            while not self._cancelled.is_set():
                self.process_next(timeout=self.POLL_INTERVAL)
        finally:
            self.stop()

    def process_next(self, timeout: float | None = None) -> bool:
        """
        Handle a single queued message.

        Args:
            timeout: Seconds to wait, None blocks until a message arrives

        Returns:
            True if a message was handled
        """
        try:
            message = self._queue.get(timeout=timeout)
        except queue.Empty:
            self._check_emitters()
            return False

        if message is _STOP:
            return False

        if isinstance(message, WatchEvent):
            self.log.info(f"source_{message.kind.value}", path=str(message.path))
            self._compile(message.path)
        elif isinstance(message, DebouncedBatch):
            for path, change_type in message.changes:
                self.log.info(f"source_{change_type}", path=str(path))
                self._compile(path)
        elif isinstance(message, NotificationFailure):
            self.log.error(
                "watch_notification_error",
                error=message.message,
                path=str(message.path) if message.path else None,
            )
        return True

    def _compile(self, path: Path) -> None:
        try:
            self._persister.compile_and_write(path)
        except CompileError as e:
            if self._policy is FailurePolicy.FAIL_FAST:
                raise
            self.log.error("compile_failed", path=str(path), error=str(e))

    def _post_event(self, event: WatchEvent) -> None:
        if self._debouncer is not None:
            self._debouncer.debounce(event.path, event.kind.value)
        else:
            self._queue.put(event)

    def _post_batch(self, changes: list[tuple[Path, str]]) -> None:
        self._queue.put(DebouncedBatch(changes))

    def _check_emitters(self) -> None:
        """Report watched directories whose notification thread has died."""
        observer = self._observer
        if observer is None:
            return
        for emitter in list(observer.emitters):
            if emitter.is_alive() or id(emitter) in self._dead_emitters:
                continue
            self._dead_emitters.add(id(emitter))
            self._queue.put(
                NotificationFailure("notifications stopped", Path(emitter.watch.path))
            )

    def __enter__(self) -> "ChangeWatcher":
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.stop()
