"""
SassWatch File Watcher Package.

File system monitoring for continuous recompilation.
Requires Python 3.11+.
"""

from watcher.file_watcher import ChangeWatcher, WatcherState, WatchSubscriptionError
from watcher.debouncer import Debouncer

__all__ = ["ChangeWatcher", "WatcherState", "WatchSubscriptionError", "Debouncer"]
