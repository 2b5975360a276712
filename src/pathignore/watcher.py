"""
Watchdog monitor for a single ignore file

Keeps an IgnoreSet in sync with the file it was loaded from. Every reload
builds a fresh IgnoreSet and swaps it in whole, so queries never see a
half-loaded rule list.
"""

import threading
from pathlib import Path
from typing import Callable, Optional, Union

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .constants import DEFAULT_DEBOUNCE_SECONDS, PATH_SEPARATOR
from .errors import IgnoreFileError
from .ignore_set import IgnoreSet
from .matcher import MatchStrategy
from .utils import get_logger

logger = get_logger(__name__)


class IgnoreFileHandler(FileSystemEventHandler):
    """
    Forwards changes of one ignore file to its WatchedIgnoreSet

    Events are debounced on the trailing edge: each event restarts a timer
    and only the last event of a burst is acted on, once the file has been
    quiet for ``debounce_seconds``.
    """

    def __init__(self, watched: "WatchedIgnoreSet",
                 debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS):
        """
        Args:
            watched: The WatchedIgnoreSet to reload
            debounce_seconds: Quiet period before acting; 0 acts immediately
        """
        super().__init__()
        self.watched = watched
        self.debounce_seconds = debounce_seconds
        self._timer: Optional[threading.Timer] = None
        self._timer_lock = threading.Lock()

    def _is_watched_file(self, path: Union[str, bytes]) -> bool:
        if isinstance(path, bytes):
            path = path.decode()
        return Path(path).resolve() == self.watched.path

    def _should_process_event(self, event: FileSystemEvent) -> bool:
        """Check if we should process this event"""
        if event.is_directory:
            return False
        return self._is_watched_file(event.src_path)

    def _schedule(self, action: Callable[[], object]):
        """Run action after the debounce period, replacing any pending action"""
        if self.debounce_seconds <= 0:
            action()
            return

        with self._timer_lock:
            if self._timer is not None:
                logger.debug(f"Debouncing change to {self.watched.path}")
                self._timer.cancel()
            self._timer = threading.Timer(self.debounce_seconds, self._fire, args=(action,))
            self._timer.daemon = True
            self._timer.start()

    def _fire(self, action: Callable[[], object]):
        with self._timer_lock:
            # A newer event may already have replaced this timer
            if self._timer is threading.current_thread():
                self._timer = None
        action()

    @property
    def has_pending(self) -> bool:
        with self._timer_lock:
            return self._timer is not None

    def cancel(self):
        """Drop a pending action and wait for a running one to finish"""
        with self._timer_lock:
            timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()
            timer.join()

    def on_created(self, event: FileSystemEvent):
        if self._should_process_event(event):
            logger.info(f"Detected new ignore file: {event.src_path}")
            self._schedule(self.watched.reload)

    def on_modified(self, event: FileSystemEvent):
        if self._should_process_event(event):
            logger.info(f"Detected change to ignore file: {event.src_path}")
            self._schedule(self.watched.reload)

    def on_deleted(self, event: FileSystemEvent):
        if self._should_process_event(event):
            logger.info(f"Detected deletion of ignore file: {event.src_path}")
            self._schedule(self.watched.clear)

    def on_moved(self, event: FileSystemEvent):
        # Editors often save by writing a temp file and renaming it over the original
        if not event.is_directory and self._is_watched_file(event.dest_path):
            logger.info(f"Detected replacement of ignore file: {event.dest_path}")
            self._schedule(self.watched.reload)
        elif self._should_process_event(event):
            logger.info(f"Detected move of ignore file: {event.src_path} -> {event.dest_path}")
            self._schedule(self.watched.clear)


class WatchedIgnoreSet:
    """
    IgnoreSet that follows changes to its ignore file
    """

    def __init__(self, path: Union[str, Path],
                 strategy: MatchStrategy = MatchStrategy.FIRST_FIT,
                 separator: str = PATH_SEPARATOR,
                 debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
                 on_reload: Optional[Callable[[IgnoreSet], None]] = None):
        """
        Load the file once; call start() to follow changes

        Args:
            path: Ignore file to load and watch
            strategy: Wildcard placement strategy for loaded sets
            separator: Path separator used by rules and queried paths
            debounce_seconds: Quiet period after a change before reloading
            on_reload: Optional callback receiving each newly loaded set

        Raises:
            IgnoreFileError: The file cannot be read on the initial load
        """
        self.path = Path(path).resolve()
        self.strategy = strategy
        self.separator = separator
        self.debounce_seconds = debounce_seconds
        self.on_reload = on_reload

        self._lock = threading.RLock()
        self._observer: Optional[Observer] = None
        self._handler: Optional[IgnoreFileHandler] = None
        self._current = IgnoreSet.from_file(self.path, strategy=strategy, separator=separator)

    @property
    def current(self) -> IgnoreSet:
        """The set in effect right now"""
        with self._lock:
            return self._current

    @property
    def is_running(self) -> bool:
        return self._observer is not None

    def matches_path(self, path: str) -> bool:
        """Check a path against the current rules"""
        return self.current.matches_path(path)

    def reload(self) -> bool:
        """
        Re-read the ignore file and swap in the new rules

        Returns:
            True if the rules were replaced; on a read error the previous
            rules stay in effect
        """
        try:
            new_set = IgnoreSet.from_file(self.path, strategy=self.strategy, separator=self.separator)
        except IgnoreFileError as e:
            logger.error(f"Keeping previous rules, reload failed: {e}")
            return False

        self._swap(new_set)
        logger.info(f"Reloaded {len(new_set)} rules from {self.path}")
        return True

    def clear(self):
        """Drop all rules, used when the ignore file disappears"""
        self._swap(IgnoreSet(strategy=self.strategy, separator=self.separator))
        logger.info(f"Ignore file {self.path} removed, no rules in effect")

    def _swap(self, new_set: IgnoreSet):
        with self._lock:
            self._current = new_set
        if self.on_reload:
            self.on_reload(new_set)

    def start(self):
        """Start watching the ignore file's directory"""
        if self._observer is not None:
            logger.warning("Monitor already running")
            return

        self._handler = IgnoreFileHandler(self, debounce_seconds=self.debounce_seconds)
        self._observer = Observer()
        self._observer.schedule(self._handler, str(self.path.parent), recursive=False)
        self._observer.start()
        logger.info(f"Watching ignore file: {self.path}")

    def stop(self, timeout: Optional[float] = 5.0):
        """Stop watching, drop any pending reload and wait for the observer thread"""
        if self._observer is None:
            logger.warning("Monitor not running")
            return

        self._observer.stop()
        self._observer.join(timeout=timeout)
        self._observer = None
        self._handler.cancel()
        self._handler = None
        logger.info("Ignore file monitor stopped")

    def __enter__(self) -> "WatchedIgnoreSet":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
