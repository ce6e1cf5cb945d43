"""
Watchdog-backed producer of debounced raw event batches

The observer thread feeds raw notifications into a BatchingHandler; a flusher
thread drains the handler once per debounce window and hands the window's
result to a callback.
"""

import threading
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from watchdog.events import (
    DirCreatedEvent,
    DirDeletedEvent,
    DirModifiedEvent,
    DirMovedEvent,
    FileCreatedEvent,
    FileDeletedEvent,
    FileModifiedEvent,
    FileMovedEvent,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer
from watchdog.observers.polling import PollingObserver

from .errors import WatcherSetupError
from .events import DebounceResult, ModifyKind, RawEvent, RemoveKind
from ..utils.logging_utils import get_logger
from ..utils.path_utils import bytes_to_string

logger = get_logger(__name__)

DEFAULT_DEBOUNCE_DELAY = 1.0


def to_raw_event(event: FileSystemEvent) -> RawEvent:
    """Translate a watchdog event into a raw event"""
    src_path = bytes_to_string(event.src_path)

    if isinstance(event, (FileMovedEvent, DirMovedEvent)):
        dest_path = bytes_to_string(event.dest_path)
        if dest_path:
            return RawEvent.modify(ModifyKind.NAME, src_path, dest_path)
        return RawEvent.modify(ModifyKind.NAME, src_path)
    if isinstance(event, (FileCreatedEvent, DirCreatedEvent)):
        return RawEvent.create(src_path)
    if isinstance(event, FileModifiedEvent):
        return RawEvent.modify(ModifyKind.DATA, src_path)
    if isinstance(event, DirModifiedEvent):
        return RawEvent.modify(ModifyKind.OTHER, src_path)
    if isinstance(event, FileDeletedEvent):
        return RawEvent.remove(RemoveKind.ANY, src_path)
    if isinstance(event, DirDeletedEvent):
        return RawEvent.remove(RemoveKind.OTHER, src_path)

    # opened/closed and anything newer watchdog may add
    if src_path:
        return RawEvent.other(src_path)
    return RawEvent.other()


class BatchingHandler(FileSystemEventHandler):
    """Collects raw events and errors until the next window is drained"""

    def __init__(self):
        super().__init__()
        self._lock = threading.Lock()
        self._pending: List[RawEvent] = []
        self._errors: List[BaseException] = []

    def on_any_event(self, event: FileSystemEvent) -> None:
        try:
            raw = to_raw_event(event)
        except (ValueError, OSError, UnicodeError) as e:
            logger.warning("Could not translate %r: %s", event, e)
            self.record_error(e)
            return
        self.record(raw)

    def record(self, raw: RawEvent) -> None:
        with self._lock:
            # Collapse back-to-back duplicates, keep first-seen order otherwise
            if self._pending and self._pending[-1] == raw:
                return
            self._pending.append(raw)

    def record_error(self, error: BaseException) -> None:
        with self._lock:
            self._errors.append(error)

    def drain(self) -> Tuple[Tuple[RawEvent, ...], Tuple[BaseException, ...]]:
        """Take everything collected so far and reset the window"""
        with self._lock:
            events, self._pending = tuple(self._pending), []
            errors, self._errors = tuple(self._errors), []
        return events, errors


class Debouncer:
    """Owns the watchdog observer and the debounce timer"""

    def __init__(self, watch_path: Union[str, Path], callback: Callable[[DebounceResult], None],
                 debounce_delay: float = DEFAULT_DEBOUNCE_DELAY, recursive: bool = True,
                 use_polling: bool = False):
        """Initialize the debouncer

        Args:
            watch_path: Directory to observe
            callback: Receives one DebounceResult per non-empty window
            debounce_delay: Length of a window in seconds
            recursive: Whether the observer should include subdirectories
            use_polling: Use watchdog's PollingObserver instead of the native one
        """
        if debounce_delay <= 0:
            raise ValueError(f"debounce_delay must be positive, got {debounce_delay}")
        self.watch_path = Path(watch_path)
        self.callback = callback
        self.debounce_delay = debounce_delay
        self.recursive = recursive
        self.use_polling = use_polling

        self.handler = BatchingHandler()
        self.observer = PollingObserver() if use_polling else Observer()
        self._stop_event = threading.Event()
        self._flusher: Optional[threading.Thread] = None
        self._observer_lost = False

    def start(self) -> None:
        """Start observing

        Raises:
            WatcherSetupError: if the path cannot be watched
        """
        if not self.watch_path.is_dir():
            raise WatcherSetupError(self.watch_path, "not an existing directory")
        try:
            self.observer.schedule(self.handler, str(self.watch_path), recursive=self.recursive)
            self.observer.start()
        except OSError as e:
            raise WatcherSetupError(self.watch_path, e) from e

        self._flusher = threading.Thread(target=self._run, name='semwatch-debouncer', daemon=True)
        self._flusher.start()
        logger.info("Watching %s (recursive=%s, window=%.2fs)",
                    self.watch_path, self.recursive, self.debounce_delay)

    def _run(self) -> None:
        while not self._stop_event.wait(self.debounce_delay):
            self._check_observer()
            self.flush()

    def _check_observer(self) -> None:
        if self._observer_lost or self.observer.is_alive():
            return
        self._observer_lost = True
        logger.error("Observer for %s stopped unexpectedly", self.watch_path)
        self.handler.record_error(RuntimeError(f"observer for {self.watch_path} stopped unexpectedly"))

    def flush(self) -> Optional[DebounceResult]:
        """Hand over the current window if anything happened in it"""
        events, errors = self.handler.drain()
        if not events and not errors:
            return None
        result = DebounceResult(events=events, errors=errors)
        logger.debug("Window closed with %d events and %d errors", len(events), len(errors))
        self.callback(result)
        return result

    def stop(self) -> None:
        """Stop observing and flush whatever is left of the current window"""
        self._stop_event.set()
        if self.observer.is_alive():
            self.observer.stop()
            self.observer.join()
        if self._flusher is not None:
            self._flusher.join()
            self._flusher = None
        self.flush()

    def is_alive(self) -> bool:
        """Check if the watcher is currently running"""
        return self.observer.is_alive() and not self._stop_event.is_set()
