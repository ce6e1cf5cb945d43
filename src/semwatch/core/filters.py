"""
Predicates over raw events and batches

The raw event type belongs to the watcher layer, so these are plain
functions taking it as an argument rather than methods on it.
"""

from typing import Iterable, Optional

from .events import Batch, RawEvent
from ..utils.path_utils import has_reserved_name

# Finder keeps per-directory attributes in this hidden sidecar file
DEFAULT_IGNORE_NAMES = ('.DS_Store',)


def should_ignore(event: RawEvent, ignore_names: Iterable[str] = DEFAULT_IGNORE_NAMES) -> bool:
    """Check if an event carries no usable path or only refers to metadata sidecars"""
    if not event.paths:
        return True
    names = tuple(ignore_names)
    return any(has_reserved_name(path, names) for path in event.paths)


def first_unqualified_removal(batch: Batch, skip_ignored: bool = False,
                              ignore_names: Iterable[str] = DEFAULT_IGNORE_NAMES,
                              require_paths: bool = False) -> Optional[RawEvent]:
    """Return the first REMOVE/ANY event in the batch, or None

    With require_paths, removals that carry no path are passed over.
    """
    names = tuple(ignore_names)
    for event in batch:
        if not event.is_remove_any:
            continue
        if skip_ignored and should_ignore(event, names):
            continue
        if require_paths and not event.paths:
            continue
        return event
    return None


def has_unqualified_removal(batch: Batch, skip_ignored: bool = False,
                            ignore_names: Iterable[str] = DEFAULT_IGNORE_NAMES) -> bool:
    """Check if any event in the batch is an unqualified removal

    By default every event counts, including ones should_ignore would skip.
    With skip_ignored those are left out of the detection as well.
    """
    return first_unqualified_removal(batch, skip_ignored, ignore_names) is not None
