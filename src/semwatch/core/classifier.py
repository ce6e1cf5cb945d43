"""
Batch classifier for SemWatch

Reduces one debounced batch of raw notifications to a single semantic event.
The rules below are tried in order for each non-ignored event; the first rule
that returns an event decides the whole batch.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Sequence, Tuple

from .events import (
    Batch,
    Create,
    Delete,
    EventKind,
    Modify,
    ModifyKind,
    RawEvent,
    SemanticEvent,
    Unknown,
    relocation,
)
from .filters import DEFAULT_IGNORE_NAMES, first_unqualified_removal, should_ignore
from ..utils.logging_utils import get_logger
from ..utils.path_utils import path_exists

logger = get_logger(__name__)

ExistsProbe = Callable[[Path], bool]


@dataclass(frozen=True)
class ClassifierOptions:
    """Tunable policies of the classifier

    Attributes:
        ignore_names: Filenames treated as metadata noise
        removal_skips_ignored: Leave ignored events out of removal detection
        stat_errors_as_missing: Treat a failing existence check as "gone"
        exists: Override for the existence check, mainly for tests
    """
    ignore_names: Tuple[str, ...] = DEFAULT_IGNORE_NAMES
    removal_skips_ignored: bool = False
    stat_errors_as_missing: bool = True
    exists: Optional[ExistsProbe] = field(default=None, compare=False)

    def probe(self) -> ExistsProbe:
        if self.exists is not None:
            return self.exists
        errors_as_missing = self.stat_errors_as_missing
        return lambda path: path_exists(path, errors_as_missing=errors_as_missing)


@dataclass(frozen=True)
class ClassifyContext:
    """Per-batch facts shared by all rules"""
    batch: Tuple[RawEvent, ...]
    removal: Optional[RawEvent]
    exists: ExistsProbe

    @property
    def remove_any(self) -> bool:
        return self.removal is not None


Rule = Callable[[RawEvent, ClassifyContext], Optional[SemanticEvent]]


def create_after_removal(event: RawEvent, context: ClassifyContext) -> Optional[SemanticEvent]:
    """A remove and a create in one window are the two halves of a move"""
    if event.kind is not EventKind.CREATE or not context.remove_any:
        return None
    if not context.removal.paths:
        return None
    old_path, new_path = context.removal.paths[0], event.paths[0]
    if old_path == new_path:
        # Replaced in place, e.g. an atomic save
        return Modify(new_path)
    return relocation(old_path, new_path)


def create(event: RawEvent, context: ClassifyContext) -> Optional[SemanticEvent]:
    if event.kind is EventKind.CREATE:
        return Create(event.paths[0])
    return None


def modify_data(event: RawEvent, context: ClassifyContext) -> Optional[SemanticEvent]:
    if event.kind is EventKind.MODIFY and event.subkind in (ModifyKind.DATA, ModifyKind.ANY):
        return Modify(event.paths[0])
    return None


def modify_name(event: RawEvent, context: ClassifyContext) -> Optional[SemanticEvent]:
    """Rename within a directory or move across directories"""
    if event.kind is EventKind.MODIFY and event.subkind is ModifyKind.NAME and len(event.paths) == 2:
        return relocation(event.paths[0], event.paths[1])
    return None


def modify_vanished(event: RawEvent, context: ClassifyContext) -> Optional[SemanticEvent]:
    """Some platforms report deletions as plain modifications, so look at the disk"""
    if event.kind is not EventKind.MODIFY:
        return None
    path = event.paths[0]
    if context.exists(path):
        return None
    return Delete(path)


RULES: Tuple[Rule, ...] = (
    create_after_removal,
    create,
    modify_data,
    modify_name,
    modify_vanished,
)


def classify(batch: Batch, options: Optional[ClassifierOptions] = None,
             rules: Sequence[Rule] = RULES) -> SemanticEvent:
    """Classify a batch of raw events into one semantic event.

    Never raises; a batch with nothing usable yields Unknown.
    """
    options = options or ClassifierOptions()
    events = tuple(batch)
    if not events:
        return Unknown()

    # Prefer a removal that can name the source of a move
    skip, names = options.removal_skips_ignored, options.ignore_names
    removal = (first_unqualified_removal(events, skip, names, require_paths=True)
               or first_unqualified_removal(events, skip, names))
    context = ClassifyContext(
        batch=events,
        removal=removal,
        exists=options.probe(),
    )

    for index, event in enumerate(events):
        if should_ignore(event, options.ignore_names):
            continue
        for rule in rules:
            result = rule(event, context)
            if result is not None:
                logger.debug("Event %d matched %s -> %s", index, rule.__name__, result)
                return result

    logger.debug("No rule matched a batch of %d events", len(events))
    return Unknown()


class Classifier:
    """Callable classifier bound to a set of options"""

    def __init__(self, options: Optional[ClassifierOptions] = None):
        self.options = options or ClassifierOptions()

    def classify(self, batch: Batch) -> SemanticEvent:
        return classify(batch, self.options)

    def __call__(self, batch: Batch) -> SemanticEvent:
        return self.classify(batch)
