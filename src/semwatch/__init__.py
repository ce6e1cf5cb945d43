"""
SemWatch - Turn noisy filesystem notifications into semantic file events
"""

__version__ = "0.1.0"
__description__ = "Classify debounced filesystem notifications into create, modify, delete, rename and move events."

from .core.events import (
    RawEvent,
    EventKind,
    ModifyKind,
    RemoveKind,
    DebounceResult,
    SemanticEvent,
    Create,
    Modify,
    Delete,
    Rename,
    Move,
    Unknown,
)
from .core.filters import should_ignore, has_unqualified_removal
from .core.classifier import Classifier, ClassifierOptions, classify
from .core.config import Config, load_config
from .core.pipeline import Pipeline, DegradedObservation

__all__ = [
    'RawEvent',
    'EventKind',
    'ModifyKind',
    'RemoveKind',
    'DebounceResult',
    'SemanticEvent',
    'Create',
    'Modify',
    'Delete',
    'Rename',
    'Move',
    'Unknown',
    'should_ignore',
    'has_unqualified_removal',
    'Classifier',
    'ClassifierOptions',
    'classify',
    'Config',
    'load_config',
    'Pipeline',
    'DegradedObservation',
]
