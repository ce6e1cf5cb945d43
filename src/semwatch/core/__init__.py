"""Core functionality for SemWatch."""

from .config import Config, load_config, load_default_config
from .classifier import Classifier, ClassifierOptions, classify
from .debouncer import Debouncer
from .pipeline import DegradedObservation, Pipeline

__all__ = [
    'Config', 'load_config', 'load_default_config',
    'Classifier', 'ClassifierOptions', 'classify',
    'Debouncer',
    'DegradedObservation', 'Pipeline',
]
