"""
Producer/consumer wiring for SemWatch

A Debouncer (producer) sends one DebounceResult per window into a Channel; a
consumer thread classifies each result and passes it to a sink, in arrival
order.
"""

import threading
from dataclasses import dataclass
from typing import Callable, Optional, Tuple, Union

from .channel import Channel
from .classifier import Classifier
from .config import Config
from .debouncer import Debouncer
from .errors import ChannelClosed
from .events import DebounceResult, SemanticEvent, Unknown
from ..utils.logging_utils import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class DegradedObservation:
    """A window in which the watcher reported errors

    Whatever raw events did arrive are still classified into event.
    """
    errors: Tuple[BaseException, ...]
    event: SemanticEvent = Unknown()

    def to_dict(self):
        return {
            'type': 'degraded',
            'errors': [str(e) for e in self.errors],
            'event': self.event.to_dict(),
        }


Output = Union[SemanticEvent, DegradedObservation]
Sink = Callable[[Output], None]


def process_result(result: DebounceResult, classifier: Classifier,
                   emit_unknown: bool = False) -> Optional[Output]:
    """Turn one debounce result into what the sink should see, if anything"""
    event = classifier.classify(result.events)
    if not result.ok:
        logger.warning("Degraded window: %d errors, classified as %s", len(result.errors), event.kind)
        return DegradedObservation(errors=result.errors, event=event)
    if event.is_unknown and not emit_unknown:
        logger.debug("Dropping unknown result for %d events", len(result.events))
        return None
    return event


class Pipeline:
    """Owns the watcher, the channel and the classifying consumer"""

    def __init__(self, config: Config, sink: Sink, classifier: Optional[Classifier] = None):
        self.config = config
        self.sink = sink
        self.classifier = classifier or Classifier(config.classifier_options())
        self.channel: Channel[DebounceResult] = Channel()
        self.debouncer = Debouncer(
            watch_path=config.watch_path,
            callback=self._send,
            debounce_delay=config.debounce_delay,
            recursive=config.recursive,
            use_polling=config.use_polling,
        )
        self._consumer: Optional[threading.Thread] = None

    def _send(self, result: DebounceResult) -> None:
        try:
            self.channel.send(result)
        except ChannelClosed:
            logger.debug("Dropping window produced after shutdown")

    def _consume(self) -> None:
        while True:
            try:
                result = self.channel.recv()
            except ChannelClosed:
                break
            output = process_result(result, self.classifier, self.config.emit_unknown)
            if output is not None:
                self.sink(output)
        logger.debug("Consumer finished")

    def start(self) -> None:
        """Start the consumer and then the watcher

        Raises:
            WatcherSetupError: if the watcher cannot be started
        """
        self._consumer = threading.Thread(target=self._consume, name='semwatch-consumer', daemon=True)
        self._consumer.start()
        try:
            self.debouncer.start()
        except Exception:
            self.channel.close()
            self._consumer.join()
            raise

    def stop(self) -> None:
        """Stop producing, then let the consumer drain the channel"""
        self.debouncer.stop()
        self.channel.close()

    def join(self, timeout: Optional[float] = None) -> None:
        if self._consumer is not None:
            self._consumer.join(timeout)

    def is_alive(self) -> bool:
        return self._consumer is not None and self._consumer.is_alive()

    def __enter__(self) -> 'Pipeline':
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
        self.join()
