"""
Tests for the producer/consumer pipeline
"""

import time
from unittest.mock import patch

import pytest

from semwatch.core.classifier import Classifier, ClassifierOptions
from semwatch.core.config import Config
from semwatch.core.errors import WatcherSetupError
from semwatch.core.events import (
    Create,
    DebounceResult,
    ModifyKind,
    Move,
    RawEvent,
    RemoveKind,
    Rename,
    Unknown,
)
from semwatch.core.pipeline import DegradedObservation, Pipeline, process_result


def always_exists(path):
    return True


CLASSIFIER = Classifier(ClassifierOptions(exists=always_exists))


class TestProcessResult:
    """Test how single debounce results are turned into sink items"""

    def test_classifies_events(self):
        result = DebounceResult(events=(RawEvent.create('/d/a.txt'),))
        assert process_result(result, CLASSIFIER) == Create('/d/a.txt')

    def test_unknown_dropped_by_default(self):
        result = DebounceResult(events=(RawEvent.other('/d/a.txt'),))
        assert process_result(result, CLASSIFIER) is None
        assert process_result(result, CLASSIFIER, emit_unknown=True) == Unknown()

    def test_errors_become_degraded_observation(self):
        """Test that window errors reach the consumer instead of vanishing"""
        error = OSError('event buffer overflow')
        result = DebounceResult(events=(RawEvent.create('/d/a.txt'),), errors=(error,))

        output = process_result(result, CLASSIFIER)

        assert isinstance(output, DegradedObservation)
        assert output.errors == (error,)
        assert output.event == Create('/d/a.txt')

    def test_degraded_without_events(self):
        output = process_result(DebounceResult(errors=(OSError('x'),)), CLASSIFIER)
        assert output.event == Unknown()
        assert output.to_dict() == {'type': 'degraded', 'errors': ['x'], 'event': {'type': 'unknown'}}


class TestPipeline:
    """Test the Pipeline class with a stubbed watcher"""

    def setup_method(self):
        self.received = []
        self.config = Config(watch_path='.', debounce_delay=0.1)

    def make_pipeline(self):
        return Pipeline(self.config, self.received.append, classifier=CLASSIFIER)

    def wait_for(self, count, timeout=5.0):
        deadline = time.time() + timeout
        while len(self.received) < count and time.time() < deadline:
            time.sleep(0.01)

    @patch('semwatch.core.pipeline.Debouncer')
    def test_events_delivered_in_order(self, mock_debouncer_class):
        """Test that batches are classified and delivered in arrival order"""
        pipeline = self.make_pipeline()
        pipeline.start()

        pipeline._send(DebounceResult(events=(RawEvent.create('/d/a.txt'),)))
        pipeline._send(DebounceResult(events=(
            RawEvent.remove(RemoveKind.ANY, '/d/old.txt'),
            RawEvent.create('/e/new.txt'),
        )))
        pipeline._send(DebounceResult(events=(RawEvent.modify(ModifyKind.NAME, '/d/a', '/d/b'),)))

        pipeline.stop()
        pipeline.join(timeout=5)

        assert not pipeline.is_alive()
        assert self.received == [
            Create('/d/a.txt'),
            Move('/d/old.txt', '/e/new.txt'),
            Rename('/d/a', '/d/b'),
        ]

    @patch('semwatch.core.pipeline.Debouncer')
    def test_stop_stops_watcher_before_closing(self, mock_debouncer_class):
        """Test the shutdown order"""
        mock_debouncer = mock_debouncer_class.return_value
        pipeline = self.make_pipeline()
        pipeline.start()
        pipeline.stop()
        pipeline.join(timeout=5)

        mock_debouncer.start.assert_called_once()
        mock_debouncer.stop.assert_called_once()
        assert pipeline.channel.closed

    @patch('semwatch.core.pipeline.Debouncer')
    def test_results_after_shutdown_dropped(self, mock_debouncer_class):
        pipeline = self.make_pipeline()
        pipeline.start()
        pipeline.stop()
        pipeline._send(DebounceResult(events=(RawEvent.create('/d/a.txt'),)))
        pipeline.join(timeout=5)
        assert self.received == []

    @patch('semwatch.core.pipeline.Debouncer')
    def test_setup_error_propagates(self, mock_debouncer_class):
        """Test that a failing watcher start is fatal and leaves no consumer behind"""
        mock_debouncer_class.return_value.start.side_effect = WatcherSetupError('/nope', 'missing')
        pipeline = self.make_pipeline()

        with pytest.raises(WatcherSetupError):
            pipeline.start()

        assert not pipeline.is_alive()

    @patch('semwatch.core.pipeline.Debouncer')
    def test_debouncer_configured_from_config(self, mock_debouncer_class):
        pipeline = self.make_pipeline()
        mock_debouncer_class.assert_called_once_with(
            watch_path='.',
            callback=pipeline._send,
            debounce_delay=0.1,
            recursive=True,
            use_polling=False,
        )

    @patch('semwatch.core.pipeline.Debouncer')
    def test_context_manager(self, mock_debouncer_class):
        with self.make_pipeline() as pipeline:
            pipeline._send(DebounceResult(events=(RawEvent.create('/d/a.txt'),)))
        assert self.received == [Create('/d/a.txt')]

    def test_real_watch(self, tmp_path):
        """Test the whole chain against the real filesystem"""
        config = Config(watch_path=str(tmp_path), debounce_delay=0.2, use_polling=True)
        with Pipeline(config, self.received.append):
            (tmp_path / 'note.txt').write_text('hello')
            self.wait_for(1, timeout=10)

        assert Create(tmp_path / 'note.txt') in self.received
