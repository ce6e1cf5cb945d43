"""
Single-producer/single-consumer channel

A thin closable wrapper around queue.Queue. Items come out in the order they
went in; once closed, the consumer drains what is left and then gets
ChannelClosed.
"""

import queue
import threading
from typing import Generic, Iterator, Optional, TypeVar

from .errors import ChannelClosed

T = TypeVar('T')

_CLOSED = object()


class Channel(Generic[T]):

    def __init__(self):
        self._queue: 'queue.Queue' = queue.Queue()
        self._lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, item: T) -> None:
        """Queue an item for the consumer

        Raises:
            ChannelClosed: if the channel was already closed
        """
        with self._lock:
            if self._closed:
                raise ChannelClosed("send on closed channel")
            self._queue.put(item)

    def close(self) -> None:
        """Close the channel; closing twice is a no-op"""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._queue.put(_CLOSED)

    def recv(self, timeout: Optional[float] = None) -> T:
        """Take the next item, blocking until one is available

        Raises:
            ChannelClosed: once the channel is closed and drained
            queue.Empty: if timeout expires first
        """
        item = self._queue.get(timeout=timeout)
        if item is _CLOSED:
            # Leave the marker for any later recv
            self._queue.put(_CLOSED)
            raise ChannelClosed("channel closed")
        return item

    def __iter__(self) -> Iterator[T]:
        while True:
            try:
                yield self.recv()
            except ChannelClosed:
                return
