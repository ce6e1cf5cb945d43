"""
Exception types for SemWatch
"""


class SemWatchError(Exception):
    """Base class for all SemWatch errors"""


class WatcherSetupError(SemWatchError):
    """The watcher could not start observing the requested path"""

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot watch {path}: {reason}")


class ConfigError(SemWatchError):
    """A configuration file could not be read or is invalid"""


class ChannelClosed(SemWatchError):
    """Raised by a channel once it has been closed and drained"""
