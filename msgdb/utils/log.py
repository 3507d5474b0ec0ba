"""Debug logging with a pluggable sink."""
import logging
from typing import Callable, Optional

logger = logging.getLogger('msgdb')

LogSink = Callable[[str], None]


def default_sink(message: str):
    """Write a debug message to the msgdb logger."""
    logger.debug(message)


class DebugLog:
    """Tagged debug messages, emitted only when enabled."""

    def __init__(self, tag: str, enabled: bool = False, sink: Optional[LogSink] = None):
        self.tag = tag
        self.enabled = enabled
        self.sink = sink or default_sink

    def child(self, tag: str) -> 'DebugLog':
        """Return a log with the same switch and sink but a different tag."""
        return DebugLog(tag, self.enabled, self.sink)

    def __call__(self, message: str):
        if not self.enabled:
            return
        self.sink(f"[{self.tag}] {message}")
