#!/usr/bin/env python3
"""File-open events and their subscription interface.

Example:
    >>> events = FileOpenedEvents()
    >>> events.subscribe(dispatcher)
    >>> events.emit("/ssh:alpha:/etc/hosts", remote_marker="/ssh:alpha:")
"""

from dataclasses import dataclass
from typing import Any, Callable, List, Optional


@dataclass(frozen=True)
class FileEvent:
    """Snapshot of a file being opened.

    Attributes:
        path: Absolute path of the opened file, empty for non-file buffers
        remote_marker: Remote-authority prefix of path, if the file is remote
    """

    path: Optional[str]
    remote_marker: Optional[str] = None


FileEventHandler = Callable[[FileEvent], Any]


class FileOpenedEvents:
    """Explicit subscription point for file-open notifications.

    Handlers run synchronously in subscription order on the emitting
    thread. Exceptions from a handler propagate to the emitter.
    """

    def __init__(self) -> None:
        self._handlers: List[FileEventHandler] = []

    def subscribe(self, handler: FileEventHandler) -> None:
        """Add handler; subscribing the same handler twice is a no-op."""
        if handler not in self._handlers:
            self._handlers.append(handler)

    def unsubscribe(self, handler: FileEventHandler) -> bool:
        """Remove handler.

        Returns:
            True if handler was subscribed
        """
        if handler in self._handlers:
            self._handlers.remove(handler)
            return True
        return False

    def emit(self, path: Optional[str], remote_marker: Optional[str] = None) -> List[Any]:
        """Build a FileEvent and deliver it to every handler.

        Returns:
            Handler return values, in subscription order
        """
        event = FileEvent(path=path, remote_marker=remote_marker)
        return [handler(event) for handler in list(self._handlers)]

    def __len__(self) -> int:
        return len(self._handlers)
