"""
Document-observed event source.

The host owns document lifecycle; the tips service only subscribes to a
stream of "document observed" paths and asks for the documents already
open when it starts.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

DocumentListener = Callable[[str], object]


@runtime_checkable
class Disposable(Protocol):
    """Something that releases a resource when disposed."""

    def dispose(self) -> None:
        ...


@runtime_checkable
class DocumentEventSource(Protocol):
    """Protocol for hosts that report opened documents."""

    def documents(self) -> list[str]:
        """Paths of documents already open."""
        ...

    def on_document_added(self, listener: DocumentListener) -> Disposable:
        """Register listener for newly opened documents."""
        ...


class _Subscription:
    def __init__(self, events: DocumentEvents, listener: DocumentListener) -> None:
        self._events = events
        self._listener = listener

    def dispose(self) -> None:
        self._events._remove(self._listener)


class DocumentEvents:
    """
    In-process document event emitter.

    Example:
        >>> events = DocumentEvents(["README.md"])
        >>> subscription = events.on_document_added(print)
        >>> events.open("src/app.ts")
        src/app.ts
        >>> subscription.dispose()
    """

    def __init__(self, documents: list[str] | None = None) -> None:
        self._documents: list[str] = list(documents or [])
        self._listeners: list[DocumentListener] = []

    def documents(self) -> list[str]:
        return list(self._documents)

    def on_document_added(self, listener: DocumentListener) -> Disposable:
        self._listeners.append(listener)
        return _Subscription(self, listener)

    @property
    def listener_count(self) -> int:
        """Number of active subscriptions."""
        return len(self._listeners)

    def open(self, path: str) -> None:
        """Record a newly opened document and notify listeners."""
        self._documents.append(path)
        for listener in list(self._listeners):
            listener(path)

    def _remove(self, listener: DocumentListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            logger.debug("Listener already removed")
