"""Deferred re-layout requests.

Some display-option toggles mutate node fields that the renderer only
re-reads after its own state has settled, so the forced re-layout has to
run after the current synchronous batch.  That is one deferred task, not a
task queue: ``DeferredScheduler`` holds at most one pending callback and a
newer request replaces an older one.

Any object with a ``call_soon(callback)`` method satisfies ``Scheduler``,
including an asyncio event loop.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

__all__ = ["DeferredScheduler", "Scheduler"]


@runtime_checkable
class Scheduler(Protocol):
    """Structural protocol: run ``callback`` after the current batch."""

    def call_soon(self, callback: Callable[[], None]) -> Any: ...


class DeferredScheduler:
    """Single-slot deferred callback, drained explicitly by the host.

    Example::

        scheduler = DeferredScheduler()
        scheduler.call_soon(renderer.refresh)
        ...  # finish the current event handler
        scheduler.run_pending()   # renderer.refresh() runs now
    """

    def __init__(self) -> None:
        self._pending: Callable[[], None] | None = None

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def call_soon(self, callback: Callable[[], None]) -> None:
        """Schedule ``callback``, replacing any callback not yet run."""
        if self._pending is not None:
            logger.debug("replacing pending deferred callback")
        self._pending = callback

    def run_pending(self) -> bool:
        """Run the pending callback, if any.

        Returns:
            True if a callback ran.
        """
        callback, self._pending = self._pending, None
        if callback is None:
            return False
        callback()
        return True
