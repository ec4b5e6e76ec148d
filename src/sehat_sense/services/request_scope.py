"""Tracking of outstanding requests owned by one view."""

import asyncio
from collections.abc import Coroutine
from dataclasses import dataclass, field
from typing import Any, TypeVar

T = TypeVar("T")


@dataclass
class RequestScope:
    """Cancels a view's outstanding requests when the view goes away.

    Flows write to the store only after their request completes, so a
    cancelled flow never commits its result.
    """

    _tasks: set[asyncio.Task[Any]] = field(default_factory=set, init=False)
    _dismissed: bool = field(default=False, init=False)

    @property
    def dismissed(self) -> bool:
        """Return whether the owning view has been dismissed."""
        return self._dismissed

    @property
    def pending(self) -> int:
        """Number of requests still in flight."""
        return len(self._tasks)

    def run(self, coro: Coroutine[Any, Any, T]) -> asyncio.Task[T]:
        """Schedule a request on the running loop and track it."""
        if self._dismissed:
            coro.close()
            raise RuntimeError("Request scope has been dismissed")
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def dismiss(self) -> None:
        """Cancel everything outstanding and refuse new requests."""
        self._dismissed = True
        for task in list(self._tasks):
            task.cancel()
