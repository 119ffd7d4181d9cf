"""Structured concurrency for views.

Every page owns a ``ViewScope``. Loads and polling loops started through it
are cancelled together when the browser client disconnects, so a request
that finishes after navigation never touches a view that is gone.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Coroutine, Optional, Set

logger = logging.getLogger(__name__)


class ScopeClosedError(RuntimeError):
    """Raised when work is started on a scope that was already closed."""


class ViewScope:
    """Owns the asyncio tasks of one mounted view."""

    def __init__(self, name: str = "view"):
        self.name = name
        self.closed = False
        self._tasks: Set[asyncio.Task] = set()

    def spawn(self, coro: Coroutine) -> asyncio.Task:
        """Run ``coro`` as a task owned by this scope."""
        if self.closed:
            coro.close()
            raise ScopeClosedError(f"{self.name} scope is closed")
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._finished)
        return task

    def _finished(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error(f"{self.name} task failed", exc_info=task.exception())

    def every(
        self,
        seconds: float,
        callback: Callable[[], Awaitable[None]],
        immediate: bool = False,
    ) -> asyncio.Task:
        """Call ``callback`` on a fixed interval until the scope closes.

        A failing tick is logged and the next tick still runs.
        """

        async def tick():
            try:
                await callback()
            except Exception:
                logger.exception(f"{self.name} refresh failed")

        async def loop():
            if immediate:
                await tick()
            while True:
                await asyncio.sleep(seconds)
                await tick()

        return self.spawn(loop())

    @property
    def active(self) -> int:
        return len(self._tasks)

    def close(self) -> None:
        """Cancel every task of this scope. Safe to call twice."""
        if self.closed:
            return
        self.closed = True
        for task in list(self._tasks):
            task.cancel()
        logger.debug(f"{self.name} scope closed")


def bind_to_client(scope: ViewScope, client: Optional[object] = None) -> ViewScope:
    """Close ``scope`` when the NiceGUI client (current one by default) disconnects."""
    if client is None:
        from nicegui import ui
        client = ui.context.client
    client.on_disconnect(scope.close)
    return scope
