"""
Session worker

A single asyncio task owns the ``BrowserSession`` and runs submitted
operations one at a time, so overlapping tool calls from several transport
connections never touch the browser concurrently.
"""

import asyncio
import logging
from typing import Any, Optional

from .session import BrowserSession

logger = logging.getLogger(__name__)


class SessionWorker:
    def __init__(self, session: Optional[BrowserSession] = None):
        self.session = session or BrowserSession()
        self._queue: Optional[asyncio.Queue] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def _ensure_started(self) -> None:
        if not self.running:
            self._queue = asyncio.Queue()
            self._task = asyncio.create_task(self._run(), name="browser-session-worker")

    async def submit(self, operation: str, *args: Any, **kwargs: Any) -> Any:
        """Queue ``session.<operation>(*args, **kwargs)`` and wait for its result."""
        self._ensure_started()
        future = asyncio.get_running_loop().create_future()
        await self._queue.put((operation, args, kwargs, future))
        return await future

    async def _run(self) -> None:
        while True:
            operation, args, kwargs, future = await self._queue.get()
            try:
                if future.cancelled():
                    logger.debug("Skipping %s, caller went away", operation)
                    continue
                result = await getattr(self.session, operation)(*args, **kwargs)
            except Exception as exc:
                if not future.done():
                    future.set_exception(exc)
            else:
                if not future.done():
                    future.set_result(result)
            finally:
                self._queue.task_done()

    async def shutdown(self) -> None:
        """Release the browser and stop the worker task."""
        if self.running:
            try:
                await self.submit("close")
            finally:
                self._task.cancel()
                try:
                    await self._task
                except asyncio.CancelledError:
                    pass
                self._task = None
                self._queue = None
        elif self.session.browser is not None:
            await self.session.close()
