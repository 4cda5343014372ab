"""Per-key serialized background task queue."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class KeyedTaskQueue:
    """Runs blocking calls in the background, one at a time per key.

    Calls submitted under the same key run in submission order; calls under
    different keys may run concurrently. Failures are logged and dropped.
    There is no timeout, retry or cancellation.
    """

    _tails: dict[str, asyncio.Task[None]]
    _tasks: set[asyncio.Task[None]]

    def __init__(self) -> None:
        self._tails = {}
        self._tasks = set()

    def submit(self, key: str, func: Callable[..., object], *args: object) -> None:
        """Schedule func(*args) after any pending call for the same key."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop, running inline", extra={"key": key})
            _call_logged(key, func, args)
            return
        previous = self._tails.get(key)
        task = loop.create_task(self._run_after(previous, key, func, args))
        self._tails[key] = task
        self._tasks.add(task)
        task.add_done_callback(lambda done: self._finish(key, done))

    def pending(self) -> list[str]:
        """Return keys with queued or running calls."""
        return list(self._tails)

    async def drain(self) -> None:
        """Wait until every submitted call has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def _run_after(
        self,
        previous: asyncio.Task[None] | None,
        key: str,
        func: Callable[..., object],
        args: tuple[object, ...],
    ) -> None:
        if previous is not None and not previous.done():
            await asyncio.wait({previous})
        try:
            await asyncio.to_thread(func, *args)
        except Exception:
            logger.exception("Background call failed", extra={"key": key})

    def _finish(self, key: str, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        if self._tails.get(key) is task:
            del self._tails[key]


def _call_logged(
    key: str, func: Callable[..., object], args: tuple[object, ...]
) -> None:
    try:
        func(*args)
    except Exception:
        logger.exception("Background call failed", extra={"key": key})
