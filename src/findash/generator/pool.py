"""Worker pool the API delegates CPU-bound metric work to.

The event loop only awaits the future returned by ``run_in_executor``; the
arithmetic itself happens in a worker process (or thread), so sibling
requests keep being served while a metric is computed.
"""
from __future__ import annotations
import asyncio
import logging
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor
from functools import partial
from typing import Any, Callable, Literal

logger = logging.getLogger(__name__)


class WorkerPool:
    def __init__(self, kind: Literal["process", "thread"] = "process", workers: int = 4) -> None:
        self.kind = kind
        self.workers = workers
        self._executor: Executor | None = None

    @property
    def started(self) -> bool:
        return self._executor is not None

    def start(self) -> None:
        if self._executor is not None:
            return
        if self.kind == "process":
            self._executor = ProcessPoolExecutor(max_workers=self.workers)
        else:
            self._executor = ThreadPoolExecutor(
                max_workers=self.workers, thread_name_prefix="findash-worker",
            )
        logger.info("Started %s worker pool (%d workers)", self.kind, self.workers)

    def shutdown(self) -> None:
        if self._executor is None:
            return
        self._executor.shutdown(wait=True, cancel_futures=True)
        self._executor = None
        logger.info("Stopped %s worker pool", self.kind)

    async def run(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Run ``fn`` in the pool and await its result without blocking the loop."""
        if self._executor is None:
            raise RuntimeError("WorkerPool.run() called before start()")
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, partial(fn, *args, **kwargs))
