"""
Worker pool for CPU-bound document work.

Parsing, image embedding and serialization run on a bounded thread pool so a
slow or adversarial document can be abandoned after a timeout instead of
holding the request forever.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from typing import Any, Callable, Optional

from docsign.utils.exceptions import TransformTimeoutError

logger = logging.getLogger(__name__)


class WorkerPool:
    """
    Bounded executor with per-call timeouts.

    Example usage:
        pool = WorkerPool(max_workers=4)
        result = pool.run_with_timeout(
            transform_service.transform,
            pdf_bytes,
            fields,
            task_name="transform",
            timeout=30.0
        )
    """

    def __init__(self, max_workers: int = 4, default_timeout: Optional[float] = None):
        self.default_timeout = default_timeout
        self._executor = ThreadPoolExecutor(max_workers=max(1, max_workers), thread_name_prefix="docsign-worker")

    def run_with_timeout(
        self,
        task: Callable,
        *args,
        task_name: Optional[str] = None,
        timeout: Optional[float] = None,
        **kwargs
    ) -> Any:
        """
        Run a task on the pool and wait for its result.

        Args:
            task: The function to execute
            *args: Positional arguments to pass to the task
            task_name: Optional name for logging purposes
            timeout: Seconds to wait; falls back to the pool default, None waits forever
            **kwargs: Keyword arguments to pass to the task

        Returns:
            Whatever the task returned. Exceptions raised by the task propagate unchanged.

        Raises:
            TransformTimeoutError: If the task did not finish in time
        """
        name = task_name or task.__name__
        wait = self.default_timeout if timeout is None else timeout

        future = self._executor.submit(task, *args, **kwargs)
        logger.debug(f"[Worker] Dispatched: {name}")

        try:
            result = future.result(timeout=wait)
        except FutureTimeoutError:
            # A running thread can't be interrupted; it finishes in the background and its result is dropped.
            future.cancel()
            logger.error(f"[Worker] Timed out after {wait}s: {name}")
            raise TransformTimeoutError(name, wait)

        logger.debug(f"[Worker] Completed: {name}")
        return result

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
