"""
workers/worker_pool.py

Fixed-size thread pool with a FIFO task queue.

Implements the scheduling side of parallel fitness evaluation:
- W long-lived worker threads started at construction
- One shared FIFO queue; any idle worker takes the next task
- Per-task completion reported through a concurrent.futures.Future
- Shutdown drains queued work, then joins every worker

This module does NOT:
- Interpret task results
- Retry failed tasks
- Prioritize, steal or pin work to particular workers
"""

import queue
import threading
from concurrent.futures import Future
from enum import Enum
from typing import Any, Callable, Iterable, List, Optional

from errors import ConfigurationError, PoolClosedError


class WorkerState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    TERMINATED = "terminated"


class _Task:
    __slots__ = ("fn", "args", "kwargs", "future")

    def __init__(self, fn, args, kwargs):
        self.fn = fn
        self.args = args
        self.kwargs = kwargs
        self.future = Future()

    def run(self):
        if not self.future.set_running_or_notify_cancel():
            return
        try:
            result = self.fn(*self.args, **self.kwargs)
        except BaseException as exc:
            self.future.set_exception(exc)
        else:
            self.future.set_result(result)


# Queued once per worker at shutdown, behind all pending tasks
_SHUTDOWN = object()


class WorkerPool:
    """
    Fixed pool of worker threads consuming a shared FIFO queue.

    Usage:
        with WorkerPool(4) as pool:
            futures = [pool.submit(fn, item) for item in items]
            results = pool.wait_all(futures)

    A task that raises does not kill its worker: the exception is stored
    on the task's future and re-raised to whoever waits on it.
    """

    def __init__(self, num_workers: int, name: str = "maze-worker"):
        """
        Start the worker threads.

        Args:
            num_workers: Number of worker threads W (positive)
            name: Thread name prefix
        """
        if isinstance(num_workers, bool) or not isinstance(num_workers, int) or num_workers <= 0:
            raise ConfigurationError(
                f"Worker count must be a positive integer, got {num_workers!r}"
            )

        self.num_workers = num_workers
        self.name = name

        self._queue: "queue.Queue[Any]" = queue.Queue()
        self._lock = threading.Lock()
        self._closed = False
        self._states = [WorkerState.IDLE] * num_workers

        self._workers = []
        for i in range(num_workers):
            worker = threading.Thread(
                target=self._worker_loop,
                args=(i,),
                name=f"{name}-{i}",
                daemon=True,
            )
            worker.start()
            self._workers.append(worker)

    # --------------------------------------------------
    # Worker side
    # --------------------------------------------------

    def _worker_loop(self, index: int):
        while True:
            item = self._queue.get()
            try:
                if item is _SHUTDOWN:
                    break
                self._states[index] = WorkerState.RUNNING
                item.run()
                self._states[index] = WorkerState.IDLE
            finally:
                self._queue.task_done()

        self._states[index] = WorkerState.TERMINATED

    # --------------------------------------------------
    # Caller side
    # --------------------------------------------------

    def submit(self, fn: Callable, *args, **kwargs) -> Future:
        """
        Enqueue one unit of work.

        Returns:
            future: Handle that completes when the task has run

        Raises:
            PoolClosedError: if shutdown() has been called
        """
        task = _Task(fn, args, kwargs)
        with self._lock:
            if self._closed:
                raise PoolClosedError(f"Pool {self.name!r} is shut down")
            self._queue.put(task)
        return task.future

    @staticmethod
    def wait(future: Future) -> Any:
        """
        Block until a task finishes.

        Returns the task's value, or re-raises the task's exception.
        """
        return future.result()

    def wait_all(self, futures: Iterable[Future]) -> List[Any]:
        """Wait for every future; results come back in submission order."""
        return [self.wait(future) for future in futures]

    def map(self, fn: Callable, items: Iterable) -> List[Any]:
        """Submit fn(item) for every item, then wait for all of them."""
        futures = [self.submit(fn, item) for item in items]
        return self.wait_all(futures)

    def shutdown(self, wait: bool = True) -> None:
        """
        Stop accepting work, drain the queue, then stop the workers.

        Safe to call more than once.
        """
        with self._lock:
            if not self._closed:
                self._closed = True
                for _ in self._workers:
                    self._queue.put(_SHUTDOWN)

        if wait:
            for worker in self._workers:
                if worker is not threading.current_thread():
                    worker.join()

    # --------------------------------------------------
    # Introspection
    # --------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._closed

    def worker_states(self) -> List[WorkerState]:
        return list(self._states)

    def __enter__(self) -> "WorkerPool":
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        self.shutdown()
        return None

    def __repr__(self):
        state = "closed" if self._closed else "open"
        return f"WorkerPool(num_workers={self.num_workers}, {state})"
