"""Bounded-parallelism batch executor.

A BatchExecutor is built per command invocation, filled with jobs via add(),
and drained by a single run() call. run() starts a fixed number of worker
threads that pull jobs from a shared queue, and returns only once every job
has a terminal outcome. Job failures are reported and recorded, never raised.
"""

import logging
import queue
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from pack.core.errors import SkipPlugin
from pack.core.plugin import Failed, JobOutcome, Skipped, Success
from pack.core.user_feedback import UserFeedback

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class _Job(Generic[T]):
    name: str
    payload: T


class BatchExecutor(Generic[T]):
    """Runs independent, I/O-bound jobs on a fixed pool of worker threads.

    Usage:
        executor = BatchExecutor(worker_count=4, feedback=ctx.feedback)
        for plugin in plugins:
            executor.add(plugin.name, plugin)
        outcomes = executor.run(lambda plugin: git.update(plugin.name, plugin.path))

    Outcome mapping for each job:
        job_fn returns       -> Success, reported with feedback.success()
        job_fn raises        -> Skipped, reported with feedback.info()
          SkipPlugin
        job_fn raises any    -> Failed, reported with feedback.error() as a
          other exception       single line; the full cause stays on the outcome
    """

    def __init__(self, worker_count: int, feedback: UserFeedback) -> None:
        """Create an executor with worker_count concurrent workers.

        Args:
            worker_count: Maximum number of jobs running at once, must be >= 1
            feedback: Destination for per-job reporting

        Raises:
            ValueError: If worker_count is less than 1
        """
        if worker_count < 1:
            raise ValueError(f"worker_count must be at least 1, got {worker_count}")
        self._worker_count = worker_count
        self._feedback = feedback
        self._jobs: queue.SimpleQueue[_Job[T]] = queue.SimpleQueue()
        self._pending = 0

    @property
    def worker_count(self) -> int:
        return self._worker_count

    def add(self, name: str, payload: T) -> None:
        """Enqueue a job. Nothing runs until run() is called."""
        self._jobs.put(_Job(name=name, payload=payload))
        self._pending += 1

    def run(self, job_fn: Callable[[T], None]) -> list[JobOutcome]:
        """Apply job_fn to every queued payload and wait for all of them.

        Only min(worker_count, number of jobs) threads are started. Each
        job runs exactly once. The queue is empty afterwards.

        Args:
            job_fn: Function applied to each payload

        Returns:
            One outcome per job, in completion order
        """
        job_count = self._pending
        self._pending = 0
        if job_count == 0:
            return []

        outcomes: list[JobOutcome] = []
        outcomes_lock = threading.Lock()

        def work() -> None:
            while True:
                try:
                    job = self._jobs.get_nowait()
                except queue.Empty:
                    return
                outcome = self._run_job(job, job_fn)
                with outcomes_lock:
                    outcomes.append(outcome)

        thread_count = min(self._worker_count, job_count)
        logger.debug("Running %d jobs on %d workers", job_count, thread_count)

        workers = [
            threading.Thread(target=work, name=f"pack-worker-{i}", daemon=True)
            for i in range(thread_count)
        ]
        for worker in workers:
            worker.start()
        for worker in workers:
            worker.join()

        logger.debug("All %d jobs finished", len(outcomes))
        return outcomes

    def _run_job(self, job: _Job[T], job_fn: Callable[[T], None]) -> JobOutcome:
        # Per-job boundary: nothing raised by job_fn escapes this method.
        try:
            job_fn(job.payload)
        except SkipPlugin as e:
            self._feedback.info(f"Skip {job.name}: {e.reason}")
            return Skipped(name=job.name, reason=e.reason)
        except Exception as e:
            logger.debug("Job %s failed", job.name, exc_info=True)
            return self._fail(job, str(e))
        except BaseException as e:
            # SystemExit from a job must not end the worker thread
            logger.debug("Job %s aborted", job.name, exc_info=True)
            return self._fail(job, f"{type(e).__name__}: {e}")

        self._feedback.success(f"Updated {job.name}")
        return Success(name=job.name)

    def _fail(self, job: _Job[T], cause: str) -> Failed:
        self._feedback.error(f"Error {job.name}: {summarize_cause(cause)}")
        return Failed(name=job.name, cause=cause)


def summarize_cause(cause: str) -> str:
    """Reduce a possibly multi-line error message to a single line.

    Keeps the first non-blank line, plus the first stderr line when the
    message came from run_subprocess_with_context.

    Example:
        >>> summarize_cause("Failed to pull 'a'\\nExit code: 1\\nstderr: fatal: no remote")
        "Failed to pull 'a': fatal: no remote"
    """
    lines = [line.strip() for line in cause.splitlines() if line.strip()]
    if not lines:
        return "unknown error"
    summary = lines[0]
    for line in lines[1:]:
        if line.startswith("stderr: "):
            return f"{summary}: {line.removeprefix('stderr: ')}"
    return summary
