"""
Background dispatch of CPU-bound image work.

Work runs on an injected ``concurrent.futures.Executor`` so the calling
thread never blocks on an encode. Each submission reports its outcome
exactly once, both to an optional error-first callback ``completion(error,
result)`` and to the returned Future.
"""

import atexit
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any, Callable, Optional

from ..errors import CompletionTimeoutError, DispatchError
from ..utils.log_utils import get_logger

logger = get_logger(__name__)

CompletionCallback = Callable[[Optional[BaseException], Any], None]

_default_executor: Optional[ThreadPoolExecutor] = None
_default_lock = threading.Lock()


def default_executor(max_workers: Optional[int] = None) -> ThreadPoolExecutor:
    """
    Return the shared worker pool, creating it on first use.

    `max_workers` only takes effect for the call that creates the pool.
    """
    global _default_executor
    with _default_lock:
        if _default_executor is None:
            _default_executor = ThreadPoolExecutor(
                max_workers=max_workers, thread_name_prefix="image-view"
            )
            atexit.register(_default_executor.shutdown, wait=False)
        return _default_executor


class InlineExecutor(Executor):
    """Executor that runs each job immediately on the submitting thread."""

    def __init__(self):
        self._shutdown = False
        self._lock = threading.Lock()

    def submit(self, fn, /, *args, **kwargs):
        with self._lock:
            if self._shutdown:
                raise RuntimeError("cannot schedule new futures after shutdown")
        future = Future()
        future.set_running_or_notify_cancel()
        try:
            result = fn(*args, **kwargs)
        except Exception as exc:
            future.set_exception(exc)
        else:
            future.set_result(result)
        return future

    def shutdown(self, wait=True, *, cancel_futures=False):
        with self._lock:
            self._shutdown = True


class Completion:
    """Delivers an (error, result) pair to a callback at most once."""

    def __init__(self, callback: Optional[CompletionCallback], label: str = "job"):
        if callback is not None and not callable(callback):
            raise TypeError(f"completion must be callable, not {type(callback).__name__}")
        self.callback = callback
        self.label = label
        self._lock = threading.Lock()
        self._delivered = False

    @property
    def delivered(self) -> bool:
        return self._delivered

    def deliver(self, error: Optional[BaseException], result: Any = None) -> bool:
        """
        Hand the outcome to the callback unless one was already delivered.

        Returns:
            True if this call delivered the outcome, False if it was dropped.
        """
        with self._lock:
            if self._delivered:
                return False
            self._delivered = True

        if self.callback is not None:
            try:
                if error is not None:
                    self.callback(error, None)
                else:
                    self.callback(None, result)
            except Exception:
                # a failing callback must not take the worker down with it
                logger.exception("Completion callback for %s raised", self.label)
        return True


class Dispatcher:
    """
    Runs jobs on an executor and reports each outcome exactly once.

    The executor is injected so tests can pass an InlineExecutor and get
    deterministic, synchronous completions.
    """

    def __init__(self, executor: Optional[Executor] = None):
        self.executor = executor if executor is not None else default_executor()

    def submit(
        self,
        label: str,
        work: Callable[[], Any],
        completion: Optional[CompletionCallback] = None,
        timeout: Optional[float] = None,
    ) -> Future:
        """
        Schedule `work` and return a Future for its outcome.

        Args:
            label: Name of the job, used in log messages.
            work: Zero-argument callable to run on the executor.
            completion: Optional error-first callback `(error, result)`.
            timeout: Seconds after which a CompletionTimeoutError is
                delivered if `work` has not finished.

        Returns:
            Future resolved with the same outcome the completion receives.

        Raises:
            TypeError: If `completion` is given but not callable.
        """
        once = Completion(completion, label)
        outcome: Future = Future()
        outcome.set_running_or_notify_cancel()

        def finish(error: Optional[BaseException], result: Any = None) -> None:
            if not once.deliver(error, result):
                logger.debug("Dropping late outcome of %s", label)
                return
            if error is not None:
                outcome.set_exception(error)
            else:
                outcome.set_result(result)

        timer: Optional[threading.Timer] = None
        if timeout is not None:
            def expire() -> None:
                logger.warning("%s did not complete within %.3fs", label, timeout)
                finish(CompletionTimeoutError(f"{label} timed out after {timeout}s"))

            timer = threading.Timer(timeout, expire)
            timer.daemon = True

        def run() -> None:
            try:
                result = work()
            except Exception as err:
                logger.error("Failed to run %s: %s", label, err)
                if timer is not None:
                    timer.cancel()
                finish(err)
            else:
                if timer is not None:
                    timer.cancel()
                finish(None, result)

        logger.debug("Dispatching %s", label)
        if timer is not None:
            timer.start()
        try:
            self.executor.submit(run)
        except RuntimeError as err:
            if timer is not None:
                timer.cancel()
            logger.error("Executor rejected %s: %s", label, err)
            error = DispatchError(f"Could not schedule {label}: {err}")
            error.__cause__ = err
            finish(error)
        return outcome
