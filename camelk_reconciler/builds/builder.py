"""Asynchronous build dispatch.

A Builder accepts a Request and immediately returns a Future that will
carry exactly one Result for it. Dispatch never raises: failures, including
builds that never got to run, are delivered as a Result with status ERROR.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor

from camelk_reconciler.builds.models import Request, Result
from camelk_reconciler.config import get_settings
from camelk_reconciler.errors import BuildCancelledError
from camelk_reconciler.types import BuildStatus

logger = logging.getLogger(__name__)

# Runs the actual build and returns the produced image reference
BuildStep = Callable[[Request], str]


class Builder(ABC):
    """Supertype of all builders."""

    @abstractmethod
    def build(self, request: Request) -> Future[Result]:
        """Dispatch a build without blocking.

        Args:
            request: Build request.

        Returns:
            Future resolved exactly once with the Result of ``request``.
        """


def new_result_future() -> Future[Result]:
    """Create a Future that consumers cannot cancel.

    The Future is marked running right away: only the builder resolves it.
    """
    future: Future[Result] = Future()
    future.set_running_or_notify_cancel()
    return future


class ExecutorBuilder(Builder):
    """Builder running a build step on a thread pool.

    Args:
        step: Callable performing the build and returning the image.
        max_workers: Maximum builds running at the same time. If not
            provided, uses the max_concurrent_builds setting.
    """

    def __init__(self, step: BuildStep, max_workers: int | None = None) -> None:
        if max_workers is None:
            max_workers = get_settings().max_concurrent_builds
        self.step = step
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="build"
        )
        self._lock = threading.Lock()

    def _deliver(self, future: Future[Result], result: Result) -> None:
        with self._lock:
            if future.done():
                logger.warning(
                    "Dropping duplicate result for build %s", result.identifier
                )
                return
            future.set_result(result)

    def _execute(self, request: Request, future: Future[Result]) -> None:
        try:
            logger.info("Build %s started", request.identifier)
            image = self.step(request)
        except Exception as e:
            logger.error("Build %s failed: %s", request.identifier, e)
            self._deliver(
                future, Result(request=request, status=BuildStatus.ERROR, error=e)
            )
        else:
            logger.info("Build %s completed: %s", request.identifier, image)
            self._deliver(
                future,
                Result(request=request, status=BuildStatus.COMPLETED, image=image),
            )
        finally:
            if not future.done():
                self._deliver(
                    future,
                    Result(
                        request=request,
                        status=BuildStatus.ERROR,
                        error=BuildCancelledError("build interrupted"),
                    ),
                )

    def build(self, request: Request) -> Future[Result]:
        future = new_result_future()

        def on_done(task: Future[None]) -> None:
            if task.cancelled():
                self._deliver(
                    future,
                    Result(
                        request=request,
                        status=BuildStatus.ERROR,
                        error=BuildCancelledError(),
                    ),
                )

        try:
            task = self._executor.submit(self._execute, request, future)
        except RuntimeError as e:
            # The executor has been shut down
            self._deliver(
                future,
                Result(
                    request=request,
                    status=BuildStatus.ERROR,
                    error=BuildCancelledError(str(e)),
                ),
            )
        else:
            task.add_done_callback(on_done)

        return future

    def shutdown(self, wait: bool = True, cancel_pending: bool = False) -> None:
        """Stop accepting builds.

        Args:
            wait: Wait for running builds to finish.
            cancel_pending: Cancel builds that have not started yet; their
                Futures are resolved with a BuildCancelledError.
        """
        self._executor.shutdown(wait=wait, cancel_futures=cancel_pending)


__all__ = ["BuildStep", "Builder", "ExecutorBuilder", "new_result_future"]
