"""Build manager.

Tracks the latest Result of every build identifier. Results arrive on
builder threads, so the result map is guarded by a lock. Status only moves
forward per identifier: an update that would move it backwards is dropped.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from typing import TYPE_CHECKING

from camelk_reconciler.builds.models import Identifier, Request, Result, Source
from camelk_reconciler.types import BuildStatus

if TYPE_CHECKING:
    from sqlalchemy.orm import Session, sessionmaker

    from camelk_reconciler.builds.builder import Builder

logger = logging.getLogger(__name__)


class BuildManager:
    """Start builds and expose their latest Result.

    Args:
        builder: Builder used to dispatch requests.
        session_factory: Optional session factory; when set, every accepted
            result is also stored as a BuildRecord.
    """

    def __init__(
        self,
        builder: Builder,
        session_factory: sessionmaker[Session] | None = None,
    ) -> None:
        self.builder = builder
        self.session_factory = session_factory
        self._results: dict[Identifier, Result] = {}
        self._lock = threading.Lock()

    def get(self, identifier: Identifier) -> Result:
        """Return the latest Result for an identifier.

        Unknown identifiers yield a NOT_REQUESTED placeholder.
        """
        with self._lock:
            result = self._results.get(identifier)
        if result is None:
            empty = Request(identifier=identifier, code=Source(name="", content=""))
            return Result(request=empty, status=BuildStatus.NOT_REQUESTED)
        return result

    def start(self, request: Request) -> bool:
        """Dispatch a build unless one is already in flight for its identifier.

        Args:
            request: Build request.

        Returns:
            True if the build was dispatched.

        Raises:
            Exception: If the start cannot be recorded; the build is not
                dispatched and its previous result is kept.
        """
        identifier = request.identifier
        with self._lock:
            current = self._results.get(identifier)
            if current is not None and current.status == BuildStatus.STARTED:
                logger.debug("Build %s already in progress", identifier)
                return False
            started = Result(request=request, status=BuildStatus.STARTED)
            self._results[identifier] = started

        try:
            self._persist(started)
        except Exception:
            # Nothing was dispatched: restore the previous result
            with self._lock:
                if self._results.get(identifier) is started:
                    if current is None:
                        del self._results[identifier]
                    else:
                        self._results[identifier] = current
            logger.error("Failed to record start of build %s", identifier)
            raise

        future = self.builder.build(request)
        future.add_done_callback(self._on_result)
        return True

    def _on_result(self, future: Future[Result]) -> None:
        self.update(future.result())

    def update(self, result: Result) -> bool:
        """Record a Result if it moves its build forward.

        Returns:
            True if the result was recorded.
        """
        identifier = result.identifier
        with self._lock:
            current = self._results.get(identifier)
            if current is not None and current.request is not result.request:
                logger.warning(
                    "Ignoring result of superseded request for build %s", identifier
                )
                return False
            if current is not None and not current.status.can_transition_to(
                result.status
            ):
                logger.warning(
                    "Ignoring %s result for build %s in status %s",
                    result.status.value,
                    identifier,
                    current.status.value,
                )
                return False
            self._results[identifier] = result

        self._persist(result)
        return True

    def _persist(self, result: Result) -> None:
        if self.session_factory is None:
            return

        from camelk_reconciler.builds.records import save_result
        from camelk_reconciler.db import get_session

        with get_session(self.session_factory) as session:
            save_result(session, result)


__all__ = ["BuildManager"]
