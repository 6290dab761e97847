"""Monitor action for builds executed in-process by the BuildManager."""

from __future__ import annotations

import logging

from camelk_reconciler.actions.base import Action
from camelk_reconciler.builds.manager import BuildManager
from camelk_reconciler.builds.resource import Build
from camelk_reconciler.types import BuildPhase, BuildStatus, BuildStrategy

logger = logging.getLogger(__name__)

STATUS_TO_BUILD_PHASE = {
    BuildStatus.NOT_REQUESTED: BuildPhase.SCHEDULING,
    BuildStatus.STARTED: BuildPhase.RUNNING,
    BuildStatus.COMPLETED: BuildPhase.SUCCEEDED,
    BuildStatus.ERROR: BuildPhase.FAILED,
}


class MonitorRoutineAction(Action):
    """Reflect the Result tracked by the BuildManager into the build phase.

    A build the manager knows nothing about (e.g. after a restart) is sent
    back to scheduling, like a build whose pod has disappeared.
    """

    name = "monitor-routine"

    def __init__(self, manager: BuildManager) -> None:
        self.manager = manager

    def can_handle(self, build: Build) -> bool:
        return (
            build.status.phase in (BuildPhase.PENDING, BuildPhase.RUNNING)
            and build.strategy == BuildStrategy.ROUTINE
        )

    def handle(self, build: Build) -> Build | None:
        result = self.manager.get(build.identifier())
        phase = STATUS_TO_BUILD_PHASE[result.status]

        if build.status.phase == phase:
            return None

        target = build.model_copy(deep=True)
        target.status.phase = phase
        if result.status == BuildStatus.COMPLETED:
            target.status.image = result.image
        elif result.status == BuildStatus.ERROR:
            target.status.error = result.error_message()

        logger.info(
            "Build %s: %s -> %s (result %s)",
            build.metadata.name,
            build.status.phase.value,
            phase.value,
            result.status.value,
        )
        return target


__all__ = ["STATUS_TO_BUILD_PHASE", "MonitorRoutineAction"]
