"""Build reconciler.

Runs the first applicable action on a build snapshot. One reconcile pass
performs at most one phase transition; the caller persists the returned
build and requeues it.
"""

from __future__ import annotations

import logging

from camelk_reconciler.actions.base import Action
from camelk_reconciler.builds.resource import Build

logger = logging.getLogger(__name__)


class BuildReconciler:
    """Dispatch builds to their applicable action.

    Args:
        actions: Actions in priority order.
    """

    def __init__(self, actions: list[Action]) -> None:
        self.actions = list(actions)

    def reconcile(self, build: Build) -> Build | None:
        """Run one reconcile pass.

        Returns:
            The updated build, or None if no action changed it.

        Raises:
            Exception: Errors raised by the action, unchanged.
        """
        for action in self.actions:
            if not action.can_handle(build):
                continue
            logger.debug(
                "Invoking action %s on build %s", action.name, build.metadata.name
            )
            return action.handle(build)

        logger.debug(
            "No action for build %s in phase %r",
            build.metadata.name,
            build.status.phase.value,
        )
        return None


__all__ = ["BuildReconciler"]
