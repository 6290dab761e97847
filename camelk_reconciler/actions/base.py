"""Build action base class.

An action reconciles the phase of a Build resource against externally
observed state. ``can_handle`` is a pure predicate re-evaluated on every
reconcile pass; ``handle`` returns an updated copy of the build, or None
when nothing changed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from camelk_reconciler.builds.resource import Build
    from camelk_reconciler.types import BuildPhase


class Action(ABC):
    """Base class for build actions."""

    name: str

    @abstractmethod
    def can_handle(self, build: Build) -> bool:
        """Tell whether this action applies to the build."""

    @abstractmethod
    def handle(self, build: Build) -> Build | None:
        """Reconcile the build.

        Returns:
            An updated copy of the build, or None if it is up to date.
        """

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(name='{self.name}')>"


def with_phase(build: Build, phase: BuildPhase) -> Build | None:
    """Return a copy of the build in the given phase, or None if unchanged."""
    if build.status.phase == phase:
        return None
    target = build.model_copy(deep=True)
    target.status.phase = phase
    return target


__all__ = ["Action", "with_phase"]
