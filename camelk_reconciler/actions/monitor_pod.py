"""Monitor action for builds executed in a pod."""

from __future__ import annotations

import logging

from camelk_reconciler.actions.base import Action, with_phase
from camelk_reconciler.builds.resource import Build, build_pod_name
from camelk_reconciler.errors import NotFoundError
from camelk_reconciler.kube.client import ObjectStore
from camelk_reconciler.kube.models import Pod
from camelk_reconciler.types import BuildPhase, BuildStrategy, PodPhase

logger = logging.getLogger(__name__)

# Terminal pod phases; any other pod phase leaves the build unchanged
POD_TO_BUILD_PHASE = {
    PodPhase.SUCCEEDED: BuildPhase.SUCCEEDED,
    PodPhase.FAILED: BuildPhase.FAILED,
}


def build_phase_for(pod: Pod) -> BuildPhase:
    """Map the phase of a build pod to a build phase (NONE if not terminal)."""
    if pod.status.phase is None:
        return BuildPhase.NONE
    return POD_TO_BUILD_PHASE.get(pod.status.phase, BuildPhase.NONE)


class MonitorPodAction(Action):
    """Follow the build pod of pending and running builds."""

    name = "monitor-pod"

    def __init__(self, store: ObjectStore, default_namespace: str = "default") -> None:
        self.store = store
        self.default_namespace = default_namespace

    def can_handle(self, build: Build) -> bool:
        return (
            build.status.phase in (BuildPhase.PENDING, BuildPhase.RUNNING)
            and build.strategy == BuildStrategy.POD
        )

    def handle(self, build: Build) -> Build | None:
        namespace = build.metadata.namespace or self.default_namespace
        pod_name = build_pod_name(build.spec.meta)

        try:
            obj = self.store.get("Pod", namespace, pod_name)
        except NotFoundError:
            # The pod is gone or was never created: reschedule the build
            logger.info(
                "Build pod %s/%s not found, rescheduling build %s",
                namespace,
                pod_name,
                build.metadata.name,
            )
            return with_phase(build, BuildPhase.SCHEDULING)

        if not isinstance(obj, Pod):
            raise TypeError(f"Expected a Pod for {pod_name}, got {obj.kind}")

        phase = build_phase_for(obj)
        if phase == BuildPhase.NONE:
            return None

        target = with_phase(build, phase)
        if target is not None:
            logger.info(
                "Build %s: %s -> %s",
                build.metadata.name,
                build.status.phase.value,
                phase.value,
            )
        return target


__all__ = ["MonitorPodAction", "POD_TO_BUILD_PHASE", "build_phase_for"]
