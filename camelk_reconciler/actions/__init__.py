"""Build actions.

Actions reconcile the phase of a Build resource against the state of the
process executing it: a pod for the pod strategy, the BuildManager for the
routine strategy.
"""

from camelk_reconciler.actions.base import Action
from camelk_reconciler.actions.monitor_pod import MonitorPodAction
from camelk_reconciler.actions.monitor_routine import MonitorRoutineAction
from camelk_reconciler.actions.reconciler import BuildReconciler

__all__ = ["Action", "BuildReconciler", "MonitorPodAction", "MonitorRoutineAction"]
