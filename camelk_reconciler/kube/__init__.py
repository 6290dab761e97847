"""Cluster object models and read-only object store access.

The live-cluster adapter lives in camelk_reconciler.kube.cluster and is
imported on demand.
"""

from camelk_reconciler.kube.client import InMemoryObjectStore, ObjectStore
from camelk_reconciler.kube.models import (
    ConfigMap,
    Container,
    ContainerPort,
    Deployment,
    ObjectMeta,
    Pod,
    Service,
    ServicePort,
)

__all__ = [
    "ConfigMap",
    "Container",
    "ContainerPort",
    "Deployment",
    "InMemoryObjectStore",
    "ObjectMeta",
    "ObjectStore",
    "Pod",
    "Service",
    "ServicePort",
]
