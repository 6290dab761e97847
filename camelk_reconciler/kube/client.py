"""Read-only access to cluster objects.

Traits and actions never persist objects: they read through an
ObjectStore and stage their output in a ResourceSet. A missing object is
reported with NotFoundError so that callers can treat it as a branch of
their logic rather than as a failure.
"""

from __future__ import annotations

import logging
from typing import Protocol

from camelk_reconciler.errors import NotFoundError
from camelk_reconciler.kube.models import KubeObject

logger = logging.getLogger(__name__)


class ObjectStore(Protocol):
    """Lookup of cluster objects by kind, namespace and name."""

    def get(self, kind: str, namespace: str, name: str) -> KubeObject:
        """Return the object or raise NotFoundError."""
        ...


class InMemoryObjectStore:
    """ObjectStore backed by a dictionary.

    Used for local reconciliation runs where no cluster is available.
    """

    def __init__(self, objects: list[KubeObject] | None = None) -> None:
        self._objects: dict[tuple[str, str, str], KubeObject] = {}
        for obj in objects or []:
            self.add(obj)

    def add(self, obj: KubeObject, namespace: str = "default") -> None:
        """Store an object, replacing any object with the same identity."""
        key = (obj.kind, obj.metadata.namespace or namespace, obj.metadata.name)
        self._objects[key] = obj

    def get(self, kind: str, namespace: str, name: str) -> KubeObject:
        try:
            return self._objects[(kind, namespace, name)]
        except KeyError:
            logger.debug("%s %s/%s not found in memory store", kind, namespace, name)
            raise NotFoundError(kind, namespace, name) from None


__all__ = ["InMemoryObjectStore", "ObjectStore"]
