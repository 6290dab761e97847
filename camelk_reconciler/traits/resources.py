"""Staged cluster objects produced by a trait pipeline run.

Traits look up an existing entry before adding a new one, so re-running the
pipeline on an unchanged Integration stages the same set of objects.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TypeVar

from camelk_reconciler.kube.models import (
    ConfigMap,
    Container,
    Deployment,
    KubeObject,
    Service,
)

T = TypeVar("T")


class ResourceSet:
    """Ordered, append-only collection of staged objects."""

    def __init__(self) -> None:
        self._items: list[KubeObject] = []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[KubeObject]:
        return iter(self._items)

    def add(self, obj: KubeObject) -> None:
        """Append an object to the set."""
        self._items.append(obj)

    def items(self) -> list[KubeObject]:
        """Return a copy of the staged objects, in insertion order."""
        return list(self._items)

    def find(self, kind: type[T], predicate: Callable[[T], bool]) -> T | None:
        """Return the first object of the given type matching the predicate."""
        for obj in self._items:
            if isinstance(obj, kind) and predicate(obj):
                return obj
        return None

    def get_service(self, predicate: Callable[[Service], bool]) -> Service | None:
        return self.find(Service, predicate)

    def get_deployment(
        self, predicate: Callable[[Deployment], bool]
    ) -> Deployment | None:
        return self.find(Deployment, predicate)

    def get_config_map(
        self, predicate: Callable[[ConfigMap], bool]
    ) -> ConfigMap | None:
        return self.find(ConfigMap, predicate)

    def get_container(
        self, predicate: Callable[[Container], bool]
    ) -> Container | None:
        """Return the first container of any staged Deployment matching."""
        for obj in self._items:
            if not isinstance(obj, Deployment):
                continue
            for container in obj.spec.template.spec.containers:
                if predicate(container):
                    return container
        return None

    def to_manifests(self) -> list[dict[str, object]]:
        """Render every staged object as a manifest dictionary."""
        return [obj.to_manifest() for obj in self._items]


__all__ = ["ResourceSet"]
