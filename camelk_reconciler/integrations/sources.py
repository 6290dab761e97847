"""Resolution of integration sources.

A source either carries its content inline or references a ConfigMap.
Referenced ConfigMaps are looked up among the resources staged by the
current pipeline run first, then in the object store.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from camelk_reconciler.errors import NotFoundError, SourceResolutionError
from camelk_reconciler.integrations.models import Integration, SourceSpec
from camelk_reconciler.kube.models import ConfigMap

if TYPE_CHECKING:
    from camelk_reconciler.kube.client import ObjectStore
    from camelk_reconciler.traits.resources import ResourceSet

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_KEY = "content"


def _lookup_config_map(
    store: ObjectStore,
    namespace: str,
    name: str,
    resources: ResourceSet | None,
) -> ConfigMap | None:
    if resources is not None:
        staged = resources.get_config_map(lambda cm: cm.metadata.name == name)
        if staged is not None:
            return staged

    try:
        obj = store.get("ConfigMap", namespace, name)
    except NotFoundError:
        return None
    return obj if isinstance(obj, ConfigMap) else None


def resolve_integration_sources(
    store: ObjectStore,
    integration: Integration,
    resources: ResourceSet | None = None,
    default_namespace: str = "default",
) -> list[SourceSpec]:
    """Return the integration sources with their content filled in.

    Args:
        store: Object store used to read referenced ConfigMaps.
        integration: Integration whose sources are resolved.
        resources: Resources staged so far in the current pipeline run.
        default_namespace: Namespace used when the integration has none.

    Returns:
        List of sources, each with inline content.

    Raises:
        SourceResolutionError: If a referenced ConfigMap or key is missing.
    """
    namespace = integration.namespace or default_namespace
    resolved: list[SourceSpec] = []

    for source in integration.sources():
        if source.content or not source.content_ref:
            resolved.append(source)
            continue

        cm = _lookup_config_map(store, namespace, source.content_ref, resources)
        if cm is None:
            raise SourceResolutionError(
                source.name, f"config map {source.content_ref} not found"
            )

        key = source.content_key or DEFAULT_CONTENT_KEY
        if key not in cm.data:
            raise SourceResolutionError(
                source.name,
                f"key {key} not found in config map {source.content_ref}",
            )

        logger.debug(
            "Resolved source %s from config map %s", source.name, source.content_ref
        )
        resolved.append(source.model_copy(update={"content": cm.data[key]}))

    return resolved


__all__ = ["resolve_integration_sources"]
