"""Shared context of one trait pipeline run.

An Environment lives for a single pass over one Integration. Traits read
the integration and the catalog, stage objects into the ResourceSet and
register post processors; nothing in here is shared across passes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from camelk_reconciler.catalog.models import CamelCatalog
from camelk_reconciler.errors import PostProcessorError
from camelk_reconciler.integrations.models import Integration
from camelk_reconciler.kube.client import InMemoryObjectStore, ObjectStore
from camelk_reconciler.traits.resources import ResourceSet
from camelk_reconciler.types import IntegrationPhase

logger = logging.getLogger(__name__)

PostProcessor = Callable[["Environment"], None]


@dataclass
class Environment:
    """Mutable reconciliation context for one Integration.

    Attributes:
        integration: Integration being reconciled; only its status changes.
        catalog: Catalog used to resolve dependencies.
        store: Object store for read-only lookups.
        resources: Objects staged so far.
        post_processors: Deferred work, run once after every trait applied.
        default_namespace: Namespace used when the integration has none.
    """

    integration: Integration
    catalog: CamelCatalog
    store: ObjectStore = field(default_factory=InMemoryObjectStore)
    resources: ResourceSet = field(default_factory=ResourceSet)
    post_processors: list[PostProcessor] = field(default_factory=list)
    default_namespace: str = "default"

    @property
    def namespace(self) -> str:
        return self.integration.namespace or self.default_namespace

    def integration_in_phase(self, *phases: IntegrationPhase) -> bool:
        """Check if the integration is in one of the given phases."""
        return self.integration.in_phase(*phases)

    def add_post_processor(self, processor: PostProcessor) -> None:
        """Register work to run after all traits have been applied."""
        self.post_processors.append(processor)

    def run_post_processors(self) -> None:
        """Run every registered post processor once, in registration order.

        Raises:
            PostProcessorError: On the first failing post processor. Objects
                staged so far are left in place.
        """
        processors = list(self.post_processors)
        for index, processor in enumerate(processors):
            try:
                processor(self)
            except Exception as e:
                raise PostProcessorError(index, str(e)) from e
        logger.debug(
            "Ran %d post processor(s) for integration %s",
            len(processors),
            self.integration.name,
        )


__all__ = ["Environment", "PostProcessor"]
