"""Trait catalog and pipeline execution.

A pass over an Integration runs in three steps:

1. every trait is configured, in declared order; a failure aborts the pass
   before anything is staged;
2. enabled traits are applied, in declared order; a failure aborts the
   remaining traits and leaves staged objects in place;
3. post processors registered while applying run once, in registration
   order.

The core never retries: the owning reconciler decides what to do with a
failed pass.
"""

from __future__ import annotations

import logging

from camelk_reconciler.catalog.models import CamelCatalog
from camelk_reconciler.errors import TraitApplyError, TraitConfigurationError
from camelk_reconciler.integrations.models import Integration
from camelk_reconciler.kube.client import InMemoryObjectStore, ObjectStore
from camelk_reconciler.traits.base import Trait
from camelk_reconciler.traits.dependencies import DependenciesTrait
from camelk_reconciler.traits.deployment import DeploymentTrait
from camelk_reconciler.traits.environment import Environment
from camelk_reconciler.traits.service import ServiceTrait

logger = logging.getLogger(__name__)


def default_traits() -> list[Trait]:
    """Return fresh instances of the built-in traits, in execution order.

    Dependencies are computed before anything that reads them, and the
    deployment container is staged before the service looks for it.
    """
    return [DependenciesTrait(), DeploymentTrait(), ServiceTrait()]


class TraitCatalog:
    """Ordered set of traits applied to an Environment."""

    def __init__(self, traits: list[Trait] | None = None) -> None:
        self.traits = traits if traits is not None else default_traits()
        ids = [t.id for t in self.traits]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate trait ids: {ids}")

    def ids(self) -> list[str]:
        """Return the trait ids in execution order."""
        return [t.id for t in self.traits]

    def get(self, trait_id: str) -> Trait | None:
        """Return the trait with the given id, if registered."""
        for trait in self.traits:
            if trait.id == trait_id:
                return trait
        return None

    def configure(self, env: Environment) -> list[Trait]:
        """Configure every trait and return the enabled ones, in order.

        Raises:
            TraitConfigurationError: If a trait configuration is invalid or
                a trait fails to configure.
        """
        unknown = set(env.integration.spec.traits) - set(self.ids())
        if unknown:
            raise TraitConfigurationError(
                ",".join(sorted(unknown)), "unknown trait"
            )

        enabled: list[Trait] = []
        for trait in self.traits:
            try:
                trait.load_options(env.integration.spec.traits.get(trait.id))
                if trait.configure(env):
                    enabled.append(trait)
            except Exception as e:
                raise TraitConfigurationError(trait.id, str(e)) from e

        logger.debug(
            "Enabled traits for integration %s: %s",
            env.integration.name,
            [t.id for t in enabled],
        )
        return enabled

    def apply(self, env: Environment) -> list[Trait]:
        """Run a full pass over the Environment.

        Returns:
            The traits that were applied, in order.

        Raises:
            TraitConfigurationError: If configuration fails.
            TraitApplyError: If a trait fails to apply.
            PostProcessorError: If a post processor fails.
        """
        enabled = self.configure(env)

        for trait in enabled:
            logger.debug("Applying trait %s", trait.id)
            try:
                trait.apply(env)
            except Exception as e:
                logger.error(
                    "Trait %s failed on integration %s: %s",
                    trait.id,
                    env.integration.name,
                    e,
                )
                raise TraitApplyError(trait.id, str(e)) from e

        env.run_post_processors()
        return enabled


def apply_traits(
    integration: Integration,
    catalog: CamelCatalog,
    store: ObjectStore | None = None,
    traits: list[Trait] | None = None,
    default_namespace: str = "default",
) -> Environment:
    """Run the trait pipeline on an integration.

    Args:
        integration: Integration to reconcile; its status is updated in place.
        catalog: Catalog used to resolve dependencies.
        store: Object store for read-only lookups.
        traits: Traits to run; defaults to the built-in traits.
        default_namespace: Namespace used when the integration has none.

    Returns:
        The Environment holding the staged resources.
    """
    env = Environment(
        integration=integration,
        catalog=catalog,
        store=store if store is not None else InMemoryObjectStore(),
        default_namespace=default_namespace,
    )
    TraitCatalog(traits).apply(env)
    logger.info(
        "Integration %s: staged %d resource(s)", integration.name, len(env.resources)
    )
    return env


__all__ = ["TraitCatalog", "apply_traits", "default_traits"]
