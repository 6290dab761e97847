"""Deployment trait.

Stages the Deployment running the integration, with a single container
named after the integration. Other traits (e.g. service) locate that
container through the ResourceSet.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from camelk_reconciler.kube.models import (
    Container,
    Deployment,
    DeploymentSpec,
    EnvVar,
    LabelSelector,
    ObjectMeta,
    PodSpec,
    PodTemplateSpec,
)
from camelk_reconciler.traits.base import Trait
from camelk_reconciler.types import LABEL_INTEGRATION, IntegrationPhase

if TYPE_CHECKING:
    from camelk_reconciler.traits.environment import Environment

logger = logging.getLogger(__name__)


class DeploymentTrait(Trait):
    """Stage the integration Deployment."""

    id = "deployment"

    def configure(self, env: Environment) -> bool:
        if self.enabled is False:
            return False
        return env.integration_in_phase(IntegrationPhase.DEPLOYING)

    def apply(self, env: Environment) -> None:
        name = env.integration.name
        deployment = env.resources.get_deployment(lambda d: d.metadata.name == name)
        if deployment is None:
            deployment = deployment_for(env)
            env.resources.add(deployment)
            logger.debug("Staged deployment %s", name)
        deployment.spec.replicas = env.integration.spec.replicas


def deployment_for(env: Environment) -> Deployment:
    """Build the Deployment of an integration."""
    integration = env.integration
    labels = {LABEL_INTEGRATION: integration.name}

    container = Container(
        name=integration.name,
        image=integration.status.image,
        env=[
            EnvVar(name="CAMEL_K_INTEGRATION", value=integration.name),
            EnvVar(
                name="CAMEL_K_DEPENDENCIES",
                value=",".join(integration.status.dependencies),
            ),
        ],
    )

    return Deployment(
        metadata=ObjectMeta(
            name=integration.name,
            namespace=env.namespace,
            labels=dict(labels),
        ),
        spec=DeploymentSpec(
            selector=LabelSelector(match_labels=dict(labels)),
            template=PodTemplateSpec(
                metadata=ObjectMeta(name=integration.name, labels=dict(labels)),
                spec=PodSpec(containers=[container]),
            ),
        ),
    )


__all__ = ["DeploymentTrait", "deployment_for"]
