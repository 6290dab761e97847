"""Service trait.

Exposes the integration through a Service when its sources consume from an
HTTP endpoint. The service port targets the container port by name; the
container port itself is added by a post processor, once the trait that
stages the integration container has run.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from camelk_reconciler.errors import ConfigurationConsistencyError, ReconcileError
from camelk_reconciler.integrations.sources import resolve_integration_sources
from camelk_reconciler.kube.models import (
    ContainerPort,
    ObjectMeta,
    Service,
    ServicePort,
    ServiceSpec,
)
from camelk_reconciler.metadata.extract import extract_all
from camelk_reconciler.traits.base import Trait, TraitOptions
from camelk_reconciler.types import (
    CONDITION_SERVICE_AVAILABLE,
    LABEL_INTEGRATION,
    LABEL_SERVICE_TYPE,
    REASON_SERVICE_AVAILABLE,
    REASON_SERVICE_NOT_AVAILABLE,
    SERVICE_TYPE_USER,
    ConditionStatus,
    IntegrationPhase,
)

if TYPE_CHECKING:
    from camelk_reconciler.traits.environment import Environment

logger = logging.getLogger(__name__)

HTTP_PORT_NAME = "http"


class ServiceTraitOptions(TraitOptions):
    """Options of the service trait.

    Attributes:
        auto: Detect from the sources whether a service is needed.
        port: Port exposed by the service.
        port_name: Name of the service port.
        container_port: Port the integration listens on.
        container_port_name: Name of the container port targeted by the
            service.
    """

    auto: bool | None = None
    port: int = 80
    port_name: str = HTTP_PORT_NAME
    container_port: int = 8080
    container_port_name: str = HTTP_PORT_NAME


class ServiceTrait(Trait):
    """Stage a Service for integrations exposing an HTTP endpoint."""

    id = "service"
    options_model = ServiceTraitOptions
    options: ServiceTraitOptions

    def configure(self, env: Environment) -> bool:
        status = env.integration.status

        if self.enabled is False:
            status.set_condition(
                CONDITION_SERVICE_AVAILABLE,
                ConditionStatus.FALSE,
                REASON_SERVICE_NOT_AVAILABLE,
                "explicitly disabled",
            )
            return False

        if not env.integration_in_phase(IntegrationPhase.DEPLOYING):
            return False

        if self.options.auto is None or self.options.auto:
            try:
                sources = resolve_integration_sources(
                    env.store, env.integration, env.resources, env.default_namespace
                )
            except ReconcileError as e:
                status.set_condition(
                    CONDITION_SERVICE_AVAILABLE,
                    ConditionStatus.FALSE,
                    REASON_SERVICE_NOT_AVAILABLE,
                    str(e),
                )
                raise

            meta = extract_all(env.catalog, sources)
            if not meta.requires_http_service:
                status.set_condition(
                    CONDITION_SERVICE_AVAILABLE,
                    ConditionStatus.FALSE,
                    REASON_SERVICE_NOT_AVAILABLE,
                    "no http service required",
                )
                return False

        return True

    def apply(self, env: Environment) -> None:
        name = env.integration.name

        # Either update a service staged by a previous trait or add a new one
        svc = env.resources.get_service(lambda s: s.metadata.name == name)
        if svc is None:
            svc = service_for(env)
            env.resources.add(svc)

        port = ServicePort(
            name=self.options.port_name,
            port=self.options.port,
            protocol="TCP",
            target_port=self.options.container_port_name,
        )
        if not any(p.name == port.name for p in svc.spec.ports):
            svc.spec.ports.append(port)

        svc.metadata.labels[LABEL_SERVICE_TYPE] = SERVICE_TYPE_USER

        options = self.options

        def add_container_port(environment: Environment) -> None:
            container = environment.resources.get_container(
                lambda c: c.name == environment.integration.name
            )
            if container is None:
                raise ConfigurationConsistencyError(
                    f"cannot add {options.container_port_name} container port: "
                    "no integration container"
                )

            if not any(p.name == options.container_port_name for p in container.ports):
                container.ports.append(
                    ContainerPort(
                        name=options.container_port_name,
                        container_port=options.container_port,
                        protocol="TCP",
                    )
                )

            message = (
                f"{svc.metadata.name}({port.name}/{port.port}) -> "
                f"{container.name}({options.container_port_name}/"
                f"{options.container_port})"
            )
            environment.integration.status.set_condition(
                CONDITION_SERVICE_AVAILABLE,
                ConditionStatus.TRUE,
                REASON_SERVICE_AVAILABLE,
                message,
            )
            logger.info("Service for integration %s: %s", name, message)

        env.add_post_processor(add_container_port)


def service_for(env: Environment) -> Service:
    """Build the Service of an integration, without ports."""
    name = env.integration.name
    return Service(
        metadata=ObjectMeta(
            name=name,
            namespace=env.namespace,
            labels={LABEL_INTEGRATION: name},
        ),
        spec=ServiceSpec(ports=[], selector={LABEL_INTEGRATION: name}),
    )


__all__ = ["HTTP_PORT_NAME", "ServiceTrait", "ServiceTraitOptions", "service_for"]
