"""Tests for the service trait."""

import pytest

from camelk_reconciler.catalog.io import default_catalog
from camelk_reconciler.errors import (
    ConfigurationConsistencyError,
    PostProcessorError,
    SourceResolutionError,
    TraitConfigurationError,
)
from camelk_reconciler.integrations.models import (
    Integration,
    IntegrationSpec,
    IntegrationStatus,
    SourceSpec,
    TraitSpec,
)
from camelk_reconciler.kube.models import Deployment, ObjectMeta, Service
from camelk_reconciler.traits.catalog import TraitCatalog, apply_traits
from camelk_reconciler.traits.deployment import DeploymentTrait
from camelk_reconciler.traits.environment import Environment
from camelk_reconciler.traits.service import ServiceTrait
from camelk_reconciler.types import (
    CONDITION_SERVICE_AVAILABLE,
    LABEL_SERVICE_TYPE,
    ConditionStatus,
    IntegrationPhase,
)

HTTP_SOURCE = SourceSpec(
    name="routes.js",
    content="from('undertow:http://0.0.0.0:8080/hello').to('log:info')",
)
DIRECT_SOURCE = SourceSpec(
    name="Request.java", content='from("direct:foo").to("log:bar");'
)


def make_integration(
    source: SourceSpec = HTTP_SOURCE,
    phase: IntegrationPhase = IntegrationPhase.DEPLOYING,
    service_config: dict[str, str] | None = None,
) -> Integration:
    """Create an integration named ``test`` in the given phase."""
    traits = {}
    if service_config is not None:
        traits["service"] = TraitSpec(configuration=service_config)
    return Integration(
        metadata=ObjectMeta(name="test", namespace="ns"),
        spec=IntegrationSpec(sources=[source], traits=traits),
        status=IntegrationStatus(phase=phase, image="registry/test:1"),
    )


def configure(integration: Integration) -> tuple[ServiceTrait, Environment, bool]:
    """Configure a fresh service trait against the integration."""
    trait = ServiceTrait()
    trait.load_options(integration.spec.traits.get("service"))
    env = Environment(integration=integration, catalog=default_catalog())
    return trait, env, trait.configure(env)


def service_condition(integration: Integration):
    return integration.status.get_condition(CONDITION_SERVICE_AVAILABLE)


class TestConfigure:
    """Test ServiceTrait.configure."""

    @pytest.mark.parametrize(
        "phase", [IntegrationPhase.NONE, IntegrationPhase.DEPLOYING]
    )
    def test_explicitly_disabled(self, phase) -> None:
        """A disabled trait reports why, whatever the phase."""
        integration = make_integration(
            phase=phase, service_config={"enabled": "false"}
        )
        _, _, enabled = configure(integration)

        assert enabled is False
        condition = service_condition(integration)
        assert condition.status == ConditionStatus.FALSE
        assert condition.message == "explicitly disabled"

    def test_not_deploying(self) -> None:
        """The trait should not run outside the deploying phase."""
        integration = make_integration(phase=IntegrationPhase.INITIALIZATION)
        _, _, enabled = configure(integration)

        assert enabled is False
        assert service_condition(integration) is None

    def test_no_http_service_required(self) -> None:
        """Sources without HTTP consumers do not need a service."""
        integration = make_integration(source=DIRECT_SOURCE)
        _, _, enabled = configure(integration)

        assert enabled is False
        condition = service_condition(integration)
        assert condition.status == ConditionStatus.FALSE
        assert condition.message == "no http service required"

    def test_http_service_required(self) -> None:
        """HTTP consumers enable the trait."""
        integration = make_integration()
        _, _, enabled = configure(integration)
        assert enabled is True

    def test_rest_dsl_service_required(self) -> None:
        """A rest DSL definition enables the trait."""
        source = SourceSpec(
            name="Rest.java",
            content='rest("/api").get("/hello").to("direct:hello");',
        )
        _, _, enabled = configure(make_integration(source=source))
        assert enabled is True

    def test_auto_disabled(self) -> None:
        """auto=false skips source inspection."""
        integration = make_integration(
            source=DIRECT_SOURCE, service_config={"auto": "false"}
        )
        _, _, enabled = configure(integration)
        assert enabled is True

    def test_unresolvable_source(self) -> None:
        """A missing source ConfigMap fails configuration and sets a condition."""
        integration = make_integration(
            source=SourceSpec(name="Routes.java", content_ref="missing")
        )
        with pytest.raises(SourceResolutionError):
            configure(integration)

        condition = service_condition(integration)
        assert condition.status == ConditionStatus.FALSE
        assert "missing" in condition.message

    def test_unresolvable_source_in_pipeline(self) -> None:
        """The pipeline wraps the failure as a configuration error."""
        integration = make_integration(
            source=SourceSpec(name="Routes.java", content_ref="missing")
        )
        with pytest.raises(TraitConfigurationError) as exc_info:
            apply_traits(integration, default_catalog())
        assert exc_info.value.trait_id == "service"
        assert isinstance(exc_info.value.__cause__, SourceResolutionError)


class TestApply:
    """Test the service trait within the pipeline."""

    def test_service_and_container_port(self) -> None:
        """The service targets the container port added after deployment."""
        integration = make_integration()
        env = apply_traits(integration, default_catalog())

        kinds = [r.kind for r in env.resources]
        assert kinds == ["Deployment", "Service"]

        svc = env.resources.get_service(lambda s: s.metadata.name == "test")
        assert svc.metadata.namespace == "ns"
        assert svc.metadata.labels[LABEL_SERVICE_TYPE] == "user"
        assert len(svc.spec.ports) == 1
        assert svc.spec.ports[0].port == 80
        assert svc.spec.ports[0].target_port == "http"

        container = env.resources.get_container(lambda c: c.name == "test")
        assert container.image == "registry/test:1"
        assert len(container.ports) == 1
        assert container.ports[0].name == "http"
        assert container.ports[0].container_port == 8080

        condition = service_condition(integration)
        assert condition.status == ConditionStatus.TRUE
        assert condition.message == "test(http/80) -> test(http/8080)"

    def test_custom_ports(self) -> None:
        """Port options should be honoured."""
        integration = make_integration(
            service_config={
                "port": "8081",
                "port-name": "web",
                "container-port": "9090",
                "container-port-name": "app",
            }
        )
        env = apply_traits(integration, default_catalog())

        svc = env.resources.get_service(lambda s: True)
        assert svc.spec.ports[0].name == "web"
        assert svc.spec.ports[0].port == 8081
        assert svc.spec.ports[0].target_port == "app"

        container = env.resources.get_container(lambda c: True)
        assert container.ports[0].container_port == 9090
        assert service_condition(integration).message == (
            "test(web/8081) -> test(app/9090)"
        )

    def test_missing_container(self) -> None:
        """Without a deployment the post processor fails; the service stays staged."""
        integration = make_integration()
        env = Environment(integration=integration, catalog=default_catalog())

        with pytest.raises(PostProcessorError) as exc_info:
            TraitCatalog([ServiceTrait()]).apply(env)

        assert isinstance(exc_info.value.__cause__, ConfigurationConsistencyError)
        assert "no integration container" in str(exc_info.value)
        assert [r.kind for r in env.resources] == ["Service"]

    def test_reuses_staged_service(self) -> None:
        """A service staged earlier in the pass should be updated, not duplicated."""
        integration = make_integration()
        env = Environment(integration=integration, catalog=default_catalog())
        env.resources.add(Service(metadata=ObjectMeta(name="test", namespace="ns")))

        TraitCatalog([DeploymentTrait(), ServiceTrait()]).apply(env)

        services = [r for r in env.resources if isinstance(r, Service)]
        assert len(services) == 1
        assert len(services[0].spec.ports) == 1

    def test_apply_twice_on_same_resources(self) -> None:
        """Re-applying on the same ResourceSet should not duplicate ports."""
        integration = make_integration()
        env = Environment(integration=integration, catalog=default_catalog())
        catalog = TraitCatalog([DeploymentTrait(), ServiceTrait()])

        catalog.apply(env)
        env.post_processors.clear()
        catalog.apply(env)

        assert len(env.resources) == 2
        svc = env.resources.get_service(lambda s: True)
        deployment = env.resources.get_deployment(lambda d: True)
        assert isinstance(deployment, Deployment)
        assert len(svc.spec.ports) == 1
        assert len(deployment.spec.template.spec.containers[0].ports) == 1

    def test_disabled_stages_nothing(self) -> None:
        """A disabled service trait leaves only the deployment."""
        integration = make_integration(service_config={"enabled": "false"})
        env = apply_traits(integration, default_catalog())
        assert [r.kind for r in env.resources] == ["Deployment"]
