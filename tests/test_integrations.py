"""Tests for integrations models and source resolution."""

import pytest

from camelk_reconciler.errors import SourceResolutionError
from camelk_reconciler.integrations.models import (
    Integration,
    IntegrationSpec,
    IntegrationStatus,
    SourceSpec,
)
from camelk_reconciler.integrations.sources import resolve_integration_sources
from camelk_reconciler.kube.client import InMemoryObjectStore
from camelk_reconciler.kube.models import ConfigMap, ObjectMeta
from camelk_reconciler.traits.resources import ResourceSet
from camelk_reconciler.types import ConditionStatus, IntegrationPhase, Language


def make_integration(*sources: SourceSpec) -> Integration:
    """Create an integration in the ``camel`` namespace."""
    return Integration(
        metadata=ObjectMeta(name="hello", namespace="camel"),
        spec=IntegrationSpec(sources=list(sources)),
    )


class TestIntegrationStatus:
    """Test condition handling on IntegrationStatus."""

    def test_default_phase_is_none(self) -> None:
        """A new integration should have no phase."""
        integration = make_integration()
        assert integration.status.phase == IntegrationPhase.NONE
        assert not integration.in_phase(IntegrationPhase.INITIALIZATION)

    def test_set_condition_upserts_by_type(self) -> None:
        """Setting a condition twice should keep a single condition."""
        status = IntegrationStatus()
        status.set_condition("ServiceAvailable", ConditionStatus.FALSE, "r1", "m1")
        status.set_condition("ServiceAvailable", ConditionStatus.TRUE, "r2", "m2")

        assert len(status.conditions) == 1
        condition = status.get_condition("ServiceAvailable")
        assert condition is not None
        assert condition.status == ConditionStatus.TRUE
        assert condition.reason == "r2"
        assert condition.message == "m2"
        assert condition.last_update_time is not None

    def test_distinct_types_are_kept(self) -> None:
        """Conditions of different types should coexist."""
        status = IntegrationStatus()
        status.set_condition("A", ConditionStatus.TRUE)
        status.set_condition("B", ConditionStatus.FALSE)
        assert set(status.conditions) == {"A", "B"}

    def test_conditions_rendered_as_list(self) -> None:
        """Conditions should render as a list in manifests."""
        integration = make_integration()
        integration.status.set_condition("A", ConditionStatus.TRUE, "Reason")

        manifest = integration.to_manifest()
        conditions = manifest["status"]["conditions"]
        assert isinstance(conditions, list)
        assert conditions[0]["type"] == "A"
        assert conditions[0]["status"] == "True"

    def test_conditions_parsed_from_list(self) -> None:
        """The manifest list form should be indexed by type."""
        status = IntegrationStatus.model_validate(
            {
                "phase": "Deploying",
                "conditions": [
                    {"type": "A", "status": "True"},
                    {"type": "A", "status": "False"},
                ],
            }
        )
        assert status.phase == IntegrationPhase.DEPLOYING
        assert list(status.conditions) == ["A"]
        assert status.conditions["A"].status == ConditionStatus.FALSE


class TestIntegrationParsing:
    """Test loading integrations from manifest dictionaries."""

    def test_camel_case_manifest(self) -> None:
        """Manifests use camelCase keys."""
        integration = Integration.model_validate(
            {
                "apiVersion": "camel.apache.org/v1alpha1",
                "kind": "Integration",
                "metadata": {"name": "hello"},
                "spec": {
                    "sources": [{"name": "routes.groovy", "contentRef": "hello-src"}],
                    "traits": {"service": {"configuration": {"port": "8081"}}},
                },
            }
        )

        source = integration.sources()[0]
        assert source.content_ref == "hello-src"
        assert source.infer_language() == Language.GROOVY
        assert integration.spec.traits["service"].configuration == {"port": "8081"}


class TestResolveIntegrationSources:
    """Test resolve_integration_sources function."""

    def test_inline_sources_unchanged(self) -> None:
        """Inline sources should be returned as is."""
        source = SourceSpec(name="Routes.java", content='from("timer:tick")')
        resolved = resolve_integration_sources(
            InMemoryObjectStore(), make_integration(source)
        )
        assert resolved == [source]

    def test_resolves_from_store(self) -> None:
        """Content refs should be read from the object store."""
        store = InMemoryObjectStore(
            [
                ConfigMap(
                    metadata=ObjectMeta(name="hello-src", namespace="camel"),
                    data={"content": 'from("direct:a")'},
                )
            ]
        )
        integration = make_integration(
            SourceSpec(name="Routes.java", content_ref="hello-src")
        )

        resolved = resolve_integration_sources(store, integration)

        assert resolved[0].content == 'from("direct:a")'
        # The integration itself is not modified
        assert integration.sources()[0].content == ""

    def test_staged_config_map_takes_precedence(self) -> None:
        """A ConfigMap staged in the ResourceSet should win over the store."""
        store = InMemoryObjectStore(
            [
                ConfigMap(
                    metadata=ObjectMeta(name="src", namespace="camel"),
                    data={"routes": "stored"},
                )
            ]
        )
        resources = ResourceSet()
        resources.add(
            ConfigMap(metadata=ObjectMeta(name="src"), data={"routes": "staged"})
        )
        integration = make_integration(
            SourceSpec(name="Routes.java", content_ref="src", content_key="routes")
        )

        resolved = resolve_integration_sources(store, integration, resources)
        assert resolved[0].content == "staged"

    def test_missing_config_map_raises(self) -> None:
        """A missing ConfigMap should raise SourceResolutionError."""
        integration = make_integration(
            SourceSpec(name="Routes.java", content_ref="missing")
        )
        with pytest.raises(SourceResolutionError) as exc_info:
            resolve_integration_sources(InMemoryObjectStore(), integration)
        assert exc_info.value.code == "source_resolution"
        assert "missing" in str(exc_info.value)

    def test_missing_key_raises(self) -> None:
        """A ConfigMap without the expected key should raise."""
        store = InMemoryObjectStore(
            [ConfigMap(metadata=ObjectMeta(name="src", namespace="camel"), data={})]
        )
        integration = make_integration(
            SourceSpec(name="Routes.java", content_ref="src")
        )
        with pytest.raises(SourceResolutionError):
            resolve_integration_sources(store, integration)
