"""Pydantic models for the Integration resource.

An Integration declares the sources of a Camel integration, its explicit
dependencies and per-trait configuration. Reconciliation only mutates the
``status`` sub-object.
"""

from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import Field, field_serializer, field_validator

from camelk_reconciler.kube.models import KubeModel, ObjectMeta
from camelk_reconciler.types import ConditionStatus, IntegrationPhase, Language


class SourceSpec(KubeModel):
    """A unit of integration code.

    Attributes:
        name: File name of the source, e.g. ``Routes.java``.
        content: Inline source text.
        content_ref: Name of a ConfigMap holding the source text, used
            when ``content`` is empty.
        content_key: Key inside the referenced ConfigMap (defaults to
            ``content``).
        language: Explicit language; inferred from the name when unset.
    """

    name: str
    content: str = ""
    content_ref: str | None = None
    content_key: str | None = None
    language: Language | None = None

    def infer_language(self) -> Language | None:
        """Return the declared language, or infer it from the file name."""
        if self.language is not None:
            return self.language
        return Language.infer(self.name)


class TraitSpec(KubeModel):
    """User configuration of a single trait, as a flat string map."""

    configuration: dict[str, str] = Field(default_factory=dict)


class IntegrationSpec(KubeModel):
    replicas: int | None = None
    sources: list[SourceSpec] = Field(default_factory=list)
    dependencies: list[str] = Field(default_factory=list)
    traits: dict[str, TraitSpec] = Field(default_factory=dict)


class IntegrationCondition(KubeModel):
    """Observable reason why a trait enabled or disabled a capability."""

    type: str
    status: ConditionStatus
    reason: str | None = None
    message: str | None = None
    last_update_time: datetime | None = None


class IntegrationStatus(KubeModel):
    """Observed state of an Integration.

    Conditions are keyed by type: setting a condition replaces any previous
    condition of the same type. They are rendered as a list.
    """

    phase: IntegrationPhase = IntegrationPhase.NONE
    dependencies: list[str] = Field(default_factory=list)
    image: str | None = None
    digest: str | None = None
    conditions: dict[str, IntegrationCondition] = Field(default_factory=dict)

    @field_validator("conditions", mode="before")
    @classmethod
    def index_conditions(cls, v: Any) -> Any:
        """Accept the list form used in manifests."""
        if isinstance(v, list):
            indexed: dict[str, Any] = {}
            for item in v:
                if isinstance(item, IntegrationCondition):
                    indexed[item.type] = item
                else:
                    indexed[item["type"]] = item
            return indexed
        return v

    @field_serializer("conditions")
    def render_conditions(
        self, conditions: dict[str, IntegrationCondition]
    ) -> list[IntegrationCondition]:
        return list(conditions.values())

    def set_condition(
        self,
        condition_type: str,
        status: ConditionStatus,
        reason: str | None = None,
        message: str | None = None,
    ) -> IntegrationCondition:
        """Insert or replace the condition of the given type.

        Args:
            condition_type: Condition type, e.g. ``ServiceAvailable``.
            status: True, False or Unknown.
            reason: Machine-readable reason.
            message: Human-readable message.

        Returns:
            The stored condition.
        """
        condition = IntegrationCondition(
            type=condition_type,
            status=status,
            reason=reason,
            message=message,
            last_update_time=datetime.now(timezone.utc),
        )
        self.conditions[condition_type] = condition
        return condition

    def get_condition(self, condition_type: str) -> IntegrationCondition | None:
        """Return the condition of the given type, if any."""
        return self.conditions.get(condition_type)


class Integration(KubeModel):
    """The Integration custom resource."""

    api_version: Literal["camel.apache.org/v1alpha1"] = "camel.apache.org/v1alpha1"
    kind: Literal["Integration"] = "Integration"
    metadata: ObjectMeta
    spec: IntegrationSpec = Field(default_factory=IntegrationSpec)
    status: IntegrationStatus = Field(default_factory=IntegrationStatus)

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str | None:
        return self.metadata.namespace

    def sources(self) -> list[SourceSpec]:
        """Return the declared sources."""
        return list(self.spec.sources)

    def in_phase(self, *phases: IntegrationPhase) -> bool:
        """Check if the integration is in one of the given phases."""
        return self.status.phase in phases


__all__ = [
    "Integration",
    "IntegrationCondition",
    "IntegrationSpec",
    "IntegrationStatus",
    "SourceSpec",
    "TraitSpec",
]
