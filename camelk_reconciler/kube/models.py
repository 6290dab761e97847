"""Pydantic models for the cluster objects handled by the reconciler.

Only the fields the traits and actions read or write are modelled. Field
names are snake_case in Python and camelCase in rendered manifests.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from camelk_reconciler.types import PodPhase


class KubeModel(BaseModel):
    """Base class for cluster object models."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_manifest(self) -> dict[str, object]:
        """Render the object as a manifest dictionary."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class ObjectMeta(KubeModel):
    """Standard object metadata."""

    name: str
    namespace: str | None = None
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)


class ServicePort(KubeModel):
    """A port exposed by a Service.

    ``target_port`` may be a container port number or a container port name.
    The port name is only required when a Service exposes several ports.
    """

    name: str | None = None
    port: int
    protocol: str = "TCP"
    target_port: int | str


class ServiceSpec(KubeModel):
    ports: list[ServicePort] = Field(default_factory=list)
    selector: dict[str, str] = Field(default_factory=dict)


class Service(KubeModel):
    api_version: Literal["v1"] = "v1"
    kind: Literal["Service"] = "Service"
    metadata: ObjectMeta
    spec: ServiceSpec = Field(default_factory=ServiceSpec)


class EnvVar(KubeModel):
    name: str
    value: str


class ContainerPort(KubeModel):
    name: str | None = None
    container_port: int
    protocol: str = "TCP"


class Container(KubeModel):
    name: str
    image: str | None = None
    env: list[EnvVar] = Field(default_factory=list)
    ports: list[ContainerPort] = Field(default_factory=list)


class PodSpec(KubeModel):
    containers: list[Container] = Field(default_factory=list)


class PodTemplateSpec(KubeModel):
    metadata: ObjectMeta | None = None
    spec: PodSpec = Field(default_factory=PodSpec)


class LabelSelector(KubeModel):
    match_labels: dict[str, str] = Field(default_factory=dict)


class DeploymentSpec(KubeModel):
    replicas: int | None = None
    selector: LabelSelector = Field(default_factory=LabelSelector)
    template: PodTemplateSpec = Field(default_factory=PodTemplateSpec)


class Deployment(KubeModel):
    api_version: Literal["apps/v1"] = "apps/v1"
    kind: Literal["Deployment"] = "Deployment"
    metadata: ObjectMeta
    spec: DeploymentSpec = Field(default_factory=DeploymentSpec)


class ConfigMap(KubeModel):
    api_version: Literal["v1"] = "v1"
    kind: Literal["ConfigMap"] = "ConfigMap"
    metadata: ObjectMeta
    data: dict[str, str] = Field(default_factory=dict)


class PodStatus(KubeModel):
    phase: PodPhase | None = None


class Pod(KubeModel):
    """A pod as returned by the object store; only its phase is consumed."""

    api_version: Literal["v1"] = "v1"
    kind: Literal["Pod"] = "Pod"
    metadata: ObjectMeta
    status: PodStatus = Field(default_factory=PodStatus)


KubeObject = Service | Deployment | ConfigMap | Pod

KINDS: dict[str, type[KubeModel]] = {
    "Service": Service,
    "Deployment": Deployment,
    "ConfigMap": ConfigMap,
    "Pod": Pod,
}


__all__ = [
    "KINDS",
    "ConfigMap",
    "Container",
    "ContainerPort",
    "Deployment",
    "DeploymentSpec",
    "EnvVar",
    "KubeModel",
    "KubeObject",
    "LabelSelector",
    "ObjectMeta",
    "Pod",
    "PodSpec",
    "PodStatus",
    "PodTemplateSpec",
    "Service",
    "ServicePort",
    "ServiceSpec",
]
