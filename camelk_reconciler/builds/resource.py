"""Pydantic models for the Build resource.

A Build tracks one attempt to produce a runnable image. Its ``spec.meta``
holds the metadata of the object the build is for; the build pod name and
the build identifier are derived from it.
"""

from typing import Literal

from pydantic import Field

from camelk_reconciler.builds.models import Identifier, Request, Source
from camelk_reconciler.integrations.models import SourceSpec
from camelk_reconciler.kube.models import KubeModel, ObjectMeta
from camelk_reconciler.types import BuildPhase, BuildStrategy


class BuildPlatformSpec(KubeModel):
    build_strategy: BuildStrategy = BuildStrategy.POD


class PlatformSpec(KubeModel):
    build: BuildPlatformSpec = Field(default_factory=BuildPlatformSpec)


class BuildSpec(KubeModel):
    meta: ObjectMeta
    platform: PlatformSpec = Field(default_factory=PlatformSpec)
    image: str | None = None
    sources: list[SourceSpec] = Field(default_factory=list)
    dependencies: list[str] = Field(default_factory=list)


class BuildResourceStatus(KubeModel):
    phase: BuildPhase = BuildPhase.NONE
    image: str | None = None
    error: str | None = None


class Build(KubeModel):
    """The Build custom resource."""

    api_version: Literal["camel.apache.org/v1alpha1"] = "camel.apache.org/v1alpha1"
    kind: Literal["Build"] = "Build"
    metadata: ObjectMeta
    spec: BuildSpec
    status: BuildResourceStatus = Field(default_factory=BuildResourceStatus)

    @property
    def strategy(self) -> BuildStrategy:
        return self.spec.platform.build.build_strategy

    def identifier(self) -> Identifier:
        """Return the identifier of the build."""
        return Identifier(name=self.spec.meta.name, qualifier=self.metadata.name)

    def to_request(self) -> Request:
        """Return the build Request for this resource.

        Raises:
            ValueError: If the build declares no source.
        """
        if not self.spec.sources:
            raise ValueError(f"Build {self.metadata.name} has no source")
        source = self.spec.sources[0]
        return Request(
            identifier=self.identifier(),
            code=Source(
                name=source.name,
                content=source.content,
                language=source.infer_language(),
            ),
            dependencies=tuple(self.spec.dependencies),
        )


def build_pod_name(meta: ObjectMeta) -> str:
    """Return the name of the pod executing a build."""
    return f"camel-k-{meta.name}-builder"


__all__ = [
    "Build",
    "BuildPlatformSpec",
    "BuildResourceStatus",
    "BuildSpec",
    "PlatformSpec",
    "build_pod_name",
]
