"""Pydantic models for the Camel catalog.

The catalog maps URI schemes (``direct``, ``log``, ``undertow``...) to the
artifact providing the component, and flags schemes that expose an inbound
HTTP endpoint when used as a consumer.
"""

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

CAMEL_DEPENDENCY_PREFIX = "camel:"
CAMEL_ARTIFACT_PREFIX = "camel-"


class CamelScheme(BaseModel):
    """A URI scheme provided by a component.

    Attributes:
        id: Scheme name as it appears in endpoint URIs.
        passive: Whether the scheme needs no dedicated dependency.
        http: Whether consuming from the scheme exposes an HTTP endpoint.
    """

    model_config = ConfigDict(extra="forbid")

    id: str
    passive: bool = False
    http: bool = False


class CamelArtifact(BaseModel):
    """A Maven artifact shipping one or more components."""

    model_config = ConfigDict(extra="forbid")

    group_id: str = "org.apache.camel"
    artifact_id: str
    version: str | None = None
    schemes: list[CamelScheme] = Field(default_factory=list)

    def dependency(self) -> str:
        """Return the dependency coordinate for this artifact.

        Camel artifacts use the short ``camel:<name>`` form, anything else
        the ``mvn:group:artifact`` form.
        """
        if self.group_id == "org.apache.camel" and self.artifact_id.startswith(
            CAMEL_ARTIFACT_PREFIX
        ):
            return CAMEL_DEPENDENCY_PREFIX + self.artifact_id.removeprefix(
                CAMEL_ARTIFACT_PREFIX
            )
        return f"mvn:{self.group_id}:{self.artifact_id}"


class CamelCatalog(BaseModel):
    """Read-only index of Camel artifacts by scheme."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    version: str
    runtime_version: str | None = None
    artifacts: dict[str, CamelArtifact] = Field(default_factory=dict)

    _by_scheme: dict[str, tuple[CamelArtifact, CamelScheme]] = PrivateAttr(
        default_factory=dict
    )

    def model_post_init(self, __context: object) -> None:
        for artifact in self.artifacts.values():
            for scheme in artifact.schemes:
                self._by_scheme[scheme.id] = (artifact, scheme)

    def get_artifact_by_scheme(self, scheme: str) -> CamelArtifact | None:
        """Return the artifact providing the given scheme, if known."""
        entry = self._by_scheme.get(scheme)
        return entry[0] if entry else None

    def get_scheme(self, scheme: str) -> CamelScheme | None:
        """Return the scheme definition, if known."""
        entry = self._by_scheme.get(scheme)
        return entry[1] if entry else None

    def dependency_for_scheme(self, scheme: str) -> str | None:
        """Return the dependency coordinate required by a scheme.

        Passive and unknown schemes need no dependency.
        """
        entry = self._by_scheme.get(scheme)
        if entry is None or entry[1].passive:
            return None
        return entry[0].dependency()


__all__ = ["CamelArtifact", "CamelCatalog", "CamelScheme"]
