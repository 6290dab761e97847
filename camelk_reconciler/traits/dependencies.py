"""Dependencies trait.

Computes the full set of dependencies of an integration once, while it is
initializing: the runtime and ``camel:core``, the components referenced by
each source, and the dependencies declared by the user.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from camelk_reconciler.integrations.sources import resolve_integration_sources
from camelk_reconciler.metadata.extract import extract
from camelk_reconciler.traits.base import Trait
from camelk_reconciler.types import IntegrationPhase, Language

if TYPE_CHECKING:
    from camelk_reconciler.traits.environment import Environment

logger = logging.getLogger(__name__)

CAMEL_CORE = "camel:core"
RUNTIME_JVM = "runtime:jvm"

# Additional runtime for languages that are not compiled Java
LANGUAGE_RUNTIMES = {
    Language.GROOVY: "runtime:groovy",
    Language.KOTLIN: "runtime:kotlin",
    Language.JAVASCRIPT: "runtime:js",
    Language.YAML: "runtime:yaml",
}


def normalize_dependency(dependency: str) -> str:
    """Normalize a user-declared dependency.

    ``camel-foo`` is rewritten to the short ``camel:foo`` form; anything
    else is kept as declared.
    """
    dependency = dependency.strip()
    if dependency.startswith("camel-"):
        return "camel:" + dependency.removeprefix("camel-")
    return dependency


class DependenciesTrait(Trait):
    """Resolve integration dependencies into ``status.dependencies``."""

    id = "dependencies"

    def configure(self, env: Environment) -> bool:
        if self.enabled is False:
            return False
        return env.integration_in_phase(IntegrationPhase.INITIALIZATION)

    def apply(self, env: Environment) -> None:
        dependencies: set[str] = set()

        sources = resolve_integration_sources(
            env.store, env.integration, env.resources, env.default_namespace
        )
        for source in sources:
            meta = extract(env.catalog, source)

            language = source.infer_language()
            if language in LANGUAGE_RUNTIMES:
                dependencies.add(LANGUAGE_RUNTIMES[language])

            # JVM runtime and camel-core are always required
            dependencies.add(RUNTIME_JVM)
            dependencies.add(CAMEL_CORE)
            dependencies |= meta.dependencies

        dependencies.update(
            normalize_dependency(d) for d in env.integration.spec.dependencies
        )

        env.integration.status.dependencies = sorted(dependencies)
        logger.info(
            "Integration %s requires %d dependencies",
            env.integration.name,
            len(dependencies),
        )


__all__ = ["DependenciesTrait", "normalize_dependency"]
