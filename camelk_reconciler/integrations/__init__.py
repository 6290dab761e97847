"""Integration resource model and source resolution."""

from camelk_reconciler.integrations.models import (
    Integration,
    IntegrationCondition,
    IntegrationSpec,
    IntegrationStatus,
    SourceSpec,
    TraitSpec,
)
from camelk_reconciler.integrations.sources import resolve_integration_sources

__all__ = [
    "Integration",
    "IntegrationCondition",
    "IntegrationSpec",
    "IntegrationStatus",
    "SourceSpec",
    "TraitSpec",
    "resolve_integration_sources",
]
