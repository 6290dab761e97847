"""Camel catalog: scheme to dependency metadata."""

from camelk_reconciler.catalog.io import default_catalog, get_catalog, load_catalog
from camelk_reconciler.catalog.models import CamelArtifact, CamelCatalog, CamelScheme

__all__ = [
    "CamelArtifact",
    "CamelCatalog",
    "CamelScheme",
    "default_catalog",
    "get_catalog",
    "load_catalog",
]
