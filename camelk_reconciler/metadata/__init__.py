"""Integration source metadata extraction."""

from camelk_reconciler.metadata.extract import (
    SourceMetadata,
    extract,
    extract_all,
    uri_scheme,
)

__all__ = ["SourceMetadata", "extract", "extract_all", "uri_scheme"]
