"""Source metadata extraction.

Inspects integration source text to find the endpoint URIs it consumes
from and produces to, the component dependencies those URIs imply, and
whether the integration exposes an inbound HTTP endpoint.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from camelk_reconciler.types import Language

if TYPE_CHECKING:
    from camelk_reconciler.catalog.models import CamelCatalog
    from camelk_reconciler.integrations.models import SourceSpec

_DSL_PATTERN = re.compile(
    r"\b(from|to|toD|toF|wireTap|enrich|pollEnrich)\s*\(\s*[\"']([^\"']+)[\"']"
)
_XML_PATTERN = re.compile(
    r"<(from|to|toD|wireTap|enrich)\b[^>]*?\buri\s*=\s*\"([^\"]+)\""
)
_YAML_PATTERN = re.compile(
    r"^\s*-?\s*(from|to)\s*:\s*(?:\n\s*uri\s*:\s*)?[\"']?([\w+.\-]+:[^\s\"']+)",
    re.MULTILINE,
)

_PATTERNS = {
    Language.JAVA: _DSL_PATTERN,
    Language.GROOVY: _DSL_PATTERN,
    Language.JAVASCRIPT: _DSL_PATTERN,
    Language.KOTLIN: _DSL_PATTERN,
    Language.XML: _XML_PATTERN,
    Language.YAML: _YAML_PATTERN,
}

# Rest DSL definitions expose an HTTP consumer without a from() URI
_REST_DSL_PATTERN = re.compile(r"\brest\s*\(")
_REST_PATTERNS = {
    Language.JAVA: _REST_DSL_PATTERN,
    Language.GROOVY: _REST_DSL_PATTERN,
    Language.JAVASCRIPT: _REST_DSL_PATTERN,
    Language.KOTLIN: _REST_DSL_PATTERN,
    Language.XML: re.compile(r"<rest\b"),
    Language.YAML: re.compile(r"^\s*-?\s*rest\s*:", re.MULTILINE),
}


@dataclass
class SourceMetadata:
    """Metadata extracted from one or more sources.

    Attributes:
        from_uris: Endpoint URIs the integration consumes from.
        to_uris: Endpoint URIs the integration produces to.
        dependencies: Dependency coordinates implied by the URIs.
        requires_http_service: Whether a consumer exposes an HTTP endpoint.
    """

    from_uris: list[str] = field(default_factory=list)
    to_uris: list[str] = field(default_factory=list)
    dependencies: set[str] = field(default_factory=set)
    requires_http_service: bool = False


def uri_scheme(uri: str) -> str:
    """Return the scheme of an endpoint URI (``direct:foo`` -> ``direct``)."""
    return uri.split(":", 1)[0]


def extract(catalog: CamelCatalog, source: SourceSpec) -> SourceMetadata:
    """Extract metadata from a single source.

    Sources of unknown language are treated as Java DSL. A rest DSL
    definition marks the source as requiring an HTTP service.

    Args:
        catalog: Catalog used to resolve schemes.
        source: Source with inline content.

    Returns:
        SourceMetadata for the source.
    """
    language = source.infer_language() or Language.JAVA
    pattern = _PATTERNS.get(language, _DSL_PATTERN)
    meta = SourceMetadata()

    for verb, uri in pattern.findall(source.content):
        if verb == "from":
            meta.from_uris.append(uri)
        else:
            meta.to_uris.append(uri)

    for uri in meta.from_uris + meta.to_uris:
        dependency = catalog.dependency_for_scheme(uri_scheme(uri))
        if dependency is not None:
            meta.dependencies.add(dependency)

    for uri in meta.from_uris:
        scheme = catalog.get_scheme(uri_scheme(uri))
        if scheme is not None and scheme.http:
            meta.requires_http_service = True
            break

    rest = _REST_PATTERNS.get(language, _REST_DSL_PATTERN)
    if rest.search(source.content):
        meta.requires_http_service = True

    return meta


def extract_all(catalog: CamelCatalog, sources: Iterable[SourceSpec]) -> SourceMetadata:
    """Extract and merge metadata from several sources."""
    merged = SourceMetadata()
    for source in sources:
        meta = extract(catalog, source)
        merged.from_uris.extend(meta.from_uris)
        merged.to_uris.extend(meta.to_uris)
        merged.dependencies |= meta.dependencies
        merged.requires_http_service = (
            merged.requires_http_service or meta.requires_http_service
        )
    return merged


__all__ = ["SourceMetadata", "extract", "extract_all", "uri_scheme"]
