"""Catalog loading.

Catalogs are YAML documents shaped like CamelCatalog. When no catalog file
is configured, the built-in catalog below is used.
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from camelk_reconciler.catalog.models import CamelCatalog
from camelk_reconciler.errors import CatalogError

logger = logging.getLogger(__name__)


def _artifact(name: str, *schemes: str, http: tuple[str, ...] = ()) -> dict[str, Any]:
    return {
        "artifact_id": f"camel-{name}",
        "schemes": [{"id": s, "http": s in http} for s in schemes],
    }


DEFAULT_CATALOG_DATA: dict[str, Any] = {
    "version": "2.23.0",
    "runtime_version": "0.2.0",
    "artifacts": {
        "camel-core": {"artifact_id": "camel-core"},
        "camel-direct": _artifact("direct", "direct"),
        "camel-log": _artifact("log", "log"),
        "camel-timer": _artifact("timer", "timer"),
        "camel-seda": _artifact("seda", "seda"),
        "camel-bean": _artifact("bean", "bean", "class"),
        "camel-file": _artifact("file", "file"),
        "camel-http4": _artifact("http4", "http4", "https4"),
        "camel-undertow": _artifact("undertow", "undertow", http=("undertow",)),
        "camel-jetty": _artifact("jetty", "jetty", http=("jetty",)),
        "camel-netty4-http": _artifact(
            "netty4-http", "netty4-http", http=("netty4-http",)
        ),
        "camel-servlet": _artifact("servlet", "servlet", http=("servlet",)),
        "camel-rest": _artifact("rest", "rest", "rest-api", http=("rest", "rest-api")),
        "camel-kafka": _artifact("kafka", "kafka"),
        "camel-amqp": _artifact("amqp", "amqp"),
        "camel-telegram": _artifact("telegram", "telegram"),
    },
}


def default_catalog() -> CamelCatalog:
    """Return the built-in catalog."""
    return CamelCatalog.model_validate(DEFAULT_CATALOG_DATA)


def load_catalog(path: Path) -> CamelCatalog:
    """Load a catalog from a YAML file.

    Args:
        path: Path to the YAML file.

    Returns:
        Validated CamelCatalog.

    Raises:
        CatalogError: If the file is missing, malformed or invalid.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise CatalogError(f"Cannot read catalog {path}: {e}") from e
    except yaml.YAMLError as e:
        raise CatalogError(f"Invalid YAML in catalog {path}: {e}") from e

    if not isinstance(data, dict):
        raise CatalogError(f"Expected a YAML mapping in catalog {path}")

    try:
        catalog = CamelCatalog.model_validate(data)
    except ValidationError as e:
        raise CatalogError(f"Invalid catalog {path}: {e}") from e

    logger.info(
        "Loaded catalog %s (%d artifacts)", catalog.version, len(catalog.artifacts)
    )
    return catalog


def get_catalog(path: Path | None = None) -> CamelCatalog:
    """Load the catalog at ``path``, or the built-in one when unset."""
    if path is None:
        return default_catalog()
    return load_catalog(path)


__all__ = ["DEFAULT_CATALOG_DATA", "default_catalog", "get_catalog", "load_catalog"]
