"""Resource loading from YAML files.

Integration and Build resources are read from the same manifest format
used on the cluster, then validated with their pydantic models.
"""

from pathlib import Path
from typing import Any

import yaml

from camelk_reconciler.builds.resource import Build
from camelk_reconciler.integrations.models import Integration


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and return its contents as a dict.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed YAML content as a dictionary.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the file is not valid YAML.
        ValueError: If the document is not a mapping.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a YAML mapping, got {type(data).__name__}")
    return data


def load_integration(path: Path) -> Integration:
    """Load and validate an Integration manifest.

    Raises:
        pydantic.ValidationError: If the manifest does not match the model.
    """
    return Integration.model_validate(load_yaml(path))


def load_build(path: Path) -> Build:
    """Load and validate a Build manifest.

    Raises:
        pydantic.ValidationError: If the manifest does not match the model.
    """
    return Build.model_validate(load_yaml(path))


def dump_yaml(documents: list[dict[str, object]]) -> str:
    """Render manifests as a multi-document YAML string."""
    return yaml.safe_dump_all(documents, sort_keys=False)


__all__ = ["dump_yaml", "load_build", "load_integration", "load_yaml"]
