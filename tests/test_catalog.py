"""Tests for the Camel catalog."""

from pathlib import Path

import pytest
import yaml

from camelk_reconciler.catalog.io import default_catalog, get_catalog, load_catalog
from camelk_reconciler.catalog.models import CamelArtifact
from camelk_reconciler.errors import CatalogError


class TestDefaultCatalog:
    """Test the built-in catalog."""

    def test_scheme_dependencies(self) -> None:
        """Schemes should resolve to short camel dependencies."""
        catalog = default_catalog()
        assert catalog.dependency_for_scheme("direct") == "camel:direct"
        assert catalog.dependency_for_scheme("log") == "camel:log"
        assert catalog.dependency_for_scheme("undertow") == "camel:undertow"

    def test_unknown_scheme(self) -> None:
        """Unknown schemes should resolve to nothing."""
        catalog = default_catalog()
        assert catalog.get_artifact_by_scheme("nope") is None
        assert catalog.get_scheme("nope") is None
        assert catalog.dependency_for_scheme("nope") is None

    def test_http_schemes(self) -> None:
        """HTTP consumer schemes should be flagged."""
        catalog = default_catalog()
        assert catalog.get_scheme("undertow").http is True
        assert catalog.get_scheme("rest").http is True
        assert catalog.get_scheme("direct").http is False
        assert catalog.get_scheme("http4").http is False


class TestCamelArtifact:
    """Test dependency coordinates of artifacts."""

    def test_camel_artifact(self) -> None:
        """Camel artifacts should use the camel: form."""
        assert CamelArtifact(artifact_id="camel-kafka").dependency() == "camel:kafka"

    def test_third_party_artifact(self) -> None:
        """Other artifacts should use the mvn: form."""
        artifact = CamelArtifact(group_id="org.foo", artifact_id="bar")
        assert artifact.dependency() == "mvn:org.foo:bar"


class TestLoadCatalog:
    """Test loading catalogs from YAML."""

    def test_load_catalog(self, tmp_path: Path) -> None:
        """A valid YAML catalog should be loaded."""
        path = tmp_path / "catalog.yaml"
        path.write_text(
            yaml.safe_dump(
                {
                    "version": "3.0.0",
                    "artifacts": {
                        "camel-mine": {
                            "artifact_id": "camel-mine",
                            "schemes": [{"id": "mine", "http": True}],
                        }
                    },
                }
            )
        )

        catalog = load_catalog(path)
        assert catalog.version == "3.0.0"
        assert catalog.dependency_for_scheme("mine") == "camel:mine"
        assert catalog.get_scheme("mine").http is True

    def test_passive_scheme_has_no_dependency(self, tmp_path: Path) -> None:
        """Passive schemes should not add dependencies."""
        path = tmp_path / "catalog.yaml"
        path.write_text(
            yaml.safe_dump(
                {
                    "version": "3.0.0",
                    "artifacts": {
                        "camel-core": {
                            "artifact_id": "camel-core",
                            "schemes": [{"id": "ref", "passive": True}],
                        }
                    },
                }
            )
        )
        assert load_catalog(path).dependency_for_scheme("ref") is None

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file should raise CatalogError."""
        with pytest.raises(CatalogError):
            load_catalog(tmp_path / "missing.yaml")

    def test_invalid_catalog(self, tmp_path: Path) -> None:
        """Invalid content should raise CatalogError."""
        path = tmp_path / "catalog.yaml"
        path.write_text("artifacts: []\n")
        with pytest.raises(CatalogError) as exc_info:
            load_catalog(path)
        assert exc_info.value.code == "catalog_error"

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        """A YAML list should raise CatalogError."""
        path = tmp_path / "catalog.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(CatalogError):
            load_catalog(path)

    def test_get_catalog_default(self) -> None:
        """get_catalog without a path should return the built-in catalog."""
        assert get_catalog(None) == default_catalog()
