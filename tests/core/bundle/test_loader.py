"""Tests for loading bundles from manifests and YAML descriptions."""

from __future__ import annotations

from pathlib import Path

import pytest

from bundlebridge.core.bundle import PACKAGE_TYPE
from bundlebridge.core.bundle.loader import bundle_from_dict, load_bundle
from bundlebridge.exceptions import ManifestError

BUNDLE_YAML = """\
symbolic_name: com.example.app
version: 1.0.0
inner_classpath: true
exports:
  - name: com.example.api
    version: 1.0.0
    uses: [com.example.spi]
requirements:
  - type: package
    name: org.slf4j
    version: "[1.7,2)"
    resolution: optional
artifacts:
  - uri: com.example.app_1.0.0.jar
    format: packed
  - uri: com.example.app.source_1.0.0.jar
    source: true
execution_environments: [JavaSE-1.8]
"""


class TestBundleFromDict:
    """Tests for the YAML structure."""

    def test_minimal(self) -> None:
        bundle = bundle_from_dict({"symbolic_name": "a"})
        assert bundle.symbolic_name == "a"
        assert bundle.version == "0.0.0"
        assert bundle.exports == []
        assert bundle.has_inner_classpath is False

    def test_numeric_version_is_text(self) -> None:
        assert bundle_from_dict({"symbolic_name": "a", "version": 2}).version == "2"

    def test_missing_symbolic_name(self) -> None:
        with pytest.raises(ManifestError, match="symbolic_name"):
            bundle_from_dict({"version": "1.0"})

    def test_requirement_without_name(self) -> None:
        with pytest.raises(ManifestError, match="Malformed"):
            bundle_from_dict({"symbolic_name": "a", "requirements": [{"type": "package"}]})

    def test_section_with_wrong_shape(self) -> None:
        with pytest.raises(ManifestError):
            bundle_from_dict({"symbolic_name": "a", "exports": ["just-a-name"]})


class TestLoadBundle:
    """Tests for file loading."""

    def test_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bundle.yaml"
        path.write_text(BUNDLE_YAML)
        loaded = load_bundle(path)
        bundle = loaded.bundle
        assert loaded.manifest is None
        assert bundle.symbolic_name == "com.example.app"
        assert bundle.has_inner_classpath is True
        assert bundle.exports[0].uses == frozenset({"com.example.spi"})
        [requirement] = bundle.requirements
        assert requirement.type == PACKAGE_TYPE
        assert requirement.version == "[1.7,2)"
        assert requirement.is_optional
        assert bundle.artifacts[0].format == "packed"
        assert bundle.artifacts[1].source is True
        assert bundle.execution_environments == ["JavaSE-1.8"]

    def test_manifest_keeps_headers(self, manifest_file: Path) -> None:
        loaded = load_bundle(manifest_file)
        assert loaded.bundle.symbolic_name == "com.example.app"
        assert loaded.manifest["Bundle-Version"] == "1.0.0"

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bundle.yaml"
        path.write_text("symbolic_name: [oops\n")
        with pytest.raises(ManifestError, match="Invalid YAML"):
            load_bundle(path)

    def test_yaml_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "bundle.yaml"
        path.write_text("- a\n")
        with pytest.raises(ManifestError, match="mapping"):
            load_bundle(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ManifestError, match="Cannot read"):
            load_bundle(tmp_path / "absent.yaml")
