"""Shared fixtures for CLI tests.

Provides bundle descriptions (YAML and manifest), profile and settings
files written to temporary directories.
"""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def bundle_yaml(tmp_path: Path) -> Path:
    """A YAML bundle with one export, one import, one artifact and an environment."""
    path = tmp_path / "bundle.yaml"
    path.write_text(
        "symbolic_name: com.example.app\n"
        "version: 1.0.0\n"
        "exports:\n"
        "  - name: com.example.api\n"
        "    version: 1.0.0\n"
        "requirements:\n"
        "  - type: package\n"
        "    name: org.slf4j\n"
        "    version: \"[1.7,2)\"\n"
        "artifacts:\n"
        "  - uri: com.example.app_1.0.0.jar\n"
        "execution_environments: [JavaSE-1.8]\n"
    )
    return path


@pytest.fixture
def settings_file(tmp_path: Path) -> Path:
    path = tmp_path / "settings.yaml"
    path.write_text(
        "status: release\n"
        "profiles:\n"
        "  JavaSE-1.8:\n"
        "    packages: [javax.xml]\n"
    )
    return path


@pytest.fixture
def broken_manifest(tmp_path: Path) -> Path:
    """A manifest without Bundle-SymbolicName."""
    path = tmp_path / "broken.MF"
    path.write_text("Manifest-Version: 1.0\nBundle-Version: 1.0.0\n")
    return path
