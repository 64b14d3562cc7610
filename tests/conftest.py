"""Shared fixtures for bundlebridge tests."""

from __future__ import annotations

import pathlib

import pytest

from bundlebridge.core.bundle import (
    PACKAGE_TYPE,
    BundleInfo,
    BundleRequirement,
    ExecutionEnvironmentProfile,
    ExportPackage,
    StaticProfileProvider,
)

SAMPLE_MANIFEST = (
    "Manifest-Version: 1.0\n"
    "Bundle-ManifestVersion: 2\n"
    "Bundle-SymbolicName: com.example.app;singleton:=true\n"
    "Bundle-Version: 1.0.0\n"
    "Export-Package: com.example.api;version=\"1.0.0\";uses:=\"com.exampl\n"
    " e.spi\",com.example.spi;version=\"1.0.0\"\n"
    "Import-Package: org.slf4j;version=\"[1.7,2)\",javax.inject;resolution:=op\n"
    " tional\n"
    "Require-Bundle: org.example.core;bundle-version=\"2.1\"\n"
    "Bundle-RequiredExecutionEnvironment: JavaSE-1.8\n"
    "\n"
    "Name: com/example/api/Api.class\n"
    "SHA-256-Digest: abc\n"
)


@pytest.fixture
def simple_bundle() -> BundleInfo:
    """``com.example;1.0.0`` exporting ``p`` and requiring ``q`` in ``[1,2)``."""
    return BundleInfo(
        symbolic_name="com.example",
        version="1.0.0",
        exports=[ExportPackage("p", "1.0.0")],
        requirements=[BundleRequirement(PACKAGE_TYPE, "q", "[1,2)")],
    )


@pytest.fixture
def java8_profiles() -> StaticProfileProvider:
    return StaticProfileProvider(
        [ExecutionEnvironmentProfile("JavaSE-1.8", frozenset({"javax.xml", "org.w3c.dom"}))]
    )


@pytest.fixture
def manifest_file(tmp_path: pathlib.Path) -> pathlib.Path:
    """A MANIFEST.MF for a small bundle with exports, imports and an environment."""
    path = tmp_path / "MANIFEST.MF"
    path.write_text(SAMPLE_MANIFEST)
    return path


@pytest.fixture
def profiles_file(tmp_path: pathlib.Path) -> pathlib.Path:
    path = tmp_path / "profiles.yaml"
    path.write_text(
        "JavaSE-1.7:\n"
        "  packages: [javax.xml, org.w3c.dom]\n"
        "JavaSE-1.8:\n"
        "  extends: JavaSE-1.7\n"
        "  packages: [javax.script]\n"
    )
    return path
