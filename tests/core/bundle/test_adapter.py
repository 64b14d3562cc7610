"""Tests for the bundle-to-descriptor translator.

Verifies:
    - Fixed configurations and use-configurations are registered.
    - Requirement edges and their configuration routing.
    - Artifact layout, URI resolution and the skip-without-base contract.
    - Execution environment exclusions and missing profiles.
    - Manifest attributes copied into extra-info.
    - The tagged-result entry point.
"""

from __future__ import annotations

import pytest

from bundlebridge.core.bundle import (
    BUNDLE_TYPE,
    EXECUTION_ENVIRONMENT_TYPE,
    PACKAGE_TYPE,
    SERVICE_TYPE,
    BundleArtifact,
    BundleInfo,
    BundleRequirement,
    ExportPackage,
    StaticProfileProvider,
    TranslationStatus,
    as_mrid,
    build_artifact,
    configuration_names,
    to_module_descriptor,
    translate,
)
from bundlebridge.core.module import ModuleId, ModuleRevisionId
from bundlebridge.exceptions import (
    InvalidFormatError,
    MalformedURLError,
    ProfileNotFoundError,
)

BASE = "https://repo.example/bundles/"


def _edge(md, name):
    matches = [dd for dd in md.dependencies if dd.dependency_revision_id.name == name]
    assert len(matches) == 1
    return matches[0]


class TestIdentityAndConfigurations:
    """Tests for identity, fixed and export configurations."""

    def test_identity(self, simple_bundle: BundleInfo) -> None:
        md = to_module_descriptor(simple_bundle)
        assert md.module_revision_id == ModuleRevisionId(BUNDLE_TYPE, "com.example", None, "1.0.0")
        assert md.publication_date is not None

    def test_osgi_namespace_registered(self, simple_bundle: BundleInfo) -> None:
        md = to_module_descriptor(simple_bundle)
        assert md.extra_attribute_namespaces == {"o": "http://ant.apache.org/ivy/osgi"}

    def test_fixed_configurations(self, simple_bundle: BundleInfo) -> None:
        md = to_module_descriptor(simple_bundle)
        assert md.configuration_names[:3] == ["default", "optional", "transitive-optional"]
        assert md.get_configuration("optional").extends == ("default",)
        assert md.get_configuration("transitive-optional").extends == ("optional",)

    def test_export_configuration_and_extra_info(self, simple_bundle: BundleInfo) -> None:
        md = to_module_descriptor(simple_bundle)
        assert md.get_configuration("use_p").extends == ("default",)
        assert md.get_extra_info("_osgi_export_p") == "1.0.0"

    def test_export_uses_are_extended(self) -> None:
        bundle = BundleInfo(
            "b", "1.0",
            exports=[ExportPackage("a", "1.0", frozenset({"c", "b"})), ExportPackage("b")],
        )
        md = to_module_descriptor(bundle)
        assert md.get_configuration("use_a").extends == ("use_b", "use_c", "default")
        assert md.get_extra_info("_osgi_export_b") == "0.0.0"

    def test_repeated_export_keeps_first_use_configuration(self) -> None:
        bundle = BundleInfo(
            "b", "1.0",
            exports=[
                ExportPackage("p", "1.0", frozenset({"a"})),
                ExportPackage("p", "2.0", frozenset({"c"})),
            ],
        )
        md = to_module_descriptor(bundle)
        assert md.get_configuration("use_p").extends == ("use_a", "default")
        assert md.configuration_names.count("use_p") == 1
        assert [i.content for i in md.extra_infos if i.name == "_osgi_export_p"] == ["1.0", "2.0"]

    def test_uses_cycle_is_kept(self) -> None:
        bundle = BundleInfo(
            "b", "1.0",
            exports=[
                ExportPackage("x", uses=frozenset({"y"})),
                ExportPackage("y", uses=frozenset({"x"})),
            ],
        )
        md = to_module_descriptor(bundle)
        assert md.get_configuration("use_x").extends == ("use_y", "default")
        assert md.get_configuration("use_y").extends == ("use_x", "default")

    def test_configuration_names(self, simple_bundle: BundleInfo) -> None:
        assert configuration_names(simple_bundle) == [
            "default", "optional", "transitive-optional", "use_p",
        ]


class TestRequirements:
    """Tests for dependency edges."""

    def test_mandatory_package_requirement(self, simple_bundle: BundleInfo) -> None:
        md = to_module_descriptor(simple_bundle)
        assert {"default", "optional", "transitive-optional", "use_p"} <= set(md.configuration_names)
        assert len(md.dependencies) == 1
        dd = md.dependencies[0]
        assert dd.dependency_revision_id == ModuleRevisionId(PACKAGE_TYPE, "q", None, "[1,2)")
        assert dd.configuration_mappings == [("use_q", "use_q"), ("default", "use_q")]

    def test_required_package_gets_use_configuration(self, simple_bundle: BundleInfo) -> None:
        md = to_module_descriptor(simple_bundle)
        conf = md.get_configuration("use_q")
        assert conf is not None
        assert conf.extends == ("default",)

    def test_optional_package_requirement(self) -> None:
        bundle = BundleInfo(
            "com.example", "1.0.0",
            exports=[ExportPackage("p", "1.0.0")],
            requirements=[BundleRequirement(PACKAGE_TYPE, "q", "[1,2)", "optional")],
        )
        dd = to_module_descriptor(bundle).dependencies[0]
        assert ("optional", "use_q") in dd.configuration_mappings
        assert ("transitive-optional", "transitive-optional") in dd.configuration_mappings
        assert dd.get_dependency_configurations("default") == []

    def test_bundle_requirement_routes_through_default(self) -> None:
        bundle = BundleInfo("a", "1", requirements=[BundleRequirement(BUNDLE_TYPE, "core", "[2,3)")])
        md = to_module_descriptor(bundle)
        dd = _edge(md, "core")
        assert dd.dependency_revision_id.organisation == BUNDLE_TYPE
        assert dd.configuration_mappings == [("default", "default")]
        assert md.get_configuration("use_core") is None

    def test_optional_bundle_requirement(self) -> None:
        bundle = BundleInfo(
            "a", "1", requirements=[BundleRequirement(SERVICE_TYPE, "log", None, "optional")]
        )
        dd = to_module_descriptor(bundle).dependencies[0]
        assert dd.configuration_mappings == [
            ("optional", "default"),
            ("transitive-optional", "transitive-optional"),
        ]

    def test_self_satisfied_package_has_no_edge(self) -> None:
        bundle = BundleInfo(
            "a", "1",
            exports=[ExportPackage("p")],
            requirements=[BundleRequirement(PACKAGE_TYPE, "p", "[1,2)")],
        )
        assert to_module_descriptor(bundle).dependencies == []

    def test_same_name_bundle_requirement_still_has_edge(self) -> None:
        bundle = BundleInfo(
            "a", "1",
            exports=[ExportPackage("p")],
            requirements=[BundleRequirement(BUNDLE_TYPE, "p")],
        )
        assert len(to_module_descriptor(bundle).dependencies) == 1

    def test_execution_environment_requirement_has_no_edge(self) -> None:
        bundle = BundleInfo(
            "a", "1", requirements=[BundleRequirement(EXECUTION_ENVIRONMENT_TYPE, "JavaSE-1.8")]
        )
        assert to_module_descriptor(bundle).dependencies == []

    def test_missing_version_means_any(self) -> None:
        bundle = BundleInfo("a", "1", requirements=[BundleRequirement(PACKAGE_TYPE, "q")])
        dd = to_module_descriptor(bundle).dependencies[0]
        assert dd.dependency_revision_id.revision == "[0,)"

    def test_one_edge_per_requirement(self) -> None:
        bundle = BundleInfo(
            "a", "1",
            requirements=[
                BundleRequirement(PACKAGE_TYPE, "q"),
                BundleRequirement(PACKAGE_TYPE, "r", resolution="optional"),
                BundleRequirement(BUNDLE_TYPE, "s"),
            ],
        )
        md = to_module_descriptor(bundle)
        assert [dd.dependency_revision_id.name for dd in md.dependencies] == ["q", "r", "s"]

    def test_as_mrid(self) -> None:
        assert as_mrid(PACKAGE_TYPE, "q", None) == ModuleRevisionId("package", "q", None, "[0,)")


class TestArtifacts:
    """Tests for artifact translation."""

    def test_skipped_without_base_uri(self) -> None:
        bundle = BundleInfo("a", "1", artifacts=[BundleArtifact("a_1.jar")])
        assert to_module_descriptor(bundle).all_artifacts == []

    def test_relative_uri_resolved_against_base(self) -> None:
        bundle = BundleInfo("a", "1", artifacts=[BundleArtifact("a_1.jar")])
        md = to_module_descriptor(bundle, BASE)
        [artifact] = md.get_artifacts("default")
        assert artifact.url == "https://repo.example/bundles/a_1.jar"
        assert (artifact.name, artifact.type, artifact.ext) == ("a", "jar", "jar")
        assert artifact.extra_attributes == {}

    def test_absolute_uri_kept(self) -> None:
        bundle = BundleInfo("a", "1", artifacts=[BundleArtifact("file:///tmp/a.jar")])
        [artifact] = to_module_descriptor(bundle, BASE).get_artifacts("default")
        assert artifact.url == "file:///tmp/a.jar"

    def test_source_artifact(self) -> None:
        bundle = BundleInfo(
            "a", "1", has_inner_classpath=True,
            artifacts=[BundleArtifact("a.source_1.jar", source=True)],
        )
        [artifact] = to_module_descriptor(bundle, BASE).get_artifacts("default")
        assert artifact.type == "source"
        assert artifact.get_extra_attribute("packaging") is None

    def test_inner_classpath_packaging(self) -> None:
        bundle = BundleInfo("a", "1", has_inner_classpath=True, artifacts=[BundleArtifact("a.jar")])
        [artifact] = to_module_descriptor(bundle, BASE).get_artifacts("default")
        assert artifact.get_extra_attribute("packaging") == "bundle"

    def test_packed_artifact(self) -> None:
        bundle = BundleInfo("a", "1", artifacts=[BundleArtifact("a.jar.pack.gz", "packed")])
        [artifact] = to_module_descriptor(bundle, BASE).get_artifacts("default")
        assert artifact.ext == "jar.pack.gz"
        assert artifact.get_extra_attribute("packaging") == "pack200"

    def test_packed_inner_classpath_artifact(self) -> None:
        bundle = BundleInfo(
            "a", "1", has_inner_classpath=True,
            artifacts=[BundleArtifact("a.jar.pack.gz", "packed")],
        )
        [artifact] = to_module_descriptor(bundle, BASE).get_artifacts("default")
        assert artifact.get_extra_attribute("packaging") == "bundle,pack200"

    def test_ivy_uri_is_decoded(self) -> None:
        bundle = BundleInfo(
            "a", "1", artifacts=[BundleArtifact("ivy:///org.other/lib?rev=2.0&type=jar&ext=jar")]
        )
        [artifact] = to_module_descriptor(bundle, BASE).get_artifacts("default")
        assert artifact.module_revision_id == ModuleRevisionId("org.other", "lib", None, "2.0")
        assert artifact.url is None

    def test_artifact_without_uri_is_skipped(self) -> None:
        bundle = BundleInfo("a", "1", artifacts=[BundleArtifact(None)])
        assert to_module_descriptor(bundle, BASE).all_artifacts == []

    def test_malformed_ivy_uri(self) -> None:
        bundle = BundleInfo("a", "1", artifacts=[BundleArtifact("ivy:///orgA")])
        with pytest.raises(InvalidFormatError):
            to_module_descriptor(bundle, BASE)

    def test_relative_base_is_rejected(self) -> None:
        mrid = as_mrid(BUNDLE_TYPE, "a", "1")
        with pytest.raises(MalformedURLError):
            build_artifact(mrid, "relative/dir/", "a.jar", "jar", "jar", None)

    def test_unparseable_uri_is_rejected(self) -> None:
        mrid = as_mrid(BUNDLE_TYPE, "a", "1")
        with pytest.raises(MalformedURLError):
            build_artifact(mrid, BASE, "http://[broken/a.jar", "jar", "jar", None)


class TestExecutionEnvironments:
    """Tests for execution environment exclusions."""

    def test_profile_packages_are_excluded(self, java8_profiles: StaticProfileProvider) -> None:
        bundle = BundleInfo("a", "1", exports=[ExportPackage("p")], execution_environments=["JavaSE-1.8"])
        md = to_module_descriptor(bundle, profile_provider=java8_profiles)
        excluded = [rule.artifact_id.module_id for rule in md.exclude_rules]
        assert excluded == [ModuleId("package", "javax.xml"), ModuleId("package", "org.w3c.dom")]
        for rule in md.exclude_rules:
            assert rule.configurations == md.configuration_names
            assert rule.matcher == "exactOrRegexp"
            assert rule.artifact_id.name == "*"

    def test_missing_profile(self, java8_profiles: StaticProfileProvider) -> None:
        bundle = BundleInfo("a", "1", execution_environments=["JavaSE-1.8", "J2SE-1.4"])
        with pytest.raises(ProfileNotFoundError) as excinfo:
            to_module_descriptor(bundle, profile_provider=java8_profiles)
        assert excinfo.value.environment == "J2SE-1.4"
        assert "J2SE-1.4" in str(excinfo.value)

    def test_no_provider_no_exclusions(self) -> None:
        bundle = BundleInfo("a", "1", execution_environments=["JavaSE-1.8"])
        assert to_module_descriptor(bundle).exclude_rules == []


class TestManifestAttributes:
    """Tests for embedded manifest attributes."""

    def test_mapping_copied(self, simple_bundle: BundleInfo) -> None:
        md = to_module_descriptor(simple_bundle, manifest={"Bundle-Vendor": "Example"})
        assert md.get_extra_info("Bundle-Vendor") == "Example"

    def test_duplicate_keys_preserved(self, simple_bundle: BundleInfo) -> None:
        md = to_module_descriptor(simple_bundle, manifest=[("X", "1"), ("X", "2")])
        assert [i.content for i in md.extra_infos if i.name == "X"] == ["1", "2"]

    def test_exports_come_before_manifest(self, simple_bundle: BundleInfo) -> None:
        md = to_module_descriptor(simple_bundle, manifest={"A": "b"})
        assert [i.name for i in md.extra_infos] == ["_osgi_export_p", "A"]


class TestTranslate:
    """Tests for the tagged-result entry point."""

    def test_ok(self, simple_bundle: BundleInfo) -> None:
        result = translate(simple_bundle)
        assert result.success
        assert result.status is TranslationStatus.OK
        assert result.descriptor is not None

    def test_profile_not_found(self) -> None:
        bundle = BundleInfo("a", "1", execution_environments=["JavaSE-1.8"])
        result = translate(bundle, profile_provider=StaticProfileProvider())
        assert not result.success
        assert result.status is TranslationStatus.PROFILE_NOT_FOUND
        assert result.descriptor is None
        assert "JavaSE-1.8" in result.error

    def test_malformed_input(self) -> None:
        bundle = BundleInfo("a", "1", artifacts=[BundleArtifact("ivy:org/mod")])
        result = translate(bundle, BASE)
        assert result.status is TranslationStatus.MALFORMED_INPUT
