"""Translation of bundle metadata into native module descriptors.

A bundle speaks in packages: it exports some, imports others, and each
export may *use* further packages in its public API. The native model
speaks in configurations and dependency edges. The translation encodes the
package graph as a configuration graph:

- every exported or required package ``p`` gets a ``use_p`` configuration;
- ``use_p`` extends ``use_q`` for every package ``q`` that ``p`` uses, and
  always extends ``default``;
- a dependency on package ``p`` routes ``use_p -> use_p`` so that consumers
  of ``p`` transitively pull in whatever ``p`` uses.

Optional requirements are routed through ``optional`` and
``transitive-optional`` instead of ``default``, so that optionality is not
promoted into a hard requirement further down the graph.

Requirements satisfied by the bundle's own exports, and execution
environment requirements, produce no edge. Packages provided by a required
execution environment are excluded from every configuration.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from urllib.parse import urljoin, urlsplit

from bundlebridge.core.bundle import ivy_uri
from bundlebridge.core.bundle.models import (
    BUNDLE_TYPE,
    EXECUTION_ENVIRONMENT_TYPE,
    PACKAGE_TYPE,
    PACKED_FORMAT,
    BundleArtifact,
    BundleInfo,
    BundleRequirement,
)
from bundlebridge.core.bundle.profiles import ExecutionEnvironmentProfile, ProfileProvider
from bundlebridge.core.module import (
    ANY_EXPRESSION,
    CONF_NAME_DEFAULT,
    CONF_NAME_OPTIONAL,
    CONF_NAME_TRANSITIVE_OPTIONAL,
    Artifact,
    ArtifactId,
    DependencyDescriptor,
    ExcludeRule,
    ModuleDescriptor,
    ModuleId,
    ModuleRevisionId,
    default_configuration,
    optional_configuration,
    transitive_optional_configuration,
    use_configuration,
    use_configuration_name,
)
from bundlebridge.exceptions import (
    InvalidFormatError,
    MalformedURLError,
    ProfileNotFoundError,
)

logger = logging.getLogger(__name__)

EXTRA_INFO_EXPORT_PREFIX = "_osgi_export_"

OSGI_NAMESPACE_PREFIX = "o"
OSGI_NAMESPACE = "http://ant.apache.org/ivy/osgi"

ANY_VERSION_RANGE = "[0,)"

ManifestAttributes = Mapping[str, str] | Iterable[tuple[str, str]]


def as_mrid(type_: str, name: str, version: str | None) -> ModuleRevisionId:
    """Synthetic identity of a bundle-level entity; no version means any version."""
    return ModuleRevisionId(type_, name, None, ANY_VERSION_RANGE if version is None else version)


def configuration_names(bundle: BundleInfo) -> list[str]:
    """Names of the configurations a translated *bundle* is known to carry."""
    names = [CONF_NAME_DEFAULT, CONF_NAME_OPTIONAL, CONF_NAME_TRANSITIVE_OPTIONAL]
    names.extend(use_configuration_name(export.name) for export in bundle.exports)
    return names


def to_module_descriptor(
    bundle: BundleInfo,
    base_uri: str | None = None,
    manifest: ManifestAttributes | None = None,
    profile_provider: ProfileProvider | None = None,
) -> ModuleDescriptor:
    """Translate a bundle into a module descriptor.

    Args:
        bundle: The bundle to translate.
        base_uri: Location relative artifact URIs are resolved against.
            When None, artifact translation is skipped entirely and the
            descriptor carries no artifacts.
        manifest: Raw manifest attributes, copied verbatim into the
            descriptor's extra-info. Pass ``(key, value)`` pairs to keep
            repeated keys.
        profile_provider: Lookup for execution environment profiles. When
            None, no exclusion rules are generated.

    Returns:
        A new ``ModuleDescriptor``.

    Raises:
        ProfileNotFoundError: If a required execution environment has no
            profile.
        InvalidFormatError: If an ``ivy:`` artifact URI is malformed.
        MalformedURLError: If another artifact URI cannot be made absolute.
    """
    mrid = as_mrid(BUNDLE_TYPE, bundle.symbolic_name, bundle.version)
    md = ModuleDescriptor(mrid, publication_date=datetime.now(timezone.utc))
    md.add_extra_attribute_namespace(OSGI_NAMESPACE_PREFIX, OSGI_NAMESPACE)

    md.add_configuration(default_configuration())
    md.add_configuration(optional_configuration())
    md.add_configuration(transitive_optional_configuration())

    exported: set[str] = set()
    for export in bundle.exports:
        md.add_extra_info(EXTRA_INFO_EXPORT_PREFIX + export.name, export.version)
        exported.add(export.name)
        # a package exported twice keeps the use-configuration of its first export
        md.ensure_configuration(use_configuration(export.name, tuple(sorted(export.uses))))

    _add_requirements(md, bundle.requirements, exported)

    if base_uri is not None:
        for bundle_artifact in bundle.artifacts:
            artifact = _translate_artifact(mrid, base_uri, bundle, bundle_artifact)
            if artifact is not None:
                md.add_artifact(CONF_NAME_DEFAULT, artifact)

    if profile_provider is not None:
        profiles = [
            _lookup_profile(profile_provider, env) for env in bundle.execution_environments
        ]
        for profile in profiles:
            _exclude_profile_packages(md, profile)

    if manifest is not None:
        pairs = manifest.items() if isinstance(manifest, Mapping) else manifest
        for key, value in pairs:
            md.add_extra_info(str(key), str(value))

    logger.debug(
        "Translated %s: %d configurations, %d dependencies, %d exclude rules",
        mrid,
        len(md.configuration_names),
        len(md.dependencies),
        len(md.exclude_rules),
    )
    return md


def _add_requirements(
    md: ModuleDescriptor, requirements: Iterable[BundleRequirement], exported: set[str]
) -> None:
    for requirement in requirements:
        # exported packages satisfy themselves; environments become excludes
        if requirement.type == PACKAGE_TYPE and requirement.name in exported:
            continue
        if requirement.type == EXECUTION_ENVIRONMENT_TYPE:
            continue

        dd = DependencyDescriptor(
            as_mrid(requirement.type, requirement.name, requirement.version)
        )
        conf = CONF_NAME_DEFAULT
        if requirement.type == PACKAGE_TYPE:
            conf = md.ensure_configuration(use_configuration(requirement.name)).name
            dd.add_dependency_configuration(conf, conf)

        if requirement.is_optional:
            dd.add_dependency_configuration(CONF_NAME_OPTIONAL, conf)
            dd.add_dependency_configuration(
                CONF_NAME_TRANSITIVE_OPTIONAL, CONF_NAME_TRANSITIVE_OPTIONAL
            )
        else:
            dd.add_dependency_configuration(CONF_NAME_DEFAULT, conf)
        md.add_dependency(dd)


def _artifact_layout(bundle: BundleInfo, bundle_artifact: BundleArtifact) -> tuple[str, str, str | None]:
    """Return ``(type, ext, packaging)`` for a bundle artifact."""
    type_ = "source" if bundle_artifact.source else "jar"
    ext = "jar"
    packaging = None
    if bundle.has_inner_classpath and not bundle_artifact.source:
        packaging = "bundle"
    if bundle_artifact.format == PACKED_FORMAT:
        ext = "jar.pack.gz"
        packaging = f"{packaging},pack200" if packaging else "pack200"
    return type_, ext, packaging


def _translate_artifact(
    mrid: ModuleRevisionId,
    base_uri: str,
    bundle: BundleInfo,
    bundle_artifact: BundleArtifact,
) -> Artifact | None:
    if bundle_artifact.uri is None:
        logger.warning("Skipping artifact without a location in %s", mrid)
        return None
    type_, ext, packaging = _artifact_layout(bundle, bundle_artifact)
    return build_artifact(mrid, base_uri, bundle_artifact.uri, type_, ext, packaging)


def build_artifact(
    mrid: ModuleRevisionId,
    base_uri: str,
    uri: str,
    type_: str,
    ext: str,
    packaging: str | None,
) -> Artifact:
    """Build the artifact a bundle artifact URI designates.

    ``ivy:`` URIs reference an artifact of another module and are decoded;
    any other URI is resolved against *base_uri* when relative and becomes a
    direct file artifact of *mrid*.

    Raises:
        InvalidFormatError: If an ``ivy:`` URI is malformed.
        MalformedURLError: If the URI cannot be parsed or stays relative.
    """
    if ivy_uri.is_ivy_uri(uri):
        return ivy_uri.decode(uri)

    try:
        if not urlsplit(uri).scheme:
            uri = urljoin(base_uri, uri)
        resolved = urlsplit(uri)
    except ValueError as exc:
        raise MalformedURLError(f"Unable to make the uri into the url: {uri}") from exc
    if not resolved.scheme:
        raise MalformedURLError(
            f"Unable to make the uri into the url: {uri} (base {base_uri!r} is not absolute)"
        )

    extra = {"packaging": packaging} if packaging is not None else {}
    return Artifact(mrid, mrid.name, type_, ext, url=uri, extra_attributes=extra)


def _lookup_profile(provider: ProfileProvider, environment: str) -> ExecutionEnvironmentProfile:
    profile = provider.get_profile(environment)
    if profile is None:
        raise ProfileNotFoundError(environment)
    return profile


def _exclude_profile_packages(md: ModuleDescriptor, profile: ExecutionEnvironmentProfile) -> None:
    for package in sorted(profile.package_names):
        rule = ExcludeRule(
            ArtifactId(
                ModuleId(PACKAGE_TYPE, package), ANY_EXPRESSION, ANY_EXPRESSION, ANY_EXPRESSION
            )
        )
        for conf in md.configuration_names:
            rule.add_configuration(conf)
        md.add_exclude_rule(rule)


# ---------------------------------------------------------------------------
# Tagged-result entry point
# ---------------------------------------------------------------------------


class TranslationStatus(Enum):
    OK = "ok"
    PROFILE_NOT_FOUND = "profile-not-found"
    MALFORMED_INPUT = "malformed-input"


@dataclass
class TranslationResult:
    """Outcome of ``translate``.

    Attributes:
        status: What happened; callers branch on this.
        descriptor: The translated descriptor when ``status`` is ``OK``.
        error: Human-readable reason when translation failed.
    """

    status: TranslationStatus
    descriptor: ModuleDescriptor | None = None
    error: str = ""

    @property
    def success(self) -> bool:
        return self.status is TranslationStatus.OK


def translate(
    bundle: BundleInfo,
    base_uri: str | None = None,
    manifest: ManifestAttributes | None = None,
    profile_provider: ProfileProvider | None = None,
) -> TranslationResult:
    """Like ``to_module_descriptor`` but reports failures as a result value."""
    try:
        md = to_module_descriptor(bundle, base_uri, manifest, profile_provider)
    except ProfileNotFoundError as exc:
        return TranslationResult(TranslationStatus.PROFILE_NOT_FOUND, error=str(exc))
    except (InvalidFormatError, MalformedURLError) as exc:
        return TranslationResult(TranslationStatus.MALFORMED_INPUT, error=str(exc))
    return TranslationResult(TranslationStatus.OK, descriptor=md)
