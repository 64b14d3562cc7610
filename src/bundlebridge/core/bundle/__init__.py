"""Bundle metadata and its translation into native module descriptors.

The package is split into focused submodules:

- ``models``: ``BundleInfo`` and its parts, plus the type tags.
- ``profiles``: execution environment profiles and their providers.
- ``ivy_uri``: the ``ivy:`` artifact URI codec.
- ``adapter``: the bundle-to-descriptor translation.
- ``loader``: reading bundles from manifests or YAML (import it directly).
"""

from bundlebridge.core.bundle.adapter import (
    EXTRA_INFO_EXPORT_PREFIX,
    TranslationResult,
    TranslationStatus,
    as_mrid,
    build_artifact,
    configuration_names,
    to_module_descriptor,
    translate,
)
from bundlebridge.core.bundle.models import (
    BUNDLE_TYPE,
    EXECUTION_ENVIRONMENT_TYPE,
    PACKAGE_TYPE,
    SERVICE_TYPE,
    BundleArtifact,
    BundleInfo,
    BundleRequirement,
    ExportPackage,
)
from bundlebridge.core.bundle.profiles import (
    ExecutionEnvironmentProfile,
    ProfileProvider,
    StaticProfileProvider,
)

__all__ = [
    "BUNDLE_TYPE",
    "EXECUTION_ENVIRONMENT_TYPE",
    "EXTRA_INFO_EXPORT_PREFIX",
    "PACKAGE_TYPE",
    "SERVICE_TYPE",
    "BundleArtifact",
    "BundleInfo",
    "BundleRequirement",
    "ExecutionEnvironmentProfile",
    "ExportPackage",
    "ProfileProvider",
    "StaticProfileProvider",
    "TranslationResult",
    "TranslationStatus",
    "as_mrid",
    "build_artifact",
    "configuration_names",
    "to_module_descriptor",
    "translate",
]
