"""Bundle metadata models --- BundleInfo and its parts.

These are pure data holders describing a bundle as declared by its
manifest (or a YAML description of one): what it exports, what it requires,
which execution environments it needs, and where its artifacts live.
The translator in ``adapter`` turns a ``BundleInfo`` into a native
``ModuleDescriptor``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# ---------------------------------------------------------------------------
# Type tags: used as the organisation of synthetic module identities
# ---------------------------------------------------------------------------

BUNDLE_TYPE = "bundle"
PACKAGE_TYPE = "package"
EXECUTION_ENVIRONMENT_TYPE = "ee"
SERVICE_TYPE = "service"

RESOLUTION_MANDATORY = "mandatory"
RESOLUTION_OPTIONAL = "optional"

PACKED_FORMAT = "packed"

DEFAULT_EXPORT_VERSION = "0.0.0"


@dataclass(frozen=True)
class ExportPackage:
    """A package the bundle makes available to others.

    Attributes:
        name: Package name (e.g. ``"org.example.api"``).
        version: Exported version string.
        uses: Names of packages the exported API depends on.
    """

    name: str
    version: str = DEFAULT_EXPORT_VERSION
    uses: frozenset[str] = frozenset()


@dataclass(frozen=True)
class BundleRequirement:
    """A named, versioned need declared by the bundle.

    Attributes:
        type: One of the type tags (``package``, ``bundle``, ``ee``, ...).
        name: Name of the required package, bundle or environment.
        version: Raw version or version range (``"[1,2)"``), or None when
            any version is acceptable.
        resolution: ``"mandatory"`` or ``"optional"``.
    """

    type: str
    name: str
    version: str | None = None
    resolution: str = RESOLUTION_MANDATORY

    @property
    def is_optional(self) -> bool:
        return self.resolution == RESOLUTION_OPTIONAL


@dataclass(frozen=True)
class BundleArtifact:
    """A downloadable artifact of the bundle.

    Attributes:
        uri: Absolute, relative or ``ivy:`` URI. None when unknown.
        format: Packaging format; ``"packed"`` marks a pack200 archive.
        source: True for a source artifact.
    """

    uri: str | None
    format: str | None = None
    source: bool = False


@dataclass
class BundleInfo:
    """The full description of one bundle."""

    symbolic_name: str
    version: str
    exports: list[ExportPackage] = field(default_factory=list)
    requirements: list[BundleRequirement] = field(default_factory=list)
    artifacts: list[BundleArtifact] = field(default_factory=list)
    execution_environments: list[str] = field(default_factory=list)
    has_inner_classpath: bool = False

    @property
    def exported_package_names(self) -> set[str]:
        return {export.name for export in self.exports}
