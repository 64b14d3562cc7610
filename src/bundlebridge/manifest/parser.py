"""Reading ``META-INF/MANIFEST.MF`` files into bundle metadata.

Two steps:

- ``parse_manifest`` reads the main section of a manifest into an ordered
  ``{header: value}`` mapping, joining continuation lines.
- ``bundle_from_manifest`` interprets the OSGi headers of that mapping and
  builds a ``BundleInfo``.

The raw mapping is also what the translator copies into the descriptor's
extra-info when the caller asks for the manifest to be embedded.
"""

from __future__ import annotations

import logging
from pathlib import Path

from bundlebridge.core.bundle.models import (
    BUNDLE_TYPE,
    DEFAULT_EXPORT_VERSION,
    PACKAGE_TYPE,
    RESOLUTION_MANDATORY,
    BundleInfo,
    BundleRequirement,
    ExportPackage,
)
from bundlebridge.exceptions import ManifestError
from bundlebridge.manifest.header import parse_header

logger = logging.getLogger(__name__)

BUNDLE_SYMBOLIC_NAME = "Bundle-SymbolicName"
BUNDLE_VERSION = "Bundle-Version"
EXPORT_PACKAGE = "Export-Package"
IMPORT_PACKAGE = "Import-Package"
REQUIRE_BUNDLE = "Require-Bundle"
REQUIRED_EXECUTION_ENVIRONMENT = "Bundle-RequiredExecutionEnvironment"
BUNDLE_CLASSPATH = "Bundle-ClassPath"


def parse_manifest(text: str) -> dict[str, str]:
    """Parse the main section of a manifest.

    Continuation lines (starting with a single space) are appended to the
    previous header. Parsing stops at the first blank line, which ends the
    main section.

    Raises:
        ManifestError: On a line that is neither a header nor a continuation.
    """
    headers: dict[str, str] = {}
    last: str | None = None
    for lineno, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            if headers:
                break
            continue
        if line.startswith(" "):
            if last is None:
                raise ManifestError(f"Continuation without a header at line {lineno}")
            headers[last] += line[1:]
            continue
        name, sep, value = line.partition(":")
        if not sep or not name.strip():
            raise ManifestError(f"Malformed manifest line {lineno}: {line!r}")
        last = name.strip()
        headers[last] = value.strip()
    return headers


def read_manifest(path: Path) -> dict[str, str]:
    """Read and parse a manifest file from disk."""
    return parse_manifest(path.read_text(encoding="utf-8"))


def _as_range(version: str | None) -> str | None:
    """A bare OSGi version means "at least"; ranges are kept verbatim."""
    if version is None:
        return None
    version = version.strip()
    if version[:1] in ("[", "("):
        return version
    return f"[{version},)"


def _requirements(value: str | None, type_: str, version_key: str) -> list[BundleRequirement]:
    requirements = []
    for element in parse_header(value):
        version = _as_range(element.attributes.get(version_key))
        resolution = element.directives.get("resolution", RESOLUTION_MANDATORY)
        for name in element.values:
            requirements.append(
                BundleRequirement(type=type_, name=name, version=version, resolution=resolution)
            )
    return requirements


def bundle_from_manifest(headers: dict[str, str]) -> BundleInfo:
    """Build a ``BundleInfo`` from parsed manifest headers.

    Raises:
        ManifestError: If the manifest has no ``Bundle-SymbolicName``.
    """
    symbolic = parse_header(headers.get(BUNDLE_SYMBOLIC_NAME))
    if not symbolic or not symbolic[0].values:
        raise ManifestError(f"Manifest has no {BUNDLE_SYMBOLIC_NAME} header")

    bundle = BundleInfo(
        symbolic_name=symbolic[0].values[0],
        version=headers.get(BUNDLE_VERSION, DEFAULT_EXPORT_VERSION).strip(),
    )

    for element in parse_header(headers.get(EXPORT_PACKAGE)):
        version = element.attributes.get("version", DEFAULT_EXPORT_VERSION)
        uses = frozenset(
            use.strip() for use in element.directives.get("uses", "").split(",") if use.strip()
        )
        for name in element.values:
            bundle.exports.append(ExportPackage(name=name, version=version, uses=uses))

    bundle.requirements.extend(_requirements(headers.get(IMPORT_PACKAGE), PACKAGE_TYPE, "version"))
    bundle.requirements.extend(
        _requirements(headers.get(REQUIRE_BUNDLE), BUNDLE_TYPE, "bundle-version")
    )

    for element in parse_header(headers.get(REQUIRED_EXECUTION_ENVIRONMENT)):
        bundle.execution_environments.extend(element.values)

    classpath = [
        value for element in parse_header(headers.get(BUNDLE_CLASSPATH)) for value in element.values
    ]
    bundle.has_inner_classpath = any(entry != "." for entry in classpath)

    logger.debug(
        "Parsed manifest of %s;%s: %d exports, %d requirements",
        bundle.symbolic_name,
        bundle.version,
        len(bundle.exports),
        len(bundle.requirements),
    )
    return bundle
