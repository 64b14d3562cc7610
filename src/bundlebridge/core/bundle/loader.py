"""Loading bundle descriptions from disk.

Two input forms are accepted:

- a ``MANIFEST.MF`` file (any ``*.mf`` name), parsed with
  ``bundlebridge.manifest``; its raw headers are kept so they can be
  embedded in the translated descriptor;
- a YAML description::

      symbolic_name: com.example.app
      version: 1.0.0
      inner_classpath: false
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
      execution_environments: [JavaSE-1.8]
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from bundlebridge.core.bundle.models import (
    DEFAULT_EXPORT_VERSION,
    RESOLUTION_MANDATORY,
    BundleArtifact,
    BundleInfo,
    BundleRequirement,
    ExportPackage,
)
from bundlebridge.exceptions import ManifestError
from bundlebridge.manifest.parser import bundle_from_manifest, parse_manifest

logger = logging.getLogger(__name__)


@dataclass
class LoadedBundle:
    """A bundle read from disk, plus its raw manifest headers when it had one."""

    bundle: BundleInfo
    manifest: dict[str, str] | None = None


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


def bundle_from_dict(data: Mapping[str, Any]) -> BundleInfo:
    """Build a ``BundleInfo`` from the YAML structure in the module docstring.

    Raises:
        ManifestError: If ``symbolic_name`` is missing or a section has the
            wrong shape.
    """
    if not data.get("symbolic_name"):
        raise ManifestError("Bundle description has no symbolic_name")
    try:
        return BundleInfo(
            symbolic_name=str(data["symbolic_name"]),
            version=str(data.get("version", DEFAULT_EXPORT_VERSION)),
            exports=[
                ExportPackage(
                    name=str(entry["name"]),
                    version=str(entry.get("version", DEFAULT_EXPORT_VERSION)),
                    uses=frozenset(str(use) for use in entry.get("uses") or []),
                )
                for entry in data.get("exports") or []
            ],
            requirements=[
                BundleRequirement(
                    type=str(entry["type"]),
                    name=str(entry["name"]),
                    version=_optional_str(entry.get("version")),
                    resolution=str(entry.get("resolution", RESOLUTION_MANDATORY)),
                )
                for entry in data.get("requirements") or []
            ],
            artifacts=[
                BundleArtifact(
                    uri=_optional_str(entry.get("uri")),
                    format=_optional_str(entry.get("format")),
                    source=bool(entry.get("source", False)),
                )
                for entry in data.get("artifacts") or []
            ],
            execution_environments=[str(e) for e in data.get("execution_environments") or []],
            has_inner_classpath=bool(data.get("inner_classpath", False)),
        )
    except (KeyError, TypeError, AttributeError) as exc:
        raise ManifestError(f"Malformed bundle description: {exc}") from exc


def load_bundle(path: Path) -> LoadedBundle:
    """Load a bundle from a manifest or a YAML description.

    Raises:
        ManifestError: If the file cannot be read or parsed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ManifestError(f"Cannot read {path}: {exc}") from exc

    if path.suffix.lower() == ".mf":
        headers = parse_manifest(text)
        logger.debug("Loaded manifest %s with %d headers", path, len(headers))
        return LoadedBundle(bundle_from_manifest(headers), headers)

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ManifestError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ManifestError(f"Bundle description {path} must contain a mapping")
    return LoadedBundle(bundle_from_dict(data))
