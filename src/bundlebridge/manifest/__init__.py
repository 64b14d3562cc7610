"""Manifest header elements and ``MANIFEST.MF`` parsing."""

from bundlebridge.manifest.element import ManifestHeaderElement
from bundlebridge.manifest.header import parse_clause, parse_header
from bundlebridge.manifest.parser import (
    bundle_from_manifest,
    parse_manifest,
    read_manifest,
)

__all__ = [
    "ManifestHeaderElement",
    "parse_clause",
    "parse_header",
    "parse_manifest",
    "read_manifest",
    "bundle_from_manifest",
]
