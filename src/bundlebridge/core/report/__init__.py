"""Resolution report consolidation and fixed descriptor derivation."""

from bundlebridge.core.report.configuration import ConfigurationResolveReport
from bundlebridge.core.report.models import (
    ArtifactDownloadReport,
    ArtifactFilter,
    DownloadStatus,
    ResolvedNode,
)
from bundlebridge.core.report.report import ResolveReport, default_resolve_id

__all__ = [
    "ArtifactDownloadReport",
    "ArtifactFilter",
    "ConfigurationResolveReport",
    "DownloadStatus",
    "ResolveReport",
    "ResolvedNode",
    "default_resolve_id",
]
