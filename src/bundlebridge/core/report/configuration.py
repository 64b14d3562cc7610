"""Per-configuration resolution report.

One ``ConfigurationResolveReport`` exists per root configuration of the
resolved module. It lists the dependency nodes reached through that
configuration and the download reports of their artifacts.
"""

from __future__ import annotations

from collections.abc import Iterable

from bundlebridge.core.module import ModuleRevisionId
from bundlebridge.core.report.models import (
    ArtifactDownloadReport,
    DownloadStatus,
    ResolvedNode,
)


class ConfigurationResolveReport:
    """Resolution outcome for one root configuration.

    Nodes are indexed by both their requested and resolved ids; each node is
    listed once.
    """

    def __init__(self, configuration: str) -> None:
        self.configuration = configuration
        self._by_id: dict[ModuleRevisionId, ResolvedNode] = {}
        self._download_reports: dict[ResolvedNode, list[ArtifactDownloadReport]] = {}

    def add_dependency(self, node: ResolvedNode) -> None:
        self._by_id[node.id] = node
        self._by_id[node.resolved_id] = node
        self._download_reports.setdefault(node, [])

    def add_download_report(self, node: ResolvedNode, report: ArtifactDownloadReport) -> None:
        self.add_dependency(node)
        self._download_reports[node].append(report)

    def get_dependency(self, mrid: ModuleRevisionId) -> ResolvedNode | None:
        return self._by_id.get(mrid)

    @property
    def dependencies(self) -> list[ResolvedNode]:
        return list(self._download_reports)

    @property
    def evicted_nodes(self) -> list[ResolvedNode]:
        return [node for node in self.dependencies if node.is_evicted(self.configuration)]

    @property
    def unresolved_dependencies(self) -> list[ResolvedNode]:
        return [node for node in self.dependencies if node.has_problem]

    def has_error(self) -> bool:
        return bool(self.unresolved_dependencies) or bool(self.failed_artifacts_reports)

    def artifacts_reports(
        self, status: DownloadStatus | None = None, with_evicted: bool = True
    ) -> list[ArtifactDownloadReport]:
        """Download reports, optionally restricted to one status.

        Args:
            status: Keep only reports with this status; None keeps all.
            with_evicted: When False, drop reports of artifacts belonging to
                nodes evicted in this configuration.
        """
        evicted_ids = {node.resolved_id for node in self.evicted_nodes}
        reports = []
        for node_reports in self._download_reports.values():
            for report in node_reports:
                if status is not None and report.status is not status:
                    continue
                if not with_evicted and report.artifact.module_revision_id in evicted_ids:
                    continue
                reports.append(report)
        return reports

    @property
    def failed_artifacts_reports(self) -> list[ArtifactDownloadReport]:
        return self.filter_out_merged_artifacts(self.artifacts_reports(DownloadStatus.FAILED))

    def download_reports(self, mrid: ModuleRevisionId) -> list[ArtifactDownloadReport]:
        node = self._by_id.get(mrid)
        if node is None:
            return []
        return list(self._download_reports[node])

    @staticmethod
    def filter_out_merged_artifacts(
        reports: Iterable[ArtifactDownloadReport],
    ) -> list[ArtifactDownloadReport]:
        """Drop reports of artifacts marked as merged from another configuration."""
        return [report for report in reports if not report.artifact.is_merged]

    def __repr__(self) -> str:
        return f"ConfigurationResolveReport({self.configuration!r}, {len(self._download_reports)} nodes)"
