"""Whole-module resolution report.

``ResolveReport`` consolidates the per-configuration reports of one
resolution attempt: evicted and unresolved nodes across configurations,
download outcomes, problem messages, timing and size counters. It also
derives a *fixed* module descriptor from the resolved dependency list: a
flattened snapshot pinning every surviving dependency, suitable for
redistribution.

Lifecycle: created once per resolution attempt, filled while the engine
runs (``add_report``, ``set_dependencies``, counters), then handed to output
consumers read-only. Not thread-safe.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime, timezone

from bundlebridge.config import Settings
from bundlebridge.core.module import (
    Artifact,
    Configuration,
    DependencyDescriptor,
    ModuleDescriptor,
    ModuleId,
    ModuleRevisionId,
)
from bundlebridge.core.report.configuration import ConfigurationResolveReport
from bundlebridge.core.report.models import (
    ArtifactDownloadReport,
    ArtifactFilter,
    DownloadStatus,
    ResolvedNode,
)

logger = logging.getLogger(__name__)


def default_resolve_id(module_id: ModuleId, separator: str = "-") -> str:
    return f"{module_id.organisation}{separator}{module_id.name}"


def _unique(items: Iterable) -> list:
    """Deduplicate, keeping first-seen order."""
    return list(dict.fromkeys(items))


class ResolveReport:
    """The resolution report of a whole module.

    Args:
        md: The descriptor of the module that was resolved.
        resolve_id: Identifier of this resolution; defaults to
            ``<organisation>-<name>``.
        settings: Supplies the separator of the default resolve id.
    """

    def __init__(
        self,
        md: ModuleDescriptor,
        resolve_id: str | None = None,
        settings: Settings | None = None,
    ) -> None:
        separator = settings.resolve_id_separator if settings else "-"
        self.module_descriptor = md
        self.resolve_id = resolve_id or default_resolve_id(
            md.module_revision_id.module_id, separator
        )
        self.problem_messages: list[str] = []
        self.resolve_time = 0
        self.download_time = 0
        self.download_size = 0
        self._conf_reports: dict[str, ConfigurationResolveReport] = {}
        # ordered from the most dependent to the least dependent
        self._dependencies: list[ResolvedNode] = []
        self._artifacts: list[Artifact] = []

    # -- Configuration reports ----------------------------------------------

    def add_report(self, conf: str, report: ConfigurationResolveReport) -> None:
        self._conf_reports[conf] = report

    def get_configuration_report(self, conf: str) -> ConfigurationResolveReport | None:
        return self._conf_reports.get(conf)

    @property
    def configurations(self) -> list[str]:
        """Configurations that received a report, in insertion order."""
        return list(self._conf_reports)

    def has_error(self) -> bool:
        return any(report.has_error() for report in self._conf_reports.values())

    # -- Cross-configuration views ------------------------------------------

    @property
    def evicted_nodes(self) -> list[ResolvedNode]:
        return _unique(
            node for report in self._conf_reports.values() for node in report.evicted_nodes
        )

    @property
    def unresolved_dependencies(self) -> list[ResolvedNode]:
        return _unique(
            node
            for report in self._conf_reports.values()
            for node in report.unresolved_dependencies
        )

    def artifacts_reports(
        self, status: DownloadStatus | None = None, with_evicted: bool = True
    ) -> list[ArtifactDownloadReport]:
        """Download reports across configurations.

        Args:
            status: Keep only reports with this status; None keeps all.
            with_evicted: When False, drop reports of evicted modules.
        """
        return _unique(
            report
            for conf_report in self._conf_reports.values()
            for report in conf_report.artifacts_reports(status, with_evicted)
        )

    @property
    def failed_artifacts_reports(self) -> list[ArtifactDownloadReport]:
        return ConfigurationResolveReport.filter_out_merged_artifacts(
            self.artifacts_reports(DownloadStatus.FAILED, True)
        )

    @property
    def all_artifacts_reports(self) -> list[ArtifactDownloadReport]:
        return self.artifacts_reports(None, True)

    def artifacts_reports_for(self, mrid: ModuleRevisionId) -> list[ArtifactDownloadReport]:
        return _unique(
            report
            for conf_report in self._conf_reports.values()
            for report in conf_report.download_reports(mrid)
        )

    def all_problem_messages(self) -> list[str]:
        """Explicit problems plus one line per unresolved node and failed download."""
        messages = list(self.problem_messages)
        for report in self._conf_reports.values():
            for node in report.unresolved_dependencies:
                if node.problem_message:
                    messages.append(f"unresolved dependency: {node.id}: {node.problem_message}")
                else:
                    messages.append(f"unresolved dependency: {node.id}")
            for download in report.failed_artifacts_reports:
                messages.append(f"download failed: {download.artifact}")
        return messages

    # -- Dependencies -------------------------------------------------------

    def set_dependencies(
        self, dependencies: list[ResolvedNode], artifact_filter: ArtifactFilter | None = None
    ) -> None:
        """Store the resolved nodes and dispatch them to configuration reports.

        The artifact list is rebuilt from the selected artifacts of every node
        that is neither completely evicted nor in error. Nodes reaching a
        root configuration without a report are not recorded for it.
        """
        self._dependencies = dependencies
        self._artifacts = []
        for node in dependencies:
            if not node.is_completely_evicted and not node.has_problem:
                self._artifacts.extend(node.get_selected_artifacts(artifact_filter))
            for conf in node.root_configurations:
                report = self.get_configuration_report(conf)
                if report is not None:
                    report.add_dependency(node)

    @property
    def dependencies(self) -> list[ResolvedNode]:
        return self._dependencies

    @property
    def artifacts(self) -> list[Artifact]:
        return self._artifacts

    @property
    def module_ids(self) -> list[ModuleId]:
        """Resolved module ids, most dependent first, each once."""
        return _unique(node.resolved_id.module_id for node in self._dependencies)

    # -- Configuration closure ----------------------------------------------

    def extending_configurations(self, extended: str) -> set[str]:
        """Every configuration that transitively extends *extended*, itself included.

        The extends graph may contain cycles; each configuration is expanded
        at most once.
        """
        md = self.module_descriptor
        extenders: dict[str, list[str]] = {}
        for conf in md.configurations:
            for parent in conf.extends:
                extenders.setdefault(parent, []).append(conf.name)

        closure = {extended}
        pending = [extended]
        while pending:
            current = pending.pop()
            for name in extenders.get(current, []):
                if name not in closure:
                    closure.add(name)
                    pending.append(name)
        return closure

    # -- Fixed descriptor ---------------------------------------------------

    def to_fixed_module_descriptor(
        self,
        settings: Settings | None = None,
        module_ids_to_keep: Iterable[ModuleId] | None = None,
    ) -> ModuleDescriptor:
        """Build a flattened, conflict-free snapshot of the resolved module.

        Only configurations that received a report are kept, as plain
        configurations without extends. Each dependency node yields one
        edge unless it is evicted in every root configuration; the edge maps
        each non-evicted root configuration to the node's configurations
        there. Edges pin the resolved revision and are forced, except for
        modules listed in *module_ids_to_keep*, which keep their requested
        revision unforced.
        """
        settings = settings or Settings()
        keep = set(module_ids_to_keep or ())
        md = self.module_descriptor

        fixed = ModuleDescriptor(
            md.module_revision_id,
            status=md.status or settings.status,
            publication_date=datetime.now(timezone.utc),
        )
        for prefix, namespace in md.extra_attribute_namespaces.items():
            fixed.add_extra_attribute_namespace(prefix, namespace)
        fixed.description = md.description
        fixed.home_page = md.home_page
        fixed.extra_infos.extend(md.extra_infos)

        resolved_confs = self.configurations
        for conf in resolved_confs:
            fixed.add_configuration(Configuration(conf))
        for conf in resolved_confs:
            for artifact in md.get_artifacts(conf):
                fixed.add_artifact(conf, artifact)

        for node in self._dependencies:
            if node.module_id in keep:
                mrid, force = node.id, False
            else:
                mrid, force = node.resolved_id, True
            dd = DependencyDescriptor(mrid, force=force, changing=False, transitive=False)
            evicted = True
            for root_conf in node.root_configurations:
                if node.is_evicted(root_conf):
                    continue
                evicted = False
                for target_conf in node.get_configurations(root_conf):
                    dd.add_dependency_configuration(root_conf, target_conf)
            if not evicted:
                fixed.add_dependency(dd)

        logger.debug(
            "Fixed descriptor for %s: %d configurations, %d dependencies",
            md.module_revision_id,
            len(resolved_confs),
            len(fixed.dependencies),
        )
        return fixed
