"""Resolution output models --- resolved nodes and artifact download reports.

These are produced by the resolution engine and the artifact fetch layer;
the report classes only read them. ``ResolvedNode`` captures, for one
dependency of the resolved module, what was asked for, what was selected,
in which root configurations it appears and where it was evicted.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from bundlebridge.core.module import Artifact, ModuleId, ModuleRevisionId

ArtifactFilter = Callable[[Artifact], bool]


class DownloadStatus(Enum):
    NO = "no"
    SUCCESSFUL = "successful"
    FAILED = "failed"


@dataclass(eq=False)
class ArtifactDownloadReport:
    """Outcome of fetching one artifact.

    Attributes:
        artifact: The artifact fetched.
        status: Download outcome; ``NO`` means it was already available.
        size: Bytes downloaded.
        download_time: Elapsed milliseconds.
        message: Failure detail, if any.
    """

    artifact: Artifact
    status: DownloadStatus = DownloadStatus.NO
    size: int = 0
    download_time: int = 0
    message: str = ""


@dataclass(eq=False)
class ResolvedNode:
    """One dependency in the resolved graph.

    Attributes:
        id: The revision as requested (possibly a range).
        resolved_id: The revision selected by the engine; defaults to ``id``.
        root_configurations: Configurations of the resolved module through
            which this node was reached.
        configurations: For each root configuration, the node's own
            configurations that were selected.
        evicted_in: Root configurations in which the node lost a conflict.
        problem_message: Why the node could not be resolved; empty if fine.
        selected_artifacts: Artifacts to fetch for this node.
    """

    id: ModuleRevisionId
    resolved_id: ModuleRevisionId | None = None
    root_configurations: list[str] = field(default_factory=list)
    configurations: dict[str, list[str]] = field(default_factory=dict)
    evicted_in: set[str] = field(default_factory=set)
    problem_message: str = ""
    selected_artifacts: list[Artifact] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.resolved_id is None:
            self.resolved_id = self.id

    @property
    def module_id(self) -> ModuleId:
        return self.id.module_id

    def is_evicted(self, root_conf: str) -> bool:
        return root_conf in self.evicted_in

    @property
    def is_completely_evicted(self) -> bool:
        """True when the node is evicted in every root configuration it reached."""
        return bool(self.root_configurations) and all(
            self.is_evicted(conf) for conf in self.root_configurations
        )

    @property
    def has_problem(self) -> bool:
        return bool(self.problem_message)

    def get_configurations(self, root_conf: str) -> list[str]:
        return list(self.configurations.get(root_conf, []))

    def get_selected_artifacts(self, artifact_filter: ArtifactFilter | None = None) -> list[Artifact]:
        if artifact_filter is None:
            return list(self.selected_artifacts)
        return [a for a in self.selected_artifacts if artifact_filter(a)]

    def __str__(self) -> str:
        return str(self.resolved_id)
