"""Module descriptors: the native representation a resolution engine consumes.

A ``ModuleDescriptor`` gathers, for one module revision:

- its configurations (unique by name),
- its dependency edges (``DependencyDescriptor``), each mapping the
  descriptor's own configurations to configurations of the dependency,
- its artifacts, bound to configurations,
- exclusion rules, extra-info entries and extra-attribute namespaces.

Thread safety: descriptors are NOT thread-safe. They are built by a single
caller and shared read-only afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from bundlebridge.core.module.artifact import Artifact
from bundlebridge.core.module.configuration import Configuration
from bundlebridge.core.module.ids import ArtifactId, ModuleId, ModuleRevisionId
from bundlebridge.exceptions import DescriptorError

DEFAULT_STATUS = "integration"

EXACT_OR_REGEXP_MATCHER = "exactOrRegexp"


@dataclass(frozen=True)
class ExtraInfo:
    """A free-form ``name -> content`` entry of the descriptor's info block."""

    name: str
    content: str


@dataclass
class ExcludeRule:
    """Excludes matching artifacts from the listed configurations."""

    artifact_id: ArtifactId
    matcher: str = EXACT_OR_REGEXP_MATCHER
    configurations: list[str] = field(default_factory=list)

    def add_configuration(self, conf: str) -> None:
        if conf not in self.configurations:
            self.configurations.append(conf)


class DependencyDescriptor:
    """A dependency edge toward another module revision.

    The edge routes each of the depender's (master) configurations to one or
    more configurations of the dependency. Mappings keep insertion order.

    Args:
        dependency_revision_id: The module revision depended upon.
        force: Whether this revision wins over conflicting ones.
        changing: Whether the revision content may change over time.
        transitive: Whether the dependency's own dependencies are followed.
    """

    def __init__(
        self,
        dependency_revision_id: ModuleRevisionId,
        force: bool = False,
        changing: bool = False,
        transitive: bool = True,
    ) -> None:
        self.dependency_revision_id = dependency_revision_id
        self.force = force
        self.changing = changing
        self.transitive = transitive
        self._confs: dict[str, list[str]] = {}

    @property
    def dependency_id(self) -> ModuleId:
        return self.dependency_revision_id.module_id

    def add_dependency_configuration(self, master_conf: str, dependency_conf: str) -> None:
        targets = self._confs.setdefault(master_conf, [])
        if dependency_conf not in targets:
            targets.append(dependency_conf)

    @property
    def module_configurations(self) -> list[str]:
        """The depender's configurations this edge participates in."""
        return list(self._confs)

    def get_dependency_configurations(self, master_conf: str) -> list[str]:
        return list(self._confs.get(master_conf, []))

    @property
    def configuration_mappings(self) -> list[tuple[str, str]]:
        """All ``(master, dependency)`` configuration pairs, in order."""
        return [(master, dep) for master, deps in self._confs.items() for dep in deps]

    def __repr__(self) -> str:
        return (
            f"DependencyDescriptor({self.dependency_revision_id}, "
            f"force={self.force}, confs={self._confs!r})"
        )


class ModuleDescriptor:
    """Everything known about one module revision."""

    def __init__(
        self,
        module_revision_id: ModuleRevisionId,
        status: str = DEFAULT_STATUS,
        publication_date: datetime | None = None,
    ) -> None:
        self.module_revision_id = module_revision_id
        self.status = status
        self.publication_date = publication_date
        self.description = ""
        self.home_page: str | None = None
        self.extra_infos: list[ExtraInfo] = []
        self.extra_attribute_namespaces: dict[str, str] = {}
        self.dependencies: list[DependencyDescriptor] = []
        self.exclude_rules: list[ExcludeRule] = []
        self._configurations: dict[str, Configuration] = {}
        self._artifacts: dict[str, list[Artifact]] = {}

    # -- Configurations -----------------------------------------------------

    def add_configuration(self, conf: Configuration) -> None:
        """Register a configuration.

        Re-adding an identical configuration is a no-op.

        Raises:
            DescriptorError: If a different configuration with the same name
                is already registered.
        """
        existing = self._configurations.get(conf.name)
        if existing is None:
            self._configurations[conf.name] = conf
        elif existing != conf:
            raise DescriptorError(
                f"Configuration {conf.name!r} is already defined on "
                f"{self.module_revision_id} with a different definition"
            )

    def ensure_configuration(self, conf: Configuration) -> Configuration:
        """Return the configuration named like *conf*, adding *conf* if absent."""
        return self._configurations.setdefault(conf.name, conf)

    def get_configuration(self, name: str) -> Configuration | None:
        return self._configurations.get(name)

    @property
    def configurations(self) -> list[Configuration]:
        return list(self._configurations.values())

    @property
    def configuration_names(self) -> list[str]:
        return list(self._configurations)

    # -- Artifacts ----------------------------------------------------------

    def add_artifact(self, conf: str, artifact: Artifact) -> None:
        self._artifacts.setdefault(conf, []).append(artifact)

    def get_artifacts(self, conf: str) -> list[Artifact]:
        return list(self._artifacts.get(conf, []))

    @property
    def all_artifacts(self) -> list[Artifact]:
        """Every artifact once, in first-binding order."""
        seen: dict[Artifact, None] = {}
        for artifacts in self._artifacts.values():
            for artifact in artifacts:
                seen.setdefault(artifact, None)
        return list(seen)

    # -- Dependencies and rules ---------------------------------------------

    def add_dependency(self, dependency: DependencyDescriptor) -> None:
        self.dependencies.append(dependency)

    def add_exclude_rule(self, rule: ExcludeRule) -> None:
        self.exclude_rules.append(rule)

    # -- Info ---------------------------------------------------------------

    def add_extra_info(self, name: str, content: str) -> None:
        self.extra_infos.append(ExtraInfo(name, content))

    def get_extra_info(self, name: str) -> str | None:
        """Content of the first extra-info entry named *name*."""
        for info in self.extra_infos:
            if info.name == name:
                return info.content
        return None

    def add_extra_attribute_namespace(self, prefix: str, namespace: str) -> None:
        self.extra_attribute_namespaces[prefix] = namespace

    def __repr__(self) -> str:
        return f"ModuleDescriptor({self.module_revision_id})"
