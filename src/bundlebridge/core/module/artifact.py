"""Artifact: a file published by a module revision."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from bundlebridge.core.module.ids import ModuleRevisionId

MERGED_ATTRIBUTE = "ivy:merged"


@dataclass(frozen=True)
class Artifact:
    """An artifact of a module revision.

    Attributes:
        module_revision_id: The revision publishing this artifact.
        name: Artifact name, usually the module name.
        type: Artifact type (``"jar"``, ``"source"``, ...).
        ext: File extension (``"jar"``, ``"jar.pack.gz"``, ...).
        url: Direct location, when the artifact is not fetched through a
            repository.
        extra_attributes: Additional qualifiers (``packaging``,
            ``ivy:merged``, ...).
    """

    module_revision_id: ModuleRevisionId
    name: str | None
    type: str | None
    ext: str | None
    url: str | None = None
    extra_attributes: Mapping[str, str] = field(default_factory=dict)

    def __hash__(self) -> int:
        return hash(
            (
                self.module_revision_id,
                self.name,
                self.type,
                self.ext,
                self.url,
                tuple(sorted(self.extra_attributes.items())),
            )
        )

    def get_extra_attribute(self, name: str) -> str | None:
        return self.extra_attributes.get(name)

    @property
    def is_merged(self) -> bool:
        """True when the artifact was resolved once for several configurations."""
        return self.get_extra_attribute(MERGED_ATTRIBUTE) is not None

    def __str__(self) -> str:
        suffix = "" if self.type == self.ext else f"({self.type})"
        return f"{self.module_revision_id}!{self.name}.{self.ext}{suffix}"
