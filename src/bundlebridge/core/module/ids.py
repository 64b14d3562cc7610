"""Module and artifact identities.

``ModuleId`` names a module independently of its revision,
``ModuleRevisionId`` pins a revision (and optionally a branch), and
``ArtifactId`` addresses artifacts of a module by name, type and extension,
which is what exclusion rules match against.
"""

from __future__ import annotations

from dataclasses import dataclass

ANY_EXPRESSION = "*"


@dataclass(frozen=True)
class ModuleId:
    organisation: str
    name: str

    def __str__(self) -> str:
        return f"{self.organisation}#{self.name}"


@dataclass(frozen=True)
class ModuleRevisionId:
    """A module at a given revision.

    The revision may be a fixed version (``"1.2.0"``) or a range
    (``"[1,2)"``) when the id describes a requested dependency.
    """

    organisation: str
    name: str
    branch: str | None = None
    revision: str | None = None

    @property
    def module_id(self) -> ModuleId:
        return ModuleId(self.organisation, self.name)

    def __str__(self) -> str:
        text = f"{self.organisation}#{self.name}"
        if self.branch is not None:
            text += f"#{self.branch}"
        return f"{text};{self.revision if self.revision is not None else ''}"


@dataclass(frozen=True)
class ArtifactId:
    module_id: ModuleId
    name: str = ANY_EXPRESSION
    type: str = ANY_EXPRESSION
    ext: str = ANY_EXPRESSION

    def __str__(self) -> str:
        return f"{self.module_id}!{self.name}.{self.ext}({self.type})"
