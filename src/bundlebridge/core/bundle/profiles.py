"""Execution environment profiles.

An execution environment (``JavaSE-1.8``, ``OSGi/Minimum-1.2``, ...) names a
platform baseline. Its profile lists the packages the platform itself
provides; requirements on those packages must not surface as external
dependencies, so the translator turns them into exclusion rules.

Profiles are looked up through the ``ProfileProvider`` protocol. The
``StaticProfileProvider`` serves profiles from memory and can be loaded from
a YAML file of the form::

    JavaSE-1.7:
      packages: [javax.xml.parsers, org.w3c.dom]
    JavaSE-1.8:
      extends: JavaSE-1.7
      packages: [javax.script]

A profile inherits the packages of the profiles it extends; extension
cycles are tolerated.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

import yaml

from bundlebridge.exceptions import ConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecutionEnvironmentProfile:
    name: str
    package_names: frozenset[str] = frozenset()


class ProfileProvider(Protocol):
    def get_profile(self, environment: str) -> ExecutionEnvironmentProfile | None:
        """Return the profile named *environment*, or None when unknown."""
        ...


class StaticProfileProvider:
    """Profiles held in memory, keyed by environment name."""

    def __init__(self, profiles: Iterable[ExecutionEnvironmentProfile] = ()) -> None:
        self._profiles = {profile.name: profile for profile in profiles}

    def add_profile(self, profile: ExecutionEnvironmentProfile) -> None:
        self._profiles[profile.name] = profile

    def get_profile(self, environment: str) -> ExecutionEnvironmentProfile | None:
        return self._profiles.get(environment)

    @property
    def environments(self) -> list[str]:
        return sorted(self._profiles)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StaticProfileProvider:
        """Build a provider from the YAML structure described in the module docstring.

        Raises:
            ConfigError: If an entry is not a mapping, or extends an unknown
                profile.
        """
        declared: dict[str, tuple[list[str], list[str]]] = {}
        for name, entry in data.items():
            if entry is None:
                entry = {}
            if not isinstance(entry, Mapping):
                raise ConfigError(f"Profile {name!r} must be a mapping")
            extends = entry.get("extends") or []
            if isinstance(extends, str):
                extends = [extends]
            packages = entry.get("packages") or []
            declared[str(name)] = ([str(e) for e in extends], [str(p) for p in packages])

        provider = cls()
        for name in declared:
            provider.add_profile(
                ExecutionEnvironmentProfile(name, frozenset(_collect_packages(name, declared)))
            )
        logger.debug("Loaded %d execution environment profiles", len(declared))
        return provider

    @classmethod
    def load(cls, path: Path) -> StaticProfileProvider:
        """Load profiles from a YAML file.

        Raises:
            ConfigError: If the file cannot be read or is not valid YAML.
        """
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Cannot load profiles from {path}: {exc}") from exc
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigError(f"Profiles file {path} must contain a mapping")
        return cls.from_dict(data)


def _collect_packages(
    name: str, declared: Mapping[str, tuple[list[str], list[str]]]
) -> set[str]:
    """Union of the packages of *name* and every profile it transitively extends."""
    packages: set[str] = set()
    visited: set[str] = set()
    pending = [name]
    while pending:
        current = pending.pop()
        if current in visited:
            continue
        visited.add(current)
        if current not in declared:
            raise ConfigError(f"Profile {name!r} extends unknown profile {current!r}")
        extends, own = declared[current]
        packages.update(own)
        pending.extend(extends)
    return packages
