"""Settings for translation and report consolidation.

Settings are read from a YAML file::

    status: release
    resolve_id_separator: "-"
    profiles:
      JavaSE-1.8:
        packages: [javax.xml.parsers]

Every key is optional. ``status`` is the status stamped on fixed
descriptors whose source descriptor has none; ``profiles`` follows the
format of ``StaticProfileProvider.from_dict``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from bundlebridge.core.bundle.profiles import StaticProfileProvider
from bundlebridge.core.module import DEFAULT_STATUS
from bundlebridge.exceptions import ConfigError

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    status: str = DEFAULT_STATUS
    resolve_id_separator: str = "-"
    profiles: StaticProfileProvider = field(default_factory=StaticProfileProvider)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Settings:
        unknown = set(data) - {"status", "resolve_id_separator", "profiles"}
        if unknown:
            raise ConfigError(f"Unknown settings: {', '.join(sorted(unknown))}")
        profiles = data.get("profiles") or {}
        if not isinstance(profiles, Mapping):
            raise ConfigError("'profiles' must be a mapping")
        return cls(
            status=str(data.get("status", DEFAULT_STATUS)),
            resolve_id_separator=str(data.get("resolve_id_separator", "-")),
            profiles=StaticProfileProvider.from_dict(profiles),
        )

    @classmethod
    def load(cls, path: Path) -> Settings:
        """Load settings from a YAML file.

        Raises:
            ConfigError: If the file cannot be read, is not valid YAML, or
                holds unknown keys.
        """
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Cannot load settings from {path}: {exc}") from exc
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigError(f"Settings file {path} must contain a mapping")
        logger.debug("Loaded settings from %s", path)
        return cls.from_dict(data)
