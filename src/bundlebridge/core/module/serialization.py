"""Module descriptor serialization --- JSON snapshots of descriptors.

Fixed descriptors are meant to be redistributed, so they need a stable
on-disk form. ``descriptor_to_dict`` produces a plain dict whose JSON
rendering is deterministic (object keys sorted, list order preserved as
declared); ``descriptor_from_dict`` reads it back.

Determinism guarantee: two descriptors with the same content produce
byte-identical JSON from ``descriptor_to_json``.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from bundlebridge.core.module.artifact import Artifact
from bundlebridge.core.module.configuration import Configuration, Visibility
from bundlebridge.core.module.descriptor import (
    DEFAULT_STATUS,
    DependencyDescriptor,
    ExcludeRule,
    ModuleDescriptor,
)
from bundlebridge.core.module.ids import ArtifactId, ModuleId, ModuleRevisionId

FORMAT_VERSION = "1.0"


def _mrid_to_dict(mrid: ModuleRevisionId) -> dict[str, Any]:
    data: dict[str, Any] = {"organisation": mrid.organisation, "name": mrid.name}
    if mrid.branch is not None:
        data["branch"] = mrid.branch
    if mrid.revision is not None:
        data["revision"] = mrid.revision
    return data


def _mrid_from_dict(data: dict[str, Any]) -> ModuleRevisionId:
    return ModuleRevisionId(
        data["organisation"], data["name"], data.get("branch"), data.get("revision")
    )


def _artifact_to_dict(artifact: Artifact) -> dict[str, Any]:
    data: dict[str, Any] = {
        "module": _mrid_to_dict(artifact.module_revision_id),
        "name": artifact.name,
        "type": artifact.type,
        "ext": artifact.ext,
    }
    if artifact.url is not None:
        data["url"] = artifact.url
    if artifact.extra_attributes:
        data["extra_attributes"] = dict(artifact.extra_attributes)
    return data


def _artifact_from_dict(data: dict[str, Any]) -> Artifact:
    return Artifact(
        module_revision_id=_mrid_from_dict(data["module"]),
        name=data.get("name"),
        type=data.get("type"),
        ext=data.get("ext"),
        url=data.get("url"),
        extra_attributes=dict(data.get("extra_attributes", {})),
    )


def descriptor_to_dict(md: ModuleDescriptor) -> dict[str, Any]:
    """Serialize a descriptor to a JSON-compatible dict."""
    configurations = []
    for conf in md.configurations:
        entry: dict[str, Any] = {
            "name": conf.name,
            "visibility": conf.visibility.value,
            "transitive": conf.transitive,
        }
        if conf.description:
            entry["description"] = conf.description
        if conf.extends:
            entry["extends"] = list(conf.extends)
        if conf.deprecated is not None:
            entry["deprecated"] = conf.deprecated
        entry["artifacts"] = [_artifact_to_dict(a) for a in md.get_artifacts(conf.name)]
        configurations.append(entry)

    dependencies = [
        {
            "module": _mrid_to_dict(dd.dependency_revision_id),
            "force": dd.force,
            "changing": dd.changing,
            "transitive": dd.transitive,
            "confs": [[master, dep] for master, dep in dd.configuration_mappings],
        }
        for dd in md.dependencies
    ]

    excludes = [
        {
            "organisation": rule.artifact_id.module_id.organisation,
            "module": rule.artifact_id.module_id.name,
            "artifact": rule.artifact_id.name,
            "type": rule.artifact_id.type,
            "ext": rule.artifact_id.ext,
            "matcher": rule.matcher,
            "confs": list(rule.configurations),
        }
        for rule in md.exclude_rules
    ]

    data: dict[str, Any] = {
        "format_version": FORMAT_VERSION,
        "generated_by": "bundlebridge",
        "module": _mrid_to_dict(md.module_revision_id),
        "status": md.status,
        "description": md.description,
        "extra_info": [[info.name, info.content] for info in md.extra_infos],
        "namespaces": dict(md.extra_attribute_namespaces),
        "configurations": configurations,
        "dependencies": dependencies,
        "excludes": excludes,
    }
    if md.home_page is not None:
        data["home_page"] = md.home_page
    if md.publication_date is not None:
        data["publication_date"] = md.publication_date.isoformat()
    return data


def descriptor_to_json(md: ModuleDescriptor, indent: int = 2) -> str:
    return json.dumps(descriptor_to_dict(md), indent=indent, sort_keys=True)


def write_descriptor(md: ModuleDescriptor, path: Path) -> None:
    """Write a descriptor to disk as JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(descriptor_to_json(md), encoding="utf-8")


def descriptor_from_dict(data: dict[str, Any]) -> ModuleDescriptor:
    """Deserialize a descriptor from the dict form of ``descriptor_to_dict``.

    Missing optional sections fall back to empty values.
    """
    published = data.get("publication_date")
    md = ModuleDescriptor(
        _mrid_from_dict(data["module"]),
        status=data.get("status", DEFAULT_STATUS),
        publication_date=datetime.fromisoformat(published) if published else None,
    )
    md.description = data.get("description", "")
    md.home_page = data.get("home_page")
    for prefix, namespace in data.get("namespaces", {}).items():
        md.add_extra_attribute_namespace(prefix, namespace)
    for name, content in data.get("extra_info", []):
        md.add_extra_info(name, content)

    for entry in data.get("configurations", []):
        md.add_configuration(
            Configuration(
                entry["name"],
                Visibility(entry.get("visibility", Visibility.PUBLIC.value)),
                entry.get("description", ""),
                tuple(entry.get("extends", ())),
                entry.get("transitive", True),
                entry.get("deprecated"),
            )
        )
        for artifact in entry.get("artifacts", []):
            md.add_artifact(entry["name"], _artifact_from_dict(artifact))

    for entry in data.get("dependencies", []):
        dd = DependencyDescriptor(
            _mrid_from_dict(entry["module"]),
            force=entry.get("force", False),
            changing=entry.get("changing", False),
            transitive=entry.get("transitive", True),
        )
        for master, dep in entry.get("confs", []):
            dd.add_dependency_configuration(master, dep)
        md.add_dependency(dd)

    for entry in data.get("excludes", []):
        md.add_exclude_rule(
            ExcludeRule(
                ArtifactId(
                    ModuleId(entry["organisation"], entry["module"]),
                    entry.get("artifact", "*"),
                    entry.get("type", "*"),
                    entry.get("ext", "*"),
                ),
                entry.get("matcher", "exactOrRegexp"),
                list(entry.get("confs", [])),
            )
        )
    return md


def descriptor_from_json(json_str: str) -> ModuleDescriptor:
    return descriptor_from_dict(json.loads(json_str))


def read_descriptor(path: Path) -> ModuleDescriptor:
    """Read a descriptor written by ``write_descriptor``.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    return descriptor_from_json(path.read_text(encoding="utf-8"))
