"""Rich output formatting helpers for the bundlebridge CLI."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from bundlebridge.core.module import Artifact, ModuleDescriptor

console = Console()


def print_descriptor_summary(md: ModuleDescriptor) -> None:
    """Print the configurations and dependencies of a translated descriptor."""
    header = f"[bold]{escape(str(md.module_revision_id))}[/bold]"
    console.print(Panel(header, title="Module Descriptor"))

    conf_table = Table(title="Configurations", show_header=True, header_style="bold")
    conf_table.add_column("Name", style="bold")
    conf_table.add_column("Extends")
    conf_table.add_column("Artifacts", justify="right")
    for conf in md.configurations:
        conf_table.add_row(
            escape(conf.name),
            escape(", ".join(conf.extends)) or "-",
            str(len(md.get_artifacts(conf.name))),
        )
    console.print(conf_table)

    if md.dependencies:
        dep_table = Table(title="Dependencies", show_header=True, header_style="bold")
        dep_table.add_column("Module", style="bold")
        dep_table.add_column("Configuration Mapping")
        for dd in md.dependencies:
            mapping = ", ".join(f"{m}->{d}" for m, d in dd.configuration_mappings)
            dep_table.add_row(escape(str(dd.dependency_revision_id)), escape(mapping))
        console.print(dep_table)
    else:
        console.print("[dim]No dependencies.[/dim]")

    parts = [
        f"[bold]{len(md.configurations)}[/bold] configurations",
        f"{len(md.dependencies)} dependencies",
        f"{len(md.all_artifacts)} artifacts",
        f"{len(md.exclude_rules)} exclude rules",
    ]
    console.print(" | ".join(parts))


def print_artifact(artifact: Artifact) -> None:
    """Print the coordinates of an artifact decoded from an ivy URI."""
    mrid = artifact.module_revision_id
    table = Table(title="Ivy Artifact", show_header=True, header_style="bold")
    table.add_column("Field", style="bold")
    table.add_column("Value")
    rows = [
        ("organisation", mrid.organisation),
        ("name", mrid.name),
        ("branch", mrid.branch),
        ("revision", mrid.revision),
        ("type", artifact.type),
        ("artifact", artifact.name),
        ("ext", artifact.ext),
    ]
    for field, value in rows:
        table.add_row(field, escape(value) if value is not None else "[dim]-[/dim]")
    console.print(table)
