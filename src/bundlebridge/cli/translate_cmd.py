"""``bundlebridge translate <path>`` --- Translate a bundle into a module descriptor.

Reads a ``MANIFEST.MF`` or a YAML bundle description, translates it, and
writes the resulting module descriptor as deterministic JSON.

Exit Codes:
    0 --- Descriptor written.
    1 --- Translation failed (missing environment profile, malformed URI).
    2 --- The bundle, settings or profiles file could not be loaded.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from bundlebridge.config import Settings
from bundlebridge.core.bundle import StaticProfileProvider, translate
from bundlebridge.core.bundle.loader import load_bundle
from bundlebridge.core.module import write_descriptor
from bundlebridge.exceptions import ConfigError, ManifestError


@click.command("translate")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--base-uri",
    type=str,
    default=None,
    help="Base location for relative artifact URIs (artifacts are skipped when omitted).",
)
@click.option(
    "--profiles",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML file of execution environment profiles.",
)
@click.option(
    "--settings",
    "settings_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML settings file.",
)
@click.option(
    "--embed-manifest",
    is_flag=True,
    help="Copy the manifest headers into the descriptor's extra info.",
)
@click.option(
    "--output", "-o",
    type=click.Path(),
    default=None,
    help="Output path (default: <dir>/<symbolic-name>-<version>.descriptor.json).",
)
def translate_command(
    path: str,
    base_uri: str | None,
    profiles: str | None,
    settings_path: str | None,
    embed_manifest: bool,
    output: str | None,
) -> None:
    """Translate the bundle at PATH into a module descriptor.

    Exit code 0 on success, 1 on translation failure, 2 on unreadable input.
    """
    source = Path(path)
    try:
        loaded = load_bundle(source)
        settings = Settings.load(Path(settings_path)) if settings_path else Settings()
        provider = StaticProfileProvider.load(Path(profiles)) if profiles else None
    except (ManifestError, ConfigError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    if provider is None and settings.profiles.environments:
        provider = settings.profiles

    manifest = loaded.manifest if embed_manifest else None
    result = translate(loaded.bundle, base_uri, manifest, provider)
    if not result.success:
        click.echo(f"Translation failed ({result.status.value}): {result.error}", err=True)
        sys.exit(1)

    md = result.descriptor
    bundle = loaded.bundle
    out_path = (
        Path(output)
        if output
        else source.parent / f"{bundle.symbolic_name}-{bundle.version}.descriptor.json"
    )
    write_descriptor(md, out_path)

    from bundlebridge.cli.output import print_descriptor_summary
    print_descriptor_summary(md)
    click.echo(f"\nDescriptor written to: {out_path}")
    sys.exit(0)
