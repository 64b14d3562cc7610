"""``bundlebridge uri`` --- Encode and decode ``ivy:`` artifact URIs.

Exit Codes:
    0 --- URI encoded or decoded.
    1 --- The URI to decode is malformed.
"""

from __future__ import annotations

import json
import sys

import click

from bundlebridge.core.bundle import ivy_uri
from bundlebridge.core.module import Artifact, ModuleRevisionId
from bundlebridge.exceptions import InvalidFormatError


@click.group("uri")
def uri_group() -> None:
    """Work with ivy:///org/name?... artifact URIs."""


@uri_group.command("encode")
@click.argument("organisation")
@click.argument("name")
@click.option("--branch", default=None, help="Module branch.")
@click.option("--rev", default=None, help="Module revision.")
@click.option("--type", "type_", default=None, help="Artifact type.")
@click.option("--art", default=None, help="Artifact name.")
@click.option("--ext", default=None, help="Artifact extension.")
def encode_command(
    organisation: str,
    name: str,
    branch: str | None,
    rev: str | None,
    type_: str | None,
    art: str | None,
    ext: str | None,
) -> None:
    """Print the ivy URI of an artifact of ORGANISATION/NAME."""
    artifact = Artifact(ModuleRevisionId(organisation, name, branch, rev), art, type_, ext)
    click.echo(ivy_uri.encode(artifact))


@uri_group.command("decode")
@click.argument("uri")
@click.option("--json", "as_json", is_flag=True, help="Print the fields as JSON.")
def decode_command(uri: str, as_json: bool) -> None:
    """Print the artifact coordinates of an ivy URI."""
    try:
        artifact = ivy_uri.decode(uri)
    except InvalidFormatError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    if as_json:
        mrid = artifact.module_revision_id
        fields = {
            "organisation": mrid.organisation,
            "name": mrid.name,
            "branch": mrid.branch,
            "revision": mrid.revision,
            "type": artifact.type,
            "artifact": artifact.name,
            "ext": artifact.ext,
        }
        click.echo(json.dumps(fields, indent=2, sort_keys=True))
        return

    from bundlebridge.cli.output import print_artifact
    print_artifact(artifact)
