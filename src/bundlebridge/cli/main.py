"""bundlebridge CLI --- bundle translation and ivy URI tooling.

Entry point for the ``bundlebridge`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    translate  --- Translate a bundle manifest or YAML description into a
                   module descriptor (JSON).
    uri        --- Encode or decode ``ivy:`` artifact URIs.

Usage::

    bundlebridge translate META-INF/MANIFEST.MF --base-uri https://repo.example/
    bundlebridge translate bundle.yaml --profiles profiles.yaml -o out.json
    bundlebridge uri encode org.example api --rev 1.0 --type jar
    bundlebridge uri decode "ivy:///org.example/api?rev=1.0&type=jar"
"""

from __future__ import annotations

import logging

import click

from bundlebridge import __version__
from bundlebridge.cli.translate_cmd import translate_command
from bundlebridge.cli.uri_cmd import uri_group


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Log translation steps to stderr.")
def cli(verbose: bool) -> None:
    """bundlebridge: translate bundles into module descriptors.

    Turns OSGi-style bundle metadata into dependency descriptors a
    resolution engine understands, and works with ivy artifact URIs.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


cli.add_command(translate_command)
cli.add_command(uri_group)
