"""The ``ivy:`` URI scheme: artifacts that live in other resolved modules.

A bundle artifact may point at an artifact of another module rather than at
a file. Such references are written as::

    ivy:///<org>/<name>?branch=<b>&rev=<r>&type=<t>&art=<a>&ext=<e>

Every query field is optional. The organisation, the name and every field
value are percent-encoded, so reserved characters such as ``#``, ``&`` or
``/`` survive. ``encode`` and ``decode`` are inverse on the organisation,
name, branch, revision, type, artifact name and extension.
"""

from __future__ import annotations

from urllib.parse import quote, unquote, urlsplit

from bundlebridge.core.module import Artifact, ModuleRevisionId
from bundlebridge.exceptions import InvalidFormatError

IVY_SCHEME = "ivy"

_QUERY_KEYS = ("branch", "rev", "type", "art", "ext")


def encode(artifact: Artifact) -> str:
    """Build the ``ivy:`` URI referencing *artifact*."""
    mrid = artifact.module_revision_id
    fields = (
        ("branch", mrid.branch),
        ("rev", mrid.revision),
        ("type", artifact.type),
        ("art", artifact.name),
        ("ext", artifact.ext),
    )
    query = "&".join(
        f"{key}={_escape(value)}" for key, value in fields if value is not None
    )
    org, name = _escape(mrid.organisation), _escape(mrid.name)
    return f"{IVY_SCHEME}:///{org}/{name}?{query}"


def decode(uri: str) -> Artifact:
    """Parse an ``ivy:`` URI into a module artifact reference.

    Raises:
        InvalidFormatError: If the path is not ``/<org>/<name>``, a query
            parameter is not a single ``key=value`` pair, or a key is unknown.
    """
    try:
        parts = urlsplit(uri)
    except ValueError as exc:
        raise InvalidFormatError(f"Unparseable ivy url: {uri}") from exc

    path = parts.path
    if not path.startswith("/"):
        raise InvalidFormatError(
            f"An ivy url should be of the form ivy:///org/module but was : {uri}"
        )
    sep = path.find("/", 1)
    if sep < 0:
        raise InvalidFormatError(f"Expecting an organisation in the ivy url: {uri}")
    org = unquote(path[1:sep])
    name = unquote(path[sep + 1:])

    fields: dict[str, str] = {}
    for parameter in parts.query.split("&"):
        if not parameter:
            continue
        name_and_value = parameter.split("=")
        if len(name_and_value) != 2 or not name_and_value[1]:
            raise InvalidFormatError(f"Malformed query string in the ivy url: {uri}")
        key, value = name_and_value
        if key not in _QUERY_KEYS:
            raise InvalidFormatError(
                f"Unrecognized parameter '{key}' in the query string of the ivy url: {uri}"
            )
        fields[key] = unquote(value)

    mrid = ModuleRevisionId(org, name, fields.get("branch"), fields.get("rev"))
    return Artifact(mrid, fields.get("art"), fields.get("type"), fields.get("ext"))


def _escape(value: str) -> str:
    return quote(value, safe="")


def is_ivy_uri(uri: str) -> bool:
    scheme, sep, _ = uri.partition(":")
    return bool(sep) and scheme.lower() == IVY_SCHEME
