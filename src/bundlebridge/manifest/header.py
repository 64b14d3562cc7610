"""Parsing of manifest header values into ``ManifestHeaderElement`` clauses.

Grammar (OSGi core, section 3.2.4, simplified)::

    header    ::= clause ( ',' clause ) *
    clause    ::= path ( ';' path ) * ( ';' parameter ) *
    parameter ::= directive | attribute
    directive ::= extended ':=' argument
    attribute ::= extended '=' argument

Arguments may be double-quoted; separators inside quotes are literal.
"""

from __future__ import annotations

from bundlebridge.exceptions import ManifestError
from bundlebridge.manifest.element import ManifestHeaderElement


def _split_unquoted(text: str, separator: str) -> list[str]:
    """Split *text* on *separator*, ignoring separators inside double quotes."""
    parts: list[str] = []
    current: list[str] = []
    quoted = False
    for char in text:
        if char == '"':
            quoted = not quoted
            current.append(char)
        elif char == separator and not quoted:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    if quoted:
        raise ManifestError(f"Unterminated quote in header value: {text!r}")
    parts.append("".join(current))
    return parts


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == '"' and value[-1] == '"':
        return value[1:-1]
    return value


def parse_clause(clause: str) -> ManifestHeaderElement:
    """Parse one clause into an element.

    Raises:
        ManifestError: If a parameter has an empty name or a value appears
            after the first parameter.
    """
    element = ManifestHeaderElement()
    seen_parameter = False
    for part in _split_unquoted(clause, ";"):
        part = part.strip()
        if not part:
            continue
        directive_at = part.find(":=")
        attribute_at = part.find("=")
        if directive_at != -1 and directive_at < attribute_at:
            name, value = part[:directive_at].strip(), part[directive_at + 2:]
            if not name:
                raise ManifestError(f"Directive without a name in clause: {clause!r}")
            element.add_directive(name, _unquote(value))
            seen_parameter = True
        elif attribute_at != -1:
            name, value = part[:attribute_at].strip(), part[attribute_at + 1:]
            if not name:
                raise ManifestError(f"Attribute without a name in clause: {clause!r}")
            element.add_attribute(name, _unquote(value))
            seen_parameter = True
        else:
            if seen_parameter:
                raise ManifestError(
                    f"Value {part!r} follows a parameter in clause: {clause!r}"
                )
            element.add_value(_unquote(part))
    return element


def parse_header(value: str | None) -> list[ManifestHeaderElement]:
    """Parse a full header value into its clauses.

    Empty clauses are skipped; ``None`` or blank input yields an empty list.
    """
    if value is None or not value.strip():
        return []
    elements = []
    for clause in _split_unquoted(value, ","):
        if clause.strip():
            elements.append(parse_clause(clause))
    return elements
