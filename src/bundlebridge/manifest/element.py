"""ManifestHeaderElement: one clause of a manifest header.

A header such as ``Import-Package`` is a comma-separated list of clauses.
Each clause carries one or more values (package names), followed by
``key=value`` attributes and ``key:=value`` directives::

    org.example.api;org.example.spi;version="[1,2)";resolution:=optional

Elements are built by appending while a header is parsed and are treated as
read-only afterwards.
"""

from __future__ import annotations


class ManifestHeaderElement:
    """Values, attributes and directives parsed from a single header clause.

    Equality is structural: values are compared as a set (order does not
    matter), attributes and directives as mappings.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(self) -> None:
        self._values: list[str] = []
        self._attributes: dict[str, str] = {}
        self._directives: dict[str, str] = {}

    @property
    def values(self) -> list[str]:
        return self._values

    @property
    def attributes(self) -> dict[str, str]:
        return self._attributes

    @property
    def directives(self) -> dict[str, str]:
        return self._directives

    def add_value(self, value: str) -> None:
        self._values.append(value)

    def add_attribute(self, name: str, value: str) -> None:
        self._attributes[name] = value

    def add_directive(self, name: str, value: str) -> None:
        self._directives[name] = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ManifestHeaderElement):
            return NotImplemented
        if len(other._values) != len(self._values) or set(other._values) != set(self._values):
            return False
        return (
            self._directives == other._directives
            and self._attributes == other._attributes
        )

    def __str__(self) -> str:
        """Render as ``values;directives;attributes``, separated by ``;``.

        Parts are joined, so an element without values starts directly with
        its first parameter (``k:=v``, not ``;k:=v``). Both forms parse
        back to the same element.
        """
        parts = list(self._values)
        parts.extend(f"{key}:={value}" for key, value in self._directives.items())
        parts.extend(f"{key}={value}" for key, value in self._attributes.items())
        return ";".join(parts)

    def __repr__(self) -> str:
        return f"ManifestHeaderElement({str(self)!r})"
