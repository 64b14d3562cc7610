"""Configurations: named, inheritable groups of dependencies and artifacts.

A configuration may ``extend`` others, inheriting their dependencies. The
extends relation forms a directed graph that is allowed to contain cycles
(bundles may use each other's packages); code walking it must guard against
revisiting names.

The three configurations every translated bundle carries are built by
factory functions so that each descriptor gets its own instances.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Visibility(Enum):
    PUBLIC = "public"
    PRIVATE = "private"


CONF_NAME_DEFAULT = "default"
CONF_NAME_OPTIONAL = "optional"
CONF_NAME_TRANSITIVE_OPTIONAL = "transitive-optional"
CONF_USE_PREFIX = "use_"


@dataclass(frozen=True)
class Configuration:
    """A configuration of a module descriptor.

    Attributes:
        name: Unique name within the descriptor.
        visibility: Public configurations are visible to dependers.
        description: Free text.
        extends: Names of the configurations this one inherits from.
        transitive: Whether dependencies of this configuration are
            resolved transitively.
        deprecated: Deprecation note, if any.
    """

    name: str
    visibility: Visibility = Visibility.PUBLIC
    description: str = ""
    extends: tuple[str, ...] = ()
    transitive: bool = True
    deprecated: str | None = None


def default_configuration() -> Configuration:
    return Configuration(CONF_NAME_DEFAULT)


def optional_configuration() -> Configuration:
    return Configuration(
        CONF_NAME_OPTIONAL,
        Visibility.PUBLIC,
        "Optional dependencies",
        (CONF_NAME_DEFAULT,),
        True,
    )


def transitive_optional_configuration() -> Configuration:
    return Configuration(
        CONF_NAME_TRANSITIVE_OPTIONAL,
        Visibility.PUBLIC,
        "Optional dependencies",
        (CONF_NAME_OPTIONAL,),
        True,
    )


def use_configuration_name(package: str) -> str:
    return CONF_USE_PREFIX + package


def use_configuration(package: str, uses: tuple[str, ...] = ()) -> Configuration:
    """Build the use-configuration of *package*.

    It extends the use-configuration of every package in *uses*, then
    ``default``.
    """
    extends = tuple(use_configuration_name(use) for use in uses) + (CONF_NAME_DEFAULT,)
    return Configuration(
        use_configuration_name(package),
        Visibility.PUBLIC,
        f"Exported package {package}",
        extends,
        True,
    )
