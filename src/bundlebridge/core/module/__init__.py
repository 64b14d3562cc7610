"""Native module model: identities, configurations, artifacts, descriptors.

All public names are re-exported here so callers can write
``from bundlebridge.core.module import ModuleDescriptor``.
"""

from bundlebridge.core.module.artifact import MERGED_ATTRIBUTE, Artifact
from bundlebridge.core.module.configuration import (
    CONF_NAME_DEFAULT,
    CONF_NAME_OPTIONAL,
    CONF_NAME_TRANSITIVE_OPTIONAL,
    CONF_USE_PREFIX,
    Configuration,
    Visibility,
    default_configuration,
    optional_configuration,
    transitive_optional_configuration,
    use_configuration,
    use_configuration_name,
)
from bundlebridge.core.module.descriptor import (
    DEFAULT_STATUS,
    EXACT_OR_REGEXP_MATCHER,
    DependencyDescriptor,
    ExcludeRule,
    ExtraInfo,
    ModuleDescriptor,
)
from bundlebridge.core.module.ids import (
    ANY_EXPRESSION,
    ArtifactId,
    ModuleId,
    ModuleRevisionId,
)
from bundlebridge.core.module.serialization import (
    descriptor_from_dict,
    descriptor_from_json,
    descriptor_to_dict,
    descriptor_to_json,
    read_descriptor,
    write_descriptor,
)

__all__ = [
    "ANY_EXPRESSION",
    "Artifact",
    "ArtifactId",
    "CONF_NAME_DEFAULT",
    "CONF_NAME_OPTIONAL",
    "CONF_NAME_TRANSITIVE_OPTIONAL",
    "CONF_USE_PREFIX",
    "Configuration",
    "DEFAULT_STATUS",
    "DependencyDescriptor",
    "EXACT_OR_REGEXP_MATCHER",
    "ExcludeRule",
    "ExtraInfo",
    "MERGED_ATTRIBUTE",
    "ModuleDescriptor",
    "ModuleId",
    "ModuleRevisionId",
    "Visibility",
    "default_configuration",
    "descriptor_from_dict",
    "descriptor_from_json",
    "descriptor_to_dict",
    "descriptor_to_json",
    "optional_configuration",
    "read_descriptor",
    "transitive_optional_configuration",
    "use_configuration",
    "use_configuration_name",
    "write_descriptor",
]
