"""bundlebridge exception hierarchy.

All public exceptions inherit from BundleBridgeError, giving callers a single
base class to catch when they want to handle any bundlebridge-specific failure
without swallowing unrelated errors.
"""


class BundleBridgeError(Exception):
    """Base exception for all bundlebridge errors."""


class ProfileNotFoundError(BundleBridgeError):
    """Raised when an execution environment profile cannot be found.

    The bundle declares a required execution environment that the profile
    provider does not know. Translation stops and no descriptor is returned.
    """

    def __init__(self, environment: str) -> None:
        super().__init__(f"Execution environment profile {environment} not found")
        self.environment = environment


class InvalidFormatError(BundleBridgeError, ValueError):
    """Raised when an ``ivy:`` URI is structurally invalid.

    Covers a missing leading slash, a missing organisation/name separator,
    malformed query parameters and unknown query keys.
    """


class MalformedURLError(BundleBridgeError):
    """Raised when an artifact URI cannot be turned into a usable URL."""


class DescriptorError(BundleBridgeError):
    """Raised when a module descriptor would become inconsistent.

    Covers configuration name clashes between differing definitions.
    """


class ManifestError(BundleBridgeError):
    """Raised when a manifest or bundle description cannot be parsed."""


class ConfigError(BundleBridgeError):
    """Raised when a settings or profile file cannot be loaded."""
