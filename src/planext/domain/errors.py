"""Extension error taxonomy.

Every error names the extension that raised it. None of them are retried:
the host surfaces the message verbatim and aborts the build.
"""

from __future__ import annotations


class ExtensionError(Exception):
    """Base error raised by a build-plan extension.

    Attributes:
        extension: Identity of the originating extension (e.g. ``"native-image"``).
        message: Human-readable diagnostic including the remedy.
    """

    code = "EXTENSION_ERROR"

    def __init__(self, extension: str, message: str) -> None:
        super().__init__(message)
        self.extension = extension
        self.message = message

    def __str__(self) -> str:
        return f"{self.extension}: {self.message}"


class ConfigurationError(ExtensionError):
    """Required input is missing or invalid; the user must supply it."""

    code = "CONFIGURATION_ERROR"


class MissingArtifactError(ExtensionError):
    """A build artifact is absent; the user must run a build step first."""

    code = "MISSING_ARTIFACT"


class HostIntegrationError(ExtensionError):
    """A collaborator the extension relies on is not present in the host."""

    code = "HOST_INTEGRATION_ERROR"
