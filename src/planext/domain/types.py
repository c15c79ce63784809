"""Well-known layer names.

Upstream image builders name their layers after these values. The
``EXTRA_FILES`` name doubles as a prefix: numbered or suffixed variants
(``"extra files: misc"``) belong to the same family.
"""

from __future__ import annotations

from enum import StrEnum


class LayerType(StrEnum):
    """Layer names produced by the upstream image builder."""

    DEPENDENCIES = "dependencies"
    SNAPSHOT_DEPENDENCIES = "snapshot dependencies"
    PROJECT_DEPENDENCIES = "project dependencies"
    RESOURCES = "resources"
    CLASSES = "classes"
    EXTRA_FILES = "extra files"
    NATIVE_IMAGE = "native image"


class LayoutKind(StrEnum):
    """Build output layouts understood by the host project model."""

    GRADLE = "gradle"
    MAVEN = "maven"
