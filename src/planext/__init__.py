"""planext — container build-plan extensions."""

__version__ = "0.1.0"
