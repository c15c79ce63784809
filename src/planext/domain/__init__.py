"""Domain layer — build-plan value objects, path and glob rules, errors.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, plugins, commands, or config.
"""
