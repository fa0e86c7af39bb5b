"""Domain layer: Result algebra, error taxonomy, validation and codec.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
