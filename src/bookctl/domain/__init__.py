"""Domain layer — locations, section slicing, and text transforms.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
