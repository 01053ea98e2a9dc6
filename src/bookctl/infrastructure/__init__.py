"""Infrastructure layer — filesystem, subprocesses, version control.

This layer depends on stdlib and pydantic only.
It must never import from services, commands, or output.
"""
