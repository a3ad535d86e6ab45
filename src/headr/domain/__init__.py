"""Domain layer — limits and the resolved head request.

This layer depends only on stdlib and pydantic.
It must never import from services, config, or the CLI.
"""
