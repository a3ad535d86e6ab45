"""Service layer — the head executor and its run report.

Services may import from the domain layer.
They must never import from the CLI module.
"""
