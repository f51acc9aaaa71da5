"""Service layer — stages, housekeeping, and composition returning TaskResult.

Services may import from domain and infrastructure layers.
They must never import from commands or output.
"""
