"""Domain layer — asset files, rename rules, and pure content transforms.

This layer depends only on the stdlib.
It must never import from services, infrastructure, commands, or config.
"""
