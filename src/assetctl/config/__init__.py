"""Configuration layer — pydantic models, settings sources, logging."""
