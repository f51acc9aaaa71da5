"""assetctl — build runner for static front-end projects."""

__version__ = "0.1.0"
