"""Built-in plugins registered on every project."""
