"""Infrastructure layer (logging)."""
