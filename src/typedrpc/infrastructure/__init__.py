"""Infrastructure layer: the HTTP transport boundary."""
