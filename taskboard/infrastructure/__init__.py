"""Infrastructure layer: pool DB y repositorios."""
