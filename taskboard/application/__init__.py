"""Application layer: casos de uso."""
