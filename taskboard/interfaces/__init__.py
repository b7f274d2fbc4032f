"""Interfaces: adaptadores entre HTTP y casos de uso."""
